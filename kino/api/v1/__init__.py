# kino/api/v1/__init__.py

from fastapi import APIRouter, Depends
from kino.core.dependencies import get_current_admin
from . import (
    auth,
    movies,
    search,
    comments,
    profile,
    settings,
    genres,
    tags,
    system,
    admin_dashboard,
    admin_movies,
    admin_catalog,
    admin_users,
    admin_comments,
    admin_settings,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["인증"])
api_router.include_router(movies.router, prefix="/movies", tags=["영화"])
api_router.include_router(search.router, prefix="/search", tags=["검색"])
api_router.include_router(comments.router, prefix="/comments", tags=["댓글"])
api_router.include_router(profile.router, prefix="/profile", tags=["프로필"])
api_router.include_router(settings.router, prefix="/settings", tags=["설정"])
api_router.include_router(genres.router, prefix="/genres", tags=["장르"])
api_router.include_router(tags.router, prefix="/tags", tags=["태그"])
api_router.include_router(system.router, prefix="/system", tags=["시스템"])

# 관리자 전용
admin_only = [Depends(get_current_admin)]
api_router.include_router(admin_dashboard.router, prefix="/admin/dashboard", tags=["관리자"], dependencies=admin_only)
api_router.include_router(admin_movies.router, prefix="/admin/movies", tags=["관리자"], dependencies=admin_only)
api_router.include_router(admin_catalog.router, prefix="/admin", tags=["관리자"], dependencies=admin_only)
api_router.include_router(admin_users.router, prefix="/admin/users", tags=["관리자"], dependencies=admin_only)
api_router.include_router(admin_comments.router, prefix="/admin/comments", tags=["관리자"], dependencies=admin_only)
api_router.include_router(admin_settings.router, prefix="/admin/settings", tags=["관리자"], dependencies=admin_only)
