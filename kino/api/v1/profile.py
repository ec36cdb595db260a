# kino/api/v1/profile.py

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.profile import Profile, ProfileUpdate, ProfileStats, Achievement
from kino.schemas.movie import ShelfMovie
from kino.services.user_service import UserService
from kino.services.movie_service import MovieService
from kino.core.dependencies import get_current_user, get_user_service
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(db)


@router.get("", response_model=Profile, summary="내 프로필")
async def get_profile(current_user: Profile = Depends(get_current_user)):
    return current_user


@router.put(
    "",
    response_model=Profile,
    summary="프로필 수정",
    description="이름과 프로필 이미지 URL 을 수정합니다.",
)
async def update_profile(
    update_data: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    try:
        return await user_service.update_profile(current_user.id, update_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "프로필 수정 실패")


@router.get("/stats", response_model=ProfileStats, summary="프로필 통계")
async def get_stats(
    current_user: Profile = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    try:
        return await user_service.get_stats(current_user.id)
    except Exception:
        raise server_error(logger, "프로필 통계 조회 실패")


@router.get(
    "/achievements",
    response_model=List[Achievement],
    summary="업적",
    description="평가/댓글/즐겨찾기 통계로 계산한 4가지 업적을 조회합니다.",
)
async def get_achievements(
    current_user: Profile = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    try:
        return await user_service.get_achievements(current_user.id)
    except Exception:
        raise server_error(logger, "업적 조회 실패")


@router.get("/watchlist", response_model=List[ShelfMovie], summary="내 왓치리스트")
async def get_watchlist(
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.get_shelf(current_user.id, "watchlist")
    except Exception:
        raise server_error(logger, "왓치리스트 조회 실패")


@router.get("/favorites", response_model=List[ShelfMovie], summary="내 즐겨찾기")
async def get_favorites(
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.get_shelf(current_user.id, "favorites")
    except Exception:
        raise server_error(logger, "즐겨찾기 조회 실패")
