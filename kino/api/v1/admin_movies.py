# kino/api/v1/admin_movies.py

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.admin import AdminMovieRow, AdminMovieForm, AdminMovieDetail, MovieStatusUpdate
from kino.schemas.profile import Profile
from kino.services.admin_movie_service import AdminMovieService
from kino.core.dependencies import get_current_admin
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_admin_movie_service(db: Session = Depends(get_db)) -> AdminMovieService:
    return AdminMovieService(db)


@router.get(
    "",
    response_model=List[AdminMovieRow],
    summary="영화 관리 목록",
    description="모든 상태의 영화를 최신 등록순으로 조회합니다.",
)
async def list_movies(
    search: Optional[str] = Query(default=None, description="제목 검색어"),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        return await admin_movie_service.list_movies(search)
    except Exception:
        raise server_error(logger, "영화 관리 목록 조회 실패")


@router.post(
    "",
    response_model=AdminMovieDetail,
    status_code=status.HTTP_201_CREATED,
    summary="영화 등록",
    description="제목, 설명, 1개 이상의 장르가 필요합니다.",
)
async def create_movie(
    form: AdminMovieForm,
    current_admin: Profile = Depends(get_current_admin),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        return await admin_movie_service.create_movie(form, current_admin.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 등록 실패")


@router.get("/{movie_id}", response_model=AdminMovieDetail, summary="영화 편집 정보")
async def get_movie(
    movie_id: int = Path(description="영화 ID"),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        return await admin_movie_service.get_movie(movie_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 편집 정보 조회 실패")


@router.put(
    "/{movie_id}",
    response_model=AdminMovieDetail,
    summary="영화 수정",
    description="영화 정보를 수정하고 장르/태그 연결을 교체합니다.",
)
async def update_movie(
    form: AdminMovieForm,
    movie_id: int = Path(description="영화 ID"),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        return await admin_movie_service.update_movie(movie_id, form)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 수정 실패")


@router.patch("/{movie_id}/status", response_model=AdminMovieRow, summary="영화 상태 변경")
async def set_movie_status(
    status_data: MovieStatusUpdate,
    movie_id: int = Path(description="영화 ID"),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        return await admin_movie_service.set_status(movie_id, status_data.status)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 상태 변경 실패")


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="영화 삭제",
    description="장르/태그 연결, 댓글, 평점, 왓치리스트, 즐겨찾기를 먼저 삭제한 뒤 영화를 삭제합니다.",
)
async def delete_movie(
    movie_id: int = Path(description="영화 ID"),
    admin_movie_service: AdminMovieService = Depends(get_admin_movie_service),
):
    try:
        await admin_movie_service.delete_movie(movie_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 삭제 실패")
