# kino/api/v1/genres.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.genre import Genre, GenreListResponse
from kino.services.genre_service import GenreService
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_genre_service(db: Session = Depends(get_db)) -> GenreService:
    return GenreService(db)


@router.get(
    "",
    response_model=GenreListResponse,
    summary="모든 장르 조회",
    description="장르 목록을 이름순으로 조회합니다. 각 장르의 영화 수가 포함됩니다."
)
async def get_all_genres(
    search: Optional[str] = Query(default=None, description="이름 검색어"),
    genre_service: GenreService = Depends(get_genre_service)
):
    try:
        return await genre_service.get_all_genres(search)
    except Exception:
        raise server_error(logger, "장르 목록 조회 실패")


@router.get(
    "/{genre_id}",
    response_model=Genre,
    summary="장르 상세 조회"
)
async def get_genre(
    genre_id: int = Path(description="장르 ID"),
    genre_service: GenreService = Depends(get_genre_service)
):
    try:
        return await genre_service.get_genre(genre_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "장르 조회 실패")
