# kino/api/v1/search.py

import logging
from typing import Optional
from fastapi import APIRouter, Query, Depends
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.movie import MovieListResponse
from kino.schemas.search import AdvancedSearchResponse
from kino.services.movie_service import MovieService
from kino.services.search_service import SearchService
from kino.services.tmdb_service import TMDBService
from kino.services.translation_service import TranslationService
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(db)


def get_tmdb_service() -> TMDBService:
    return TMDBService()


def get_translation_service() -> TranslationService:
    return TranslationService()


def get_search_service(
    db: Session = Depends(get_db),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
    translation_service: TranslationService = Depends(get_translation_service),
) -> SearchService:
    return SearchService(db, tmdb_service, translation_service)


@router.get(
    "",
    response_model=MovieListResponse,
    summary="영화 검색",
    description="제목, 우즈벡어 제목, 설명(우즈벡어 포함)으로 활성 영화를 검색합니다.",
)
async def search_movies(
    search: Optional[str] = Query(default=None, description="검색어"),
    genre: Optional[str] = Query(default=None, description="장르 ID"),
    year: Optional[str] = Query(default=None, description="개봉 연도"),
    tag: Optional[str] = Query(default=None, description="태그 ID"),
    sort_by: str = Query(default="newest", description="newest | oldest | rating | views | title"),
    page: int = Query(default=1, ge=1),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.list_movies(
            search=search,
            genre=genre,
            year=year,
            tag=tag,
            sort_by=sort_by,
            page=page,
            include_description_uz=True,
        )
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 검색 실패")


@router.get(
    "/advanced",
    response_model=AdvancedSearchResponse,
    summary="고급 검색",
    description="로컬 DB 를 먼저 검색하고, 결과가 없으면 TMDB 에서 검색 후 우즈벡어로 번역합니다.",
)
async def advanced_search(
    query: str = Query(default="", description="검색어"),
    year_range: Optional[str] = Query(default=None, description="연도 범위 (예: 2010-2020)"),
    page: int = Query(default=1, ge=1),
    search_service: SearchService = Depends(get_search_service),
):
    try:
        return await search_service.advanced_search(query, year_range=year_range, page=page)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "고급 검색 실패")
