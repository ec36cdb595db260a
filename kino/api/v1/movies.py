# kino/api/v1/movies.py

import logging
from typing import List, Optional
from fastapi import APIRouter, Query, Path, Depends, status
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.movie import (
    MovieDetail,
    MovieListResponse,
    FilterOptions,
    UserMovieInteractions,
    RatingRequest,
    RatingResponse,
    ToggleResponse,
)
from kino.schemas.comment import Comment, CommentCreate
from kino.schemas.profile import Profile
from kino.services.movie_service import MovieService
from kino.services.comment_service import CommentService
from kino.core.dependencies import get_current_user
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(db)


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(db)


@router.get(
    "",
    response_model=MovieListResponse,
    summary="영화 목록",
    description="활성 영화 목록을 검색/필터/정렬/페이지 단위(12개)로 조회합니다.",
)
async def list_movies(
    search: Optional[str] = Query(default=None, description="제목/설명 검색어"),
    genre: Optional[str] = Query(default=None, description="장르 ID (all = 전체)"),
    year: Optional[str] = Query(default=None, description="개봉 연도 (all = 전체)"),
    tag: Optional[str] = Query(default=None, description="태그 ID (all = 전체)"),
    sort_by: str = Query(default="newest", description="newest | oldest | rating | views | title"),
    page: int = Query(default=1, ge=1, description="페이지 번호"),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.list_movies(
            search=search, genre=genre, year=year, tag=tag, sort_by=sort_by, page=page
        )
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "영화 목록 조회 실패")


@router.get(
    "/filters",
    response_model=FilterOptions,
    summary="필터 옵션",
    description="필터 바에 표시할 장르/태그 목록을 이름순으로 조회합니다.",
)
async def get_filter_options(movie_service: MovieService = Depends(get_movie_service)):
    try:
        return await movie_service.get_filter_options()
    except Exception:
        raise server_error(logger, "필터 옵션 조회 실패")


@router.get(
    "/{movie_id}",
    response_model=MovieDetail,
    summary="영화 상세 정보",
    description="영화 상세 정보를 조회하고 조회수를 1 증가시킵니다.",
)
async def get_movie_detail(
    movie_id: int = Path(description="영화 ID"),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.get_movie_detail(movie_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, f"영화 상세 조회 실패: {movie_id}")


@router.post(
    "/{movie_id}/view",
    summary="조회수 증가",
)
async def increment_view_count(
    movie_id: int = Path(description="영화 ID"),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        view_count = await movie_service.increment_view_count(movie_id)
        return {"movie_id": movie_id, "view_count": view_count}
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, f"조회수 증가 실패: {movie_id}")


@router.get(
    "/{movie_id}/interactions",
    response_model=UserMovieInteractions,
    summary="내 영화 상호작용",
    description="현재 사용자의 평점, 왓치리스트, 즐겨찾기 상태를 조회합니다.",
)
async def get_user_interactions(
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.get_user_interactions(movie_id, current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "상호작용 조회 실패")


@router.put(
    "/{movie_id}/rating",
    response_model=RatingResponse,
    summary="평점 등록/수정",
)
async def rate_movie(
    rating_data: RatingRequest,
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.rate_movie(movie_id, current_user.id, rating_data.rating)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "평점 저장 실패")


@router.delete(
    "/{movie_id}/rating",
    response_model=RatingResponse,
    summary="평점 삭제",
)
async def remove_rating(
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.remove_rating(movie_id, current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "평점 삭제 실패")


@router.post(
    "/{movie_id}/watchlist",
    response_model=ToggleResponse,
    summary="왓치리스트 토글",
    description="왓치리스트에 없으면 추가하고, 있으면 제거합니다.",
)
async def toggle_watchlist(
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.toggle_watchlist(movie_id, current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "왓치리스트 처리 실패")


@router.post(
    "/{movie_id}/favorite",
    response_model=ToggleResponse,
    summary="즐겨찾기 토글",
)
async def toggle_favorite(
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.toggle_favorite(movie_id, current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "즐겨찾기 처리 실패")


@router.get(
    "/{movie_id}/comments",
    response_model=List[Comment],
    summary="영화 댓글 목록",
    description="승인된 댓글을 최신순으로 조회합니다. 답글은 replies 에 포함됩니다.",
)
async def get_movie_comments(
    movie_id: int = Path(description="영화 ID"),
    comment_service: CommentService = Depends(get_comment_service),
):
    try:
        return await comment_service.get_movie_comments(movie_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 목록 조회 실패")


@router.post(
    "/{movie_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    summary="댓글/답글 작성",
    description="parent_id 를 지정하면 답글로 작성됩니다.",
)
async def create_comment(
    comment_data: CommentCreate,
    movie_id: int = Path(description="영화 ID"),
    current_user: Profile = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    try:
        return await comment_service.create_comment(movie_id, current_user.id, comment_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 작성 실패")
