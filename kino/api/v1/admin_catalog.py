# kino/api/v1/admin_catalog.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.genre import Genre, GenreCreate, GenreUpdate, GenreListResponse
from kino.schemas.tag import Tag, TagCreate, TagUpdate, TagListResponse
from kino.services.genre_service import GenreService
from kino.services.tag_service import TagService
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_genre_service(db: Session = Depends(get_db)) -> GenreService:
    return GenreService(db)


def get_tag_service(db: Session = Depends(get_db)) -> TagService:
    return TagService(db)


# 장르 관리
@router.get("/genres", response_model=GenreListResponse, summary="장르 관리 목록")
async def list_genres(
    search: Optional[str] = Query(default=None, description="이름/우즈벡어 이름 검색어"),
    genre_service: GenreService = Depends(get_genre_service),
):
    try:
        return await genre_service.get_all_genres(search)
    except Exception:
        raise server_error(logger, "장르 관리 목록 조회 실패")


@router.post("/genres", response_model=Genre, status_code=status.HTTP_201_CREATED, summary="장르 생성")
async def create_genre(genre_data: GenreCreate, genre_service: GenreService = Depends(get_genre_service)):
    try:
        return await genre_service.create_genre(genre_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "장르 생성 실패")


@router.put("/genres/{genre_id}", response_model=Genre, summary="장르 수정")
async def update_genre(
    genre_data: GenreUpdate,
    genre_id: int = Path(description="장르 ID"),
    genre_service: GenreService = Depends(get_genre_service),
):
    try:
        return await genre_service.update_genre(genre_id, genre_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "장르 수정 실패")


@router.delete("/genres/{genre_id}", status_code=status.HTTP_204_NO_CONTENT, summary="장르 삭제")
async def delete_genre(
    genre_id: int = Path(description="장르 ID"),
    genre_service: GenreService = Depends(get_genre_service),
):
    try:
        await genre_service.delete_genre(genre_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "장르 삭제 실패")


# 태그 관리
@router.get("/tags", response_model=TagListResponse, summary="태그 관리 목록")
async def list_tags(
    search: Optional[str] = Query(default=None, description="이름 검색어"),
    tag_service: TagService = Depends(get_tag_service),
):
    try:
        return await tag_service.get_all_tags(search)
    except Exception:
        raise server_error(logger, "태그 관리 목록 조회 실패")


@router.post("/tags", response_model=Tag, status_code=status.HTTP_201_CREATED, summary="태그 생성")
async def create_tag(tag_data: TagCreate, tag_service: TagService = Depends(get_tag_service)):
    try:
        return await tag_service.create_tag(tag_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "태그 생성 실패")


@router.put("/tags/{tag_id}", response_model=Tag, summary="태그 수정")
async def update_tag(
    tag_data: TagUpdate,
    tag_id: int = Path(description="태그 ID"),
    tag_service: TagService = Depends(get_tag_service),
):
    try:
        return await tag_service.update_tag(tag_id, tag_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "태그 수정 실패")


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="태그 삭제")
async def delete_tag(
    tag_id: int = Path(description="태그 ID"),
    tag_service: TagService = Depends(get_tag_service),
):
    try:
        await tag_service.delete_tag(tag_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "태그 삭제 실패")
