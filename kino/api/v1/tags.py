# kino/api/v1/tags.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.tag import TagListResponse
from kino.services.tag_service import TagService
from kino.core.exceptions import server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_tag_service(db: Session = Depends(get_db)) -> TagService:
    return TagService(db)


@router.get("", response_model=TagListResponse, summary="모든 태그 조회")
async def get_all_tags(
    search: Optional[str] = Query(default=None, description="이름 검색어"),
    tag_service: TagService = Depends(get_tag_service)
):
    try:
        return await tag_service.get_all_tags(search)
    except Exception:
        raise server_error(logger, "태그 목록 조회 실패")
