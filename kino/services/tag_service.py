# kino/services/tag_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, delete
from kino.models import TagModel, MovieTagModel
from kino.schemas.tag import Tag, TagWithMovieCount, TagListResponse, TagCreate, TagUpdate
from kino.core.exceptions import NotFoundException, ConflictException, ValidationException

logger = logging.getLogger(__name__)


class TagService:

    def __init__(self, db: Session):
        self.db = db

    def _get_tag_model_by_id(self, tag_id: int) -> TagModel:
        tag_model = self.db.get(TagModel, tag_id)
        if tag_model is None:
            raise NotFoundException("Teg topilmadi")
        return tag_model

    def _clean_name(self, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValidationException("Teg nomi majburiy")
        return name

    def _ensure_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        stmt = select(TagModel.id).where(func.lower(TagModel.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(TagModel.id != exclude_id)
        if self.db.scalar(stmt) is not None:
            raise ConflictException("Bu nomli teg allaqachon mavjud")

    async def get_all_tags(self, search: Optional[str] = None) -> TagListResponse:
        stmt = select(TagModel).order_by(TagModel.name)
        term = (search or "").strip().lower()
        if term:
            stmt = stmt.where(func.lower(TagModel.name).like(f"%{term}%"))

        tags = []
        for tag_model in self.db.execute(stmt).scalars().all():
            movie_count = self.db.scalar(
                select(func.count()).select_from(MovieTagModel).where(MovieTagModel.tag_id == tag_model.id)
            )
            tags.append(TagWithMovieCount(**Tag.model_validate(tag_model).model_dump(), movie_count=movie_count or 0))
        return TagListResponse(tags=tags)

    async def create_tag(self, tag_data: TagCreate) -> Tag:
        name = self._clean_name(tag_data.name)
        self._ensure_unique_name(name)
        tag_model = TagModel(name=name, color=tag_data.color)
        self.db.add(tag_model)
        self.db.commit()
        self.db.refresh(tag_model)
        logger.info("태그 생성: %s", name)
        return Tag.model_validate(tag_model)

    async def update_tag(self, tag_id: int, tag_data: TagUpdate) -> Tag:
        tag_model = self._get_tag_model_by_id(tag_id)
        if tag_data.name is not None:
            name = self._clean_name(tag_data.name)
            self._ensure_unique_name(name, exclude_id=tag_id)
            tag_model.name = name
        if tag_data.color is not None:
            tag_model.color = tag_data.color
        self.db.commit()
        self.db.refresh(tag_model)
        return Tag.model_validate(tag_model)

    async def delete_tag(self, tag_id: int) -> None:
        tag_model = self._get_tag_model_by_id(tag_id)
        self.db.execute(delete(MovieTagModel).where(MovieTagModel.tag_id == tag_id))
        self.db.delete(tag_model)
        self.db.commit()
        logger.info("태그 삭제: tag_id=%s", tag_id)
