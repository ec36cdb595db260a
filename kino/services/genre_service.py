# kino/services/genre_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, delete
from kino.models import GenreModel, MovieGenreModel
from kino.schemas.genre import (
    Genre,
    GenreWithMovieCount,
    GenreListResponse,
    GenreCreate,
    GenreUpdate,
)
from kino.core.exceptions import NotFoundException, ConflictException, ValidationException

logger = logging.getLogger(__name__)


class GenreService:

    def __init__(self, db: Session):
        self.db = db

    def _get_genre_model_by_id(self, genre_id: int) -> GenreModel:
        genre_model = self.db.get(GenreModel, genre_id)
        if genre_model is None:
            raise NotFoundException("Janr topilmadi")
        return genre_model

    def _count_movies(self, genre_id: int) -> int:
        stmt = select(func.count()).select_from(MovieGenreModel).where(MovieGenreModel.genre_id == genre_id)
        return self.db.scalar(stmt) or 0

    def _clean_name(self, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValidationException("Janr nomi majburiy")
        return name

    def _ensure_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        stmt = select(GenreModel.id).where(func.lower(GenreModel.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(GenreModel.id != exclude_id)
        if self.db.scalar(stmt) is not None:
            raise ConflictException("Bu nomli janr allaqachon mavjud")

    async def get_all_genres(self, search: Optional[str] = None) -> GenreListResponse:
        """장르 목록 (영화 수 포함)"""
        stmt = select(GenreModel).order_by(GenreModel.name)
        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            stmt = stmt.where(or_(func.lower(GenreModel.name).like(pattern), func.lower(GenreModel.name_uz).like(pattern)))

        genres = self.db.execute(stmt).scalars().all()
        return GenreListResponse(
            genres=[
                GenreWithMovieCount(**Genre.model_validate(g).model_dump(), movie_count=self._count_movies(g.id))
                for g in genres
            ]
        )

    async def get_genre(self, genre_id: int) -> Genre:
        return Genre.model_validate(self._get_genre_model_by_id(genre_id))

    async def create_genre(self, genre_data: GenreCreate) -> Genre:
        name = self._clean_name(genre_data.name)
        self._ensure_unique_name(name)
        genre_model = GenreModel(**{**genre_data.model_dump(), "name": name})
        self.db.add(genre_model)
        self.db.commit()
        self.db.refresh(genre_model)
        logger.info("장르 생성: %s", name)
        return Genre.model_validate(genre_model)

    async def update_genre(self, genre_id: int, genre_data: GenreUpdate) -> Genre:
        genre_model = self._get_genre_model_by_id(genre_id)
        changes = genre_data.model_dump(exclude_unset=True)
        if changes.get("name") is not None:
            changes["name"] = self._clean_name(changes["name"])
            self._ensure_unique_name(changes["name"], exclude_id=genre_id)
        for field, value in changes.items():
            if field == "name" and value is None:
                continue
            setattr(genre_model, field, value)
        self.db.commit()
        self.db.refresh(genre_model)
        return Genre.model_validate(genre_model)

    async def delete_genre(self, genre_id: int) -> None:
        genre_model = self._get_genre_model_by_id(genre_id)
        self.db.execute(delete(MovieGenreModel).where(MovieGenreModel.genre_id == genre_id))
        self.db.delete(genre_model)
        self.db.commit()
        logger.info("장르 삭제: genre_id=%s", genre_id)
