# kino/services/admin_movie_service.py

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, delete
from sqlalchemy.exc import SQLAlchemyError
from kino.models import (
    MovieModel,
    MovieStatus,
    GenreModel,
    TagModel,
    MovieGenreModel,
    MovieTagModel,
    CommentModel,
    RatingModel,
    WatchlistModel,
    FavoriteModel,
)
from kino.schemas.admin import AdminMovieRow, AdminMovieForm, AdminMovieDetail
from kino.schemas.movie import GenreBrief, TagBrief
from kino.core.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)

MOVIE_FIELDS = [
    "title", "title_uz", "title_ru", "title_en",
    "description", "description_uz", "description_ru", "description_en",
    "poster_url", "trailer_url", "release_year", "duration", "imdb_rating",
    "director", "actors", "country", "language",
]


class AdminMovieService:

    def __init__(self, db: Session):
        self.db = db

    def _get_movie_model(self, movie_id: int) -> MovieModel:
        movie_model = self.db.get(MovieModel, movie_id)
        if movie_model is None:
            raise NotFoundException("Kino topilmadi")
        return movie_model

    def _validate_form(self, form: AdminMovieForm) -> None:
        if not form.title.strip():
            raise ValidationException("Kino nomi majburiy")
        if not form.description.strip():
            raise ValidationException("Kino tavsifi majburiy")
        if not form.genre_ids:
            raise ValidationException("Kamida bitta janr tanlang")

        genre_ids = set(form.genre_ids)
        found = self.db.scalar(select(func.count(GenreModel.id)).where(GenreModel.id.in_(genre_ids)))
        if found != len(genre_ids):
            raise ValidationException("Tanlangan janr topilmadi")
        if form.tag_ids:
            tag_ids = set(form.tag_ids)
            found = self.db.scalar(select(func.count(TagModel.id)).where(TagModel.id.in_(tag_ids)))
            if found != len(tag_ids):
                raise ValidationException("Tanlangan teg topilmadi")

    def _apply_form(self, movie_model: MovieModel, form: AdminMovieForm) -> None:
        data = form.model_dump()
        for field in MOVIE_FIELDS:
            value = data[field]
            if isinstance(value, str):
                value = value.strip() or None
            setattr(movie_model, field, value)
        movie_model.actors = [a.strip() for a in form.actors if a.strip()]
        movie_model.status = MovieStatus(form.status)

    def _replace_links(self, movie_id: int, genre_ids: List[int], tag_ids: List[int]) -> None:
        self.db.execute(delete(MovieGenreModel).where(MovieGenreModel.movie_id == movie_id))
        self.db.execute(delete(MovieTagModel).where(MovieTagModel.movie_id == movie_id))
        for genre_id in dict.fromkeys(genre_ids):
            self.db.add(MovieGenreModel(movie_id=movie_id, genre_id=genre_id))
        for tag_id in dict.fromkeys(tag_ids):
            self.db.add(MovieTagModel(movie_id=movie_id, tag_id=tag_id))

    async def list_movies(self, search: Optional[str] = None) -> List[AdminMovieRow]:
        stmt = select(MovieModel).order_by(MovieModel.created_at.desc(), MovieModel.id.desc())
        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            stmt = stmt.where(or_(func.lower(MovieModel.title).like(pattern), func.lower(MovieModel.title_uz).like(pattern)))

        return [
            AdminMovieRow(
                id=m.id,
                title=m.title,
                title_uz=m.title_uz,
                release_year=m.release_year,
                rating=m.rating or 0.0,
                view_count=m.view_count or 0,
                status=m.status.value,
                created_at=m.created_at,
            )
            for m in self.db.execute(stmt).scalars().all()
        ]

    async def get_movie(self, movie_id: int) -> AdminMovieDetail:
        movie_model = self._get_movie_model(movie_id)
        genres = self.db.execute(
            select(GenreModel)
            .join(MovieGenreModel, MovieGenreModel.genre_id == GenreModel.id)
            .where(MovieGenreModel.movie_id == movie_id)
            .order_by(GenreModel.name)
        ).scalars().all()
        tags = self.db.execute(
            select(TagModel)
            .join(MovieTagModel, MovieTagModel.tag_id == TagModel.id)
            .where(MovieTagModel.movie_id == movie_id)
            .order_by(TagModel.name)
        ).scalars().all()

        data = {column.name: getattr(movie_model, column.name) for column in MovieModel.__table__.columns}
        data.update(
            status=movie_model.status.value,
            genres=[GenreBrief.model_validate(g) for g in genres],
            tags=[TagBrief.model_validate(t) for t in tags],
            genre_ids=[g.id for g in genres],
            tag_ids=[t.id for t in tags],
        )
        return AdminMovieDetail.model_validate(data)

    async def create_movie(self, form: AdminMovieForm, admin_id: int) -> AdminMovieDetail:
        """영화 등록 (장르/태그 연결 포함)"""
        self._validate_form(form)
        movie_model = MovieModel(created_by=admin_id, rating=0.0, view_count=0)
        self._apply_form(movie_model, form)
        try:
            self.db.add(movie_model)
            self.db.flush()
            self._replace_links(movie_model.id, form.genre_ids, form.tag_ids)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("영화 등록 실패")
            raise
        logger.info("영화 등록: movie_id=%s title=%s", movie_model.id, movie_model.title)
        return await self.get_movie(movie_model.id)

    async def update_movie(self, movie_id: int, form: AdminMovieForm) -> AdminMovieDetail:
        movie_model = self._get_movie_model(movie_id)
        self._validate_form(form)
        self._apply_form(movie_model, form)
        movie_model.updated_at = datetime.utcnow()
        try:
            self._replace_links(movie_id, form.genre_ids, form.tag_ids)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("영화 수정 실패: movie_id=%s", movie_id)
            raise
        return await self.get_movie(movie_id)

    async def set_status(self, movie_id: int, status: str) -> AdminMovieRow:
        movie_model = self._get_movie_model(movie_id)
        movie_model.status = MovieStatus(status)
        movie_model.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(movie_model)
        return AdminMovieRow(
            id=movie_model.id,
            title=movie_model.title,
            title_uz=movie_model.title_uz,
            release_year=movie_model.release_year,
            rating=movie_model.rating or 0.0,
            view_count=movie_model.view_count or 0,
            status=movie_model.status.value,
            created_at=movie_model.created_at,
        )

    async def delete_movie(self, movie_id: int) -> None:
        """영화 삭제 (연결 데이터 먼저 삭제)"""
        movie_model = self._get_movie_model(movie_id)
        try:
            for model_cls in (MovieGenreModel, MovieTagModel, RatingModel, WatchlistModel, FavoriteModel):
                self.db.execute(delete(model_cls).where(model_cls.movie_id == movie_id))
            # 답글 먼저
            self.db.execute(
                delete(CommentModel).where(CommentModel.movie_id == movie_id, CommentModel.parent_id.is_not(None))
            )
            self.db.execute(delete(CommentModel).where(CommentModel.movie_id == movie_id))
            self.db.delete(movie_model)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("영화 삭제 실패: movie_id=%s", movie_id)
            raise
        logger.info("영화 삭제: movie_id=%s", movie_id)
