# kino/services/movie_service.py

import logging
import math
from typing import List, Optional, Dict
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, update, delete
from sqlalchemy.exc import IntegrityError
from kino.models import (
    MovieModel,
    MovieStatus,
    GenreModel,
    TagModel,
    MovieGenreModel,
    MovieTagModel,
    RatingModel,
    WatchlistModel,
    FavoriteModel,
)
from kino.schemas.movie import (
    GenreBrief,
    TagBrief,
    MovieSummary,
    MovieDetail,
    MovieListResponse,
    FilterOptions,
    UserMovieInteractions,
    RatingResponse,
    ToggleResponse,
    ShelfMovie,
)
from kino.services.settings_service import SettingsService
from kino.core.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)

MOVIES_PER_PAGE = 12

SORT_COLUMNS = {
    "newest": (MovieModel.created_at.desc(), MovieModel.id.desc()),
    "oldest": (MovieModel.created_at.asc(), MovieModel.id.asc()),
    "rating": (MovieModel.rating.desc(), MovieModel.id.desc()),
    "views": (MovieModel.view_count.desc(), MovieModel.id.desc()),
    "title": (MovieModel.title.asc(), MovieModel.id.asc()),
}


def parse_filter_id(value: Optional[str], name: str) -> Optional[int]:
    """필터 값 파싱 ('all' 또는 빈 값은 필터 없음)"""
    if value is None or value.strip() in ("", "all"):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationException(f"Noto'g'ri filtr qiymati: {name}")


def total_pages_for(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if total else 0


class MovieService:

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    def _get_active_movie_model(self, movie_id: int) -> MovieModel:
        movie_model = self.db.get(MovieModel, movie_id)
        if movie_model is None or movie_model.status != MovieStatus.active:
            raise NotFoundException("Kino topilmadi")
        return movie_model

    def _load_genres(self, movie_ids: List[int]) -> Dict[int, List[GenreBrief]]:
        result: Dict[int, List[GenreBrief]] = {movie_id: [] for movie_id in movie_ids}
        if not movie_ids:
            return result
        stmt = (
            select(MovieGenreModel.movie_id, GenreModel)
            .join(GenreModel, MovieGenreModel.genre_id == GenreModel.id)
            .where(MovieGenreModel.movie_id.in_(movie_ids))
            .order_by(GenreModel.name)
        )
        for movie_id, genre_model in self.db.execute(stmt).all():
            result[movie_id].append(GenreBrief.model_validate(genre_model))
        return result

    def _load_tags(self, movie_ids: List[int]) -> Dict[int, List[TagBrief]]:
        result: Dict[int, List[TagBrief]] = {movie_id: [] for movie_id in movie_ids}
        if not movie_ids:
            return result
        stmt = (
            select(MovieTagModel.movie_id, TagModel)
            .join(TagModel, MovieTagModel.tag_id == TagModel.id)
            .where(MovieTagModel.movie_id.in_(movie_ids))
            .order_by(TagModel.name)
        )
        for movie_id, tag_model in self.db.execute(stmt).all():
            result[movie_id].append(TagBrief.model_validate(tag_model))
        return result

    def _build_movie_dict(self, movie_model: MovieModel, genres, tags) -> dict:
        data = {column.name: getattr(movie_model, column.name) for column in MovieModel.__table__.columns}
        data["status"] = movie_model.status.value
        data["rating"] = movie_model.rating or 0.0
        data["genres"] = genres
        data["tags"] = tags
        return data

    async def list_movies(
        self,
        search: Optional[str] = None,
        genre: Optional[str] = None,
        year: Optional[str] = None,
        tag: Optional[str] = None,
        sort_by: Optional[str] = "newest",
        page: int = 1,
        include_description_uz: bool = False,
    ) -> MovieListResponse:
        """활성 영화 목록 (검색/필터/정렬/페이지)"""
        genre_id = parse_filter_id(genre, "genre")
        tag_id = parse_filter_id(tag, "tag")
        release_year = parse_filter_id(year, "year")

        conditions = [MovieModel.status == MovieStatus.active]

        term = (search or "").strip()
        if term:
            pattern = f"%{term.lower()}%"
            text_columns = [MovieModel.title, MovieModel.title_uz, MovieModel.description]
            if include_description_uz:
                text_columns.append(MovieModel.description_uz)
            conditions.append(or_(*[func.lower(column).like(pattern) for column in text_columns]))

        if genre_id is not None:
            conditions.append(
                MovieModel.id.in_(select(MovieGenreModel.movie_id).where(MovieGenreModel.genre_id == genre_id))
            )
        if tag_id is not None:
            conditions.append(
                MovieModel.id.in_(select(MovieTagModel.movie_id).where(MovieTagModel.tag_id == tag_id))
            )
        if release_year is not None:
            conditions.append(MovieModel.release_year == release_year)

        total = self.db.scalar(select(func.count(MovieModel.id)).where(*conditions)) or 0

        page = max(page, 1)
        order = SORT_COLUMNS.get(sort_by or "newest", SORT_COLUMNS["newest"])
        stmt = (
            select(MovieModel)
            .where(*conditions)
            .order_by(*order)
            .offset((page - 1) * MOVIES_PER_PAGE)
            .limit(MOVIES_PER_PAGE)
        )
        movie_models = self.db.execute(stmt).scalars().all()

        movie_ids = [m.id for m in movie_models]
        genres = self._load_genres(movie_ids)
        tags = self._load_tags(movie_ids)

        movies = [
            MovieSummary.model_validate(self._build_movie_dict(m, genres[m.id], tags[m.id]))
            for m in movie_models
        ]
        return MovieListResponse(
            movies=movies,
            total=total,
            page=page,
            total_pages=total_pages_for(total, MOVIES_PER_PAGE),
        )

    async def get_movie_detail(self, movie_id: int, count_view: bool = True) -> MovieDetail:
        movie_model = self._get_active_movie_model(movie_id)
        if count_view:
            await self.increment_view_count(movie_id)
            self.db.refresh(movie_model)

        genres = self._load_genres([movie_id])[movie_id]
        tags = self._load_tags([movie_id])[movie_id]
        return MovieDetail.model_validate(self._build_movie_dict(movie_model, genres, tags))

    async def increment_view_count(self, movie_id: int) -> int:
        """조회수 1 증가"""
        self._get_active_movie_model(movie_id)
        self.db.execute(
            update(MovieModel)
            .where(MovieModel.id == movie_id)
            .values(view_count=MovieModel.view_count + 1)
        )
        self.db.commit()
        return self.db.scalar(select(MovieModel.view_count).where(MovieModel.id == movie_id))

    async def get_filter_options(self) -> FilterOptions:
        genres = self.db.execute(select(GenreModel).order_by(GenreModel.name)).scalars().all()
        tags = self.db.execute(select(TagModel).order_by(TagModel.name)).scalars().all()
        return FilterOptions(
            genres=[GenreBrief.model_validate(g) for g in genres],
            tags=[TagBrief.model_validate(t) for t in tags],
        )

    # ------------------------------------------------------------------
    # 사용자 상호작용
    # ------------------------------------------------------------------
    async def get_user_interactions(self, movie_id: int, user_id: int) -> UserMovieInteractions:
        self._get_active_movie_model(movie_id)
        user_rating = self.db.scalar(
            select(RatingModel.rating).where(RatingModel.movie_id == movie_id, RatingModel.user_id == user_id)
        )
        in_watchlist = self.db.scalar(
            select(WatchlistModel.id).where(WatchlistModel.movie_id == movie_id, WatchlistModel.user_id == user_id)
        )
        is_favorite = self.db.scalar(
            select(FavoriteModel.id).where(FavoriteModel.movie_id == movie_id, FavoriteModel.user_id == user_id)
        )
        return UserMovieInteractions(
            user_rating=user_rating or 0,
            in_watchlist=in_watchlist is not None,
            is_favorite=is_favorite is not None,
        )

    def _recalculate_rating(self, movie_model: MovieModel) -> float:
        average = self.db.scalar(select(func.avg(RatingModel.rating)).where(RatingModel.movie_id == movie_model.id))
        movie_model.rating = round(float(average), 2) if average else 0.0
        return movie_model.rating

    async def rate_movie(self, movie_id: int, user_id: int, rating: int) -> RatingResponse:
        """평점 등록/수정 (사용자당 1개)"""
        if rating < 1 or rating > 5:
            raise ValidationException("Baho 1 dan 5 gacha bo'lishi kerak")
        await SettingsService(self.db).ensure_feature_enabled("ratings_enabled")
        movie_model = self._get_active_movie_model(movie_id)

        rating_model = self.db.execute(
            select(RatingModel).where(RatingModel.movie_id == movie_id, RatingModel.user_id == user_id)
        ).scalar_one_or_none()
        if rating_model:
            rating_model.rating = rating
        else:
            self.db.add(RatingModel(movie_id=movie_id, user_id=user_id, rating=rating))
        self.db.flush()

        movie_rating = self._recalculate_rating(movie_model)
        self.db.commit()
        logger.info("평점 저장: movie_id=%s user_id=%s rating=%s", movie_id, user_id, rating)
        return RatingResponse(movie_id=movie_id, user_rating=rating, movie_rating=movie_rating)

    async def remove_rating(self, movie_id: int, user_id: int) -> RatingResponse:
        movie_model = self._get_active_movie_model(movie_id)
        self.db.execute(
            delete(RatingModel).where(RatingModel.movie_id == movie_id, RatingModel.user_id == user_id)
        )
        self.db.flush()
        movie_rating = self._recalculate_rating(movie_model)
        self.db.commit()
        return RatingResponse(movie_id=movie_id, user_rating=0, movie_rating=movie_rating)

    async def _toggle(self, model_cls, movie_id: int, user_id: int) -> ToggleResponse:
        self._get_active_movie_model(movie_id)
        existing = self.db.execute(
            select(model_cls).where(model_cls.movie_id == movie_id, model_cls.user_id == user_id)
        ).scalar_one_or_none()

        if existing:
            self.db.delete(existing)
            self.db.commit()
            return ToggleResponse(movie_id=movie_id, active=False)

        try:
            self.db.add(model_cls(movie_id=movie_id, user_id=user_id))
            self.db.commit()
        except IntegrityError:
            # 동시 요청으로 이미 추가된 경우
            self.db.rollback()
        return ToggleResponse(movie_id=movie_id, active=True)

    async def toggle_watchlist(self, movie_id: int, user_id: int) -> ToggleResponse:
        return await self._toggle(WatchlistModel, movie_id, user_id)

    async def toggle_favorite(self, movie_id: int, user_id: int) -> ToggleResponse:
        return await self._toggle(FavoriteModel, movie_id, user_id)

    async def get_shelf(self, user_id: int, kind: str = "watchlist") -> List[ShelfMovie]:
        """왓치리스트 또는 즐겨찾기 영화 목록 (최근 추가순)"""
        model_cls = WatchlistModel if kind == "watchlist" else FavoriteModel
        stmt = (
            select(MovieModel, model_cls.created_at)
            .join(model_cls, model_cls.movie_id == MovieModel.id)
            .where(model_cls.user_id == user_id)
            .order_by(model_cls.created_at.desc(), model_cls.id.desc())
        )
        return [
            ShelfMovie(
                id=movie_model.id,
                title=movie_model.title,
                title_uz=movie_model.title_uz,
                poster_url=movie_model.poster_url,
                release_year=movie_model.release_year,
                rating=movie_model.rating or 0.0,
                added_at=added_at,
            )
            for movie_model, added_at in self.db.execute(stmt).all()
        ]
