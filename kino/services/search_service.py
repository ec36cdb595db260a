# kino/services/search_service.py

import asyncio
import logging
import math
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from kino.models import MovieModel, MovieStatus, GenreModel, MovieGenreModel
from kino.schemas.search import AdvancedSearchResult, AdvancedSearchResponse
from kino.services.tmdb_service import TMDBService, TMDB_GENRE_NAMES
from kino.services.translation_service import TranslationService
from kino.core.exceptions import ValidationException

logger = logging.getLogger(__name__)

RESULTS_PER_PAGE = 12
NO_DESCRIPTION = "Ta'rif yo'q"
PLACEHOLDER_POSTER = "/placeholder.svg?height=450&width=300"


def parse_year_range(year_range: Optional[str]) -> Optional[Tuple[int, int]]:
    """'YYYY-YYYY' 형식 연도 범위 파싱"""
    if not year_range or not year_range.strip():
        return None
    try:
        start, end = (int(part) for part in year_range.strip().split("-"))
    except ValueError:
        raise ValidationException("Yil oralig'i YYYY-YYYY ko'rinishida bo'lishi kerak")
    if start > end:
        start, end = end, start
    return start, end


class SearchService:

    def __init__(self, db: Session, tmdb_service: TMDBService, translation_service: TranslationService):
        self.db = db
        self.tmdb_service = tmdb_service
        self.translation_service = translation_service

    async def advanced_search(self, query: str, year_range: Optional[str] = None, page: int = 1) -> AdvancedSearchResponse:
        """로컬 DB 우선 검색, 결과가 없으면 TMDB 검색 후 번역"""
        term = (query or "").strip()
        if not term:
            raise ValidationException("Qidiruv so'zi kiriting")
        years = parse_year_range(year_range)
        page = max(page, 1)

        local_results = self._search_local(term, years)
        if local_results:
            start = (page - 1) * RESULTS_PER_PAGE
            return AdvancedSearchResponse(
                results=local_results[start:start + RESULTS_PER_PAGE],
                page=page,
                total_pages=math.ceil(len(local_results) / RESULTS_PER_PAGE),
                source="local",
            )

        logger.info("로컬 결과 없음, TMDB 검색: %s", term)
        tmdb_data = await self.tmdb_service.search_movies(term, page=page)
        tmdb_movies = tmdb_data.get("results") or []
        if not tmdb_movies:
            return AdvancedSearchResponse(results=[], page=page, total_pages=0, source="none")

        start_year, end_year = years if years else (0, math.inf)
        filtered = [
            movie for movie in tmdb_movies
            if start_year <= self._release_year(movie) <= end_year
        ][:RESULTS_PER_PAGE]

        results = await asyncio.gather(*[self._build_tmdb_result(movie) for movie in filtered])
        return AdvancedSearchResponse(
            results=list(results),
            page=page,
            total_pages=math.ceil((tmdb_data.get("total_results") or 0) / RESULTS_PER_PAGE),
            source="tmdb",
        )

    def _search_local(self, term: str, years: Optional[Tuple[int, int]]) -> List[AdvancedSearchResult]:
        pattern = f"%{term.lower()}%"
        stmt = (
            select(MovieModel)
            .where(
                MovieModel.status == MovieStatus.active,
                or_(
                    func.lower(MovieModel.title).like(pattern),
                    func.lower(MovieModel.title_uz).like(pattern),
                    func.lower(MovieModel.description).like(pattern),
                ),
            )
            .order_by(MovieModel.created_at.desc(), MovieModel.id.desc())
        )
        if years:
            stmt = stmt.where(MovieModel.release_year >= years[0], MovieModel.release_year <= years[1])

        results = []
        for movie_model in self.db.execute(stmt).scalars().all():
            genre_names = self.db.execute(
                select(func.coalesce(GenreModel.name_uz, GenreModel.name))
                .join(MovieGenreModel, MovieGenreModel.genre_id == GenreModel.id)
                .where(MovieGenreModel.movie_id == movie_model.id)
                .order_by(GenreModel.name)
            ).scalars().all()
            results.append(
                AdvancedSearchResult(
                    id=f"local-{movie_model.id}",
                    title=movie_model.title,
                    translated_title=movie_model.title_uz,
                    year=str(movie_model.release_year) if movie_model.release_year else "N/A",
                    genre=", ".join(genre_names) or "N/A",
                    plot=movie_model.description or movie_model.description_uz or NO_DESCRIPTION,
                    poster=movie_model.poster_url or PLACEHOLDER_POSTER,
                    rating=f"{movie_model.rating or 0:.1f}",
                    is_local=True,
                )
            )
        return results

    @staticmethod
    def _release_year(movie: dict) -> int:
        release_date = movie.get("release_date") or ""
        try:
            return int(release_date.split("-")[0])
        except ValueError:
            return 0

    async def _build_tmdb_result(self, movie: dict) -> AdvancedSearchResult:
        title = movie.get("title") or ""
        translated_title, translated_plot = await asyncio.gather(
            self.translation_service.translate(title),
            self.translation_service.translate(movie.get("overview") or NO_DESCRIPTION),
        )
        release_date = movie.get("release_date") or ""
        return AdvancedSearchResult(
            id=f"tmdb-{movie.get('id')}",
            title=title,
            translated_title=translated_title,
            year=release_date.split("-")[0] or "N/A",
            genre=", ".join(TMDB_GENRE_NAMES.get(gid, "N/A") for gid in movie.get("genre_ids") or []),
            plot=translated_plot,
            poster=self.tmdb_service.get_image_url(movie.get("poster_path")) or PLACEHOLDER_POSTER,
            rating=f"{(movie.get('vote_average') or 0) / 2:.1f}",
            tmdb_id=movie.get("id"),
            is_local=False,
        )
