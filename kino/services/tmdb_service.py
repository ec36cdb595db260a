# kino/services/tmdb_service.py

import logging
from typing import Optional
import httpx
from kino.core.config import get_settings
from kino.core.exceptions import ExternalServiceException

logger = logging.getLogger(__name__)

# TMDB 장르 ID -> 우즈벡어 이름
TMDB_GENRE_NAMES = {
    28: "Jangari",
    12: "Sarguzasht",
    16: "Animatsiya",
    35: "Komediya",
    80: "Jinoyat",
    99: "Hujjatli",
    18: "Drama",
    10751: "Oila",
    14: "Fantastika",
    36: "Tarixiy",
    27: "Qo'rqinchli",
    10402: "Musiqiy",
    9648: "Sirli",
    10749: "Romantik",
    878: "Ilmiy fantastika",
    10770: "TV Film",
    53: "Triller",
    10752: "Urush",
    37: "Vestern",
}


class TMDBService:

    def __init__(self):
        self.settings = get_settings()
        self.timeout = httpx.Timeout(self.settings.tmdb_timeout)
        self.default_language = "ru"

    def get_image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        if not path:
            return None
        return f"{self.settings.tmdb_image_base_url}{size}{path}"

    async def search_movies(self, query: str, page: int = 1, language: str = None) -> dict:
        """TMDB 영화 검색 (search/movie 응답 그대로 반환)"""
        if language is None:
            language = self.default_language

        url = f"{self.settings.tmdb_base_url}/search/movie"

        params = {
            "query": query,
            "page": page,
            "language": language,
        }
        if self.settings.tmdb_api_key:
            params["api_key"] = self.settings.tmdb_api_key

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    params=params,
                    headers=self.settings.tmdb_headers
                )
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                logger.error("TMDB API 오류: %s", e.response.status_code)
                raise ExternalServiceException("Qidirishda xatolik yuz berdi")
            except httpx.RequestError as e:
                logger.error("TMDB 요청 실패: %s", e)
                raise ExternalServiceException("Qidirishda xatolik yuz berdi")
