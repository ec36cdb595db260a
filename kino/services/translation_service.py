# kino/services/translation_service.py

import logging
import httpx
from kino.core.config import get_settings

logger = logging.getLogger(__name__)


class TranslationService:
    """무료 번역 엔드포인트 (실패하면 원문 반환)"""

    def __init__(self):
        self.settings = get_settings()
        self.timeout = httpx.Timeout(self.settings.tmdb_timeout)

    async def translate(self, text: str, target_language: str = None) -> str:
        if not text:
            return text
        if target_language is None:
            target_language = self.settings.translate_target_language

        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": target_language,
            "dt": "t",
            "q": text,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(self.settings.translate_url, params=params)
                response.raise_for_status()
                data = response.json()
                return data[0][0][0] or text

            except (httpx.HTTPError, ValueError, LookupError, TypeError) as e:
                logger.warning("번역 실패, 원문 사용: %s", e)
                return text
