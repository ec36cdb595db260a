# kino/core/config.py

from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """설정 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # 애플리케이션 설정
    app_name: str = Field(default="Kino Platform", description="애플리케이션 이름")
    debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")
    cors_allow_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="CORS 허용 origin (콤마 구분)"
    )

    # 데이터베이스 설정
    database_url: str = Field(default="sqlite:///./kino.db", description="데이터베이스 URL")

    # JWT 인증 설정
    secret_key: str = Field(default="secret-jwt-key", description="JWT 토큰 암호화 키")
    algorithm: str = Field(default="HS256", description="JWT 알고리즘")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, description="JWT 토큰 만료 시간(분)")

    # TMDB API 설정
    tmdb_api_key: Optional[str] = Field(default=None, description="TMDB API Key")
    tmdb_access_token: Optional[str] = Field(default=None, description="TMDB Access Token")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB API URL")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p/", description="TMDB 이미지 URL")
    tmdb_timeout: float = Field(default=10.0, description="요청 타임아웃")

    # 번역 API 설정
    translate_url: str = Field(
        default="https://translate.googleapis.com/translate_a/single",
        description="번역 API URL"
    )
    translate_target_language: str = Field(default="uz", description="번역 대상 언어")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def tmdb_headers(self) -> dict[str, str]:
        """TMDB API 요청 헤더"""
        headers = {"Content-Type": "application/json"}
        if self.tmdb_access_token:
            headers["Authorization"] = f"Bearer {self.tmdb_access_token}"
        return headers


@lru_cache()
def get_settings() -> Settings:
    return Settings()
