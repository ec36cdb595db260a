# kino/schemas/genre.py

from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime


class Genre(BaseModel):
    id: int = Field(description="장르 ID")
    name: str = Field(description="장르 이름")
    name_uz: Optional[str] = Field(default=None, description="우즈벡어 이름")
    name_ru: Optional[str] = Field(default=None, description="러시아어 이름")
    name_en: Optional[str] = Field(default=None, description="영어 이름")
    description: Optional[str] = Field(default=None, description="설명")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")

    class Config:
        from_attributes = True


class GenreWithMovieCount(Genre):
    movie_count: int = Field(default=0, description="해당 장르의 영화 수")


class GenreCreate(BaseModel):
    name: str = Field(description="장르 이름", min_length=1, max_length=100)
    name_uz: Optional[str] = Field(default=None, max_length=100)
    name_ru: Optional[str] = Field(default=None, max_length=100)
    name_en: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None)


class GenreUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name_uz: Optional[str] = Field(default=None, max_length=100)
    name_ru: Optional[str] = Field(default=None, max_length=100)
    name_en: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None)


class GenreListResponse(BaseModel):
    genres: List[GenreWithMovieCount] = Field(description="장르 목록")
