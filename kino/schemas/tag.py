# kino/schemas/tag.py

from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class Tag(BaseModel):
    id: int = Field(description="태그 ID")
    name: str = Field(description="태그 이름")
    color: str = Field(default="#3b82f6", description="표시 색상")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")

    class Config:
        from_attributes = True


class TagWithMovieCount(Tag):
    movie_count: int = Field(default=0, description="해당 태그의 영화 수")


class TagCreate(BaseModel):
    name: str = Field(description="태그 이름", min_length=1, max_length=100)
    color: str = Field(default="#3b82f6", pattern=HEX_COLOR)


class TagUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class TagListResponse(BaseModel):
    tags: List[TagWithMovieCount] = Field(description="태그 목록")
