# kino/schemas/search.py

from typing import Optional, List
from pydantic import BaseModel, Field


class AdvancedSearchResult(BaseModel):
    id: str = Field(description="local-<id> 또는 tmdb-<id>")
    title: str
    translated_title: Optional[str] = None
    year: str = "N/A"
    genre: str
    plot: str
    poster: Optional[str] = None
    rating: str = Field(description="5점 만점, 소수점 1자리")
    tmdb_id: Optional[int] = None
    is_local: bool


class AdvancedSearchResponse(BaseModel):
    results: List[AdvancedSearchResult]
    page: int
    total_pages: int
    source: str = Field(description="local | tmdb | none")
