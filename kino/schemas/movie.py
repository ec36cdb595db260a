# kino/schemas/movie.py

from typing import Optional, List, Literal
from pydantic import BaseModel, Field
from datetime import datetime

MovieStatusLiteral = Literal["active", "inactive", "pending"]


class GenreBrief(BaseModel):
    id: int
    name: str
    name_uz: Optional[str] = None

    class Config:
        from_attributes = True


class TagBrief(BaseModel):
    id: int
    name: str
    color: str

    class Config:
        from_attributes = True


class MovieSummary(BaseModel):
    """목록용 영화 정보"""

    id: int = Field(description="영화 ID")
    title: str = Field(description="영화 제목")
    title_uz: Optional[str] = Field(default=None, description="우즈벡어 제목")
    description: Optional[str] = Field(default=None, description="설명")
    poster_url: Optional[str] = Field(default=None, description="포스터 URL")
    release_year: Optional[int] = Field(default=None, description="개봉 연도")
    duration: Optional[int] = Field(default=None, description="상영시간(분)")
    rating: float = Field(default=0.0, description="플랫폼 평점")
    view_count: int = Field(default=0, description="조회수")
    genres: List[GenreBrief] = Field(default_factory=list)
    tags: List[TagBrief] = Field(default_factory=list)

    class Config:
        from_attributes = True


class MovieDetail(MovieSummary):
    title_ru: Optional[str] = None
    title_en: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    trailer_url: Optional[str] = None
    imdb_rating: Optional[float] = None
    director: Optional[str] = None
    actors: Optional[List[str]] = None
    country: Optional[str] = None
    language: Optional[str] = None
    status: MovieStatusLiteral = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MovieListResponse(BaseModel):
    movies: List[MovieSummary] = Field(description="영화 목록")
    total: int = Field(description="전체 영화 수")
    page: int = Field(description="현재 페이지")
    total_pages: int = Field(description="전체 페이지 수")


class FilterOptions(BaseModel):
    genres: List[GenreBrief]
    tags: List[TagBrief]


class UserMovieInteractions(BaseModel):
    """현재 사용자의 영화 상호작용 상태"""

    user_rating: int = Field(default=0, description="내 평점 (없으면 0)")
    in_watchlist: bool = Field(default=False, description="왓치리스트 여부")
    is_favorite: bool = Field(default=False, description="즐겨찾기 여부")


class RatingRequest(BaseModel):
    rating: int = Field(description="평점 (1 ~ 5)", ge=1, le=5)


class RatingResponse(BaseModel):
    movie_id: int
    user_rating: int
    movie_rating: float = Field(description="갱신된 영화 평균 평점")


class ToggleResponse(BaseModel):
    movie_id: int
    active: bool = Field(description="토글 후 상태 (추가됨 = True)")


class ShelfMovie(BaseModel):
    """왓치리스트 / 즐겨찾기 목록 항목"""

    id: int = Field(description="영화 ID")
    title: str = Field(description="영화 제목")
    title_uz: Optional[str] = None
    poster_url: Optional[str] = None
    release_year: Optional[int] = None
    rating: float = 0.0
    added_at: datetime = Field(description="추가일")
