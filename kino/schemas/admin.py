# kino/schemas/admin.py

from typing import Optional, List, Literal
from pydantic import BaseModel, Field
from datetime import datetime
from kino.schemas.movie import MovieDetail, MovieStatusLiteral


class DashboardStats(BaseModel):
    total_movies: int = 0
    total_users: int = 0
    total_comments: int = 0
    total_views: int = 0
    average_rating: float = 0.0
    new_movies_this_month: int = Field(default=0, description="최근 30일 등록 영화")
    new_users_this_week: int = Field(default=0, description="최근 7일 가입자")
    pending_comments: int = 0
    total_genres: int = 0
    total_tags: int = 0
    approved_comments: int = 0
    rejected_comments: int = Field(default=0, description="전체 - 승인 - 대기")


class RecentActivity(BaseModel):
    id: str = Field(description="movie-1, user-3 형태")
    type: Literal["movie", "user", "comment", "rating"]
    title: str
    description: str
    created_at: datetime


class ChartPoint(BaseModel):
    name: str
    value: int


class DashboardCharts(BaseModel):
    movies_by_status: List[ChartPoint]
    users_by_month: List[ChartPoint]
    ratings_distribution: List[ChartPoint]


# 영화 관리
class AdminMovieRow(BaseModel):
    id: int
    title: str
    title_uz: Optional[str] = None
    release_year: Optional[int] = None
    rating: float = 0.0
    view_count: int = 0
    status: MovieStatusLiteral
    created_at: Optional[datetime] = None


class AdminMovieForm(BaseModel):
    """영화 등록/수정 폼"""

    title: str = Field(default="", max_length=255)
    title_uz: Optional[str] = None
    title_ru: Optional[str] = None
    title_en: Optional[str] = None
    description: str = Field(default="")
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    release_year: Optional[int] = Field(default=None, ge=1888, le=2100)
    duration: Optional[int] = Field(default=None, ge=1)
    imdb_rating: Optional[float] = Field(default=None, ge=0, le=10)
    director: Optional[str] = None
    actors: List[str] = Field(default_factory=list)
    country: Optional[str] = None
    language: Optional[str] = None
    status: MovieStatusLiteral = "active"
    genre_ids: List[int] = Field(default_factory=list)
    tag_ids: List[int] = Field(default_factory=list)


class AdminMovieDetail(MovieDetail):
    genre_ids: List[int] = Field(default_factory=list)
    tag_ids: List[int] = Field(default_factory=list)
    created_by: Optional[int] = None


class MovieStatusUpdate(BaseModel):
    status: MovieStatusLiteral


# 사용자 관리
class AdminUser(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Literal["user", "admin"]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_comments: int = 0
    total_ratings: int = 0
    avg_rating: float = 0.0


class AdminUserListResponse(BaseModel):
    users: List[AdminUser]
    total: int
    page: int
    total_pages: int


class RoleUpdate(BaseModel):
    role: Literal["user", "admin"]


class BulkUserAction(BaseModel):
    user_ids: List[int] = Field(min_length=1)
    action: Literal["promote", "demote", "delete"]


# 댓글 관리
class AdminCommentMovie(BaseModel):
    id: int
    title: str
    title_uz: Optional[str] = None


class AdminCommentAuthor(BaseModel):
    id: int
    full_name: Optional[str] = None
    email: str
    avatar_url: Optional[str] = None


class AdminComment(BaseModel):
    id: int
    movie_id: int
    user_id: int
    content: str
    rating: Optional[int] = None
    parent_id: Optional[int] = None
    is_approved: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profiles: Optional[AdminCommentAuthor] = None
    movies: Optional[AdminCommentMovie] = None
    replies_count: int = 0


class AdminCommentListResponse(BaseModel):
    comments: List[AdminComment]
    total: int
    page: int
    total_pages: int


class CommentModeration(BaseModel):
    approve: bool


class BulkCommentAction(BaseModel):
    comment_ids: List[int] = Field(min_length=1)
    action: Literal["approve", "reject", "delete"]


class BulkActionResponse(BaseModel):
    action: str
    affected: int
    message: str
