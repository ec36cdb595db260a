# kino/schemas/__init__.py

from .profile import (
    Profile,
    ProfileAuthor,
    SignupRequest,
    LoginRequest,
    TokenResponse,
    ProfileUpdate,
    PasswordChangeRequest,
    ProfileStats,
    Achievement,
)
from .movie import (
    MovieSummary,
    MovieDetail,
    MovieListResponse,
    UserMovieInteractions,
    RatingRequest,
    ShelfMovie,
)
from .genre import Genre, GenreCreate, GenreUpdate, GenreWithMovieCount
from .tag import Tag, TagCreate, TagUpdate, TagWithMovieCount
from .comment import Comment, CommentCreate, CommentUpdate
from .search import AdvancedSearchResult, AdvancedSearchResponse
from .settings import UserSettings, UserSettingsUpdate, SiteSettings, SiteSettingsUpdate

__all__ = [
    "Profile",
    "ProfileAuthor",
    "SignupRequest",
    "LoginRequest",
    "TokenResponse",
    "ProfileUpdate",
    "PasswordChangeRequest",
    "ProfileStats",
    "Achievement",
    "MovieSummary",
    "MovieDetail",
    "MovieListResponse",
    "UserMovieInteractions",
    "RatingRequest",
    "ShelfMovie",
    "Genre",
    "GenreCreate",
    "GenreUpdate",
    "GenreWithMovieCount",
    "Tag",
    "TagCreate",
    "TagUpdate",
    "TagWithMovieCount",
    "Comment",
    "CommentCreate",
    "CommentUpdate",
    "AdvancedSearchResult",
    "AdvancedSearchResponse",
    "UserSettings",
    "UserSettingsUpdate",
    "SiteSettings",
    "SiteSettingsUpdate",
]
