# kino/services/__init__.py

from .settings_service import SettingsService
from .user_service import UserService
from .movie_service import MovieService
from .comment_service import CommentService
from .genre_service import GenreService
from .tag_service import TagService
from .tmdb_service import TMDBService
from .translation_service import TranslationService
from .search_service import SearchService
from .dashboard_service import DashboardService
from .admin_movie_service import AdminMovieService
from .admin_user_service import AdminUserService
from .admin_comment_service import AdminCommentService

__all__ = [
    "SettingsService",
    "UserService",
    "MovieService",
    "CommentService",
    "GenreService",
    "TagService",
    "TMDBService",
    "TranslationService",
    "SearchService",
    "DashboardService",
    "AdminMovieService",
    "AdminUserService",
    "AdminCommentService",
]
