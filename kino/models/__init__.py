# kino/models/__init__.py

from .profile import ProfileModel
from .movie import MovieModel, MovieStatus
from .genre import GenreModel
from .tag import TagModel
from .movie_genre import MovieGenreModel
from .movie_tag import MovieTagModel
from .comment import CommentModel
from .rating import RatingModel
from .watchlist import WatchlistModel
from .favorite import FavoriteModel
from .user_settings import UserSettingsModel
from .site_settings import SiteSettingsModel


__all__ = [
    "ProfileModel",
    "MovieModel",
    "MovieStatus",
    "GenreModel",
    "TagModel",
    "MovieGenreModel",
    "MovieTagModel",
    "CommentModel",
    "RatingModel",
    "WatchlistModel",
    "FavoriteModel",
    "UserSettingsModel",
    "SiteSettingsModel",
]
