# kino/schemas/settings.py

from typing import Optional, List, Literal, Any, Dict
from pydantic import BaseModel, Field
from datetime import datetime

Language = Literal["uz", "ru", "en"]


class UserSettings(BaseModel):
    id: int
    profile_visibility: Literal["public", "private", "friends"] = "public"
    show_email: bool = False
    show_activity: bool = True
    show_watchlist: bool = True
    email_notifications: bool = True
    push_notifications: bool = True
    comment_notifications: bool = True
    rating_notifications: bool = False
    newsletter: bool = False
    language: Language = "uz"
    theme: Literal["light", "dark", "system"] = "system"
    movies_per_page: int = 20
    default_quality: Literal["720p", "1080p", "4k"] = "1080p"
    two_factor_enabled: bool = False
    login_notifications: bool = True
    session_timeout: int = 30
    autoplay_trailers: bool = True
    sound_effects: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSettingsUpdate(BaseModel):
    """부분 수정 - 전달된 필드만 반영"""

    profile_visibility: Optional[Literal["public", "private", "friends"]] = None
    show_email: Optional[bool] = None
    show_activity: Optional[bool] = None
    show_watchlist: Optional[bool] = None
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    comment_notifications: Optional[bool] = None
    rating_notifications: Optional[bool] = None
    newsletter: Optional[bool] = None
    language: Optional[Language] = None
    theme: Optional[Literal["light", "dark", "system"]] = None
    movies_per_page: Optional[int] = Field(default=None, ge=1, le=100)
    default_quality: Optional[Literal["720p", "1080p", "4k"]] = None
    two_factor_enabled: Optional[bool] = None
    login_notifications: Optional[bool] = None
    session_timeout: Optional[int] = Field(default=None, ge=5, le=1440)
    autoplay_trailers: Optional[bool] = None
    sound_effects: Optional[bool] = None


class UserDataExport(BaseModel):
    user: Dict[str, Any]
    profile: Optional[Dict[str, Any]]
    settings: Optional[Dict[str, Any]]
    ratings: List[Dict[str, Any]]
    comments: List[Dict[str, Any]]
    favorites: List[Dict[str, Any]]
    exported_at: datetime


class SiteSettings(BaseModel):
    site_name: str
    site_description: str
    site_logo: str = ""
    maintenance_mode: bool = False
    registration_enabled: bool = True
    comments_enabled: bool = True
    ratings_enabled: bool = True
    email_notifications: bool = True
    max_file_size: int = 10
    allowed_file_types: List[str] = Field(default_factory=lambda: ["jpg", "jpeg", "png", "webp"])
    default_language: Language = "uz"
    theme_color: str = "#3b82f6"
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SiteSettingsUpdate(BaseModel):
    site_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    site_description: Optional[str] = None
    site_logo: Optional[str] = None
    maintenance_mode: Optional[bool] = None
    registration_enabled: Optional[bool] = None
    comments_enabled: Optional[bool] = None
    ratings_enabled: Optional[bool] = None
    email_notifications: Optional[bool] = None
    max_file_size: Optional[int] = Field(default=None, ge=1, le=500)
    allowed_file_types: Optional[List[str]] = None
    default_language: Optional[Language] = None
    theme_color: Optional[str] = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")


class SystemStats(BaseModel):
    total_users: int
    total_movies: int
    total_comments: int
