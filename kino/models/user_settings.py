# kino/models/user_settings.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from kino.database import Base


class UserSettingsModel(Base):
    __tablename__ = "user_settings"

    # profiles.id 와 1:1
    id = Column(Integer, ForeignKey("profiles.id"), primary_key=True)

    # 개인정보
    profile_visibility = Column(String(20), default="public", nullable=False)
    show_email = Column(Boolean, default=False, nullable=False)
    show_activity = Column(Boolean, default=True, nullable=False)
    show_watchlist = Column(Boolean, default=True, nullable=False)

    # 알림
    email_notifications = Column(Boolean, default=True, nullable=False)
    push_notifications = Column(Boolean, default=True, nullable=False)
    comment_notifications = Column(Boolean, default=True, nullable=False)
    rating_notifications = Column(Boolean, default=False, nullable=False)
    newsletter = Column(Boolean, default=False, nullable=False)

    # 화면
    language = Column(String(2), default="uz", nullable=False)
    theme = Column(String(10), default="system", nullable=False)
    movies_per_page = Column(Integer, default=20, nullable=False)
    default_quality = Column(String(10), default="1080p", nullable=False)

    # 보안
    two_factor_enabled = Column(Boolean, default=False, nullable=False)
    login_notifications = Column(Boolean, default=True, nullable=False)
    session_timeout = Column(Integer, default=30, nullable=False)

    # 재생
    autoplay_trailers = Column(Boolean, default=True, nullable=False)
    sound_effects = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<UserSettingsModel(id={self.id}, language='{self.language}')>"
