# kino/models/site_settings.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from kino.database import Base


class SiteSettingsModel(Base):
    """관리자 시스템 설정 (단일 행, id=1)"""

    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, default=1)
    site_name = Column(String(255), default="Kino Platform", nullable=False)
    site_description = Column(Text, default="Eng yaxshi kinolarni tomosha qiling", nullable=False)
    site_logo = Column(Text, default="", nullable=False)
    maintenance_mode = Column(Boolean, default=False, nullable=False)
    registration_enabled = Column(Boolean, default=True, nullable=False)
    comments_enabled = Column(Boolean, default=True, nullable=False)
    ratings_enabled = Column(Boolean, default=True, nullable=False)
    email_notifications = Column(Boolean, default=True, nullable=False)
    max_file_size = Column(Integer, default=10, nullable=False, comment="MB")
    allowed_file_types = Column(JSON, nullable=False, default=lambda: ["jpg", "jpeg", "png", "webp"])
    default_language = Column(String(2), default="uz", nullable=False)
    theme_color = Column(String(7), default="#3b82f6", nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SiteSettingsModel(site_name='{self.site_name}')>"
