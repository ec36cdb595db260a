# kino/models/profile.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from kino.database import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    full_name = Column(String(100), nullable=True)
    avatar_url = Column(Text, nullable=True)
    role = Column(String(20), default="user", nullable=False)  # user | admin
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<ProfileModel(id={self.id}, email='{self.email}', role='{self.role}')>"
