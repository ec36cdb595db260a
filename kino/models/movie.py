# kino/models/movie.py

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Enum, JSON, ForeignKey
from kino.database import Base


class MovieStatus(enum.Enum):
    active = "active"
    inactive = "inactive"
    pending = "pending"


class MovieModel(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    title_uz = Column(String(255), nullable=True)
    title_ru = Column(String(255), nullable=True)
    title_en = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    description_uz = Column(Text, nullable=True)
    description_ru = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    poster_url = Column(Text, nullable=True)
    trailer_url = Column(Text, nullable=True)
    release_year = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True, comment="상영시간(분)")
    rating = Column(Float, default=0.0, nullable=False, comment="플랫폼 평균 평점 (ratings 평균)")
    imdb_rating = Column(Float, nullable=True)
    director = Column(String(255), nullable=True)
    actors = Column(JSON, nullable=True)
    country = Column(String(100), nullable=True)
    language = Column(String(100), nullable=True)
    status = Column(Enum(MovieStatus), default=MovieStatus.active, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    created_by = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<MovieModel(id={self.id}, title='{self.title}')>"
