# kino/models/genre.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from kino.database import Base


class GenreModel(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    name_uz = Column(String(100), nullable=True)
    name_ru = Column(String(100), nullable=True)
    name_en = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<GenreModel(id={self.id}, name='{self.name}')>"
