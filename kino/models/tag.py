# kino/models/tag.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from kino.database import Base


class TagModel(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    color = Column(String(7), default="#3b82f6", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<TagModel(id={self.id}, name='{self.name}')>"
