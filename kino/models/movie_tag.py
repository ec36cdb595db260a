# kino/models/movie_tag.py

from sqlalchemy import Column, Integer, ForeignKey
from kino.database import Base


class MovieTagModel(Base):
    __tablename__ = "movie_tags"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id"), primary_key=True)

    def __repr__(self):
        return f"<MovieTagModel(movie_id={self.movie_id}, tag_id={self.tag_id})>"
