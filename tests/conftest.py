"""
Shared fixtures: in-memory SQLite database, API client and seeded users/catalog.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kino.core.auth import create_access_token, get_password_hash
from kino.database import Base, get_db
from kino.main import app
from kino.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    MovieStatus,
    MovieTagModel,
    ProfileModel,
    TagModel,
)

PASSWORD = "secret123"


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_profile(db_session, email: str, role: str = "user", full_name: str = None) -> ProfileModel:
    profile = ProfileModel(
        email=email,
        password_hash=get_password_hash(PASSWORD),
        full_name=full_name,
        role=role,
    )
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


def auth_headers(profile: ProfileModel) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': profile.email})}"}


@pytest.fixture
def user(db_session) -> ProfileModel:
    return make_profile(db_session, "aziz@example.com", full_name="Aziz")


@pytest.fixture
def other_user(db_session) -> ProfileModel:
    return make_profile(db_session, "dilnoza@example.com", full_name="Dilnoza")


@pytest.fixture
def admin(db_session) -> ProfileModel:
    return make_profile(db_session, "admin@example.com", role="admin", full_name="Admin")


@pytest.fixture
def user_headers(user) -> dict:
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return auth_headers(other_user)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers(admin)


@pytest.fixture
def catalog(db_session) -> dict:
    """Two genres, two tags and four movies (one inactive) with distinct timestamps."""
    drama = GenreModel(name="Drama", name_uz="Drama")
    comedy = GenreModel(name="Comedy", name_uz="Komediya")
    classic = TagModel(name="Classic", color="#ff0000")
    new = TagModel(name="New", color="#00ff00")
    db_session.add_all([drama, comedy, classic, new])
    db_session.flush()

    base = datetime(2024, 1, 1)
    movies = {
        "godfather": MovieModel(
            title="The Godfather", title_uz="Cho'qintirgan ota", description="Mafia family saga",
            release_year=1972, rating=4.8, view_count=50, created_at=base,
        ),
        "mask": MovieModel(
            title="The Mask", description="A bank clerk finds a magical mask",
            description_uz="Sehrli niqob", release_year=1994, rating=3.5, view_count=200,
            created_at=base + timedelta(days=1),
        ),
        "amelie": MovieModel(
            title="Amelie", description="A shy waitress in Paris",
            release_year=2001, rating=4.1, view_count=10, created_at=base + timedelta(days=2),
        ),
        "hidden": MovieModel(
            title="Hidden Draft", description="Not published yet", release_year=2024,
            status=MovieStatus.pending, created_at=base + timedelta(days=3),
        ),
    }
    db_session.add_all(movies.values())
    db_session.flush()

    db_session.add_all([
        MovieGenreModel(movie_id=movies["godfather"].id, genre_id=drama.id),
        MovieGenreModel(movie_id=movies["mask"].id, genre_id=comedy.id),
        MovieGenreModel(movie_id=movies["amelie"].id, genre_id=comedy.id),
        MovieGenreModel(movie_id=movies["amelie"].id, genre_id=drama.id),
        MovieTagModel(movie_id=movies["godfather"].id, tag_id=classic.id),
        MovieTagModel(movie_id=movies["amelie"].id, tag_id=new.id),
    ])
    db_session.commit()

    return {
        "genres": {"drama": drama.id, "comedy": comedy.id},
        "tags": {"classic": classic.id, "new": new.id},
        "movies": {key: movie.id for key, movie in movies.items()},
    }
