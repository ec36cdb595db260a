"""
Tests for the profile page (stats, achievements) and per-user settings.
"""

from kino.models import CommentModel, FavoriteModel, RatingModel

from tests.conftest import PASSWORD


def test_profile_get_and_update(client, user_headers) -> None:
    assert client.get("/v1/profile", headers=user_headers).json()["full_name"] == "Aziz"

    response = client.put(
        "/v1/profile",
        json={"full_name": " Aziz Karimov ", "avatar_url": "https://img.example.com/a.png"},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json()["full_name"] == "Aziz Karimov"
    assert response.json()["avatar_url"] == "https://img.example.com/a.png"


def test_stats_and_achievements(client, catalog, user, user_headers, db_session) -> None:
    movies = catalog["movies"]
    db_session.add_all([
        RatingModel(user_id=user.id, movie_id=movies["godfather"], rating=5),
        RatingModel(user_id=user.id, movie_id=movies["mask"], rating=4),
        RatingModel(user_id=user.id, movie_id=movies["amelie"], rating=4),
        CommentModel(user_id=user.id, movie_id=movies["mask"], content="Ajoyib"),
        FavoriteModel(user_id=user.id, movie_id=movies["amelie"]),
    ])
    db_session.commit()

    stats = client.get("/v1/profile/stats", headers=user_headers).json()
    assert stats == {
        "total_ratings": 3,
        "total_comments": 1,
        "total_favorites": 1,
        "average_rating": 4.33,
        "movies_watched": 3,
        "reviews_written": 1,
    }

    achievements = {a["name"]: a for a in client.get("/v1/profile/achievements", headers=user_headers).json()}
    assert list(achievements) == ["Kino Sevuvchi", "Tanqidchi", "Kolleksioner", "Ekspert"]
    assert achievements["Kino Sevuvchi"]["earned"] is False
    assert achievements["Kino Sevuvchi"]["progress"] == 3
    assert achievements["Kolleksioner"]["max_progress"] == 50
    assert achievements["Ekspert"]["earned"] is True
    assert achievements["Ekspert"]["progress"] == 43


def test_stats_for_new_user(client, user_headers) -> None:
    stats = client.get("/v1/profile/stats", headers=user_headers).json()
    assert stats["average_rating"] == 0.0
    assert stats["total_ratings"] == 0


def test_settings_created_with_defaults(client, user_headers) -> None:
    body = client.get("/v1/settings", headers=user_headers).json()

    assert body["profile_visibility"] == "public"
    assert body["show_email"] is False
    assert body["rating_notifications"] is False
    assert body["language"] == "uz"
    assert body["theme"] == "system"
    assert body["movies_per_page"] == 20
    assert body["default_quality"] == "1080p"
    assert body["session_timeout"] == 30
    assert body["sound_effects"] is True


def test_settings_partial_update(client, user_headers) -> None:
    response = client.put("/v1/settings", json={"theme": "dark", "newsletter": True}, headers=user_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["theme"] == "dark"
    assert body["newsletter"] is True
    assert body["language"] == "uz"


def test_settings_validation(client, user_headers) -> None:
    assert client.put("/v1/settings", json={"theme": "neon"}, headers=user_headers).status_code == 422
    assert client.put("/v1/settings", json={"language": "de"}, headers=user_headers).status_code == 422
    assert client.put("/v1/settings", json={"session_timeout": 1}, headers=user_headers).status_code == 422


def test_password_change_rules(client, user, user_headers) -> None:
    mismatch = client.post(
        "/v1/settings/password",
        json={"new_password": "abcdef1", "confirm_password": "abcdef2"},
        headers=user_headers,
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["detail"] == "Yangi parollar mos kelmaydi"

    short = client.post(
        "/v1/settings/password",
        json={"new_password": "abc", "confirm_password": "abc"},
        headers=user_headers,
    )
    assert short.status_code == 400
    assert short.json()["detail"] == "Parol kamida 6 ta belgidan iborat bo'lishi kerak"

    ok = client.post(
        "/v1/settings/password",
        json={"new_password": "yangi-parol", "confirm_password": "yangi-parol"},
        headers=user_headers,
    )
    assert ok.status_code == 200

    assert client.post("/v1/auth/login", json={"email": user.email, "password": PASSWORD}).status_code == 401
    assert client.post("/v1/auth/login", json={"email": user.email, "password": "yangi-parol"}).status_code == 200


def test_export_user_data(client, catalog, user, user_headers, db_session) -> None:
    db_session.add(RatingModel(user_id=user.id, movie_id=catalog["movies"]["mask"], rating=3))
    db_session.commit()
    client.get("/v1/settings", headers=user_headers)

    body = client.get("/v1/settings/export", headers=user_headers).json()

    assert body["user"]["email"] == user.email
    assert "password_hash" not in body["profile"]
    assert body["settings"]["language"] == "uz"
    assert [r["rating"] for r in body["ratings"]] == [3]
    assert body["comments"] == []
    assert body["favorites"] == []
    assert body["exported_at"]
