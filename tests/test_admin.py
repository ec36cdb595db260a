"""
Tests for the admin back-office: access control, dashboard and management screens.
"""

import pytest

from kino.models import (
    CommentModel,
    FavoriteModel,
    MovieGenreModel,
    MovieModel,
    ProfileModel,
    RatingModel,
    WatchlistModel,
)

from tests.conftest import auth_headers, make_profile


def movie_form(**overrides) -> dict:
    form = {
        "title": "Inception",
        "title_uz": "Boshlanish",
        "description": "Dreams within dreams",
        "release_year": 2010,
        "duration": 148,
        "director": "Christopher Nolan",
        "actors": ["Leonardo DiCaprio", " "],
        "status": "active",
        "genre_ids": [],
        "tag_ids": [],
    }
    form.update(overrides)
    return form


@pytest.mark.parametrize("path", [
    "/v1/admin/dashboard/stats",
    "/v1/admin/movies",
    "/v1/admin/genres",
    "/v1/admin/users",
    "/v1/admin/comments",
    "/v1/admin/settings",
])
def test_admin_endpoints_require_admin_role(client, user_headers, path) -> None:
    assert client.get(path).status_code == 401
    response = client.get(path, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Admin paneliga kirish uchun ruxsat yo'q"


def test_dashboard_stats(client, catalog, user, admin_headers, db_session) -> None:
    db_session.add_all([
        RatingModel(user_id=user.id, movie_id=catalog["movies"]["mask"], rating=4),
        CommentModel(user_id=user.id, movie_id=catalog["movies"]["mask"], content="ok"),
        CommentModel(user_id=user.id, movie_id=catalog["movies"]["mask"], content="kutilmoqda", is_approved=False),
    ])
    db_session.commit()

    stats = client.get("/v1/admin/dashboard/stats", headers=admin_headers).json()

    assert stats["total_movies"] == 4
    assert stats["total_users"] == 2
    assert stats["total_comments"] == 2
    assert stats["pending_comments"] == 1
    assert stats["approved_comments"] == 1
    assert stats["rejected_comments"] == 0
    assert stats["total_views"] == 260
    assert stats["total_genres"] == 2
    assert stats["total_tags"] == 2
    assert stats["new_users_this_week"] == 2
    assert stats["new_movies_this_month"] == 0


def test_recent_activity_and_charts(client, catalog, user, admin_headers, db_session) -> None:
    db_session.add(RatingModel(user_id=user.id, movie_id=catalog["movies"]["amelie"], rating=5))
    db_session.commit()

    activity = client.get("/v1/admin/dashboard/activity", headers=admin_headers).json()
    assert {a["type"] for a in activity} == {"movie", "user", "rating"}
    assert activity == sorted(activity, key=lambda a: a["created_at"], reverse=True)
    rating = next(a for a in activity if a["type"] == "rating")
    assert rating["description"] == 'Aziz "Amelie" ga 5 yulduz berdi'

    charts = client.get("/v1/admin/dashboard/charts", headers=admin_headers).json()
    assert charts["movies_by_status"] == [
        {"name": "Faol", "value": 3},
        {"name": "Kutilmoqda", "value": 1},
        {"name": "Nofaol", "value": 0},
    ]
    assert len(charts["users_by_month"]) == 6
    assert charts["users_by_month"][-1]["value"] == 2
    assert [p["value"] for p in charts["ratings_distribution"]] == [0, 0, 0, 0, 1]


def test_recent_activity_keeps_latest_fifteen(client, catalog, user, admin, admin_headers, db_session) -> None:
    movie_ids = list(catalog["movies"].values())
    db_session.add_all(
        [CommentModel(user_id=user.id, movie_id=movie_ids[0], content=f"izoh {i}") for i in range(5)]
        + [RatingModel(user_id=user.id, movie_id=movie_id, rating=4) for movie_id in movie_ids]
        + [RatingModel(user_id=admin.id, movie_id=movie_ids[0], rating=3)]
    )
    db_session.commit()

    activity = client.get("/v1/admin/dashboard/activity", headers=admin_headers).json()

    assert len(activity) == 15
    assert activity == sorted(activity, key=lambda a: a["created_at"], reverse=True)


def test_create_movie_validation(client, catalog, admin_headers) -> None:
    drama = catalog["genres"]["drama"]
    cases = [
        (movie_form(title=" ", genre_ids=[drama]), "Kino nomi majburiy"),
        (movie_form(description="", genre_ids=[drama]), "Kino tavsifi majburiy"),
        (movie_form(genre_ids=[]), "Kamida bitta janr tanlang"),
    ]
    for form, message in cases:
        response = client.post("/v1/admin/movies", json=form, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == message


def test_create_and_update_movie(client, catalog, admin, admin_headers, db_session) -> None:
    genres, tags = catalog["genres"], catalog["tags"]

    created = client.post(
        "/v1/admin/movies",
        json=movie_form(genre_ids=[genres["drama"]], tag_ids=[tags["new"]]),
        headers=admin_headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["created_by"] == admin.id
    assert body["genre_ids"] == [genres["drama"]]
    assert body["tag_ids"] == [tags["new"]]
    assert body["actors"] == ["Leonardo DiCaprio"]
    assert body["rating"] == 0.0

    updated = client.put(
        f"/v1/admin/movies/{body['id']}",
        json=movie_form(title="Inception (2010)", genre_ids=[genres["comedy"]], tag_ids=[]),
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Inception (2010)"
    assert updated.json()["genre_ids"] == [genres["comedy"]]
    assert updated.json()["tag_ids"] == []

    assert db_session.query(MovieGenreModel).filter_by(movie_id=body["id"]).count() == 1


def test_movie_status_change_hides_from_public(client, catalog, admin_headers) -> None:
    movie_id = catalog["movies"]["mask"]
    response = client.patch(f"/v1/admin/movies/{movie_id}/status", json={"status": "inactive"}, headers=admin_headers)

    assert response.json()["status"] == "inactive"
    assert client.get(f"/v1/movies/{movie_id}").status_code == 404
    assert client.get(f"/v1/admin/movies/{movie_id}", headers=admin_headers).status_code == 200


def test_admin_movie_list_search(client, catalog, admin_headers) -> None:
    rows = client.get("/v1/admin/movies", headers=admin_headers).json()
    assert [r["title"] for r in rows] == ["Hidden Draft", "Amelie", "The Mask", "The Godfather"]

    found = client.get("/v1/admin/movies", params={"search": "ota"}, headers=admin_headers).json()
    assert [r["title"] for r in found] == ["The Godfather"]


def test_delete_movie_removes_dependent_rows(client, catalog, user, admin_headers, db_session) -> None:
    movie_id = catalog["movies"]["amelie"]
    parent = CommentModel(user_id=user.id, movie_id=movie_id, content="izoh")
    db_session.add(parent)
    db_session.flush()
    db_session.add_all([
        CommentModel(user_id=user.id, movie_id=movie_id, content="javob", parent_id=parent.id),
        RatingModel(user_id=user.id, movie_id=movie_id, rating=4),
        WatchlistModel(user_id=user.id, movie_id=movie_id),
        FavoriteModel(user_id=user.id, movie_id=movie_id),
    ])
    db_session.commit()

    assert client.delete(f"/v1/admin/movies/{movie_id}", headers=admin_headers).status_code == 204

    db_session.expire_all()
    assert db_session.get(MovieModel, movie_id) is None
    for model_cls in (CommentModel, RatingModel, WatchlistModel, FavoriteModel, MovieGenreModel):
        assert db_session.query(model_cls).filter_by(movie_id=movie_id).count() == 0
    assert client.delete(f"/v1/admin/movies/{movie_id}", headers=admin_headers).status_code == 404


def test_genre_management(client, catalog, admin_headers, db_session) -> None:
    listed = client.get("/v1/admin/genres", params={"search": "komed"}, headers=admin_headers).json()["genres"]
    assert [(g["name"], g["movie_count"]) for g in listed] == [("Comedy", 2)]

    created = client.post("/v1/admin/genres", json={"name": "Thriller", "name_uz": "Triller"}, headers=admin_headers)
    assert created.status_code == 201
    assert client.post("/v1/admin/genres", json={"name": "thriller"}, headers=admin_headers).status_code == 409

    renamed = client.put(
        f"/v1/admin/genres/{created.json()['id']}", json={"name_uz": "Triller filmi"}, headers=admin_headers
    )
    assert renamed.json()["name"] == "Thriller"
    assert renamed.json()["name_uz"] == "Triller filmi"

    drama = catalog["genres"]["drama"]
    assert client.delete(f"/v1/admin/genres/{drama}", headers=admin_headers).status_code == 204
    assert db_session.query(MovieGenreModel).filter_by(genre_id=drama).count() == 0


def test_tag_management(client, catalog, admin_headers) -> None:
    created = client.post("/v1/admin/tags", json={"name": "Oscar"}, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["color"] == "#3b82f6"

    assert client.post("/v1/admin/tags", json={"name": "Bad", "color": "red"}, headers=admin_headers).status_code == 422

    tag_id = created.json()["id"]
    updated = client.put(f"/v1/admin/tags/{tag_id}", json={"color": "#AABBCC"}, headers=admin_headers)
    assert updated.json()["color"] == "#AABBCC"

    tags = client.get("/v1/admin/tags", headers=admin_headers).json()["tags"]
    assert [t["name"] for t in tags] == ["Classic", "New", "Oscar"]
    assert client.delete(f"/v1/admin/tags/{tag_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/v1/admin/tags/{tag_id}", headers=admin_headers).status_code == 404


def test_user_list_with_stats_and_filters(client, catalog, user, admin_headers, db_session) -> None:
    db_session.add_all([
        RatingModel(user_id=user.id, movie_id=catalog["movies"]["mask"], rating=4),
        RatingModel(user_id=user.id, movie_id=catalog["movies"]["amelie"], rating=3),
        CommentModel(user_id=user.id, movie_id=catalog["movies"]["mask"], content="salom"),
    ])
    db_session.commit()

    body = client.get("/v1/admin/users", params={"search": "aziz"}, headers=admin_headers).json()
    assert body["total"] == 1
    row = body["users"][0]
    assert (row["total_ratings"], row["total_comments"], row["avg_rating"]) == (2, 1, 3.5)

    admins = client.get("/v1/admin/users", params={"role": "admin"}, headers=admin_headers).json()
    assert [u["email"] for u in admins["users"]] == ["admin@example.com"]

    by_email = client.get("/v1/admin/users", params={"sort_by": "email", "sort_order": "asc"}, headers=admin_headers)
    assert [u["email"] for u in by_email.json()["users"]] == ["admin@example.com", "aziz@example.com"]


def test_user_list_pagination(client, admin_headers, db_session) -> None:
    for i in range(21):
        db_session.add(ProfileModel(email=f"user{i:02d}@example.com", role="user"))
    db_session.commit()

    first = client.get("/v1/admin/users", headers=admin_headers).json()
    second = client.get("/v1/admin/users", params={"page": 2}, headers=admin_headers).json()

    assert first["total"] == 22
    assert first["total_pages"] == 2
    assert len(first["users"]) == 20
    assert len(second["users"]) == 2


def test_role_change_and_bulk_actions(client, catalog, user, other_user, admin, admin_headers, db_session) -> None:
    other_id = other_user.id
    promoted = client.patch(f"/v1/admin/users/{user.id}/role", json={"role": "admin"}, headers=admin_headers)
    assert promoted.json()["role"] == "admin"

    demote_self = client.post(
        "/v1/admin/users/bulk", json={"user_ids": [admin.id], "action": "demote"}, headers=admin_headers
    )
    assert demote_self.status_code == 400

    demoted = client.post(
        "/v1/admin/users/bulk", json={"user_ids": [user.id], "action": "demote"}, headers=admin_headers
    ).json()
    assert demoted["affected"] == 1

    db_session.add(CommentModel(user_id=other_id, movie_id=catalog["movies"]["mask"], content="salom"))
    db_session.commit()
    deleted = client.post(
        "/v1/admin/users/bulk", json={"user_ids": [other_id], "action": "delete"}, headers=admin_headers
    ).json()
    assert deleted["affected"] == 1

    db_session.expire_all()
    assert db_session.get(ProfileModel, user.id).role == "user"
    assert db_session.get(ProfileModel, other_id) is None
    assert db_session.query(CommentModel).count() == 0


def test_users_csv_export(client, user, admin_headers) -> None:
    response = client.get("/v1/admin/users/export", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().split("\n")
    assert lines[0] == "ID,Email,Full Name,Role,Created At,Updated At"
    assert len(lines) == 3
    assert any(line.startswith(f"{user.id},aziz@example.com,Aziz,user,") for line in lines)


def test_comment_moderation(client, catalog, user, db_session) -> None:
    moderator = make_profile(db_session, "moderator@example.com", role="admin")
    headers = auth_headers(moderator)
    movie_id = catalog["movies"]["mask"]
    parent = CommentModel(user_id=user.id, movie_id=movie_id, content="Ajoyib film")
    db_session.add(parent)
    db_session.flush()
    db_session.add_all([
        CommentModel(user_id=user.id, movie_id=movie_id, content="javob", parent_id=parent.id),
        CommentModel(user_id=user.id, movie_id=movie_id, content="spam", is_approved=False),
    ])
    db_session.commit()
    parent_id = parent.id

    listed = client.get("/v1/admin/comments", headers=headers).json()
    assert listed["total"] == 3
    parent_row = next(c for c in listed["comments"] if c["id"] == parent_id)
    assert parent_row["replies_count"] == 1
    assert parent_row["profiles"]["email"] == "aziz@example.com"
    assert parent_row["movies"]["title"] == "The Mask"

    pending = client.get("/v1/admin/comments", params={"status": "pending"}, headers=headers).json()
    assert [c["content"] for c in pending["comments"]] == ["spam"]
    by_email = client.get("/v1/admin/comments", params={"search": "aziz@"}, headers=headers).json()
    assert by_email["total"] == 3

    client.patch(f"/v1/admin/comments/{parent_id}/moderation", json={"approve": False}, headers=headers)
    assert client.get(f"/v1/movies/{movie_id}/comments").json() == []

    approved = client.post(
        "/v1/admin/comments/bulk",
        json={"comment_ids": [c["id"] for c in listed["comments"]], "action": "approve"},
        headers=headers,
    ).json()
    assert approved["affected"] == 3

    assert client.delete(f"/v1/admin/comments/{parent_id}", headers=headers).status_code == 204
    remaining = client.get("/v1/admin/comments", headers=headers).json()
    assert [c["content"] for c in remaining["comments"]] == ["spam"]


def test_site_settings(client, catalog, admin_headers) -> None:
    defaults = client.get("/v1/admin/settings", headers=admin_headers).json()
    assert defaults["site_name"] == "Kino Platform"
    assert defaults["allowed_file_types"] == ["jpg", "jpeg", "png", "webp"]
    assert defaults["theme_color"] == "#3b82f6"

    updated = client.put(
        "/v1/admin/settings",
        json={"site_name": "Kino UZ", "maintenance_mode": True, "max_file_size": 20},
        headers=admin_headers,
    ).json()
    assert updated["site_name"] == "Kino UZ"
    assert updated["maintenance_mode"] is True
    assert updated["site_description"] == "Eng yaxshi kinolarni tomosha qiling"

    assert client.put("/v1/admin/settings", json={"theme_color": "blue"}, headers=admin_headers).status_code == 422

    stats = client.get("/v1/admin/settings/system-stats", headers=admin_headers).json()
    assert stats == {"total_users": 1, "total_movies": 4, "total_comments": 0}


def test_site_export(client, catalog, admin_headers) -> None:
    body = client.get("/v1/admin/settings/export", headers=admin_headers).json()

    assert len(body["movies"]) == 4
    assert body["movies"][0]["status"] == "active"
    assert [u["email"] for u in body["users"]] == ["admin@example.com"]
    assert "password_hash" not in body["users"][0]
    assert len(body["genres"]) == 2
    assert len(body["tags"]) == 2
    assert body["exported_at"]


def test_blank_genre_and_tag_names_rejected(client, catalog, admin_headers) -> None:
    response = client.post("/v1/admin/genres", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Janr nomi majburiy"

    drama = catalog["genres"]["drama"]
    response = client.put(f"/v1/admin/genres/{drama}", json={"name": "  "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Janr nomi majburiy"

    response = client.post("/v1/admin/tags", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Teg nomi majburiy"

    classic = catalog["tags"]["classic"]
    response = client.put(f"/v1/admin/tags/{classic}", json={"name": " "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Teg nomi majburiy"

    genres = client.get("/v1/admin/genres", headers=admin_headers).json()["genres"]
    tags = client.get("/v1/admin/tags", headers=admin_headers).json()["tags"]
    assert [g["name"] for g in genres] == ["Comedy", "Drama"]
    assert [t["name"] for t in tags] == ["Classic", "New"]


def test_site_settings_ignore_null_values(client, catalog, admin_headers) -> None:
    for payload in ({"allowed_file_types": None}, {"site_description": None}, {"site_name": None}):
        assert client.put("/v1/admin/settings", json=payload, headers=admin_headers).status_code == 200

    response = client.get("/v1/admin/settings", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["allowed_file_types"] == ["jpg", "jpeg", "png", "webp"]
    assert response.json()["site_description"] == "Eng yaxshi kinolarni tomosha qiling"
    assert response.json()["site_name"] == "Kino Platform"


def test_bulk_comment_delete_counts_replies(client, catalog, user, admin_headers, db_session) -> None:
    movie_id = catalog["movies"]["mask"]
    parent = CommentModel(user_id=user.id, movie_id=movie_id, content="Zo'r")
    other = CommentModel(user_id=user.id, movie_id=movie_id, content="Yaxshi")
    db_session.add_all([parent, other])
    db_session.flush()
    reply = CommentModel(user_id=user.id, movie_id=movie_id, content="Rozi", parent_id=parent.id)
    extra_reply = CommentModel(user_id=user.id, movie_id=movie_id, content="Men ham", parent_id=parent.id)
    db_session.add_all([reply, extra_reply])
    db_session.commit()
    ids = [parent.id, reply.id, other.id]

    result = client.post(
        "/v1/admin/comments/bulk", json={"comment_ids": ids, "action": "delete"}, headers=admin_headers
    ).json()

    assert result["affected"] == 4
    assert result["message"] == "4 ta izoh o'chirildi"
    assert client.get("/v1/admin/comments", headers=admin_headers).json()["total"] == 0
