"""
Tests for the comments section: listing, replies, edit and delete rules.
"""

from kino.models import CommentModel, SiteSettingsModel


def post_comment(client, movie_id, headers, content, **extra):
    return client.post(f"/v1/movies/{movie_id}/comments", json={"content": content, **extra}, headers=headers)


def test_create_comment_with_rating(client, catalog, user, user_headers) -> None:
    movie_id = catalog["movies"]["mask"]
    response = post_comment(client, movie_id, user_headers, "  Zo'r kino!  ", rating=5)

    assert response.status_code == 201
    body = response.json()
    assert body["content"] == "Zo'r kino!"
    assert body["rating"] == 5
    assert body["is_approved"] is True
    assert body["profiles"] == {"id": user.id, "full_name": "Aziz", "avatar_url": None}


def test_blank_comment_rejected(client, catalog, user_headers) -> None:
    response = post_comment(client, catalog["movies"]["mask"], user_headers, "   ")
    assert response.status_code == 400


def test_comment_requires_login(client, catalog) -> None:
    response = client.post(f"/v1/movies/{catalog['movies']['mask']}/comments", json={"content": "salom"})
    assert response.status_code == 401


def test_comments_disabled(client, catalog, user_headers, db_session) -> None:
    db_session.add(SiteSettingsModel(id=1, comments_enabled=False))
    db_session.commit()

    assert post_comment(client, catalog["movies"]["mask"], user_headers, "salom").status_code == 403


def test_listing_groups_replies_under_parents(client, catalog, user_headers, other_headers) -> None:
    movie_id = catalog["movies"]["godfather"]
    first = post_comment(client, movie_id, user_headers, "Birinchi").json()
    second = post_comment(client, movie_id, other_headers, "Ikkinchi").json()
    reply = post_comment(client, movie_id, other_headers, "Javob", parent_id=first["id"]).json()
    nested = post_comment(client, movie_id, user_headers, "Javobga javob", parent_id=reply["id"]).json()

    assert nested["parent_id"] == first["id"]

    comments = client.get(f"/v1/movies/{movie_id}/comments").json()
    assert [c["content"] for c in comments] == ["Ikkinchi", "Birinchi"]
    assert comments[0]["replies"] == []
    assert [r["content"] for r in comments[1]["replies"]] == ["Javobga javob", "Javob"]
    assert second["parent_id"] is None


def test_unapproved_comments_hidden(client, catalog, user, db_session) -> None:
    movie_id = catalog["movies"]["godfather"]
    db_session.add(CommentModel(movie_id=movie_id, user_id=user.id, content="Yashirin", is_approved=False))
    db_session.commit()

    assert client.get(f"/v1/movies/{movie_id}/comments").json() == []


def test_reply_to_comment_of_other_movie(client, catalog, user_headers) -> None:
    parent = post_comment(client, catalog["movies"]["mask"], user_headers, "Niqob").json()
    response = post_comment(client, catalog["movies"]["amelie"], user_headers, "Javob", parent_id=parent["id"])
    assert response.status_code == 400


def test_only_author_can_edit(client, catalog, user_headers, other_headers) -> None:
    comment = post_comment(client, catalog["movies"]["mask"], user_headers, "Asl matn").json()

    forbidden = client.put(f"/v1/comments/{comment['id']}", json={"content": "Buzilgan"}, headers=other_headers)
    assert forbidden.status_code == 403

    edited = client.put(f"/v1/comments/{comment['id']}", json={"content": "Yangi matn"}, headers=user_headers)
    assert edited.status_code == 200
    assert edited.json()["content"] == "Yangi matn"


def test_author_delete_removes_replies(client, catalog, user_headers, other_headers, db_session) -> None:
    movie_id = catalog["movies"]["mask"]
    parent = post_comment(client, movie_id, user_headers, "Ota izoh").json()
    post_comment(client, movie_id, other_headers, "Bola izoh", parent_id=parent["id"])

    assert client.delete(f"/v1/comments/{parent['id']}", headers=other_headers).status_code == 403
    assert client.delete(f"/v1/comments/{parent['id']}", headers=user_headers).status_code == 204

    assert db_session.query(CommentModel).count() == 0
    assert client.delete(f"/v1/comments/{parent['id']}", headers=user_headers).status_code == 404
