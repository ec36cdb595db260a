"""
Tests for service info and health endpoints.
"""


def test_root_describes_service(client) -> None:
    body = client.get("/").json()
    assert body["service"] == "Kino Platform"
    assert body["docs"] == "/docs"


def test_health(client) -> None:
    assert client.get("/v1/system/health").json() == {"status": "healthy", "service": "Kino Platform"}


def test_db_test(client) -> None:
    response = client.get("/v1/system/db-test")
    assert response.status_code == 200
    assert response.json()["result"] == 1
