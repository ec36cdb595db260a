"""
Tests for advanced search: local-first lookup, TMDB fallback and translation.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from kino.api.v1.search import get_tmdb_service, get_translation_service
from kino.core.exceptions import ExternalServiceException
from kino.main import app
from kino.services.tmdb_service import TMDBService
from kino.services.translation_service import TranslationService

TMDB_PAYLOAD = {
    "page": 1,
    "total_results": 25,
    "results": [
        {
            "id": 27205,
            "title": "Начало",
            "overview": "Кобб крадёт секреты",
            "release_date": "2010-07-15",
            "genre_ids": [28, 878],
            "poster_path": "/inception.jpg",
            "vote_average": 8.4,
        },
        {
            "id": 1,
            "title": "Старый фильм",
            "overview": "",
            "release_date": "1950-01-01",
            "genre_ids": [18, 12345],
            "poster_path": None,
            "vote_average": 6.0,
        },
        {
            "id": 2,
            "title": "Без даты",
            "overview": "Неизвестно",
            "release_date": "",
            "genre_ids": [],
            "vote_average": 0,
        },
    ],
}


class FakeTMDBService(TMDBService):

    def __init__(self, payload=None):
        super().__init__()
        self.payload = payload if payload is not None else TMDB_PAYLOAD
        self.calls = []

    async def search_movies(self, query, page=1, language=None):
        self.calls.append((query, page))
        return self.payload


class FakeTranslationService(TranslationService):

    async def translate(self, text, target_language=None):
        return f"uz:{text}"


@pytest.fixture
def fake_tmdb(client):
    tmdb = FakeTMDBService()
    app.dependency_overrides[get_tmdb_service] = lambda: tmdb
    app.dependency_overrides[get_translation_service] = FakeTranslationService
    return tmdb


def test_empty_query_rejected(client, fake_tmdb) -> None:
    response = client.get("/v1/search/advanced", params={"query": "  "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Qidiruv so'zi kiriting"


def test_local_results_take_priority(client, catalog, fake_tmdb) -> None:
    body = client.get("/v1/search/advanced", params={"query": "godfather"}).json()

    assert body["source"] == "local"
    assert body["total_pages"] == 1
    assert fake_tmdb.calls == []
    [result] = body["results"]
    assert result["id"] == f"local-{catalog['movies']['godfather']}"
    assert result["translated_title"] == "Cho'qintirgan ota"
    assert result["year"] == "1972"
    assert result["genre"] == "Drama"
    assert result["rating"] == "4.8"
    assert result["is_local"] is True


def test_local_search_skips_inactive_movies(client, catalog, fake_tmdb) -> None:
    body = client.get("/v1/search/advanced", params={"query": "hidden draft"}).json()
    assert body["source"] == "tmdb"


def test_falls_back_to_tmdb_and_translates(client, catalog, fake_tmdb) -> None:
    body = client.get("/v1/search/advanced", params={"query": "inception", "page": 2}).json()

    assert fake_tmdb.calls == [("inception", 2)]
    assert body["source"] == "tmdb"
    assert body["page"] == 2
    assert body["total_pages"] == 3
    assert len(body["results"]) == 3

    first, second, third = body["results"]
    assert first["id"] == "tmdb-27205"
    assert first["tmdb_id"] == 27205
    assert first["title"] == "Начало"
    assert first["translated_title"] == "uz:Начало"
    assert first["plot"] == "uz:Кобб крадёт секреты"
    assert first["genre"] == "Jangari, Ilmiy fantastika"
    assert first["rating"] == "4.2"
    assert first["year"] == "2010"
    assert first["poster"] == "https://image.tmdb.org/t/p/w500/inception.jpg"
    assert first["is_local"] is False

    assert second["genre"] == "Drama, N/A"
    assert second["plot"] == "uz:Ta'rif yo'q"
    assert third["year"] == "N/A"
    assert third["rating"] == "0.0"


def test_year_range_filters_both_sources(client, catalog, fake_tmdb) -> None:
    body = client.get("/v1/search/advanced", params={"query": "godfather", "year_range": "2000-2020"}).json()

    assert body["source"] == "tmdb"
    assert [r["id"] for r in body["results"]] == ["tmdb-27205"]


def test_invalid_year_range(client, fake_tmdb) -> None:
    response = client.get("/v1/search/advanced", params={"query": "x", "year_range": "last-year"})
    assert response.status_code == 400


def test_no_results_anywhere(client, catalog) -> None:
    app.dependency_overrides[get_tmdb_service] = lambda: FakeTMDBService(payload={"results": [], "total_results": 0})
    app.dependency_overrides[get_translation_service] = FakeTranslationService

    body = client.get("/v1/search/advanced", params={"query": "zzz"}).json()
    assert body == {"results": [], "page": 1, "total_pages": 0, "source": "none"}


def test_tmdb_failure_maps_to_bad_gateway(client, catalog) -> None:
    failing = FakeTMDBService()
    failing.search_movies = AsyncMock(side_effect=ExternalServiceException("Qidirishda xatolik yuz berdi"))
    app.dependency_overrides[get_tmdb_service] = lambda: failing

    response = client.get("/v1/search/advanced", params={"query": "zzz"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Qidirishda xatolik yuz berdi"


def make_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", "https://example.test"))


def test_translation_reads_first_segment() -> None:
    mock_get = AsyncMock(return_value=make_response(200, [[["Boshlanish", "Начало", None]], None, "ru"]))

    with patch.object(httpx.AsyncClient, "get", mock_get):
        result = asyncio.run(TranslationService().translate("Начало"))

    assert result == "Boshlanish"
    params = mock_get.call_args.kwargs["params"]
    assert params["tl"] == "uz"
    assert params["client"] == "gtx"
    assert params["q"] == "Начало"


@pytest.mark.parametrize("mock_get", [
    AsyncMock(side_effect=httpx.ConnectError("offline")),
    AsyncMock(return_value=make_response(500, {})),
    AsyncMock(return_value=make_response(200, [])),
])
def test_translation_falls_back_to_source_text(mock_get) -> None:
    with patch.object(httpx.AsyncClient, "get", mock_get):
        assert asyncio.run(TranslationService().translate("Начало")) == "Начало"


def test_tmdb_search_sends_russian_language() -> None:
    mock_get = AsyncMock(return_value=make_response(200, TMDB_PAYLOAD))

    with patch.object(httpx.AsyncClient, "get", mock_get):
        data = asyncio.run(TMDBService().search_movies("inception", page=3))

    assert data["total_results"] == 25
    params = mock_get.call_args.kwargs["params"]
    assert params["language"] == "ru"
    assert params["page"] == 3


def test_tmdb_http_error_raises_external_service_error() -> None:
    with patch.object(httpx.AsyncClient, "get", AsyncMock(return_value=make_response(401, {}))):
        with pytest.raises(ExternalServiceException):
            asyncio.run(TMDBService().search_movies("inception"))
