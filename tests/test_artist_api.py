"""Tests for the HTTP client talking to the search backend."""

from __future__ import annotations

import httpx
import pytest

from artist_explorer.config import ApiSettings
from artist_explorer.services.artist_api import ArtistSearchClient
from artist_explorer.services.exceptions import NetworkError, ServerError
from artist_explorer.ui.images import resolve_image_url

BASE = "https://backend.example/api"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_search_sends_query_and_limit():
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "suggestions": [{"id": "1", "name": "Taylor Swift", "followers": 100}],
                "results": [],
            },
        )

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("Tay", 20)

    assert seen[0].url.path == "/api/search"
    assert seen[0].url.params["q"] == "Tay"
    assert seen[0].url.params["limit"] == "20"
    assert seen[0].headers["Accept"] == "application/json"
    assert [entity.name for entity in payload.suggestions] == ["Taylor Swift"]
    assert payload.results == ()


@pytest.mark.asyncio
async def test_search_with_blank_query_skips_network():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("   ", 20)

    assert payload.suggestions == ()
    assert payload.results == ()


@pytest.mark.asyncio
async def test_missing_fields_are_empty_not_errors():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("beatles", 20)

    assert payload.suggestions == ()
    assert payload.results == ()


@pytest.mark.asyncio
async def test_rows_are_normalized_and_bad_rows_skipped():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "suggestions": None,
                "results": [
                    {"spotifyId": "abc", "id": "ignored", "name": "Adele", "followers": {"total": 1234}},
                    {"id": 7, "name": "Numeric", "followers": None},
                    "not-an-object",
                    {"name": "No id"},
                ],
            },
        )

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("a", 20)

    assert [(e.id, e.name, e.followers) for e in payload.results] == [
        ("abc", "Adele", 1234),
        ("7", "Numeric", 0),
    ]


@pytest.mark.asyncio
async def test_non_success_status_raises_server_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        with pytest.raises(ServerError):
            await service.search("beatles", 20)


@pytest.mark.asyncio
async def test_undecodable_body_raises_server_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        with pytest.raises(ServerError):
            await service.search("beatles", 20)


@pytest.mark.asyncio
async def test_unreachable_endpoint_raises_network_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        with pytest.raises(NetworkError):
            await service.search("beatles", 20)


@pytest.mark.asyncio
async def test_get_details_parses_entity():
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(
            200,
            json={
                "id": "1",
                "name": "Taylor Swift",
                "followers": {"total": 100},
                "images": [{"url": "https://img.example/1.jpg", "width": 640, "height": 640}],
                "genres": ["pop"],
                "popularity": 99,
            },
        )

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE + "/"))
        entity = await service.get_details("1")

    assert seen == ["/api/artist/1"]
    assert entity.followers == 100
    assert entity.images[0].url == "https://img.example/1.jpg"
    assert entity.genres == ("pop",)


@pytest.mark.asyncio
async def test_get_details_rejects_invalid_entity():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"name": "missing id"})

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        with pytest.raises(ServerError):
            await service.get_details("1")


@pytest.mark.asyncio
async def test_get_details_not_found_is_server_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "not found"})

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        with pytest.raises(ServerError):
            await service.get_details("missing")


@pytest.mark.asyncio
async def test_null_or_empty_spotify_id_falls_back_to_id():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "suggestions": [
                    {"spotifyId": None, "id": "x1", "name": "Fallback"},
                    {"spotifyId": "", "id": "x2", "name": "Empty"},
                    {"spotifyId": None, "id": None, "name": "Nothing"},
                ],
            },
        )

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("fa", 20)

    assert [e.id for e in payload.suggestions] == ["x1", "x2"]


@pytest.mark.asyncio
async def test_rows_with_broken_images_are_kept():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "suggestions": [
                    {"id": "x2", "name": "NullImg", "images": [{"url": None}]},
                    {"id": "x3", "name": "Junk", "images": ["nope", {"width": 64}]},
                ],
            },
        )

    async with _client(handler) as http:
        service = ArtistSearchClient(http, settings=ApiSettings(base_url=BASE))
        payload = await service.search("nu", 20)

    assert [e.id for e in payload.suggestions] == ["x2", "x3"]
    assert [resolve_image_url(e) for e in payload.suggestions] == [None, None]
