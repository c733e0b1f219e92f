"""Adapter tests for TMDB auth, multi-search normalization and failure fallback."""

from __future__ import annotations

import httpx
import pytest

from catalist.core.config import settings
from catalist.providers.errors import CredentialMissing
from catalist.providers.observability import ProviderMonitor
from catalist.providers.tmdb import TMDBAdapter
from catalist.schema.results import ContentType, FallbackReason
from catalist.tests.utils import build_response, install_client

SEARCH_URL = "https://api.themoviedb.org/3/search/multi"


def test_tmdb_auth_prefers_bearer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_auth_header", "preferred-token")
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")

    headers, params = TMDBAdapter()._auth()

    assert headers["Authorization"] == "Bearer preferred-token"
    assert "api_key" not in params


def test_tmdb_auth_uses_api_key_when_header_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")

    headers, params = TMDBAdapter()._auth()

    assert "Authorization" not in headers
    assert params["api_key"] == "api-key"


def test_tmdb_auth_errors_without_credentials() -> None:
    with pytest.raises(CredentialMissing):
        TMDBAdapter()._auth()


def test_tmdb_parse_identifier_accepts_site_urls() -> None:
    adapter = TMDBAdapter()
    assert adapter.parse_identifier("https://www.themoviedb.org/movie/27205-inception") == "movie:27205"
    assert adapter.parse_identifier("https://www.themoviedb.org/person/525") == "person:525"
    assert adapter.parse_identifier(" tv:1396 ") == "tv:1396"


@pytest.mark.asyncio
async def test_tmdb_multi_search_splits_media_types(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")
    payload = {
        "total_results": 4,
        "results": [
            {"id": 1, "media_type": "movie", "title": "Heat", "release_date": "1995-12-15", "poster_path": "/heat.jpg"},
            {"id": 2, "media_type": "tv", "name": "The Wire", "first_air_date": "2002-06-02", "poster_path": None},
            {"id": 3, "media_type": "person", "name": "Al Pacino", "known_for_department": "Acting"},
            {"id": 4, "media_type": "collection", "name": "Ignored"},
        ],
    }
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data=payload))

    response = await TMDBAdapter().search("heat")

    assert response.fallback is False
    assert [item.content_type for item in response.items] == [ContentType.MOVIE, ContentType.TV, ContentType.PERSON]
    movie, show, person = response.items
    assert movie.subtitle == "1995"
    assert movie.image_url == "https://image.tmdb.org/t/p/w500/heat.jpg"
    assert show.subtitle == "2002"
    assert show.image_url.startswith("https://")
    assert person.subtitle == "Acting"
    assert calls[0]["url"] == SEARCH_URL
    assert calls[0]["params"]["query"] == "heat"
    assert calls[0]["params"]["api_key"] == "api-key"


@pytest.mark.asyncio
async def test_tmdb_transport_failure_serves_filtered_mock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")
    install_client(monkeypatch, lambda url, params: httpx.ConnectTimeout("timed out"))

    response = await TMDBAdapter().search("inception")

    assert response.fallback is True
    assert response.fallback_reason is FallbackReason.TRANSPORT_FAILURE
    assert [item.title for item in response.items] == ["Inception"]


@pytest.mark.asyncio
async def test_tmdb_malformed_body_is_schema_mismatch(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")
    install_client(monkeypatch, lambda url, params: build_response(url, json_data={"results": "nope"}))

    response = await TMDBAdapter().search("dark")

    assert response.fallback is True
    assert response.fallback_reason is FallbackReason.SCHEMA_MISMATCH
    assert [item.title for item in response.items] == ["Dark"]


@pytest.mark.asyncio
async def test_tmdb_open_circuit_skips_network(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")
    calls = install_client(monkeypatch, lambda url, params: build_response(url, status=500))
    monitor = ProviderMonitor(circuit_threshold=1, base_backoff_seconds=60, max_backoff_seconds=60)
    adapter = TMDBAdapter(monitor=monitor)

    first = await adapter.search("parasite")
    second = await adapter.search("parasite")

    assert first.fallback_reason is FallbackReason.TRANSPORT_FAILURE
    assert second.fallback_reason is FallbackReason.CIRCUIT_OPEN
    assert len(calls) == 1
    assert [item.title for item in second.items] == ["Parasite"]


@pytest.mark.asyncio
async def test_tmdb_get_by_id_uses_mock_dataset_offline() -> None:
    item = await TMDBAdapter().get_by_id("tv:1396")

    assert item is not None
    assert item.title == "Breaking Bad"
    assert item.content_type is ContentType.TV


@pytest.mark.asyncio
async def test_tmdb_typed_search_stamps_media_type(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "tmdb_api_key", "api-key")
    payload = {"results": [{"id": 525, "name": "Christopher Nolan", "known_for_department": "Directing"}]}
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data=payload))

    response = await TMDBAdapter().search_media("nolan", "person")

    [person] = response.items
    assert person.id == "person-525"
    assert person.content_type is ContentType.PERSON
    assert person.raw["media_type"] == "person"
    assert calls[0]["url"] == "https://api.themoviedb.org/3/search/person"


@pytest.mark.asyncio
async def test_tmdb_typed_search_rejects_unknown_media_type() -> None:
    with pytest.raises(ValueError):
        await TMDBAdapter().search_media("heat", "collection")


@pytest.mark.asyncio
async def test_tmdb_typed_search_offline_never_mixes_types() -> None:
    response = await TMDBAdapter().search_media("drama", "tv")

    assert response.fallback is True
    assert [item.title for item in response.items] == ["Breaking Bad", "Dark"]
