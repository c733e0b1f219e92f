"""Adapters without credentials answer from their mock datasets."""

from __future__ import annotations

import pytest

from catalist.core.config import settings
from catalist.providers import build_adapters
from catalist.providers.books import GoogleBooksAdapter
from catalist.providers.mock_data import BOOK_VOLUMES, filter_mock
from catalist.providers.tmdb import TMDBAdapter
from catalist.schema.results import ContentType, FallbackReason
from catalist.tests.utils import install_client


@pytest.mark.asyncio
async def test_tmdb_without_credentials_matches_inception_only(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = install_client(monkeypatch, lambda url, params: AssertionError("network used"))

    response = await TMDBAdapter().search("inception")

    assert [item.title for item in response.items] == ["Inception"]
    assert response.items[0].content_type is ContentType.MOVIE
    assert response.items[0].subtitle == "2010"
    assert response.fallback is True
    assert response.fallback_reason is FallbackReason.CREDENTIAL_MISSING
    assert calls == []


@pytest.mark.asyncio
async def test_books_without_match_returns_entire_mock_dataset() -> None:
    response = await GoogleBooksAdapter().search("zzzznomatch")

    assert len(response.items) == 5
    assert response.total == 5
    assert {item.content_id for item in response.items} == {volume["id"] for volume in BOOK_VOLUMES}


@pytest.mark.asyncio
async def test_placeholder_credentials_count_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "your-api-key")
    calls = install_client(monkeypatch, lambda url, params: AssertionError("network used"))

    response = await GoogleBooksAdapter().search("dune")

    assert response.fallback is True
    assert [item.title for item in response.items] == ["Dune"]
    assert calls == []


@pytest.mark.asyncio
async def test_every_general_adapter_answers_with_items_offline() -> None:
    adapters = build_adapters()
    for name, adapter in adapters.items():
        response = await adapter.search("qqqq-not-in-any-dataset")
        assert response.items, name
        assert response.fallback is True


@pytest.mark.asyncio
async def test_blank_query_short_circuits_without_discover_mode() -> None:
    response = await TMDBAdapter().search("   ")

    assert response.items == []
    assert response.fallback is False


def test_filter_mock_is_case_insensitive_over_nested_fields() -> None:
    matches = filter_mock(BOOK_VOLUMES, "HERBERT", ["volumeInfo.authors"])
    assert [entry["id"] for entry in matches] == ["B1hSG45JCX4C"]
