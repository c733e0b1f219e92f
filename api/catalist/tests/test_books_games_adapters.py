from __future__ import annotations

import pytest

from catalist.core.config import settings
from catalist.providers.books import GoogleBooksAdapter, format_authors
from catalist.providers.games import RAWGAdapter
from catalist.providers.images import BOOK_PLACEHOLDER, IMAGE_PLACEHOLDER
from catalist.schema.results import ContentType, FallbackReason
from catalist.tests.utils import build_response, install_client


def test_format_authors() -> None:
    assert format_authors(["Ann"]) == "Ann"
    assert format_authors(["Ann", "Bob"]) == "Ann & Bob"
    assert format_authors(["Ann", "Bob", "Cy", "Di"]) == "Ann & 3 others"
    assert format_authors([]) is None


@pytest.mark.asyncio
async def test_books_search_normalizes_volumes_and_paginates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "books-key")
    payload = {
        "totalItems": 41,
        "items": [
            {
                "id": "vol1",
                "volumeInfo": {
                    "title": "Good Omens",
                    "authors": ["Terry Pratchett", "Neil Gaiman"],
                    "publishedDate": "1990-05-01",
                    "imageLinks": {"thumbnail": "http://books.google.com/cover"},
                },
            },
            {"id": "vol2", "volumeInfo": {"title": "Untitled draft"}},
        ],
    }
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data=payload))

    response = await GoogleBooksAdapter().search("omens", page=3)

    assert response.total == 41
    first, second = response.items
    assert first.content_type is ContentType.BOOK
    assert first.subtitle == "Terry Pratchett & Neil Gaiman · 1990"
    assert first.image_url == "https://books.google.com/cover"
    assert second.subtitle is None
    assert second.image_url == BOOK_PLACEHOLDER
    assert calls[0]["params"]["startIndex"] == 40
    assert calls[0]["params"]["maxResults"] == 20


@pytest.mark.asyncio
async def test_books_missing_items_means_zero_results(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "books-key")
    install_client(monkeypatch, lambda url, params: build_response(url, json_data={"totalItems": 0}))

    response = await GoogleBooksAdapter().search("qwertyuiop")

    assert response.items == []
    assert response.fallback is False


@pytest.mark.asyncio
async def test_books_blank_query_runs_wildcard_discover(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "books-key")
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data={"items": []}))

    await GoogleBooksAdapter().search("")

    assert calls[0]["params"]["q"] == "*"


@pytest.mark.asyncio
async def test_games_search_uses_release_year_then_platforms(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "rawg_api_key", "rawg-key")
    payload = {
        "count": 2,
        "results": [
            {"id": 1, "name": "Celeste", "released": "2018-01-25", "background_image": "https://media.rawg.io/c.jpg"},
            {
                "id": 2,
                "name": "Unreleased",
                "released": None,
                "background_image": None,
                "platforms": [
                    {"platform": {"name": "PC"}},
                    {"platform": {"name": "macOS"}},
                    {"platform": {"name": "Linux"}},
                    {"platform": {"name": "Xbox"}},
                ],
            },
        ],
    }
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data=payload))

    response = await RAWGAdapter().search("celeste", page=2)

    celeste, unreleased = response.items
    assert celeste.subtitle == "2018"
    assert celeste.image_url == "https://media.rawg.io/c.jpg"
    assert unreleased.subtitle == "PC, macOS, Linux"
    assert unreleased.image_url == IMAGE_PLACEHOLDER
    assert calls[0]["params"]["search"] == "celeste"
    assert calls[0]["params"]["page"] == 2


@pytest.mark.asyncio
async def test_games_blank_query_orders_by_rating(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "rawg_api_key", "rawg-key")
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data={"results": []}))

    await RAWGAdapter().search("  ")

    assert calls[0]["params"]["ordering"] == "-rating"
    assert "search" not in calls[0]["params"]


@pytest.mark.asyncio
async def test_games_non_json_body_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "rawg_api_key", "rawg-key")
    install_client(monkeypatch, lambda url, params: build_response(url, text="<html>oops</html>"))

    response = await RAWGAdapter().search("hades")

    assert response.fallback_reason is FallbackReason.SCHEMA_MISMATCH
    assert [item.title for item in response.items] == ["Hades"]


@pytest.mark.asyncio
async def test_books_subject_search_uses_subject_query(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "books-key")
    payload = {"totalItems": 1, "items": [{"id": "v1", "volumeInfo": {"title": "Mistborn", "authors": ["B. Sanderson"]}}]}
    calls = install_client(monkeypatch, lambda url, params: build_response(url, json_data=payload))

    response = await GoogleBooksAdapter().search_by_subject("Fantasy", page=2)

    assert [item.title for item in response.items] == ["Mistborn"]
    assert calls[0]["params"]["q"] == "subject:Fantasy"
    assert calls[0]["params"]["orderBy"] == "relevance"
    assert calls[0]["params"]["startIndex"] == 20


@pytest.mark.asyncio
async def test_books_subject_search_offline_serves_that_category() -> None:
    response = await GoogleBooksAdapter().search_by_subject("fantasy")

    assert response.fallback is True
    assert [item.title for item in response.items] == ["The Hobbit"]

    unknown = await GoogleBooksAdapter().search_by_subject("cookery")
    assert len(unknown.items) == 5
