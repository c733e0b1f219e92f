from __future__ import annotations

import pytest

from catalist.providers.mock_data import RAWG_GAMES, TMDB_RESULTS
from catalist.schema.results import ContentType
from catalist.services.category_router import (
    CategoryKey,
    category_display_name,
    known_routes,
    route_category,
)


@pytest.mark.parametrize(
    ("key", "adapter", "content_type", "label"),
    [
        ("places", "places", ContentType.PLACE, "Places"),
        ("movies", "tmdb", ContentType.MOVIE, "Movies"),
        ("tv_shows", "tmdb", ContentType.TV, "TV Shows"),
        ("books", "books", ContentType.BOOK, "Books"),
        ("games", "games", ContentType.GAME, "Games"),
        ("videos", "video", ContentType.VIDEO, "Videos"),
        ("person", "tmdb", ContentType.PERSON, "Person"),
    ],
)
def test_known_categories_route_to_adapters(key: str, adapter: str, content_type: ContentType, label: str) -> None:
    route = route_category(key)

    assert route.adapter_name == adapter
    assert route.content_type is content_type
    assert route.display.label == label
    assert route.display.color.startswith("#")


def test_unknown_key_gets_default_route() -> None:
    route = route_category("board_games")

    assert route.adapter_name is None
    assert route.is_default
    assert route.display.icon == "plus"
    assert route.display.color == "#6B7280"
    assert route.display.label == "Board Games"
    assert route.field_mapper({"anything": 1}) is None


@pytest.mark.parametrize("key", ["", "   ", None])
def test_blank_key_is_labelled_general(key) -> None:
    assert route_category(key).display.label == "General"


def test_display_names_for_persistence() -> None:
    assert category_display_name("person") == "People"
    assert category_display_name("movies") == "Movies"
    assert category_display_name("board_games") == "Board Games"


def test_field_mappers_normalize_raw_payloads() -> None:
    movie = route_category("movies").field_mapper(TMDB_RESULTS[0])
    game = route_category("games").field_mapper(RAWG_GAMES[0])

    assert movie is not None and movie.content_type is ContentType.MOVIE
    assert game is not None and game.title == "The Witcher 3: Wild Hunt"


def test_every_category_key_has_a_route() -> None:
    assert {route.key for route in known_routes()} == {key.value for key in CategoryKey}
