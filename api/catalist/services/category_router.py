"""Map category keys from the UI to provider adapters and display metadata.

Routing never fails: unknown keys get a neutral default route with no adapter.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

from catalist.providers.books import GoogleBooksAdapter
from catalist.providers.games import RAWGAdapter
from catalist.providers.places import PlacesAdapter
from catalist.providers.tmdb import TMDBAdapter
from catalist.providers.video import YouTubeAdapter
from catalist.schema.results import ContentType, NormalizedResultItem

FieldMapper = Callable[[dict[str, Any]], "NormalizedResultItem | None"]


class CategoryKey(str, enum.Enum):
    PLACES = "places"
    MOVIES = "movies"
    TV_SHOWS = "tv_shows"
    BOOKS = "books"
    GAMES = "games"
    VIDEOS = "videos"
    PERSON = "person"


@dataclass(frozen=True, slots=True)
class DisplayMeta:
    icon: str
    label: str
    color: str


@dataclass(frozen=True, slots=True)
class CategoryRoute:
    """Where a category's searches go and how its rows are drawn."""
    key: str
    adapter_name: str | None
    content_type: ContentType | None
    display: DisplayMeta
    field_mapper: FieldMapper

    @property
    def is_default(self) -> bool:
        return self.adapter_name is None


def _tmdb_mapper(media_type: str) -> FieldMapper:
    def _map(raw: dict[str, Any]) -> NormalizedResultItem | None:
        return TMDBAdapter().normalize(raw, media_type=media_type)

    return _map


def _unmapped(raw: dict[str, Any]) -> NormalizedResultItem | None:
    return None


DEFAULT_ICON = "plus"
DEFAULT_COLOR = "#6B7280"
DEFAULT_LABEL = "General"

_ROUTES: dict[CategoryKey, CategoryRoute] = {
    CategoryKey.PLACES: CategoryRoute(
        key=CategoryKey.PLACES.value,
        adapter_name=PlacesAdapter.source_name,
        content_type=ContentType.PLACE,
        display=DisplayMeta(icon="map-pin", label="Places", color="#FF6B35"),
        field_mapper=lambda raw: PlacesAdapter().normalize(raw),
    ),
    CategoryKey.MOVIES: CategoryRoute(
        key=CategoryKey.MOVIES.value,
        adapter_name=TMDBAdapter.source_name,
        content_type=ContentType.MOVIE,
        display=DisplayMeta(icon="film-strip", label="Movies", color="#F97316"),
        field_mapper=_tmdb_mapper("movie"),
    ),
    CategoryKey.TV_SHOWS: CategoryRoute(
        key=CategoryKey.TV_SHOWS.value,
        adapter_name=TMDBAdapter.source_name,
        content_type=ContentType.TV,
        display=DisplayMeta(icon="television", label="TV Shows", color="#EA580C"),
        field_mapper=_tmdb_mapper("tv"),
    ),
    CategoryKey.BOOKS: CategoryRoute(
        key=CategoryKey.BOOKS.value,
        adapter_name=GoogleBooksAdapter.source_name,
        content_type=ContentType.BOOK,
        display=DisplayMeta(icon="book-open", label="Books", color="#DC2626"),
        field_mapper=lambda raw: GoogleBooksAdapter().normalize(raw),
    ),
    CategoryKey.GAMES: CategoryRoute(
        key=CategoryKey.GAMES.value,
        adapter_name=RAWGAdapter.source_name,
        content_type=ContentType.GAME,
        display=DisplayMeta(icon="game-controller", label="Games", color="#F59E0B"),
        field_mapper=lambda raw: RAWGAdapter().normalize(raw),
    ),
    CategoryKey.VIDEOS: CategoryRoute(
        key=CategoryKey.VIDEOS.value,
        adapter_name=YouTubeAdapter.source_name,
        content_type=ContentType.VIDEO,
        display=DisplayMeta(icon="play-circle", label="Videos", color="#EF4444"),
        field_mapper=lambda raw: YouTubeAdapter().normalize(raw),
    ),
    CategoryKey.PERSON: CategoryRoute(
        key=CategoryKey.PERSON.value,
        adapter_name=TMDBAdapter.source_name,
        content_type=ContentType.PERSON,
        display=DisplayMeta(icon="user", label="Person", color="#FB923C"),
        field_mapper=_tmdb_mapper("person"),
    ),
}

# Persisted category names differ from picker labels only where plural reads better.
_DISPLAY_NAMES: dict[CategoryKey, str] = {CategoryKey.PERSON: "People"}


def _default_label(key: str) -> str:
    label = " ".join(part for part in (key or "").replace("_", " ").split())
    return label.title() if label else DEFAULT_LABEL


def _lookup(key: str | None) -> CategoryKey | None:
    try:
        return CategoryKey((key or "").strip().lower())
    except ValueError:
        return None


def route_category(key: str | None) -> CategoryRoute:
    known = _lookup(key)
    if known is not None:
        return _ROUTES[known]
    raw_key = (key or "").strip()
    return CategoryRoute(
        key=raw_key,
        adapter_name=None,
        content_type=None,
        display=DisplayMeta(icon=DEFAULT_ICON, label=_default_label(raw_key), color=DEFAULT_COLOR),
        field_mapper=_unmapped,
    )


def category_display_name(key: str | None) -> str:
    """Name used for the ``categories`` row a list is filed under."""
    known = _lookup(key)
    if known is not None and known in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[known]
    return route_category(key).display.label


def known_routes() -> list[CategoryRoute]:
    return list(_ROUTES.values())
