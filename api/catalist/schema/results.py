"""Provider-agnostic search result shapes shared by adapters and the aggregator."""

from __future__ import annotations

import enum
from typing import Any, Iterable

from pydantic import BaseModel, Field, computed_field


class ContentType(str, enum.Enum):
    """Discriminant for normalized items; drives routing and persistence."""
    PLACE = "place"
    MOVIE = "movie"
    TV = "tv"
    BOOK = "book"
    GAME = "game"
    VIDEO = "video"
    PERSON = "person"
    USER = "user"


class FallbackReason(str, enum.Enum):
    """Why an adapter answered from its mock dataset."""
    CREDENTIAL_MISSING = "credential_missing"
    TRANSPORT_FAILURE = "transport_failure"
    SCHEMA_MISMATCH = "schema_mismatch"
    CIRCUIT_OPEN = "circuit_open"


class NormalizedResultItem(BaseModel):
    """Single search/browse result in the shape every adapter must produce."""
    id: str
    content_type: ContentType
    content_id: str
    title: str = ""
    subtitle: str | None = None
    image_url: str | None = None
    url: str | None = None
    source: str = ""
    raw: dict[str, Any] = Field(default_factory=dict)


class ProviderResponse(BaseModel):
    """One page of answers from one adapter, live or mocked."""
    source: str
    items: list[NormalizedResultItem] = Field(default_factory=list)
    total: int = 0
    fallback: bool = False
    fallback_reason: FallbackReason | None = None
    next_page_token: str | None = None

    @classmethod
    def empty(cls, source: str) -> "ProviderResponse":
        return cls(source=source)


BUCKET_BY_CONTENT_TYPE: dict[ContentType, str] = {
    ContentType.PLACE: "places",
    ContentType.MOVIE: "movies",
    ContentType.TV: "tv_shows",
    ContentType.PERSON: "people",
    ContentType.GAME: "games",
    ContentType.BOOK: "books",
    ContentType.USER: "users",
}


class CategorizedResultBundle(BaseModel):
    """Aggregated search output with one ordered sequence per category."""
    places: list[NormalizedResultItem] = Field(default_factory=list)
    movies: list[NormalizedResultItem] = Field(default_factory=list)
    tv_shows: list[NormalizedResultItem] = Field(default_factory=list)
    people: list[NormalizedResultItem] = Field(default_factory=list)
    games: list[NormalizedResultItem] = Field(default_factory=list)
    books: list[NormalizedResultItem] = Field(default_factory=list)
    users: list[NormalizedResultItem] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return sum(len(getattr(self, bucket)) for bucket in BUCKET_BY_CONTENT_TYPE.values())

    def bucket_for(self, content_type: ContentType) -> list[NormalizedResultItem] | None:
        """Return the bucket list for a content type, or None if it has no bucket."""
        name = BUCKET_BY_CONTENT_TYPE.get(content_type)
        return getattr(self, name) if name else None

    def extend(self, items: Iterable[NormalizedResultItem]) -> list[NormalizedResultItem]:
        """Append items to their buckets in order; returns the items with no bucket."""
        unplaced: list[NormalizedResultItem] = []
        for item in items:
            bucket = self.bucket_for(item.content_type)
            if bucket is None:
                unplaced.append(item)
                continue
            bucket.append(item)
        return unplaced
