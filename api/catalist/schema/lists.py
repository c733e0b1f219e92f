"""Draft, submission and persisted-list schemas."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalist.schema.results import ContentType, NormalizedResultItem
from catalist.utils.sanitizer import sanitize_tags, sanitize_text


class Privacy(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    FRIENDS = "friends"


class DraftListItem(BaseModel):
    """A selected result waiting in a draft; has no position until commit."""
    model_config = ConfigDict(frozen=True)

    id: str
    content_type: ContentType
    content_id: str
    title: str = ""
    subtitle: str | None = None
    description: str | None = None
    image_url: str | None = None
    url: str | None = None
    source: str = ""
    raw_external_data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, item: NormalizedResultItem, description: str | None = None) -> "DraftListItem":
        return cls(
            id=item.id,
            content_type=item.content_type,
            content_id=item.content_id,
            title=item.title,
            subtitle=item.subtitle,
            description=description,
            image_url=item.image_url,
            url=item.url,
            source=item.source,
            raw_external_data=item.raw,
        )


class CommittedListItem(DraftListItem):
    position: int = Field(ge=1)


class ListMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    category: str = ""
    privacy: Privacy = Privacy.PUBLIC
    allow_comments: bool = True
    allow_collaboration: bool = False
    tags: tuple[str, ...] = ()

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value) if value is not None else ""

    @field_validator("tags", mode="before")
    @classmethod
    def _sanitize_tags(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        return tuple(sanitize_tags(value))


class DraftSubmission(BaseModel):
    """Committed draft handed to persistence as one unit."""
    metadata: ListMetadata
    items: list[CommittedListItem]


class PersistedList(BaseModel):
    id: str
    title: str
    category_id: str | None = None
    item_count: int
    item_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class ListSubmissionRequest(BaseModel):
    """Request body for creating a list from selected results."""
    title: str
    description: str = ""
    category: str = ""
    privacy: Privacy = Privacy.PUBLIC
    allow_comments: bool = True
    allow_collaboration: bool = False
    tags: list[str] = Field(default_factory=list)
    items: list[NormalizedResultItem] = Field(default_factory=list)


class ListSummary(BaseModel):
    """Public list containing a given content item."""
    list_id: str
    title: str
    creator_id: str
    privacy: Privacy
    added_at: datetime | None = None
