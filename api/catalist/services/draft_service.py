"""Immutable draft state for the list being assembled.

Every operation returns a new ``DraftList``; nothing mutates in place, so a failed
commit or submission always leaves the caller's draft as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from catalist.schema.lists import CommittedListItem, DraftListItem, DraftSubmission, ListMetadata
from catalist.schema.results import NormalizedResultItem


class DraftValidationError(ValueError):
    """The draft cannot be committed yet; ``reason`` is shown to the user."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True, slots=True)
class DraftList:
    items: tuple[DraftListItem, ...] = ()
    metadata: ListMetadata = field(default_factory=ListMetadata)

    def contains(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.items)

    def toggle_select(self, item: DraftListItem | NormalizedResultItem) -> "DraftList":
        """Add ``item`` at the end, or remove it when an item with its id is present."""
        if isinstance(item, NormalizedResultItem):
            item = DraftListItem.from_result(item)
        if self.contains(item.id):
            return self.remove(item.id)
        return replace(self, items=self.items + (item,))

    def select(self, item: DraftListItem | NormalizedResultItem) -> "DraftList":
        """Add ``item`` unless an item with its id is already selected."""
        if isinstance(item, NormalizedResultItem):
            item = DraftListItem.from_result(item)
        if self.contains(item.id):
            return self
        return replace(self, items=self.items + (item,))

    def remove(self, item_id: str) -> "DraftList":
        return replace(self, items=tuple(item for item in self.items if item.id != item_id))

    def with_metadata(self, **changes: Any) -> "DraftList":
        merged = {**self.metadata.model_dump(), **changes}
        return replace(self, metadata=ListMetadata(**merged))

    def add_tag(self, tag: str) -> "DraftList":
        return self.with_metadata(tags=[*self.metadata.tags, tag])

    def remove_tag(self, tag: str) -> "DraftList":
        return self.with_metadata(tags=[existing for existing in self.metadata.tags if existing != tag])

    def commit(self) -> DraftSubmission:
        if not self.items:
            raise DraftValidationError("Please add at least one item to your list")
        if not self.metadata.title.strip():
            raise DraftValidationError("Please enter a title for your list")
        committed = [
            CommittedListItem(**item.model_dump(), position=index)
            for index, item in enumerate(self.items, start=1)
        ]
        return DraftSubmission(metadata=self.metadata, items=committed)
