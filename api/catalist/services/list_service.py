"""Write committed drafts through the row store.

Submission is three sequential writes (category, list header, list items) with no
transaction spanning them. A failure after the header exists surfaces the orphaned
list id instead of attempting a compensating delete.
"""

from __future__ import annotations

import logging
from typing import Any

from catalist.core.session import SessionContext
from catalist.schema.lists import DraftSubmission, ListSummary, PersistedList, Privacy
from catalist.schema.results import ContentType
from catalist.services.category_router import category_display_name
from catalist.store.base import RowStore, StoreError

logger = logging.getLogger("catalist.services.lists")

NEW_CATEGORY_ICON = "list"
NEW_CATEGORY_COLOR = "#F97316"


class PersistenceError(Exception):
    """The list could not be created; nothing user-visible was written."""


class PartialPersistenceError(PersistenceError):
    """The list header was written but its items were not."""

    def __init__(self, message: str, list_id: str) -> None:
        super().__init__(message)
        self.list_id = list_id


class ListService:
    def __init__(self, store: RowStore) -> None:
        self.store = store

    async def resolve_category(self, key: str) -> dict[str, Any] | None:
        """Find the category row for ``key`` by display name, creating it if absent."""
        if not (key or "").strip():
            return None
        name = category_display_name(key)
        rows = await self.store.select("categories", {"name": name}, limit=1)
        if rows:
            return rows[0]
        created = await self.store.insert(
            "categories",
            {
                "name": name,
                "description": f"{name} lists",
                "icon": NEW_CATEGORY_ICON,
                "color": NEW_CATEGORY_COLOR,
            },
        )
        logger.info("Created list category", extra={"category": name})
        return created  # type: ignore[return-value]

    async def submit(self, session_ctx: SessionContext, submission: DraftSubmission) -> PersistedList:
        metadata = submission.metadata
        try:
            category = await self.resolve_category(metadata.category)
            header = await self.store.insert(
                "lists",
                {
                    "creator_id": session_ctx.user_id,
                    "title": metadata.title,
                    "description": metadata.description or None,
                    "category_id": category["id"] if category else None,
                    "privacy": metadata.privacy.value,
                    "allow_comments": metadata.allow_comments,
                    "allow_collaboration": metadata.allow_collaboration,
                    "tags": list(metadata.tags),
                    "item_count": len(submission.items),
                },
            )
        except StoreError as exc:
            logger.error("List creation failed", extra={"user_id": session_ctx.user_id, "error": str(exc)})
            raise PersistenceError(f"Failed to create list: {exc}") from exc

        list_id = str(header["id"])  # type: ignore[index]
        rows = [
            {
                "list_id": list_id,
                "external_id": item.content_id,
                "title": item.title,
                "subtitle": item.subtitle,
                "description": item.description,
                "image_url": item.image_url,
                "content_id": item.content_id,
                "content_type": item.content_type.value,
                "external_data": item.raw_external_data,
                "position": item.position,
                "source": "youtube" if item.content_type is ContentType.VIDEO else "api",
            }
            for item in submission.items
        ]
        try:
            inserted = await self.store.insert("list_items", rows)
        except StoreError as exc:
            logger.error(
                "List items failed to save; list header left without items",
                extra={"list_id": list_id, "item_count": len(rows), "error": str(exc)},
            )
            raise PartialPersistenceError(f"List created but items failed to save: {exc}", list_id) from exc

        logger.info(
            "List created",
            extra={"list_id": list_id, "user_id": session_ctx.user_id, "item_count": len(rows)},
        )
        return PersistedList(
            id=list_id,
            title=metadata.title,
            category_id=category["id"] if category else None,
            item_count=len(rows),
            item_ids=[str(row["id"]) for row in inserted],  # type: ignore[union-attr]
            created_at=header.get("created_at"),  # type: ignore[union-attr]
        )

    async def who_added(self, content_id: str, content_type: ContentType | str) -> list[ListSummary]:
        """Public lists that contain the given content item, newest addition first."""
        kind = content_type.value if isinstance(content_type, ContentType) else str(content_type)
        items = await self.store.select("list_items", {"content_id": content_id, "content_type": kind})
        if not items:
            return []
        added_at = {row["list_id"]: row.get("created_at") for row in items}
        lists = await self.store.select(
            "lists", {"id": list(added_at), "privacy": Privacy.PUBLIC.value}
        )
        summaries = [
            ListSummary(
                list_id=str(row["id"]),
                title=row.get("title") or "",
                creator_id=str(row.get("creator_id")),
                privacy=row.get("privacy") or Privacy.PUBLIC,
                added_at=added_at.get(row["id"]),
            )
            for row in lists
        ]
        return sorted(
            summaries,
            key=lambda summary: summary.added_at.timestamp() if summary.added_at else float("-inf"),
            reverse=True,
        )
