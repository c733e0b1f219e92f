from __future__ import annotations

import pytest

from catalist.core.session import SessionContext
from catalist.schema.results import ContentType
from catalist.services.draft_service import DraftList
from catalist.services.list_service import ListService, PartialPersistenceError, PersistenceError
from catalist.store.base import InMemoryRowStore, StoreError
from catalist.tests.utils import make_item

SESSION = SessionContext(user_id="user-1", display_name="Tester")


def _submission(category: str = "movies", title: str = "Weekend watchlist"):
    draft = (
        DraftList()
        .toggle_select(make_item("movie-27205", ContentType.MOVIE, "Inception"))
        .toggle_select(make_item("video-dQw4w9WgXcQ", ContentType.VIDEO, "Never Gonna"))
        .with_metadata(title=title, category=category, tags=["sci-fi", "sci-fi"])
    )
    return draft.commit()


@pytest.mark.asyncio
async def test_submit_writes_category_list_and_items(memory_store: InMemoryRowStore) -> None:
    persisted = await ListService(memory_store).submit(SESSION, _submission())

    categories = await memory_store.select("categories")
    assert [(row["name"], row["icon"], row["color"]) for row in categories] == [("Movies", "list", "#F97316")]
    [header] = await memory_store.select("lists")
    assert header["creator_id"] == "user-1"
    assert header["category_id"] == categories[0]["id"]
    assert header["item_count"] == 2
    assert header["tags"] == ["sci-fi"]
    assert header["privacy"] == "public"
    items = await memory_store.select("list_items", {"list_id": persisted.id})
    assert [(row["position"], row["content_type"], row["source"]) for row in items] == [
        (1, "movie", "api"),
        (2, "video", "youtube"),
    ]
    assert items[0]["external_id"] == "27205"
    assert persisted.item_count == 2
    assert len(persisted.item_ids) == 2


@pytest.mark.asyncio
async def test_existing_category_is_reused(memory_store: InMemoryRowStore) -> None:
    service = ListService(memory_store)
    await service.submit(SESSION, _submission(category="person"))
    await service.submit(SESSION, _submission(category="person", title="Second"))

    categories = await memory_store.select("categories")
    assert [row["name"] for row in categories] == ["People"]
    assert len(await memory_store.select("lists")) == 2


class FailingStore(InMemoryRowStore):
    def __init__(self, fail_table: str) -> None:
        super().__init__()
        self.fail_table = fail_table

    async def insert(self, table, rows):
        if table == self.fail_table:
            raise StoreError("write rejected", table=table)
        return await super().insert(table, rows)


@pytest.mark.asyncio
async def test_header_failure_raises_persistence_error() -> None:
    store = FailingStore("lists")

    with pytest.raises(PersistenceError) as excinfo:
        await ListService(store).submit(SESSION, _submission())

    assert not isinstance(excinfo.value, PartialPersistenceError)
    assert await store.select("list_items") == []


@pytest.mark.asyncio
async def test_item_failure_reports_orphaned_list_id() -> None:
    store = FailingStore("list_items")

    with pytest.raises(PartialPersistenceError) as excinfo:
        await ListService(store).submit(SESSION, _submission())

    [header] = await store.select("lists")
    assert excinfo.value.list_id == header["id"]


@pytest.mark.asyncio
async def test_who_added_lists_only_public_lists(memory_store: InMemoryRowStore) -> None:
    service = ListService(memory_store)
    public = await service.submit(SESSION, _submission())
    draft = (
        DraftList()
        .toggle_select(make_item("movie-27205", ContentType.MOVIE, "Inception"))
        .with_metadata(title="Secret", privacy="private")
    )
    await service.submit(SessionContext(user_id="user-2"), draft.commit())

    summaries = await service.who_added("27205", ContentType.MOVIE)

    assert [summary.list_id for summary in summaries] == [public.id]
    assert summaries[0].creator_id == "user-1"
    assert await service.who_added("27205", ContentType.BOOK) == []


@pytest.mark.asyncio
async def test_submit_through_sqlalchemy_store(sql_store) -> None:
    service = ListService(sql_store)

    persisted = await service.submit(SESSION, _submission(category="books"))

    items = await sql_store.select("list_items", {"list_id": persisted.id})
    assert sorted(row["position"] for row in items) == [1, 2]
    [header] = await sql_store.select("lists", {"id": persisted.id})
    assert header["tags"] == ["sci-fi"]
    summaries = await service.who_added("dQw4w9WgXcQ", "video")
    assert [summary.title for summary in summaries] == ["Weekend watchlist"]
