from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from catalist.core.session import SessionContext
from catalist.providers import build_adapters
from catalist.providers.base import ProviderAdapter
from catalist.services.list_service import ListService
from catalist.services.search_service import SearchAggregator
from catalist.store.base import RowStore
from catalist.store.sql import SQLAlchemyRowStore

_schema_ready = False


@lru_cache
def _default_store() -> SQLAlchemyRowStore:
    return SQLAlchemyRowStore.from_url()


async def get_store() -> RowStore:
    """Return the process-wide row store, creating its tables on first use."""
    global _schema_ready
    store = _default_store()
    if not _schema_ready:
        await store.create_all()
        _schema_ready = True
    return store


async def get_adapters(store: RowStore = Depends(get_store)) -> dict[str, ProviderAdapter]:
    return build_adapters(store=store)


async def get_aggregator(
    adapters: dict[str, ProviderAdapter] = Depends(get_adapters),
) -> SearchAggregator:
    return SearchAggregator(adapters)


async def get_list_service(store: RowStore = Depends(get_store)) -> ListService:
    return ListService(store)


async def get_session_context(
    user_id: str | None = Header(default=None, alias="X-User-Id"),
    display_name: str | None = Header(default=None, alias="X-User-Name"),
) -> SessionContext:
    """Identity comes from the upstream auth layer as headers; it is never looked up here."""
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user identity")
    return SessionContext(user_id=user_id.strip(), display_name=display_name)
