from __future__ import annotations

from catalist.providers.base import ProviderAdapter
from catalist.providers.books import GoogleBooksAdapter
from catalist.providers.games import RAWGAdapter
from catalist.providers.observability import ProviderMonitor
from catalist.providers.places import PlacesAdapter
from catalist.providers.tmdb import TMDBAdapter
from catalist.providers.users import UserDirectoryAdapter
from catalist.providers.video import YouTubeAdapter
from catalist.store.base import RowStore

ADAPTERS: dict[str, type[ProviderAdapter]] = {
    PlacesAdapter.source_name: PlacesAdapter,
    TMDBAdapter.source_name: TMDBAdapter,
    RAWGAdapter.source_name: RAWGAdapter,
    GoogleBooksAdapter.source_name: GoogleBooksAdapter,
    YouTubeAdapter.source_name: YouTubeAdapter,
    UserDirectoryAdapter.source_name: UserDirectoryAdapter,
}


def get_adapter(
    name: str,
    *,
    store: RowStore | None = None,
    monitor: ProviderMonitor | None = None,
) -> ProviderAdapter:
    adapter_cls = ADAPTERS.get(name)
    if adapter_cls is None:
        raise ValueError(f"Unsupported provider {name}")
    if adapter_cls is UserDirectoryAdapter:
        return UserDirectoryAdapter(store=store, monitor=monitor)
    return adapter_cls(monitor=monitor)


def build_adapters(
    *,
    store: RowStore | None = None,
    monitor: ProviderMonitor | None = None,
) -> dict[str, ProviderAdapter]:
    return {name: get_adapter(name, store=store, monitor=monitor) for name in ADAPTERS}


__all__ = ["ADAPTERS", "ProviderAdapter", "build_adapters", "get_adapter"]
