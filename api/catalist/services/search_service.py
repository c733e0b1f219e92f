"""Fan a query out to providers and merge the answers into category buckets.

Invariants:
- Blank queries never reach an adapter.
- One adapter failing only empties its own bucket.
- Buckets keep each adapter's order; nothing is re-ranked or de-duplicated.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Mapping, Sequence

from catalist.core.config import settings
from catalist.providers.base import ProviderAdapter
from catalist.schema.results import CategorizedResultBundle, ContentType, NormalizedResultItem, ProviderResponse
from catalist.services.category_router import route_category
from catalist.utils.redaction import redact_secrets

logger = logging.getLogger("catalist.services.search")

GENERAL_SEARCH_SOURCES: tuple[str, ...] = ("places", "tmdb", "games", "books", "users")

DISCOVER_TERMS: dict[str, tuple[str, ...]] = {
    "places": ("restaurant", "cafe", "hotel", "park", "museum", "bar", "shopping", "beach"),
    "tmdb": ("action", "comedy", "drama", "thriller", "adventure", "romance", "horror", "animation"),
    "games": ("action", "adventure", "rpg", "strategy", "puzzle", "racing", "simulation", "sports"),
    "books": ("fiction", "mystery", "romance", "thriller", "fantasy", "biography", "history", "science"),
}


class SearchAggregator:
    """Run adapter searches concurrently and bucket the results."""

    def __init__(self, adapters: Mapping[str, ProviderAdapter]) -> None:
        self.adapters = dict(adapters)

    async def _search_adapter(
        self, name: str, query: str, content_type: ContentType | None = None
    ) -> ProviderResponse:
        adapter = self.adapters.get(name)
        if adapter is None:
            return ProviderResponse.empty(name)
        try:
            if content_type is not None:
                return await adapter.search_category(query, content_type)
            return await adapter.search(query)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Adapter search raised; continuing with partial results",
                extra={"source": name, "error": redact_secrets(str(exc))},
            )
            return ProviderResponse.empty(name)

    async def _gather(self, sources: Sequence[str], queries: Sequence[str]) -> list[ProviderResponse]:
        return list(
            await asyncio.gather(
                *(self._search_adapter(name, query) for name, query in zip(sources, queries))
            )
        )

    async def aggregate(self, query: str) -> CategorizedResultBundle:
        term = (query or "").strip()
        bundle = CategorizedResultBundle()
        if not term:
            return bundle
        responses = await self._gather(GENERAL_SEARCH_SOURCES, [term] * len(GENERAL_SEARCH_SOURCES))
        for response in responses:
            bundle.extend(response.items)
        logger.info(
            "Aggregated search",
            extra={
                "query_length": len(term),
                "total": bundle.total,
                "fallback_sources": [response.source for response in responses if response.fallback],
            },
        )
        return bundle

    async def aggregate_for_category(self, category: str, query: str) -> list[NormalizedResultItem]:
        """Search only the routed adapter, keeping the routed content type."""
        term = (query or "").strip()
        route = route_category(category)
        if route.adapter_name is None:
            return []
        adapter = self.adapters.get(route.adapter_name)
        if not term and not (adapter and adapter.supports_discover):
            return []
        response = await self._search_adapter(route.adapter_name, term, route.content_type)
        return [item for item in response.items if item.content_type == route.content_type]

    async def discover(self, rng: random.Random | None = None) -> CategorizedResultBundle:
        """Build a browse bundle from one random seed term per category."""
        rng = rng or random.Random()
        sources = list(DISCOVER_TERMS)
        terms = [rng.choice(DISCOVER_TERMS[name]) for name in sources]
        responses = await self._gather(sources, terms)
        window = settings.discover_items_per_category
        bundle = CategorizedResultBundle()
        for response in responses:
            items = response.items
            if len(items) > window:
                start = rng.randrange(len(items) - window + 1)
                items = items[start : start + window]
            bundle.extend(items)
        return bundle
