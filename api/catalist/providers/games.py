from __future__ import annotations

from typing import Any

from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import ProviderSchemaMismatch, ProviderTransportFailure
from catalist.providers.http import fetch_json
from catalist.providers.images import GAME_IMAGES, resolve_image_url
from catalist.providers.mock_data import RAWG_GAMES
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse
from catalist.utils.datetime import display_year

API_BASE = "https://api.rawg.io/api"
PAGE_SIZE = 20
MAX_PLATFORMS = 3


def platform_names(payload: dict[str, Any], limit: int = MAX_PLATFORMS) -> list[str]:
    names: list[str] = []
    for entry in payload.get("platforms") or []:
        platform = entry.get("platform") if isinstance(entry, dict) else None
        name = platform.get("name") if isinstance(platform, dict) else None
        if name:
            names.append(name)
        if len(names) >= limit:
            break
    return names


class RAWGAdapter(ProviderAdapter):
    """RAWG game search; a blank query lists top-rated games instead."""
    source_name = "games"
    supports_discover = True
    mock_dataset = RAWG_GAMES
    mock_fields = ("name", "genres", "platforms")

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        game_id = payload.get("id")
        if game_id is None:
            return None
        subtitle = display_year(payload.get("released")) or ", ".join(platform_names(payload))
        slug = payload.get("slug")
        return NormalizedResultItem(
            id=f"game-{game_id}",
            content_type=ContentType.GAME,
            content_id=str(game_id),
            title=payload.get("name") or "",
            subtitle=subtitle or None,
            image_url=resolve_image_url(payload.get("background_image"), GAME_IMAGES),
            url=f"https://rawg.io/games/{slug}" if slug else None,
            source=self.source_name,
            raw=payload,
        )

    async def _search(self, query: str, page: int) -> ProviderResponse:
        params: dict[str, Any] = {"key": self.credential(), "page": page, "page_size": PAGE_SIZE}
        if query:
            params["search"] = query
        else:
            params["ordering"] = "-rating"
        payload = await fetch_json(f"{API_BASE}/games", params=params)
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise ProviderSchemaMismatch("RAWG response missing results")
        items = self.normalize_many(payload["results"])
        count = payload.get("count")
        return ProviderResponse(
            source=self.source_name,
            items=items,
            total=count if isinstance(count, int) else len(items),
        )

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        if not self.has_credential():
            return self._mock_lookup(identifier)
        try:
            payload = await fetch_json(f"{API_BASE}/games/{identifier}", params={"key": self.credential()})
        except ProviderTransportFailure as exc:
            if exc.status_code == 404:
                return None
            raise
        return self.normalize(payload) if isinstance(payload, dict) else None
