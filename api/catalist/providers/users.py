from __future__ import annotations

from typing import Any, Sequence

from catalist.core.config import settings
from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import CredentialMissing, ProviderTransportFailure
from catalist.providers.images import avatar_convention, resolve_image_url
from catalist.providers.mock_data import MOCK_USERS
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse
from catalist.store.base import RowStore, StoreError

USERS_TABLE = "users_profiles"
MAX_RESULTS = 20


def rank_users(rows: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Order directory rows by how closely they match ``query``.

    Exact full name, full-name prefix, full-name contains, exact username and
    username prefix come first in that order; ties break on follower count.
    """
    needle = query.strip().casefold()

    def tier(row: dict[str, Any]) -> int:
        full_name = (row.get("full_name") or "").casefold()
        username = (row.get("username") or "").casefold()
        if full_name == needle:
            return 0
        if full_name.startswith(needle):
            return 1
        if needle in full_name:
            return 2
        if username == needle:
            return 3
        if username.startswith(needle):
            return 4
        return 5

    return sorted(rows, key=lambda row: (tier(row), -int(row.get("followers_count") or 0)))


class UserDirectoryAdapter(ProviderAdapter):
    """Search public profiles in the row store's ``users_profiles`` table."""
    source_name = "users"
    mock_dataset = MOCK_USERS
    mock_fields = ("username", "full_name", "bio")

    def __init__(self, store: RowStore | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.store = store

    def has_credential(self) -> bool:
        return self.store is not None

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        user_id = payload.get("id")
        username = payload.get("username")
        if not user_id or not username:
            return None
        return NormalizedResultItem(
            id=f"user-{user_id}",
            content_type=ContentType.USER,
            content_id=str(user_id),
            title=payload.get("full_name") or username,
            subtitle=f"@{username}",
            image_url=resolve_image_url(
                payload.get("avatar_url"), avatar_convention(settings.avatar_storage_base_url)
            ),
            source=self.source_name,
            raw=payload,
        )

    def mock_search(
        self, query: str, dataset: Sequence[dict[str, Any]] | None = None
    ) -> list[NormalizedResultItem]:
        items = super().mock_search(query, dataset)
        ranked = rank_users([item.raw for item in items], query)
        return self.normalize_many(ranked)

    async def _search(self, query: str, page: int) -> ProviderResponse:
        if self.store is None:
            raise CredentialMissing("users directory needs a row store")
        try:
            rows = await self.store.search(USERS_TABLE, ("username", "full_name"), query)
        except StoreError as exc:
            raise ProviderTransportFailure(str(exc)) from exc
        ranked = rank_users(rows, query)
        start = (page - 1) * MAX_RESULTS
        items = self.normalize_many(ranked[start : start + MAX_RESULTS])
        return ProviderResponse(source=self.source_name, items=items, total=len(rows))

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        if self.store is None:
            return self._mock_lookup(identifier)
        rows = await self.store.select(USERS_TABLE, {"id": identifier}, limit=1)
        return self.normalize(rows[0]) if rows else None
