from __future__ import annotations

from typing import Any, Sequence

from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import ProviderSchemaMismatch, ProviderTransportFailure
from catalist.providers.http import fetch_json
from catalist.providers.images import book_cover_url
from catalist.providers.mock_data import BOOK_VOLUMES
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse
from catalist.utils.datetime import display_year

API_BASE = "https://www.googleapis.com/books/v1"
MAX_RESULTS = 20
WILDCARD_QUERY = "*"


def format_authors(authors: Sequence[str] | None) -> str | None:
    """Render author credits as ``A``, ``A & B`` or ``A & N others``."""
    names = [name.strip() for name in authors or [] if isinstance(name, str) and name.strip()]
    if not names:
        return None
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} & {names[1]}"
    return f"{names[0]} & {len(names) - 1} others"


class GoogleBooksAdapter(ProviderAdapter):
    """Google Books volume search; paginates by ``startIndex``."""
    source_name = "books"
    supports_discover = True
    mock_dataset = BOOK_VOLUMES
    mock_fields = (
        "volumeInfo.title",
        "volumeInfo.subtitle",
        "volumeInfo.authors",
        "volumeInfo.description",
        "volumeInfo.categories",
    )

    def __init__(self, cover_size: str = "medium", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.cover_size = cover_size

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        volume_id = payload.get("id")
        if not volume_id:
            return None
        info = payload.get("volumeInfo") or {}
        if not isinstance(info, dict):
            raise ProviderSchemaMismatch("Google Books volumeInfo is not an object")
        parts = [format_authors(info.get("authors")), display_year(info.get("publishedDate"))]
        subtitle = " · ".join(part for part in parts if part)
        return NormalizedResultItem(
            id=f"book-{volume_id}",
            content_type=ContentType.BOOK,
            content_id=str(volume_id),
            title=info.get("title") or "",
            subtitle=subtitle or None,
            image_url=book_cover_url(info.get("imageLinks"), self.cover_size),
            url=info.get("infoLink") or info.get("canonicalVolumeLink"),
            source=self.source_name,
            raw=payload,
        )

    async def _volumes(self, query: str, page: int, **extra: Any) -> ProviderResponse:
        payload = await fetch_json(
            f"{API_BASE}/volumes",
            params={
                "q": query or WILDCARD_QUERY,
                "key": self.credential(),
                "startIndex": (page - 1) * MAX_RESULTS,
                "maxResults": MAX_RESULTS,
                **extra,
            },
        )
        if not isinstance(payload, dict):
            raise ProviderSchemaMismatch("Google Books response is not an object")
        # Google Books omits "items" entirely when nothing matched.
        volumes = payload.get("items", [])
        if not isinstance(volumes, list):
            raise ProviderSchemaMismatch("Google Books items is not a list")
        items = self.normalize_many(volumes)
        total = payload.get("totalItems")
        return ProviderResponse(
            source=self.source_name,
            items=items,
            total=total if isinstance(total, int) else len(items),
        )

    async def _search(self, query: str, page: int) -> ProviderResponse:
        return await self._volumes(query, page)

    async def search_by_subject(self, subject: str, page: int = 1) -> ProviderResponse:
        """Browse volumes filed under a subject such as ``Fantasy``."""
        term = (subject or "").strip()
        if not term:
            return await self.search("", page)
        needle = term.casefold()
        subject_mock = [
            entry
            for entry in self.mock_dataset
            if any(needle in str(name).casefold() for name in entry.get("volumeInfo", {}).get("categories") or [])
        ]
        return await self._guarded(
            "search_by_subject",
            term,
            lambda: self._volumes(f"subject:{term}", max(page, 1), orderBy="relevance"),
            subject_mock or self.mock_dataset,
        )

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        if not self.has_credential():
            return self._mock_lookup(identifier)
        try:
            payload = await fetch_json(f"{API_BASE}/volumes/{identifier}", params={"key": self.credential()})
        except ProviderTransportFailure as exc:
            if exc.status_code == 404:
                return None
            raise
        return self.normalize(payload) if isinstance(payload, dict) else None
