from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from catalist.core.config import settings
from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import CredentialMissing, ProviderSchemaMismatch, ProviderTransportFailure
from catalist.providers.http import fetch_json
from catalist.providers.images import TMDB_IMAGES, resolve_image_url
from catalist.providers.mock_data import TMDB_RESULTS
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse
from catalist.utils.datetime import display_year

API_BASE = "https://api.themoviedb.org/3"
MEDIA_TYPES: dict[str, ContentType] = {
    "movie": ContentType.MOVIE,
    "tv": ContentType.TV,
    "person": ContentType.PERSON,
}


class TMDBAdapter(ProviderAdapter):
    """Movie, TV and person search over TMDB's multi and per-type endpoints."""
    source_name = "tmdb"
    mock_dataset = TMDB_RESULTS
    mock_fields = ("title", "name", "overview", "genres", "known_for_department")

    def __init__(self, api_key: str | None = None, auth_token: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key if settings.is_usable_credential(api_key) else settings.tmdb_api_key
        self.auth_token = auth_token if settings.is_usable_credential(auth_token) else settings.tmdb_api_auth_header

    def has_credential(self) -> bool:
        return settings.is_usable_credential(self.auth_token) or settings.is_usable_credential(self.api_key)

    def parse_identifier(self, identifier: str) -> str:
        """Accept ``movie:ID`` tokens or themoviedb.org URLs."""
        identifier = identifier.strip()
        if identifier.startswith("http"):
            parts = urlparse(identifier).path.strip("/").split("/")
            if len(parts) >= 2 and parts[0] in MEDIA_TYPES:
                return f"{parts[0]}:{parts[1].split('-', 1)[0]}"
        return identifier

    def _auth(self) -> tuple[dict[str, str], dict[str, str]]:
        headers: dict[str, str] = {"accept": "application/json"}
        params: dict[str, str] = {}
        if settings.is_usable_credential(self.auth_token):
            headers["Authorization"] = f"Bearer {self.auth_token}"
        elif settings.is_usable_credential(self.api_key):
            params["api_key"] = self.api_key  # type: ignore[assignment]
        else:
            raise CredentialMissing("TMDB API credentials missing; set TMDB_API_AUTH_HEADER or TMDB_API_KEY")
        return headers, params

    def normalize(self, payload: dict[str, Any], media_type: str | None = None) -> NormalizedResultItem | None:
        kind = media_type or payload.get("media_type")
        content_type = MEDIA_TYPES.get(kind or "")
        tmdb_id = payload.get("id")
        if content_type is None or tmdb_id is None:
            return None
        if content_type is ContentType.PERSON:
            title = payload.get("name")
            subtitle = payload.get("known_for_department")
            image = payload.get("profile_path")
        elif content_type is ContentType.TV:
            title = payload.get("name")
            subtitle = display_year(payload.get("first_air_date"))
            image = payload.get("poster_path")
        else:
            title = payload.get("title")
            subtitle = display_year(payload.get("release_date"))
            image = payload.get("poster_path")
        return NormalizedResultItem(
            id=f"{kind}-{tmdb_id}",
            content_type=content_type,
            content_id=str(tmdb_id),
            title=title or "",
            subtitle=subtitle or None,
            image_url=resolve_image_url(image, TMDB_IMAGES),
            url=f"https://www.themoviedb.org/{kind}/{tmdb_id}",
            source=self.source_name,
            raw={**payload, "media_type": kind},
        )

    async def _query(self, path: str, query: str, page: int, media_type: str | None = None) -> ProviderResponse:
        headers, params = self._auth()
        payload = await fetch_json(
            f"{API_BASE}/search/{path}",
            headers=headers,
            params={
                **params,
                "query": query,
                "page": page,
                "include_adult": "false",
                "language": settings.search_language,
            },
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise ProviderSchemaMismatch("TMDB response missing results")
        items: list[NormalizedResultItem] = []
        for entry in payload["results"]:
            if not isinstance(entry, dict):
                raise ProviderSchemaMismatch("tmdb result entry is not an object")
            item = self.normalize(entry, media_type=media_type)
            if item is not None:
                items.append(item)
        total = payload.get("total_results")
        return ProviderResponse(
            source=self.source_name,
            items=items,
            total=total if isinstance(total, int) else len(items),
        )

    async def _search(self, query: str, page: int) -> ProviderResponse:
        return await self._query("multi", query, page)

    async def search_media(self, query: str, media_type: str, page: int = 1) -> ProviderResponse:
        """Search one TMDB media type (``movie``, ``tv`` or ``person``).

        Typed endpoints omit ``media_type`` on each result, so it is stamped on
        during normalization. Offline answers only draw from mock entries of the
        same type.
        """
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"Unsupported TMDB media type: {media_type}")
        term = (query or "").strip()
        if not term:
            return ProviderResponse.empty(self.source_name)
        typed_mock = [entry for entry in self.mock_dataset if entry.get("media_type") == media_type]
        return await self._guarded(
            f"search_{media_type}",
            term,
            lambda: self._query(media_type, term, max(page, 1), media_type=media_type),
            typed_mock,
        )

    async def search_category(
        self, query: str, content_type: ContentType, page: int = 1
    ) -> ProviderResponse:
        for media_type, mapped in MEDIA_TYPES.items():
            if mapped is content_type:
                return await self.search_media(query, media_type, page)
        return await self.search(query, page)

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        token = self.parse_identifier(identifier)
        kind_hint = None
        if ":" in token:
            kind_hint, token = token.split(":", 1)
        if not self.has_credential():
            for entry in self.mock_dataset:
                if str(entry.get("id")) == token and (kind_hint is None or entry.get("media_type") == kind_hint):
                    return self.normalize(entry)
            return None
        headers, params = self._auth()
        for kind in [kind_hint] if kind_hint else ["movie", "tv"]:
            if kind not in MEDIA_TYPES:
                return None
            try:
                payload = await fetch_json(
                    f"{API_BASE}/{kind}/{token}",
                    headers=headers,
                    params={**params, "language": settings.search_language},
                )
            except ProviderTransportFailure as exc:
                if exc.status_code == 404:
                    continue
                raise
            if isinstance(payload, dict) and payload:
                return self.normalize(payload, media_type=kind)
        return None
