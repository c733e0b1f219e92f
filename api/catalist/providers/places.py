from __future__ import annotations

from typing import Any

from catalist.core.config import settings
from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import ProviderSchemaMismatch
from catalist.providers.http import fetch_json
from catalist.providers.images import PLACE_PHOTOS, place_photo_url, resolve_image_url
from catalist.providers.mock_data import PLACE_RESULTS
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse

PLACES_BASE = "https://maps.googleapis.com/maps/api/place"
OK_STATUSES = {"OK", "ZERO_RESULTS"}
TEXT_SEARCH_RADIUS_METERS = 50_000
NEARBY_RADIUS_METERS = 5_000


def format_location(location: tuple[float, float]) -> str:
    latitude, longitude = location
    return f"{latitude},{longitude}"


class PlacesAdapter(ProviderAdapter):
    """Google Places text and nearby search; results carry no pagination."""
    source_name = "places"
    mock_dataset = PLACE_RESULTS
    mock_fields = ("name", "formatted_address", "vicinity", "types")

    def __init__(self, api_key: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key

    def has_credential(self) -> bool:
        return settings.is_usable_credential(self.api_key) or super().has_credential()

    def credential(self) -> str:
        if settings.is_usable_credential(self.api_key):
            return self.api_key.strip()  # type: ignore[union-attr]
        return super().credential()

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        place_id = payload.get("place_id")
        if not place_id:
            return None
        types = payload.get("types") or []
        subtitle = payload.get("formatted_address") or payload.get("vicinity")
        if not subtitle and types:
            subtitle = str(types[0]).replace("_", " ")
        photos = payload.get("photos") or []
        reference = photos[0].get("photo_reference") if photos and isinstance(photos[0], dict) else None
        api_key = self.credential() if reference and self.has_credential() else None
        photo = place_photo_url(reference, api_key)
        return NormalizedResultItem(
            id=str(place_id),
            content_type=ContentType.PLACE,
            content_id=str(place_id),
            title=payload.get("name") or "",
            subtitle=subtitle or None,
            image_url=resolve_image_url(photo, PLACE_PHOTOS),
            source=self.source_name,
            raw=payload,
        )

    def _parse_results(self, payload: Any) -> ProviderResponse:
        if not isinstance(payload, dict):
            raise ProviderSchemaMismatch("Places response is not an object")
        status = payload.get("status")
        if status not in OK_STATUSES:
            raise ProviderSchemaMismatch(f"Places status {status}")
        results = payload.get("results")
        if results is None and status == "ZERO_RESULTS":
            results = []
        if not isinstance(results, list):
            raise ProviderSchemaMismatch("Places response missing results")
        items = self.normalize_many(results)
        return ProviderResponse(source=self.source_name, items=items, total=len(items))

    async def _text_search(
        self,
        query: str,
        location: tuple[float, float] | None = None,
        radius: int = TEXT_SEARCH_RADIUS_METERS,
    ) -> ProviderResponse:
        params: dict[str, Any] = {
            "query": query,
            "key": self.credential(),
            "language": settings.places_language,
        }
        if settings.places_region:
            params["region"] = settings.places_region
        if location is not None:
            params["location"] = format_location(location)
            params["radius"] = radius
        return self._parse_results(await fetch_json(f"{PLACES_BASE}/textsearch/json", params=params))

    async def _search(self, query: str, page: int) -> ProviderResponse:
        return await self._text_search(query)

    async def search_near(
        self,
        query: str,
        location: tuple[float, float],
        radius: int = TEXT_SEARCH_RADIUS_METERS,
    ) -> ProviderResponse:
        """Text search biased toward ``location`` (latitude, longitude)."""
        term = (query or "").strip()
        if not term:
            return ProviderResponse.empty(self.source_name)
        return await self._guarded(
            "search_near", term, lambda: self._text_search(term, location, radius)
        )

    async def _nearby(
        self, location: tuple[float, float], place_type: str | None, radius: int
    ) -> ProviderResponse:
        params: dict[str, Any] = {
            "location": format_location(location),
            "radius": radius,
            "key": self.credential(),
            "language": settings.places_language,
        }
        if place_type:
            params["type"] = place_type
        return self._parse_results(await fetch_json(f"{PLACES_BASE}/nearbysearch/json", params=params))

    async def nearby(
        self,
        latitude: float,
        longitude: float,
        place_type: str | None = None,
        radius: int = NEARBY_RADIUS_METERS,
    ) -> ProviderResponse:
        """Places around a coordinate, optionally limited to one Places ``type``.

        Offline, mock places of that type are returned, or all of them when none match.
        """
        kind = (place_type or "").strip()
        typed_mock = [entry for entry in self.mock_dataset if kind in (entry.get("types") or [])]
        return await self._guarded(
            "nearby",
            kind,
            lambda: self._nearby((latitude, longitude), kind or None, radius),
            typed_mock or self.mock_dataset,
        )

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        if not self.has_credential():
            return self._mock_lookup(identifier, key="place_id")
        payload = await fetch_json(
            f"{PLACES_BASE}/details/json",
            params={
                "place_id": identifier,
                "key": self.credential(),
                "language": settings.places_language,
                "fields": "place_id,name,formatted_address,types,photos,rating,geometry,website",
            },
        )
        if not isinstance(payload, dict) or payload.get("status") != "OK":
            return None
        result = payload.get("result")
        return self.normalize(result) if isinstance(result, dict) else None
