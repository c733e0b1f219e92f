from __future__ import annotations

from typing import cast

from fastapi import APIRouter, Depends, Query

from catalist.api.deps import get_adapters, get_aggregator
from catalist.providers.base import ProviderAdapter
from catalist.providers.books import GoogleBooksAdapter
from catalist.providers.places import NEARBY_RADIUS_METERS, PlacesAdapter
from catalist.schema.results import CategorizedResultBundle, NormalizedResultItem
from catalist.services.search_service import SearchAggregator

router = APIRouter()


@router.get("", response_model=CategorizedResultBundle)
async def search(
    q: str = Query(default="", max_length=200),
    aggregator: SearchAggregator = Depends(get_aggregator),
) -> CategorizedResultBundle:
    """Search every general provider at once; blank queries return an empty bundle."""
    return await aggregator.aggregate(q)


@router.get("/discover", response_model=CategorizedResultBundle)
async def discover(aggregator: SearchAggregator = Depends(get_aggregator)) -> CategorizedResultBundle:
    return await aggregator.discover()


@router.get("/categories/{category}", response_model=list[NormalizedResultItem])
async def search_category(
    category: str,
    q: str = Query(default="", max_length=200),
    aggregator: SearchAggregator = Depends(get_aggregator),
) -> list[NormalizedResultItem]:
    return await aggregator.aggregate_for_category(category, q)


@router.get("/places/nearby", response_model=list[NormalizedResultItem])
async def nearby_places(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    place_type: str | None = Query(default=None, alias="type", max_length=64),
    radius: int = Query(default=NEARBY_RADIUS_METERS, gt=0, le=50_000),
    adapters: dict[str, ProviderAdapter] = Depends(get_adapters),
) -> list[NormalizedResultItem]:
    places = cast(PlacesAdapter, adapters["places"])
    response = await places.nearby(lat, lng, place_type=place_type, radius=radius)
    return response.items


@router.get("/books/subjects/{subject}", response_model=list[NormalizedResultItem])
async def books_by_subject(
    subject: str,
    page: int = Query(default=1, ge=1),
    adapters: dict[str, ProviderAdapter] = Depends(get_adapters),
) -> list[NormalizedResultItem]:
    books = cast(GoogleBooksAdapter, adapters["books"])
    response = await books.search_by_subject(subject, page=page)
    return response.items
