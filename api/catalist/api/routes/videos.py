from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from catalist.api.deps import get_adapters
from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import ProviderError
from catalist.providers.video import YouTubeAdapter, is_valid_video_url
from catalist.schema.results import NormalizedResultItem

router = APIRouter()


@router.get("/lookup", response_model=NormalizedResultItem)
async def lookup_video(
    url: str = Query(..., min_length=1),
    adapters: dict[str, ProviderAdapter] = Depends(get_adapters),
) -> NormalizedResultItem:
    if not is_valid_video_url(url):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Not a video URL")
    adapter = adapters.get(YouTubeAdapter.source_name)
    if not isinstance(adapter, YouTubeAdapter):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Video provider unavailable")
    try:
        item = await adapter.get_by_url(url)
    except ProviderError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Video provider failed") from exc
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found")
    return item
