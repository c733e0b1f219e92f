"""YouTube video search, lookup and URL helpers."""

from __future__ import annotations

import re
from typing import Any

from catalist.providers.base import ProviderAdapter
from catalist.providers.errors import ProviderSchemaMismatch
from catalist.providers.http import fetch_json
from catalist.providers.images import VIDEO_THUMBNAILS, best_thumbnail, resolve_image_url, video_thumbnail_url
from catalist.providers.mock_data import YOUTUBE_VIDEOS
from catalist.schema.results import ContentType, NormalizedResultItem, ProviderResponse

API_BASE = "https://www.googleapis.com/youtube/v3"
MAX_RESULTS = 20

_VIDEO_ID_RE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:[^#\s]*&)?v=|embed/|v/|shorts/)|youtu\.be/)([A-Za-z0-9_-]{11})",
    re.IGNORECASE,
)
_DURATION_RE = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def extract_video_id(url: str | None) -> str | None:
    if not url:
        return None
    match = _VIDEO_ID_RE.search(url.strip())
    return match.group(1) if match else None


def is_valid_video_url(url: str | None) -> bool:
    return extract_video_id(url) is not None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def format_duration(value: str | None) -> str | None:
    """Render an ISO-8601 duration (``PT1H2M3S``) as ``H:MM:SS`` or ``M:SS``."""
    if not value:
        return None
    match = _DURATION_RE.match(value.strip())
    if not match:
        return None
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_view_count(value: str | int | None) -> str | None:
    try:
        count = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M views"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K views"
    return f"{count} views"


class YouTubeAdapter(ProviderAdapter):
    """YouTube search hydrated through the videos resource.

    Pagination uses YouTube page tokens. Each response carries ``next_page_token``
    and the caller passes it back to ``search_page``; the adapter keeps no state.
    """
    source_name = "video"
    mock_dataset = YOUTUBE_VIDEOS
    mock_fields = ("snippet.title", "snippet.channelTitle", "snippet.description")

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        video_id = payload.get("id")
        if isinstance(video_id, dict):
            video_id = video_id.get("videoId")
        if not video_id:
            return None
        snippet = payload.get("snippet") or {}
        statistics = payload.get("statistics") or {}
        details = payload.get("contentDetails") or {}
        image = best_thumbnail(snippet.get("thumbnails")) or video_thumbnail_url(video_id)
        raw = {
            **payload,
            "duration": format_duration(details.get("duration")),
            "view_count": format_view_count(statistics.get("viewCount")),
        }
        return NormalizedResultItem(
            id=f"video-{video_id}",
            content_type=ContentType.VIDEO,
            content_id=str(video_id),
            title=snippet.get("title") or "",
            subtitle=snippet.get("channelTitle") or None,
            image_url=resolve_image_url(image, VIDEO_THUMBNAILS),
            url=watch_url(video_id),
            source=self.source_name,
            raw=raw,
        )

    async def _fetch_videos(self, video_ids: list[str]) -> list[dict[str, Any]]:
        if not video_ids:
            return []
        payload = await fetch_json(
            f"{API_BASE}/videos",
            params={
                "part": "snippet,statistics,contentDetails",
                "id": ",".join(video_ids),
                "key": self.credential(),
            },
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("items", []), list):
            raise ProviderSchemaMismatch("YouTube videos response missing items")
        return payload.get("items", [])

    async def _search_videos(self, query: str, page_token: str | None = None) -> ProviderResponse:
        params: dict[str, Any] = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": MAX_RESULTS,
            "key": self.credential(),
        }
        if page_token:
            params["pageToken"] = page_token
        payload = await fetch_json(f"{API_BASE}/search", params=params)
        if not isinstance(payload, dict) or not isinstance(payload.get("items", []), list):
            raise ProviderSchemaMismatch("YouTube search response missing items")
        ids = [
            entry["id"]["videoId"]
            for entry in payload.get("items", [])
            if isinstance(entry.get("id"), dict) and entry["id"].get("videoId")
        ]
        items = self.normalize_many(await self._fetch_videos(ids))
        total = (payload.get("pageInfo") or {}).get("totalResults")
        return ProviderResponse(
            source=self.source_name,
            items=items,
            total=total if isinstance(total, int) else len(items),
            next_page_token=payload.get("nextPageToken") or None,
        )

    async def _search(self, query: str, page: int) -> ProviderResponse:
        # YouTube pages by token; later pages go through search_page
        if page > 1:
            return ProviderResponse.empty(self.source_name)
        return await self._search_videos(query)

    async def search_page(self, query: str, page_token: str) -> ProviderResponse:
        """Fetch the page named by a ``next_page_token`` from an earlier response."""
        term = (query or "").strip()
        if not term:
            return ProviderResponse.empty(self.source_name)
        return await self._guarded(
            "search_page", term, lambda: self._search_videos(term, page_token or None)
        )

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        if not self.has_credential():
            return self._mock_lookup(identifier)
        videos = await self._fetch_videos([identifier])
        return self.normalize(videos[0]) if videos else None

    async def get_by_url(self, url: str) -> NormalizedResultItem | None:
        """Resolve a pasted watch/short/embed URL; None for anything else."""
        video_id = extract_video_id(url)
        if video_id is None:
            return None
        return await self.get_by_id(video_id)
