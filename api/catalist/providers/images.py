"""Image and media URL resolution.

Providers hand back image references in different shapes: absolute URLs (RAWG,
YouTube), CDN-relative paths (TMDB posters, avatar storage keys), nested link maps
(Google Books) or opaque references (Places photos). Everything here is pure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

_ABSOLUTE_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)

BOOK_PLACEHOLDER = "https://via.placeholder.com/128x192?text=No+Cover"
IMAGE_PLACEHOLDER = "https://via.placeholder.com/300x200?text=No+Image"
AVATAR_PLACEHOLDER = "https://via.placeholder.com/150x150?text=User"

PLACES_PHOTO_ENDPOINT = "https://maps.googleapis.com/maps/api/place/photo"
YOUTUBE_THUMBNAIL_BASE = "https://img.youtube.com/vi"

BOOK_SIZE_PREFERENCE: dict[str, tuple[str, ...]] = {
    "small": ("smallThumbnail", "thumbnail"),
    "medium": ("thumbnail", "small", "medium"),
    "large": ("large", "medium", "thumbnail"),
}


@dataclass(frozen=True, slots=True)
class ImageConvention:
    """How a provider's relative image fragments become absolute URLs."""
    base_url: str | None
    default_size: str | None = None
    placeholder: str = IMAGE_PLACEHOLDER

    def join(self, fragment: str, size: str | None = None) -> str | None:
        if not self.base_url:
            return None
        base = self.base_url.rstrip("/")
        segment = size or self.default_size
        path = fragment if fragment.startswith("/") else f"/{fragment}"
        if segment:
            return f"{base}/{segment}{path}"
        return f"{base}{path}"


TMDB_IMAGES = ImageConvention(base_url="https://image.tmdb.org/t/p", default_size="w500")
BOOK_COVERS = ImageConvention(base_url=None, placeholder=BOOK_PLACEHOLDER)
GAME_IMAGES = ImageConvention(base_url=None)
PLACE_PHOTOS = ImageConvention(base_url=None)
VIDEO_THUMBNAILS = ImageConvention(base_url=None)


def avatar_convention(storage_base_url: str | None) -> ImageConvention:
    """Avatar keys live under the public avatars bucket of the storage host."""
    base = None
    if storage_base_url:
        base = f"{storage_base_url.rstrip('/')}/storage/v1/object/public/avatars"
    return ImageConvention(base_url=base, placeholder=AVATAR_PLACEHOLDER)


def resolve_image_url(
    raw: str | None,
    convention: ImageConvention,
    size_hint: str | None = None,
) -> str:
    """Turn a provider image reference into an absolute URL or the placeholder.

    Never returns an empty string or a relative path.
    """
    if raw is None or not isinstance(raw, str) or not raw.strip():
        return convention.placeholder
    value = raw.strip()
    if value.startswith("//"):
        return f"https:{value}"
    if _ABSOLUTE_RE.match(value):
        return value
    joined = convention.join(value, size_hint)
    return joined or convention.placeholder


def book_cover_url(image_links: Mapping[str, Any] | None, size: str = "medium") -> str:
    if not image_links:
        return BOOK_PLACEHOLDER
    for key in BOOK_SIZE_PREFERENCE.get(size, BOOK_SIZE_PREFERENCE["medium"]):
        candidate = image_links.get(key)
        if isinstance(candidate, str) and candidate.strip():
            # Google Books still serves plain http links.
            url = resolve_image_url(candidate, BOOK_COVERS)
            if url.startswith("http://"):
                url = "https://" + url[len("http://"):]
            return url
    return BOOK_PLACEHOLDER


def place_photo_url(reference: str | None, api_key: str | None, max_width: int = 400) -> str | None:
    """Build the Places photo URL; None without a reference or key."""
    if not reference or not api_key:
        return None
    return f"{PLACES_PHOTO_ENDPOINT}?photo_reference={reference}&maxwidth={max_width}&key={api_key}"


def video_thumbnail_url(video_id: str, quality: str = "hqdefault") -> str:
    return f"{YOUTUBE_THUMBNAIL_BASE}/{video_id}/{quality}.jpg"


def best_thumbnail(thumbnails: Mapping[str, Any] | None) -> str | None:
    """Pick the highest-resolution thumbnail URL from a YouTube thumbnails map."""
    for key in ("maxres", "high", "medium", "default"):
        entry = (thumbnails or {}).get(key)
        if isinstance(entry, Mapping) and entry.get("url"):
            return str(entry["url"])
    return None
