"""Text sanitizers for user-authored list content."""

from __future__ import annotations

import re
from typing import Iterable

_BLOCK_TAG_RE = re.compile(
    r"<(script|iframe|object|embed)\b[^<]*(?:(?!</\1>)<[^<]*)*</\1>", re.IGNORECASE
)
_JS_PROTOCOL_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\bon\w+\s*=", re.IGNORECASE)


def sanitize_text(value: str | None) -> str:
    """Strip executable markup from free text and trim surrounding whitespace."""
    if not value or not isinstance(value, str):
        return ""
    cleaned = _BLOCK_TAG_RE.sub("", value)
    cleaned = _JS_PROTOCOL_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    return cleaned.strip()


def sanitize_tags(tags: Iterable[str] | None) -> list[str]:
    """Sanitize tags, dropping blanks and duplicates while keeping order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for tag in tags or []:
        value = sanitize_text(tag)
        if not value or value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned
