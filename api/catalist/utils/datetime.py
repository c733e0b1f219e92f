"""Datetime parsing helpers for provider payloads."""

from __future__ import annotations

from datetime import date, datetime


def parse_date(value: str | None) -> date | None:
    """Parse YYYY, YYYY-MM, YYYY-MM-DD or ISO timestamp strings into dates."""
    if not value:
        return None
    value = value.strip()
    try:
        if len(value) == 4:
            return date.fromisoformat(f"{value}-01-01")
        if len(value) == 7:
            return date.fromisoformat(f"{value}-01")
        if len(value) > 10 and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return date.fromisoformat(value)
    except ValueError:
        return None


def display_year(value: str | None) -> str | None:
    """Return the four-digit year for list rows, or None when unparseable."""
    parsed = parse_date(value)
    if parsed:
        return str(parsed.year)
    if value and len(value) >= 4 and value[:4].isdigit():
        return value[:4]
    return None
