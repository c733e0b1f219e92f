"""Explicit caller identity passed into components that need it."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Identity of the user driving the current request or UI flow."""
    user_id: str
    display_name: str | None = None
