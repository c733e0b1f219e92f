from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ProviderStatus(BaseModel):
    name: str
    env_var: str | None = None
    has_credential: bool
    credential_preview: str
    mode: str
    circuit: dict[str, Any] = Field(default_factory=dict)


class ProviderStatusSummary(BaseModel):
    total: int
    live: int
    mock: int


class ProviderStatusReport(BaseModel):
    providers: list[ProviderStatus]
    summary: ProviderStatusSummary
    recommendations: list[str] = Field(default_factory=list)
