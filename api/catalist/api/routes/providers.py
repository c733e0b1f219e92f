from __future__ import annotations

from fastapi import APIRouter, Depends

from catalist.api.deps import get_adapters
from catalist.providers.base import ProviderAdapter
from catalist.schema.providers import ProviderStatusReport
from catalist.services.provider_status import build_status_report

router = APIRouter()


@router.get("/status", response_model=ProviderStatusReport)
async def provider_status(
    adapters: dict[str, ProviderAdapter] = Depends(get_adapters),
) -> ProviderStatusReport:
    """Which providers answer live, which fall back to mock data, and what to configure."""
    return await build_status_report(adapters)
