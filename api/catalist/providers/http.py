from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from catalist.core.config import settings
from catalist.providers.errors import ProviderSchemaMismatch, ProviderTransportFailure
from catalist.utils.redaction import redact_secrets


async def fetch_json(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> Any:
    """GET a provider endpoint and decode its JSON body.

    Attempts come from ``settings.provider_max_attempts``; the default of one means
    the first failure goes straight to the caller's fallback.
    """
    host = urlparse(url).netloc
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max(settings.provider_max_attempts, 1)),
        wait=wait_exponential_jitter(initial=0.5, max=4),
        retry=retry_if_exception_type(ProviderTransportFailure),
        reraise=True,
    ):
        with attempt:
            try:
                async with httpx.AsyncClient(timeout=timeout or settings.provider_timeout_seconds) as client:
                    response = await client.get(url, headers=headers, params=params)
            except httpx.HTTPError as exc:
                raise ProviderTransportFailure(
                    redact_secrets(f"{host}: {exc.__class__.__name__}: {exc}")
                ) from exc
            if response.status_code >= 400:
                raise ProviderTransportFailure(
                    f"{host} responded {response.status_code}", status_code=response.status_code
                )
            try:
                return response.json()
            except ValueError as exc:
                raise ProviderSchemaMismatch(f"{host} returned a non-JSON body") from exc
    raise ProviderTransportFailure("Unreachable")
