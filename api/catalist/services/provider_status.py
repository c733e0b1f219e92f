"""Report which providers run live and which answer from mock data."""

from __future__ import annotations

from typing import Mapping

from catalist.core.config import PROVIDER_CREDENTIAL_FIELDS, settings
from catalist.providers.base import ProviderAdapter
from catalist.providers.observability import ProviderMonitor, provider_monitor
from catalist.schema.providers import ProviderStatus, ProviderStatusReport, ProviderStatusSummary
from catalist.utils.redaction import preview_secret

PROVIDER_LABELS: dict[str, str] = {
    "places": "place search",
    "tmdb": "movie, TV and people search",
    "games": "game search",
    "books": "book search",
    "video": "video lookup",
    "users": "user directory",
}


def _env_var(provider: str) -> str | None:
    fields = PROVIDER_CREDENTIAL_FIELDS.get(provider)
    if fields is None:
        return None
    names = fields if isinstance(fields, tuple) else (fields,)
    return " or ".join(name.upper() for name in names)


async def build_status_report(
    adapters: Mapping[str, ProviderAdapter],
    monitor: ProviderMonitor | None = None,
) -> ProviderStatusReport:
    monitor = monitor or provider_monitor
    snapshot = await monitor.snapshot()
    providers: list[ProviderStatus] = []
    recommendations: list[str] = []
    for name, adapter in adapters.items():
        live = adapter.has_credential()
        circuit = snapshot.get(name, {}).get("circuit", {})
        providers.append(
            ProviderStatus(
                name=name,
                env_var=_env_var(name),
                has_credential=live,
                credential_preview=preview_secret(settings.credential_for(name)) if live else "missing",
                mode="live" if live else "mock",
                circuit=circuit,
            )
        )
        if live:
            if float(circuit.get("remaining_cooldown") or 0.0) > 0:
                recommendations.append(f"{name} is cooling down after repeated failures; serving mock data")
            continue
        env_var = _env_var(name)
        label = PROVIDER_LABELS.get(name, name)
        if env_var:
            recommendations.append(f"Set {env_var} to enable live {label}")
        else:
            recommendations.append(f"Configure a row store to enable live {label}")
    live_count = sum(1 for provider in providers if provider.has_credential)
    if providers and live_count == len(providers):
        recommendations.append("All providers are configured")
    return ProviderStatusReport(
        providers=providers,
        summary=ProviderStatusSummary(total=len(providers), live=live_count, mock=len(providers) - live_count),
        recommendations=recommendations,
    )
