from __future__ import annotations

import asyncio

import pytest

from catalist.providers.errors import ProviderTransportFailure
from catalist.providers.observability import CircuitOpenError, ProviderMonitor


@pytest.mark.asyncio
async def test_provider_monitor_opens_circuit_after_repeated_failures() -> None:
    monitor = ProviderMonitor(circuit_threshold=2, base_backoff_seconds=0.01, max_backoff_seconds=0.02)

    async def failing_call() -> None:
        raise ProviderTransportFailure("boom")

    with pytest.raises(ProviderTransportFailure):
        await monitor.track("tmdb", "search", failing_call)
    with pytest.raises(ProviderTransportFailure):
        await monitor.track("tmdb", "search", failing_call)

    assert monitor.allow_call("tmdb") is False
    with pytest.raises(CircuitOpenError):
        await monitor.track("tmdb", "search", failing_call)

    snapshot = await monitor.snapshot()
    assert snapshot["tmdb"]["circuit"]["opened_count"] >= 1
    assert snapshot["tmdb"]["operations"]["search"]["failed"] == 2

    await monitor.record_fallback("tmdb", "search", reason="circuit_open", context={"query": "x"})
    updated = await monitor.snapshot()
    assert updated["tmdb"]["operations"]["search"]["skipped"] >= 2
    assert updated["tmdb"]["operations"]["search"]["fallbacks"] == 1
    assert updated["tmdb"]["operations"]["search"]["last_fallback_reason"] == "circuit_open"


@pytest.mark.asyncio
async def test_provider_monitor_recovers_after_cooldown_and_success() -> None:
    monitor = ProviderMonitor(circuit_threshold=1, base_backoff_seconds=0.01, max_backoff_seconds=0.02)

    async def failing_call() -> None:
        raise ProviderTransportFailure("boom")

    with pytest.raises(ProviderTransportFailure):
        await monitor.track("books", "search", failing_call)

    assert monitor.allow_call("books") is False
    await asyncio.sleep(0.02)

    async def ok_call() -> str:
        return "ok"

    assert await monitor.track("books", "search", ok_call, context={"query": "dune"}) == "ok"
    snapshot = await monitor.snapshot()
    assert snapshot["books"]["operations"]["search"]["succeeded"] == 1
    assert snapshot["books"]["circuit"]["consecutive_failures"] == 0
    assert snapshot["books"]["circuit"]["state"] == "closed"


@pytest.mark.asyncio
async def test_failed_trial_call_after_cooldown_reopens_immediately() -> None:
    monitor = ProviderMonitor(circuit_threshold=3, base_backoff_seconds=0.01, max_backoff_seconds=1.0)

    async def failing_call() -> None:
        raise ProviderTransportFailure("boom")

    for _ in range(3):
        with pytest.raises(ProviderTransportFailure):
            await monitor.track("games", "search", failing_call)
    assert monitor.circuit("games").state == "open"
    await asyncio.sleep(0.02)
    assert monitor.circuit("games").state == "half_open"

    with pytest.raises(ProviderTransportFailure):
        await monitor.track("games", "search", failing_call)

    circuit = monitor.circuit("games")
    assert circuit.state == "open"
    assert circuit.trips == 2
    assert circuit.next_cooldown == pytest.approx(0.04)
