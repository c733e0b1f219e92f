"""Per-provider circuit breaking and call telemetry.

Every live provider call goes through ``ProviderMonitor.track``. Three consecutive
failures (configurable) open that provider's circuit; while open, adapters answer
from mock data without touching the network. Cooldowns double on each re-open up
to a ceiling and reset after the first success.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

from catalist.core.config import settings
from catalist.utils.redaction import redact_secrets

logger = logging.getLogger("catalist.providers")

T = TypeVar("T")


class CircuitOpenError(Exception):
    """The provider's circuit is open; no call was attempted."""


@dataclass
class ProviderCircuit:
    threshold: int
    cooldown_seconds: float
    max_cooldown_seconds: float
    consecutive_failures: int = 0
    reopen_at: float = 0.0
    trips: int = 0
    next_cooldown: float = field(init=False)

    def __post_init__(self) -> None:
        self.next_cooldown = self.cooldown_seconds

    @property
    def state(self) -> str:
        if self.reopen_at and time.monotonic() < self.reopen_at:
            return "open"
        return "half_open" if self.trips and self.reopen_at else "closed"

    def cooldown_left(self) -> float:
        return max(self.reopen_at - time.monotonic(), 0.0) if self.reopen_at else 0.0

    def note_success(self) -> None:
        self.consecutive_failures = 0
        self.reopen_at = 0.0
        self.next_cooldown = self.cooldown_seconds

    def note_failure(self) -> bool:
        """Count a failure; returns True when this failure tripped the circuit.

        Failures landing while the circuit is already open are ignored. A failed
        trial call after the cooldown reopens it immediately.
        """
        state = self.state
        if state == "open":
            return False
        self.consecutive_failures += 1
        if state == "closed" and self.consecutive_failures < self.threshold:
            return False
        self.trips += 1
        self.consecutive_failures = 0
        self.reopen_at = time.monotonic() + self.next_cooldown
        self.next_cooldown = min(self.next_cooldown * 2, self.max_cooldown_seconds)
        return True

    def describe(self) -> dict[str, Any]:
        return {
            "state": self.state,
            "consecutive_failures": self.consecutive_failures,
            "remaining_cooldown": round(self.cooldown_left(), 2),
            "next_cooldown": self.next_cooldown,
            "opened_count": self.trips,
        }


@dataclass
class CallStats:
    started: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    fallbacks: int = 0
    last_latency_ms: float | None = None
    last_error: str | None = None
    last_fallback_reason: str | None = None


def _emit(level: int, event: str, **fields: Any) -> None:
    logger.log(level, json.dumps({"event": event, **fields}, default=str))


class ProviderMonitor:
    def __init__(
        self,
        *,
        circuit_threshold: int | None = None,
        base_backoff_seconds: float | None = None,
        max_backoff_seconds: float | None = None,
    ) -> None:
        self._circuit_args = {
            "threshold": circuit_threshold or settings.provider_circuit_threshold,
            "cooldown_seconds": base_backoff_seconds or settings.provider_circuit_backoff_seconds,
            "max_cooldown_seconds": max_backoff_seconds or settings.provider_circuit_max_backoff_seconds,
        }
        self._circuits: dict[str, ProviderCircuit] = {}
        self._stats: defaultdict[tuple[str, str], CallStats] = defaultdict(CallStats)
        self._lock = asyncio.Lock()

    def circuit(self, source: str) -> ProviderCircuit:
        if source not in self._circuits:
            self._circuits[source] = ProviderCircuit(**self._circuit_args)
        return self._circuits[source]

    def allow_call(self, source: str) -> bool:
        return self.circuit(source).state != "open"

    async def record_fallback(
        self,
        source: str,
        operation: str,
        *,
        reason: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        async with self._lock:
            stats = self._stats[(source, operation)]
            stats.fallbacks += 1
            stats.last_fallback_reason = reason
            if reason == "circuit_open":
                stats.skipped += 1
            circuit = self.circuit(source).describe()
        _emit(
            logging.WARNING,
            "provider_fallback",
            source=source,
            operation=operation,
            reason=reason,
            context=context or {},
            circuit=circuit,
        )

    async def track(
        self,
        source: str,
        operation: str,
        func: Callable[[], Awaitable[T]],
        *,
        context: dict[str, Any] | None = None,
    ) -> T:
        """Await ``func`` under the provider's circuit, recording the outcome.

        Raises CircuitOpenError without calling ``func`` while the circuit is open.
        Exceptions from ``func`` are recorded and re-raised unchanged.
        """
        async with self._lock:
            circuit = self.circuit(source)
            stats = self._stats[(source, operation)]
            if circuit.state == "open":
                stats.skipped += 1
                raise CircuitOpenError(f"{source} circuit open for {circuit.cooldown_left():.2f}s")
            stats.started += 1

        started = time.monotonic()
        try:
            result = await func()
        except Exception as exc:
            latency_ms = round((time.monotonic() - started) * 1000, 2)
            error = redact_secrets(str(exc))
            async with self._lock:
                stats.failed += 1
                stats.last_latency_ms = latency_ms
                stats.last_error = error
                tripped = circuit.note_failure()
                described = circuit.describe()
            _emit(
                logging.WARNING,
                "provider_failure",
                source=source,
                operation=operation,
                error_type=type(exc).__name__,
                error=error,
                latency_ms=latency_ms,
                context=context or {},
                circuit=described,
            )
            if tripped:
                _emit(logging.ERROR, "provider_circuit_open", source=source, circuit=described)
            raise

        latency_ms = round((time.monotonic() - started) * 1000, 2)
        async with self._lock:
            stats.succeeded += 1
            stats.last_latency_ms = latency_ms
            stats.last_error = None
            circuit.note_success()
        _emit(
            logging.INFO,
            "provider_success",
            source=source,
            operation=operation,
            latency_ms=latency_ms,
            context=context or {},
        )
        return result

    async def snapshot(self) -> dict[str, Any]:
        """Nested ``{source: {"circuit": ..., "operations": {op: stats}}}`` view."""
        async with self._lock:
            report: dict[str, Any] = {}
            for (source, operation), stats in self._stats.items():
                entry = report.setdefault(
                    source, {"circuit": self.circuit(source).describe(), "operations": {}}
                )
                entry["operations"][operation] = asdict(stats)
            return report


provider_monitor = ProviderMonitor()
