"""Debounced, latest-query-wins search for interactive search boxes."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from catalist.core.config import settings
from catalist.utils.redaction import redact_secrets

logger = logging.getLogger("catalist.services.search_session")

T = TypeVar("T")


class LatestQueryGate:
    """Hand out increasing generation tokens; only the newest may apply results."""

    def __init__(self) -> None:
        self._latest = 0
        self._applied = 0

    @property
    def latest(self) -> int:
        return self._latest

    @property
    def applied(self) -> int:
        return self._applied

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def try_apply(self, token: int) -> bool:
        """Mark ``token`` applied if it is still the newest; False means discard."""
        if not self.is_current(token) or token <= self._applied:
            return False
        self._applied = token
        return True


class DebouncedSearch(Generic[T]):
    """Run ``search`` after a quiet period and deliver only the newest result.

    ``submit`` cancels a timer that has not fired yet. Searches already running are
    left alone; their results are dropped at the apply step if a newer query was
    submitted meanwhile.
    """

    def __init__(
        self,
        search: Callable[[str], Awaitable[T]],
        on_result: Callable[[str, T], Any],
        delay: float | None = None,
    ) -> None:
        self._search = search
        self._on_result = on_result
        self.delay = settings.search_debounce_seconds if delay is None else delay
        self.gate = LatestQueryGate()
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()

    def submit(self, query: str) -> int:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        token = self.gate.issue()
        self._timer = asyncio.create_task(self._wait_then_fire(query, token))
        return token

    async def _wait_then_fire(self, query: str, token: int) -> None:
        await asyncio.sleep(self.delay)
        task = asyncio.create_task(self._run(query, token))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, query: str, token: int) -> None:
        try:
            result = await self._search(query)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Debounced search failed", extra={"error": redact_secrets(str(exc))})
            return
        if not self.gate.try_apply(token):
            logger.debug("Discarding stale search result", extra={"token": token, "latest": self.gate.latest})
            return
        outcome = self._on_result(query, result)
        if inspect.isawaitable(outcome):
            await outcome

    async def drain(self) -> None:
        """Wait for the pending timer and every running search to finish."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        for task in list(self._in_flight):
            task.cancel()
