"""Base adapter primitives for external content providers."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Sequence

from catalist.core.config import settings
from catalist.providers.errors import CredentialMissing, ProviderError, ProviderSchemaMismatch
from catalist.providers.mock_data import filter_mock
from catalist.providers.observability import CircuitOpenError, ProviderMonitor, provider_monitor
from catalist.schema.results import ContentType, FallbackReason, NormalizedResultItem, ProviderResponse
from catalist.utils.redaction import redact_secrets

logger = logging.getLogger("catalist.providers")

SCHEMA_ERRORS = (KeyError, TypeError, AttributeError, ValueError)


class ProviderAdapter:
    """Search one upstream provider and normalize its answers.

    Subclasses implement ``_search`` against the live API and ``normalize`` for a
    single raw payload; ``search`` wraps both in the fallback policy and never
    raises for provider-side failures.
    """
    source_name: str
    supports_discover: bool = False
    mock_dataset: Sequence[dict[str, Any]] = ()
    mock_fields: Sequence[str] = ()

    def __init__(self, monitor: ProviderMonitor | None = None) -> None:
        self.monitor = monitor or provider_monitor

    def has_credential(self) -> bool:
        return settings.credential_for(self.source_name) is not None

    def credential(self) -> str:
        value = settings.credential_for(self.source_name)
        if value is None:
            raise CredentialMissing(f"{self.source_name} credentials missing")
        return value

    def normalize(self, payload: dict[str, Any]) -> NormalizedResultItem | None:
        """Map one raw provider payload to a result item; None drops it."""
        raise NotImplementedError

    def normalize_many(self, payloads: Sequence[Any]) -> list[NormalizedResultItem]:
        items: list[NormalizedResultItem] = []
        for payload in payloads:
            if not isinstance(payload, dict):
                raise ProviderSchemaMismatch(f"{self.source_name} result entry is not an object")
            item = self.normalize(payload)
            if item is not None:
                items.append(item)
        return items

    async def _search(self, query: str, page: int) -> ProviderResponse:
        raise NotImplementedError

    async def search(self, query: str, page: int = 1) -> ProviderResponse:
        """Return the first page of results for ``query``, live or mocked."""
        term = (query or "").strip()
        if not term and not self.supports_discover:
            return ProviderResponse.empty(self.source_name)
        return await self._guarded("search", term, lambda: self._search(term, max(page, 1)))

    async def search_category(
        self, query: str, content_type: ContentType, page: int = 1
    ) -> ProviderResponse:
        """Search restricted to one content type; single-type providers just search."""
        return await self.search(query, page)

    async def _guarded(
        self,
        operation: str,
        term: str,
        call: Callable[[], Awaitable[ProviderResponse]],
        mock_dataset: Sequence[dict[str, Any]] | None = None,
    ) -> ProviderResponse:
        """Run ``call`` under the fallback policy; mock answers come from ``mock_dataset``."""
        if not self.has_credential():
            return await self._fallback(term, FallbackReason.CREDENTIAL_MISSING, operation, mock_dataset)
        if not self.monitor.allow_call(self.source_name):
            return await self._fallback(term, FallbackReason.CIRCUIT_OPEN, operation, mock_dataset)
        try:
            return await self.monitor.track(
                self.source_name,
                operation,
                call,
                context={"query": term},
            )
        except CircuitOpenError:
            return await self._fallback(term, FallbackReason.CIRCUIT_OPEN, operation, mock_dataset)
        except ProviderError as exc:
            logger.warning(
                "Provider search failed; serving mock results",
                extra={"source": self.source_name, "operation": operation, "error": redact_secrets(str(exc))},
            )
            return await self._fallback(term, exc.reason, operation, mock_dataset)
        except SCHEMA_ERRORS as exc:
            logger.warning(
                "Provider payload malformed; serving mock results",
                extra={"source": self.source_name, "operation": operation, "error": redact_secrets(repr(exc))},
            )
            return await self._fallback(term, FallbackReason.SCHEMA_MISMATCH, operation, mock_dataset)

    def mock_search(
        self, query: str, dataset: Sequence[dict[str, Any]] | None = None
    ) -> list[NormalizedResultItem]:
        entries = self.mock_dataset if dataset is None else dataset
        return self.normalize_many(filter_mock(entries, query, self.mock_fields))

    async def _fallback(
        self,
        query: str,
        reason: FallbackReason,
        operation: str = "search",
        dataset: Sequence[dict[str, Any]] | None = None,
    ) -> ProviderResponse:
        await self.monitor.record_fallback(
            self.source_name, operation, reason=reason.value, context={"query": query}
        )
        items = self.mock_search(query, dataset)
        return ProviderResponse(
            source=self.source_name,
            items=items,
            total=len(items),
            fallback=True,
            fallback_reason=reason,
        )

    async def get_by_id(self, identifier: str) -> NormalizedResultItem | None:
        """Look up a single item for detail hydration.

        Without a credential the mock dataset is searched by id; unsupported
        providers return None.
        """
        return None

    def _mock_lookup(self, identifier: str, key: str = "id") -> NormalizedResultItem | None:
        for entry in self.mock_dataset:
            if str(entry.get(key)) == str(identifier):
                return self.normalize(entry)
        return None
