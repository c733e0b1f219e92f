"""Failure taxonomy for content providers.

None of these escape an adapter's ``search``: each one selects the mock fallback.
"""

from __future__ import annotations

from catalist.schema.results import FallbackReason


class ProviderError(Exception):
    """Base class for provider-side failures."""
    reason: FallbackReason = FallbackReason.TRANSPORT_FAILURE


class CredentialMissing(ProviderError):
    """No usable key or token is configured for the provider."""
    reason = FallbackReason.CREDENTIAL_MISSING


class ProviderTransportFailure(ProviderError):
    """Network error, timeout, or non-2xx status from the provider."""
    reason = FallbackReason.TRANSPORT_FAILURE

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderSchemaMismatch(ProviderError):
    """The provider answered, but not in the shape the adapter understands."""
    reason = FallbackReason.SCHEMA_MISMATCH
