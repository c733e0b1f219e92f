"""Ensure provider keys never reach logs or error messages."""

from __future__ import annotations

import logging

import httpx
import pytest

from catalist.core.config import settings
from catalist.providers.books import GoogleBooksAdapter
from catalist.providers.errors import ProviderTransportFailure
from catalist.providers.http import fetch_json
from catalist.tests.utils import install_client
from catalist.utils.redaction import preview_secret, redact_secrets


def test_redact_secrets_covers_query_keys_userinfo_and_bearer() -> None:
    text = "GET https://user:pw@host/x?key=abc123&q=dune Authorization: Bearer tok.en"
    redacted = redact_secrets(text)

    assert "abc123" not in redacted
    assert "pw@" not in redacted
    assert "tok.en" not in redacted
    assert "q=dune" in redacted


def test_preview_secret() -> None:
    assert preview_secret(None) == "missing"
    assert preview_secret("abcdefgh") == "abcd..."


@pytest.mark.asyncio
async def test_fetch_json_redacts_transport_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    install_client(
        monkeypatch,
        lambda url, params: httpx.ConnectError("failed https://www.googleapis.com/books/v1/volumes?key=supersecret"),
    )

    with pytest.raises(ProviderTransportFailure) as excinfo:
        await fetch_json("https://www.googleapis.com/books/v1/volumes", params={"key": "supersecret"})

    assert "supersecret" not in str(excinfo.value)


@pytest.mark.asyncio
async def test_adapter_failure_logs_do_not_leak_keys(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    monkeypatch.setattr(settings, "google_books_api_key", "supersecret")
    install_client(
        monkeypatch,
        lambda url, params: httpx.ConnectError(f"failed {url}?key={params['key']}"),
    )
    caplog.set_level(logging.WARNING, logger="catalist.providers")

    response = await GoogleBooksAdapter().search("dune")

    assert response.fallback is True
    assert "provider_failure" in caplog.text
    assert "supersecret" not in caplog.text
