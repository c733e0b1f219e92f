"""Shared helpers for provider and API tests."""

from __future__ import annotations

from typing import Any, Callable

import httpx

from catalist.schema.results import ContentType, NormalizedResultItem

Handler = Callable[[str, dict[str, Any]], "httpx.Response | Exception"]


def build_response(
    url: str,
    *,
    status: int = 200,
    json_data: Any | None = None,
    text: str | None = None,
) -> httpx.Response:
    request = httpx.Request("GET", url)
    if text is not None:
        return httpx.Response(status_code=status, text=text, request=request)
    return httpx.Response(status_code=status, json=json_data if json_data is not None else {}, request=request)


def make_async_client(handler: Handler, call_log: list[dict[str, Any]]) -> type:
    """Build a stand-in for httpx.AsyncClient that answers GETs through ``handler``."""

    class DummyAsyncClient:
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            self.timeout = kwargs.get("timeout")

        async def __aenter__(self) -> "DummyAsyncClient":
            return self

        async def __aexit__(self, *args: Any) -> bool:
            return False

        async def get(
            self,
            url: str,
            *,
            headers: dict[str, str] | None = None,
            params: dict[str, Any] | None = None,
        ) -> httpx.Response:
            call_log.append(
                {"url": url, "params": dict(params or {}), "headers": dict(headers or {}), "timeout": self.timeout}
            )
            result = handler(url, dict(params or {}))
            if isinstance(result, Exception):
                raise result
            return result

    return DummyAsyncClient


def install_client(monkeypatch, handler: Handler) -> list[dict[str, Any]]:
    call_log: list[dict[str, Any]] = []
    monkeypatch.setattr("catalist.providers.http.httpx.AsyncClient", make_async_client(handler, call_log))
    return call_log


def make_item(item_id: str, content_type: ContentType = ContentType.MOVIE, title: str | None = None) -> NormalizedResultItem:
    return NormalizedResultItem(
        id=item_id,
        content_type=content_type,
        content_id=item_id.split("-")[-1],
        title=title if title is not None else f"Item {item_id}",
        source="test",
        raw={"id": item_id},
    )
