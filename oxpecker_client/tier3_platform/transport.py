"""
oxpecker_client.tier3_platform.transport
──────────────────────────────────────────
The one place a client call waits on the network. A transport takes an
HttpRequest and returns an HttpResponse for ANY status code; only
request-level failures (refused, timeout, DNS, TLS, undecodable
body, redirect loop) raise, and they raise TransportError.

Cancellation is the transport's business: cancelling the awaiting task
cancels the in-flight request, and asyncio.CancelledError is never caught.

Minimal stack: httpx (async) | in-memory mock (tests, offline demos)
Select via:    OXPECKER_TRANSPORT=httpx|mock
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol, Union, runtime_checkable
from urllib.parse import urlsplit

import httpx

from oxpecker_client.tier0_core.errors import TransportError
from oxpecker_client.tier0_core.http import HTTP, HttpRequest, HttpResponse


# ── Provider protocol ─────────────────────────────────────────────────────────

@runtime_checkable
class Transport(Protocol):
    async def send(self, request: HttpRequest) -> HttpResponse: ...


# ── httpx transport ───────────────────────────────────────────────────────────

class HttpxTransport:
    """
    httpx-backed transport.

    Pass a long-lived ``httpx.AsyncClient`` to reuse its connection pool;
    without one, each call opens and closes its own client.

    Usage::

        async with httpx.AsyncClient(timeout=10) as http:
            api = ExamplesApi(config, transport=HttpxTransport(http))
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._timeout = timeout

    async def send(self, request: HttpRequest) -> HttpResponse:
        try:
            if self._client is not None:
                response = await self._send(self._client, request)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await self._send(client, request)
        except httpx.RequestError as exc:
            raise TransportError(
                f"{request.method} {_origin(request.url)} failed: {type(exc).__name__}",
                method=request.method,
                url=request.url,
                cause=type(exc).__name__,
            ) from exc
        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body_text=response.text,
        )

    @staticmethod
    async def _send(client: httpx.AsyncClient, request: HttpRequest) -> httpx.Response:
        return await client.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


# ── Mock transport (tests) ────────────────────────────────────────────────────

MockResult = Union[
    HttpResponse,
    Exception,
    Callable[[HttpRequest], Union[HttpResponse, Awaitable[HttpResponse]]],
]


class MockTransport:
    """
    In-memory transport for tests and offline demos. Routes are keyed by
    ``(method, path)``; unmatched requests get a 404. Every request is
    recorded in ``requests``.
    """

    def __init__(self, routes: Mapping[tuple[str, str], MockResult] | None = None) -> None:
        self._routes: dict[tuple[str, str], MockResult] = dict(routes or {})
        self.requests: list[HttpRequest] = []

    def add(self, method: str, path: str, result: MockResult) -> None:
        self._routes[(method.upper(), path)] = result

    def reply(
        self,
        method: str,
        path: str,
        status: int = HTTP.OK,
        body: str = "",
        content_type: str = "application/json",
    ) -> None:
        self.add(method, path, HttpResponse(
            status=status,
            headers={"content-type": content_type},
            body_text=body,
        ))

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        result = self._routes.get((request.method, urlsplit(request.url).path))
        if result is None:
            return HttpResponse(status=HTTP.NOT_FOUND, body_text="")
        if isinstance(result, Exception):
            raise result
        if callable(result):
            outcome = result(request)
            if isinstance(outcome, Awaitable):
                outcome = await outcome
            return outcome
        return result


# ── Provider registry ─────────────────────────────────────────────────────────

def build_transport() -> Transport:
    from oxpecker_client.tier0_core.config import get_settings

    settings = get_settings()
    if settings.transport == "mock":
        return MockTransport()
    return HttpxTransport(timeout=settings.timeout)


__all__ = ["Transport", "HttpxTransport", "MockTransport", "build_transport"]
