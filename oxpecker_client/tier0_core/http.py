"""
oxpecker_client.tier0_core.http
─────────────────────────────────
HTTP primitives shared by the request builder, the transports and the
response decoder: status code constants and the transport-agnostic request
and response descriptions that cross the transport boundary.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

Method = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """Standard HTTP status codes."""

    # 2xx
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


def is_success(status: int) -> bool:
    return 200 <= status <= 299


# ── Wire descriptions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class HttpRequest:
    """What the request builder hands to a transport."""
    method: Method
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class HttpResponse:
    """What a transport hands back: status, headers, body text."""
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body_text: str = ""

    @property
    def ok(self) -> bool:
        return is_success(self.status)

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value.split(";", 1)[0].strip().lower()
        return ""

    @property
    def is_json(self) -> bool:
        ctype = self.content_type
        return ctype == "application/json" or ctype.endswith("+json")


__all__ = ["HTTP", "Method", "HttpRequest", "HttpResponse", "is_success"]
