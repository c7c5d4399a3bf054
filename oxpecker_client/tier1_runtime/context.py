"""
oxpecker_client.tier1_runtime.context
───────────────────────────────────────
Per-call correlation context (request_id, trace_id). When a context is
active, the request builder forwards it as ``x-request-id`` /
``x-trace-id`` headers and the logger binds it to every event.

Uses Python contextvars, so each asyncio task sees its own value and
concurrent calls never observe each other's context.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

import structlog


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RequestContext:
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    trace_id: str | None = None

    def headers(self) -> dict[str, str]:
        out = {"x-request-id": self.request_id}
        if self.trace_id:
            out["x-trace-id"] = self.trace_id
        return out


# ── ContextVar storage ────────────────────────────────────────────────────────

_ctx: ContextVar[RequestContext | None] = ContextVar(
    "oxpecker_request_context",
    default=None,
)


# ── Public API ────────────────────────────────────────────────────────────────

def get_context() -> RequestContext | None:
    """Return the active request context, if any."""
    return _ctx.get()


@contextmanager
def request_context(
    request_id: str | None = None,
    trace_id: str | None = None,
) -> Iterator[RequestContext]:
    """
    Activate a request context for the enclosed calls.

    Usage:
        with request_context(trace_id="abc123"):
            shape = await examples.get_single_shape()
    """
    ctx = RequestContext(trace_id=trace_id) if request_id is None else RequestContext(request_id, trace_id)
    token = _ctx.set(ctx)
    bound = structlog.contextvars.bind_contextvars(
        request_id=ctx.request_id,
        trace_id=ctx.trace_id,
    )
    try:
        yield ctx
    finally:
        structlog.contextvars.reset_contextvars(**bound)
        _ctx.reset(token)


__all__ = ["RequestContext", "get_context", "request_context"]
