"""
oxpecker_client.tier1_runtime.retry
─────────────────────────────────────
Opt-in retry/backoff for caller code, backed by Tenacity. API facades never
retry on their own; wrap the calls you want retried.

Retried by default: TransportError, and ApiError with status 429/502/503/504.
Never retried: InvalidParameters, EncodingError, DecodeError and any other
ApiError.

Usage:
    @retry_policy()
    async def fetch_shape() -> Shape:
        return await examples.get_single_shape()

    @retry_policy(max_attempts=5, on=[TransportError])
    async def search() -> list[Animal]:
        return await search_api.search_animals(name="Fluffy")
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, Type

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from oxpecker_client.tier0_core.errors import ApiError, TransportError
from oxpecker_client.tier0_core.http import HTTP

RETRYABLE_STATUSES = frozenset({
    HTTP.TOO_MANY_REQUESTS,
    HTTP.BAD_GATEWAY,
    HTTP.SERVICE_UNAVAILABLE,
    HTTP.GATEWAY_TIMEOUT,
})


def is_retryable(exc: BaseException) -> bool:
    """Return True if the exception should be retried."""
    if isinstance(exc, TransportError):
        return True
    if isinstance(exc, ApiError):
        return exc.status in RETRYABLE_STATUSES
    return False


def retry_policy(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 10.0,
    jitter: float = 1.0,
    on: list[Type[Exception]] | None = None,
) -> Callable:
    """
    Decorator applying exponential backoff with jitter to an async callable.

    Args:
        max_attempts: Total number of attempts (including first).
        min_wait:     Minimum wait seconds between retries.
        max_wait:     Maximum wait seconds between retries.
        jitter:       Maximum random seconds added to each wait.
        on:           Specific exception types to retry on. If None, uses
                      ``is_retryable``.
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if on:
                retry_on = retry_if_exception_type(tuple(on))
            else:
                retry_on = retry_if_exception(is_retryable)

            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(min=min_wait, max=max_wait) + wait_random(0, jitter),
                retry=retry_on,
                reraise=True,
            ):
                with attempt:
                    return await fn(*args, **kwargs)

        return wrapper
    return decorator


__all__ = ["retry_policy", "is_retryable", "RETRYABLE_STATUSES"]
