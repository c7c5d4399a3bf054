"""
oxpecker_client.tier0_core.redact
───────────────────────────────────
Secret redaction for anything that leaves the client as text: log events,
header dumps, and body snippets attached to errors. Bearer tokens and API
keys configured on a Configuration must never show up in either.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "access_token", "refresh_token", "private_key", "client_secret",
    "authorization", "proxy-authorization", "x-api-key", "cookie",
    "set-cookie",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Bearer tokens
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.I), "Bearer [REDACTED]"),
    # Basic auth
    (re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.I), "Basic [REDACTED]"),
    # Generic key=value / "key": "value" secrets
    (re.compile(
        r"(password|secret|token|api[_-]?key)(\"?\s*[=:]\s*\"?)[^\s&\"',}]+",
        re.I,
    ), r"\1\2[REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def redact_dict(
    data: Mapping[str, Any],
    sensitive_keys: frozenset[str] | None = None,
    *,
    deep: bool = True,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive key values replaced by REDACTED.
    If *deep* is True, recurse into nested mappings and lists.
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    result: dict[str, Any] = {}
    for k, v in data.items():
        if k.lower() in keys:
            result[k] = REDACTED
        elif deep and isinstance(v, Mapping):
            result[k] = redact_dict(v, keys, deep=True)
        elif deep and isinstance(v, list):
            result[k] = [
                redact_dict(item, keys, deep=True) if isinstance(item, Mapping) else item
                for item in v
            ]
        else:
            result[k] = v
    return result


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Header-only shortcut: shallow, case-insensitive."""
    return redact_dict(headers, deep=False)


def scrub_string(text: str) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def snippet(text: str, limit: int = 64) -> str:
    """First *limit* characters of *text*, scrubbed. Used in error messages."""
    scrubbed = scrub_string(text)
    if len(scrubbed) > limit:
        return scrubbed[:limit] + "..."
    return scrubbed


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor that redacts sensitive keys from the event dict.
    Add to the structlog processor chain before any serialisation step.
    """
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "redact_dict",
    "redact_headers",
    "scrub_string",
    "snippet",
    "structlog_redact_processor",
]
