"""
oxpecker_client.tier1_runtime.serialize
─────────────────────────────────────────
JSON text layer on top of the wire codec: typed values ↔ bytes/str.
Strict JSON only: NaN and Infinity are rejected rather than emitted.
"""
from __future__ import annotations

import json
from typing import Any

from oxpecker_client.tier0_core.errors import EncodingError, MalformedResponse
from oxpecker_client.tier0_core.redact import snippet
from oxpecker_client.tier1_runtime.codec import decode_value, encode_value


def serialize(value: Any, annotation: Any = None) -> bytes:
    """
    Encode a typed value and serialize it to UTF-8 JSON bytes.

    Usage:
        body = serialize(Circle(radius=5), Shape)   # → b'{"type":"Circle","radius":5.0}'
    """
    data = encode_value(value, annotation)
    try:
        return json.dumps(data, separators=(",", ":"), allow_nan=False).encode()
    except ValueError as exc:
        raise EncodingError(f"Value is not representable as JSON: {exc}") from exc


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str | bytes) -> Any:
    """Parse JSON text. Raises MalformedResponse with a scrubbed snippet."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedResponse(len(text), snippet(text)) from exc


def deserialize(text: str | bytes, annotation: Any) -> Any:
    """
    Parse JSON text and decode it against a declared annotation.

    Usage:
        shape = deserialize('{"type": "Circle", "radius": 5}', Shape)
    """
    return decode_value(parse_json(text), annotation)


__all__ = ["serialize", "deserialize", "parse_json"]
