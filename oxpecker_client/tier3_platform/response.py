"""
oxpecker_client.tier3_platform.response
─────────────────────────────────────────
Response decoder: HttpResponse → the endpoint's declared return type.

Order of checks:
    1. non-2xx status  → ApiError (the success decoder is never reached)
    2. no declared type → None
    3. str declared and a non-JSON body → the raw text
    4. body not JSON   → MalformedResponse
    5. decode against the declared type (union/enum/record/scalar)
"""
from __future__ import annotations

from typing import Any

from oxpecker_client.tier0_core.errors import ApiError, ClientError
from oxpecker_client.tier0_core.http import HttpResponse
from oxpecker_client.tier0_core.redact import snippet
from oxpecker_client.tier1_runtime.codec import decode_value
from oxpecker_client.tier1_runtime.serialize import parse_json
from oxpecker_client.tier1_runtime.types import unwrap
from oxpecker_client.tier3_platform.endpoint import Endpoint

ERROR_TEXT_LIMIT = 512


def decode_response(response: HttpResponse, endpoint: Endpoint) -> Any:
    """Decode a transport response for *endpoint* or raise the matching error."""
    if not response.ok:
        raise api_error(response, endpoint.error_type)

    if endpoint.response_type is None:
        return None

    declared, _ = unwrap(endpoint.response_type)
    if declared is str and not response.is_json:
        return response.body_text

    data = parse_json(response.body_text)
    return decode_value(data, endpoint.response_type)


def api_error(response: HttpResponse, error_type: Any = None) -> ApiError:
    """
    Build an ApiError for a non-2xx response. The error body is decoded on a
    best-effort basis: declared error type, else plain JSON, else None. The
    status code always survives.
    """
    return ApiError(
        response.status,
        body=_decode_error_body(response, error_type),
        raw_text=snippet(response.body_text, ERROR_TEXT_LIMIT),
    )


def _decode_error_body(response: HttpResponse, error_type: Any) -> Any:
    if not response.body_text.strip():
        return None
    try:
        data = parse_json(response.body_text)
    except ClientError:
        return None
    if error_type is None:
        return data
    try:
        return decode_value(data, error_type)
    except ClientError:
        return data


__all__ = ["decode_response", "api_error"]
