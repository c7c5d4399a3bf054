"""
oxpecker_client.tier3_platform.request
────────────────────────────────────────
Request builder: declared endpoint + call parameters + Configuration →
transport-agnostic HttpRequest. Invalid parameters fail here, before
anything touches the network.

Encoding rules:
    path    each value percent-encoded, no safe characters
    query   None omitted entirely; booleans as true/false; enums as label;
            lists as repeated keys; RFC 3986 escaping (%20, not +)
    body    the declared body parameter, via the wire codec, as JSON
    headers Accept, User-Agent, Configuration.headers, Authorization,
            correlation context, per-call headers (later entries win)
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote, urlencode

from oxpecker_client.tier0_core.config import Configuration
from oxpecker_client.tier0_core.errors import InvalidParameters
from oxpecker_client.tier0_core.http import HttpRequest
from oxpecker_client.tier1_runtime.codec import encode_enum, encode_value
from oxpecker_client.tier1_runtime.context import get_context
from oxpecker_client.tier1_runtime.serialize import serialize
from oxpecker_client.tier1_runtime.types import Record
from oxpecker_client.tier1_runtime.validate import CallParameters, validate_params
from oxpecker_client.tier3_platform.endpoint import Endpoint

JSON_CONTENT_TYPE = "application/json"


def build_request(
    endpoint: Endpoint,
    params: Mapping[str, Any] | CallParameters | None,
    configuration: Configuration,
    *,
    headers: Mapping[str, str] | None = None,
) -> HttpRequest:
    """Validate *params* and describe the HTTP request for *endpoint*."""
    validated = validate_params(endpoint.params, params)

    path = _render_path(endpoint, validated)
    query = encode_query(
        {name: getattr(validated, name) for name in endpoint.query_params}
    )
    url = configuration.url_for(path)
    if query:
        url = f"{url}?{query}"

    body: bytes | None = None
    request_headers: dict[str, str] = {
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": configuration.user_agent,
    }
    if endpoint.body is not None:
        value = getattr(validated, endpoint.body)
        annotation = endpoint.params.model_fields[endpoint.body].rebuild_annotation()
        if value is not None or _sends_null(validated, endpoint.body):
            body = serialize(value, annotation)
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

    request_headers.update(configuration.headers)
    if configuration.access_token:
        request_headers["Authorization"] = f"Bearer {configuration.access_token}"
    ctx = get_context()
    if ctx is not None:
        request_headers.update(ctx.headers())
    if headers:
        request_headers.update(headers)

    return HttpRequest(
        method=endpoint.method,
        url=url,
        headers=request_headers,
        body=body,
    )


def _render_path(endpoint: Endpoint, params: CallParameters) -> str:
    path = endpoint.path
    for name in endpoint.path_params:
        value = getattr(params, name)
        if value is None:
            raise InvalidParameters(
                f"Path parameter {name!r} of {endpoint.operation_id} is required.",
                fields={name: "Path parameters cannot be empty"},
            )
        path = path.replace("{" + name + "}", quote(_scalar(value), safe=""))
    return path


def encode_query(values: Mapping[str, Any]) -> str:
    """Encode query parameters, dropping None values entirely."""
    pairs: list[tuple[str, str]] = []
    for name, value in values.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((name, _scalar(item)) for item in value if item is not None)
        else:
            pairs.append((name, _scalar(value)))
    return urlencode(pairs, quote_via=quote)


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(encode_enum(value))
    if isinstance(value, Record):
        raise InvalidParameters(
            f"{type(value).__name__} cannot be sent as a path or query parameter.",
        )
    return str(encode_value(value))


def _sends_null(params: CallParameters, name: str) -> bool:
    """An explicit None on a nullable() parameter goes out as JSON null."""
    info = type(params).model_fields[name]
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    return bool(extra.get("nullable", False)) and name in params.model_fields_set


__all__ = ["build_request", "encode_query", "JSON_CONTENT_TYPE"]
