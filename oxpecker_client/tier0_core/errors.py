"""
oxpecker_client.tier0_core.errors
───────────────────────────────────
Error taxonomy for every failure a client call can surface. Each kind is a
distinct class so callers can branch on it (retry on TransportError, give up
on DecodeError, and so on).

    ClientError
    ├── ConfigurationError
    ├── InvalidParameters
    ├── EncodingError
    ├── TransportError
    ├── ApiError
    └── DecodeError
        ├── MalformedResponse
        ├── MalformedPayload
        │   └── MalformedVariant
        ├── UnknownVariant
        └── UnknownEnumLabel

Errors are raised to the caller as-is. Nothing in the client logs, reports
or retries them.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ClientError(Exception):
    """
    Base class for all client errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - message: short human-readable summary
    - detail: longer internal context
    - metadata: structured extras for the specific kind
    """

    code: str = "client_error"

    def __init__(
        self,
        message: str = "Client call failed.",
        *,
        code: str | None = None,
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.message = message
        self.detail = detail or message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                **{k: _plain(v) for k, v in self.metadata.items()},
            }
        }


def _plain(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


# ── Call-side errors (never reach the wire) ───────────────────────────────────

class ConfigurationError(ClientError):
    """Misconfiguration detected while building a Configuration."""
    code = "configuration_error"


class InvalidParameters(ClientError):
    """Caller-supplied parameters violate the endpoint's declared contract."""
    code = "invalid_parameters"

    def __init__(
        self,
        message: str = "Call parameters failed validation.",
        fields: dict[str, str] | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        detail = message
        if self.fields:
            detail = f"{message} " + "; ".join(
                f"{name}: {reason}" for name, reason in sorted(self.fields.items())
            )
        super().__init__(message, detail=detail, fields=self.fields, **metadata)


class EncodingError(ClientError):
    """A value could not be encoded to its wire form."""
    code = "encoding_error"


# ── Transport / HTTP errors ───────────────────────────────────────────────────

class TransportError(ClientError):
    """Connection-level failure: refused, timed out, DNS, TLS."""
    code = "transport_error"

    def __init__(
        self,
        message: str = "Transport failure.",
        *,
        method: str | None = None,
        url: str | None = None,
        **metadata: Any,
    ) -> None:
        self.method = method
        self.url = url
        super().__init__(message, method=method, url=url, **metadata)


class ApiError(ClientError):
    """
    The server answered with a non-2xx status. ``body`` is the decoded error
    payload when one could be decoded, ``raw_text`` the (truncated) body text.
    """
    code = "api_error"

    def __init__(
        self,
        status: int,
        *,
        body: Any = None,
        raw_text: str = "",
        **metadata: Any,
    ) -> None:
        self.status = status
        self.body = body
        self.raw_text = raw_text
        super().__init__(
            f"Server responded with HTTP {status}.",
            status=status,
            **metadata,
        )

    @property
    def status_code(self) -> int:
        return self.status


# ── Decode errors ─────────────────────────────────────────────────────────────

class DecodeError(ClientError):
    """The response payload does not match the declared typed model."""
    code = "decode_error"

    def __init__(self, message: str, *, path: str = "$", **metadata: Any) -> None:
        self.path = path
        super().__init__(message, detail=f"{message} (at {path})", path=path, **metadata)


class MalformedResponse(DecodeError):
    """Response body is not valid JSON."""
    code = "malformed_response"

    def __init__(self, length: int, snippet: str, **metadata: Any) -> None:
        self.length = length
        self.snippet = snippet
        super().__init__(
            f"Response body is not valid JSON ({length} chars, starts {snippet!r}).",
            length=length,
            snippet=snippet,
            **metadata,
        )


class MalformedPayload(DecodeError):
    """A value is missing or has the wrong kind."""
    code = "malformed_payload"

    def __init__(
        self,
        expected: str,
        *,
        path: str = "$",
        field: str | None = None,
        message: str | None = None,
        **metadata: Any,
    ) -> None:
        self.expected = expected
        self.field = field
        super().__init__(
            message or f"Expected {expected}.",
            path=path,
            expected=expected,
            field=field,
            **metadata,
        )


class MalformedVariant(MalformedPayload):
    """A known variant is missing a required field or has a mistyped field."""
    code = "malformed_variant"

    def __init__(
        self,
        variant: str,
        field: str,
        expected: str,
        *,
        path: str = "$",
        missing: bool = False,
    ) -> None:
        self.variant = variant
        self.missing = missing
        problem = "is missing" if missing else "has the wrong kind"
        super().__init__(
            expected,
            path=path,
            field=field,
            message=f"Variant {variant!r}: field {field!r} {problem}, expected {expected}.",
            variant=variant,
            missing=missing,
        )


class UnknownVariant(DecodeError):
    """The discriminant is absent or names a variant outside the declared set."""
    code = "unknown_variant"

    def __init__(
        self,
        tag: Any,
        accepted: Sequence[str],
        *,
        union: str | None = None,
        path: str = "$",
    ) -> None:
        self.tag = tag
        self.accepted = tuple(accepted)
        self.union = union
        what = "missing discriminant 'type'" if tag is None else f"unknown variant {tag!r}"
        super().__init__(
            f"{union or 'Union'}: {what}; accepted: {', '.join(self.accepted)}.",
            path=path,
            tag=tag,
            accepted=self.accepted,
            union=union,
        )


class UnknownEnumLabel(DecodeError):
    """The value is not exactly one of the enum's declared labels."""
    code = "unknown_enum_label"

    def __init__(
        self,
        value: Any,
        labels: Sequence[Any],
        *,
        enum: str | None = None,
        path: str = "$",
    ) -> None:
        self.value = value
        self.labels = tuple(labels)
        self.enum = enum
        super().__init__(
            f"{enum or 'Enum'}: {value!r} is not one of {list(self.labels)!r}.",
            path=path,
            value=value,
            labels=self.labels,
            enum=enum,
        )


__all__ = [
    "ClientError",
    "ConfigurationError",
    "InvalidParameters",
    "EncodingError",
    "TransportError",
    "ApiError",
    "DecodeError",
    "MalformedResponse",
    "MalformedPayload",
    "MalformedVariant",
    "UnknownVariant",
    "UnknownEnumLabel",
]
