"""
oxpecker_client
───────────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from oxpecker_client.tier0_core.config import Configuration, ClientSettings, get_settings
from oxpecker_client.tier0_core.errors import (
    ClientError,
    ConfigurationError,
    InvalidParameters,
    EncodingError,
    TransportError,
    ApiError,
    DecodeError,
    MalformedResponse,
    MalformedPayload,
    MalformedVariant,
    UnknownVariant,
    UnknownEnumLabel,
)
from oxpecker_client.tier0_core.http import HttpRequest, HttpResponse
from oxpecker_client.tier0_core.logging import get_logger

from oxpecker_client.tier1_runtime.types import Record, Variant, UnionSchema, enum_labels, nullable
from oxpecker_client.tier1_runtime.codec import (
    encode_union,
    decode_union,
    encode_enum,
    decode_enum,
    encode_value,
    decode_value,
)
from oxpecker_client.tier1_runtime.serialize import serialize, deserialize
from oxpecker_client.tier1_runtime.validate import CallParameters
from oxpecker_client.tier1_runtime.context import request_context
from oxpecker_client.tier1_runtime.retry import retry_policy

from oxpecker_client.tier3_platform.endpoint import Endpoint
from oxpecker_client.tier3_platform.transport import Transport, HttpxTransport, MockTransport

from oxpecker_client.api.models import (
    Shape,
    Circle,
    Rectangle,
    Triangle,
    AnimalColor,
    Animal,
    Person,
    UnionExamples,
    AnimalColorTest,
    UnionSerializationTest,
    ProblemDetails,
)
from oxpecker_client.api.apis import (
    OxpeckerOpenApiBugTestApi,
    ExamplesApi,
    SearchApi,
    TestingApi,
)

__version__ = "0.1.0"
__all__ = [
    # config
    "Configuration", "ClientSettings", "get_settings",
    # errors
    "ClientError", "ConfigurationError", "InvalidParameters", "EncodingError",
    "TransportError", "ApiError", "DecodeError", "MalformedResponse",
    "MalformedPayload", "MalformedVariant", "UnknownVariant", "UnknownEnumLabel",
    # http
    "HttpRequest", "HttpResponse",
    # logging
    "get_logger",
    # typed model
    "Record", "Variant", "UnionSchema", "enum_labels", "nullable",
    # codec
    "encode_union", "decode_union", "encode_enum", "decode_enum",
    "encode_value", "decode_value",
    # serialize
    "serialize", "deserialize",
    # validate
    "CallParameters",
    # context
    "request_context",
    # retry
    "retry_policy",
    # endpoint / transport
    "Endpoint", "Transport", "HttpxTransport", "MockTransport",
    # models
    "Shape", "Circle", "Rectangle", "Triangle", "AnimalColor", "Animal",
    "Person", "UnionExamples", "AnimalColorTest", "UnionSerializationTest",
    "ProblemDetails",
    # apis
    "OxpeckerOpenApiBugTestApi", "ExamplesApi", "SearchApi", "TestingApi",
]
