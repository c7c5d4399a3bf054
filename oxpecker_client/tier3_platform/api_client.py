"""
oxpecker_client.tier3_platform.api_client
───────────────────────────────────────────
Base class for API facades. A facade groups related endpoints and exposes one
async method per endpoint; every method goes through ``_call``:

    build_request → transport.send → decode_response

No retries, no caching and no per-call state on the facade, so concurrent
calls on one instance are safe. Errors propagate unchanged:
InvalidParameters, EncodingError, TransportError, ApiError, DecodeError.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from oxpecker_client.tier0_core.config import Configuration
from oxpecker_client.tier0_core.errors import TransportError
from oxpecker_client.tier0_core.logging import get_logger
from oxpecker_client.tier0_core.redact import redact_headers
from oxpecker_client.tier1_runtime.validate import CallParameters
from oxpecker_client.tier3_platform.endpoint import Endpoint
from oxpecker_client.tier3_platform.request import build_request
from oxpecker_client.tier3_platform.response import decode_response
from oxpecker_client.tier3_platform.transport import Transport, build_transport

logger = get_logger(__name__)


class BaseApi:
    """
    Shared plumbing for generated API groups.

    Usage::

        config = Configuration(base_path="http://localhost:5166")
        examples = ExamplesApi(config)
        shape = await examples.get_single_shape()
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._configuration = configuration or Configuration.from_settings()
        self._transport = transport or build_transport()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def transport(self) -> Transport:
        return self._transport

    async def _call(
        self,
        endpoint: Endpoint,
        params: Mapping[str, Any] | CallParameters | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        request = build_request(endpoint, params, self._configuration, headers=headers)
        logger.debug(
            "api.request",
            operation=endpoint.operation_id,
            method=request.method,
            url=request.url,
            headers=redact_headers(request.headers),
        )
        try:
            response = await self._transport.send(request)
        except TransportError as exc:
            logger.debug(
                "api.transport_failed",
                operation=endpoint.operation_id,
                error=exc.code,
            )
            raise
        logger.debug(
            "api.response",
            operation=endpoint.operation_id,
            status=response.status,
            length=len(response.body_text),
        )
        return decode_response(response, endpoint)


__all__ = ["BaseApi"]
