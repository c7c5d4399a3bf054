"""Tests for tier3_platform modules: endpoint, request, response, transport."""
from __future__ import annotations

import json

import httpx
import pytest

from oxpecker_client.api import endpoints as ep
from oxpecker_client.api.models import Animal, AnimalColor, Circle, ProblemDetails
from oxpecker_client.tier0_core.config import Configuration
from oxpecker_client.tier0_core.errors import (
    ApiError,
    InvalidParameters,
    MalformedResponse,
    TransportError,
    UnknownVariant,
)
from oxpecker_client.tier0_core.http import HttpRequest, HttpResponse
from oxpecker_client.tier1_runtime.context import request_context
from oxpecker_client.tier1_runtime.types import nullable
from oxpecker_client.tier1_runtime.validate import CallParameters
from oxpecker_client.tier3_platform.endpoint import Endpoint
from oxpecker_client.tier3_platform.request import build_request, encode_query
from oxpecker_client.tier3_platform.response import decode_response
from oxpecker_client.tier3_platform.transport import (
    HttpxTransport,
    MockTransport,
    Transport,
    build_transport,
)


def _json(status: int, body: object) -> HttpResponse:
    return HttpResponse(status, {"content-type": "application/json"}, json.dumps(body))


# ── endpoint ───────────────────────────────────────────────────────────────

class TestEndpoint:
    def test_parameter_placement(self):
        assert ep.GET_GREETING.path_params == ("name",)
        assert ep.GET_GREETING.query_params == ()
        assert ep.SEARCH_ANIMALS.query_params == ("name", "species", "vaccinated")
        assert ep.ECHO_SHAPE.query_params == ()

    def test_undeclared_placeholder_rejected(self):
        with pytest.raises(TypeError):
            Endpoint(operation_id="broken", method="GET", path="/things/{id}")

    def test_undeclared_body_rejected(self):
        with pytest.raises(TypeError):
            Endpoint(operation_id="broken", method="POST", path="/things", body="thing")


# ── request builder ────────────────────────────────────────────────────────

class NoteParams(CallParameters):
    note: str | None = nullable()


PATCH_NOTE = Endpoint(
    operation_id="patchNote",
    method="PATCH",
    path="/notes",
    params=NoteParams,
    body="note",
)


class TestBuildRequest:
    def test_no_parameters(self, configuration):
        request = build_request(ep.HELLO, None, configuration)
        assert request.method == "GET"
        assert request.url == "http://testserver/hello"
        assert request.body is None

    def test_omitted_optionals_are_not_sent(self, configuration):
        request = build_request(ep.SEARCH_ANIMALS, {"name": "Fluffy"}, configuration)
        assert request.url == "http://testserver/search/animals?name=Fluffy"

    def test_query_encoding(self, configuration):
        request = build_request(
            ep.SEARCH_ANIMALS,
            {"name": "Fluffy Cat", "species": "Cat", "vaccinated": True},
            configuration,
        )
        assert request.url == (
            "http://testserver/search/animals?name=Fluffy%20Cat&species=Cat&vaccinated=true"
        )

    def test_path_value_is_percent_encoded(self, configuration):
        request = build_request(ep.GET_GREETING, {"name": "a b/c"}, configuration)
        assert request.url == "http://testserver/greeting/a%20b%2Fc"

    def test_missing_path_parameter(self, configuration):
        with pytest.raises(InvalidParameters) as info:
            build_request(ep.GET_GREETING, {}, configuration)
        assert "name" in info.value.fields

    def test_wrong_parameter_kind(self, configuration):
        with pytest.raises(InvalidParameters):
            build_request(ep.SEARCH_ANIMALS, {"vaccinated": "yes"}, configuration)

    def test_union_body(self, configuration):
        request = build_request(ep.ECHO_SHAPE, {"shape": Circle(radius=5)}, configuration)
        assert request.method == "POST"
        assert request.body == b'{"type":"Circle","radius":5.0}'
        assert request.headers["Content-Type"] == "application/json"

    def test_nullable_body_sent_only_when_set(self, configuration):
        assert build_request(PATCH_NOTE, {}, configuration).body is None
        assert build_request(PATCH_NOTE, {"note": None}, configuration).body == b"null"

    def test_headers(self, configuration):
        config = Configuration(
            base_path=configuration.base_path,
            headers=configuration.headers,
            access_token="tok",
        )
        request = build_request(ep.HELLO, None, config, headers={"X-Extra": "1"})
        assert request.headers["Accept"] == "application/json"
        assert request.headers["X-Client"] == "tests"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["X-Extra"] == "1"
        assert list(request.headers)[0] == "Accept"

    def test_no_authorization_without_token(self, configuration):
        request = build_request(ep.HELLO, None, configuration)
        assert "Authorization" not in request.headers

    def test_context_headers(self, configuration):
        with request_context(request_id="req-9", trace_id="trace-9"):
            request = build_request(ep.HELLO, None, configuration)
        assert request.headers["x-request-id"] == "req-9"
        assert request.headers["x-trace-id"] == "trace-9"


class TestEncodeQuery:
    def test_drops_none(self):
        assert encode_query({"a": None, "b": "x"}) == "b=x"

    def test_repeats_list_keys(self):
        assert encode_query({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_enum_as_label(self):
        assert encode_query({"color": AnimalColor.Brown}) == "color=Brown"

    def test_booleans_lowercase(self):
        assert encode_query({"a": True, "b": False}) == "a=true&b=false"

    def test_record_rejected(self):
        with pytest.raises(InvalidParameters):
            encode_query({"animal": Animal(name="Rex", species="Dog", vaccinated=True)})


# ── response decoder ───────────────────────────────────────────────────────

class TestDecodeResponse:
    def test_decodes_union(self):
        response = _json(200, {"type": "Circle", "radius": 5})
        assert decode_response(response, ep.GET_SINGLE_SHAPE) == Circle(radius=5)

    def test_decodes_list_of_records(self):
        response = _json(200, [{"name": "Fluffy", "species": "Cat", "vaccinated": True}])
        animals = decode_response(response, ep.SEARCH_ANIMALS)
        assert animals == [Animal(name="Fluffy", species="Cat", vaccinated=True)]

    def test_plain_text_string(self):
        response = HttpResponse(200, {"content-type": "text/plain"}, "Hello World!")
        assert decode_response(response, ep.HELLO) == "Hello World!"

    def test_json_string(self):
        assert decode_response(_json(200, "Hello World!"), ep.HELLO) == "Hello World!"

    def test_error_status_never_decodes_success_type(self):
        response = HttpResponse(
            404,
            {"content-type": "application/problem+json"},
            '{"title": "Not Found", "status": 404}',
        )
        with pytest.raises(ApiError) as info:
            decode_response(response, ep.GET_SINGLE_SHAPE)
        assert info.value.status == 404
        assert info.value.body == ProblemDetails(title="Not Found", status=404)

    def test_error_with_html_body(self):
        response = HttpResponse(500, {"content-type": "text/html"}, "<html>oops</html>")
        with pytest.raises(ApiError) as info:
            decode_response(response, ep.GET_SINGLE_SHAPE)
        assert info.value.status == 500
        assert info.value.body is None
        assert info.value.raw_text == "<html>oops</html>"

    def test_error_body_falls_back_to_raw_json(self):
        with pytest.raises(ApiError) as info:
            decode_response(_json(400, [1, 2]), ep.GET_SINGLE_SHAPE)
        assert info.value.body == [1, 2]

    def test_non_json_success_body(self):
        response = HttpResponse(200, {"content-type": "text/html"}, "<html>proxy</html>")
        with pytest.raises(MalformedResponse) as info:
            decode_response(response, ep.GET_SINGLE_SHAPE)
        assert info.value.snippet.startswith("<html>")

    def test_unknown_variant_propagates(self):
        with pytest.raises(UnknownVariant):
            decode_response(_json(200, {"type": "Hexagon"}), ep.GET_SINGLE_SHAPE)

    def test_no_declared_type(self):
        assert decode_response(HttpResponse(204), PATCH_NOTE) is None


# ── transports ─────────────────────────────────────────────────────────────

class TestHttpxTransport:
    @pytest.mark.asyncio
    async def test_sends_request(self):
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = request.content
            seen["accept"] = request.headers.get("accept")
            return httpx.Response(200, json={"type": "Circle", "radius": 2})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            transport = HttpxTransport(client)
            response = await transport.send(HttpRequest(
                method="POST",
                url="http://testserver/testing/shape",
                headers={"Accept": "application/json"},
                body=b'{"type":"Circle","radius":2}',
            ))

        assert seen == {
            "method": "POST",
            "url": "http://testserver/testing/shape",
            "body": b'{"type":"Circle","radius":2}',
            "accept": "application/json",
        }
        assert response.status == 200
        assert response.is_json
        assert json.loads(response.body_text) == {"type": "Circle", "radius": 2}

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="busy")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            response = await HttpxTransport(client).send(
                HttpRequest(method="GET", url="http://testserver/hello")
            )
        assert response.status == 503
        assert response.body_text == "busy"

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError) as info:
                await HttpxTransport(client).send(
                    HttpRequest(method="GET", url="http://testserver/hello")
                )
        assert info.value.method == "GET"
        assert info.value.url == "http://testserver/hello"
        assert isinstance(info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_undecodable_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError) as info:
                await HttpxTransport(client).send(
                    HttpRequest(method="GET", url="http://testserver/examples/shape")
                )
        assert info.value.url == "http://testserver/examples/shape"
        assert isinstance(info.value.__cause__, httpx.DecodingError)


class TestMockTransport:
    def test_satisfies_protocol(self):
        assert isinstance(MockTransport(), Transport)
        assert isinstance(HttpxTransport(), Transport)

    def test_build_transport_from_settings(self):
        assert isinstance(build_transport(), MockTransport)

    @pytest.mark.asyncio
    async def test_unmatched_route_is_404(self, mock_transport):
        response = await mock_transport.send(HttpRequest(method="GET", url="http://testserver/nope"))
        assert response.status == 404
        assert len(mock_transport.requests) == 1

    @pytest.mark.asyncio
    async def test_reply_and_exception_routes(self, mock_transport):
        mock_transport.reply("GET", "/hello", body='"hi"')
        mock_transport.add("GET", "/down", TransportError("refused"))

        response = await mock_transport.send(HttpRequest(method="GET", url="http://testserver/hello"))
        assert response.body_text == '"hi"'
        with pytest.raises(TransportError):
            await mock_transport.send(HttpRequest(method="GET", url="http://testserver/down"))

    @pytest.mark.asyncio
    async def test_async_callable_route(self, mock_transport):
        async def echo(request: HttpRequest) -> HttpResponse:
            return HttpResponse(200, {"content-type": "application/json"}, (request.body or b"").decode())

        mock_transport.add("POST", "/testing/shape", echo)
        response = await mock_transport.send(HttpRequest(
            method="POST", url="http://testserver/testing/shape", body=b'{"a":1}',
        ))
        assert response.body_text == '{"a":1}'
