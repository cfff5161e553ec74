"""Tests for marquee.transport — httpx-backed requests."""

import json

import httpx
import pytest

from marquee.errors import TransportError
from marquee.transport import Transport, TransportResponse


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestTransportResponse:
    def test_status_range(self) -> None:
        assert TransportResponse(200, None, "/").ok
        assert TransportResponse(300, None, "/").ok
        assert not TransportResponse(199, None, "/").ok
        assert not TransportResponse(404, None, "/").ok


class TestTransport:
    async def test_get_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            return httpx.Response(200, json={"title": "Home"})

        transport = Transport(client=_client(handler))
        response = await transport.get("https://api.test/home")
        assert response.status == 200
        assert response.payload == {"title": "Home"}

    async def test_get_text(self) -> None:
        transport = Transport(client=_client(lambda r: httpx.Response(200, text="<document/>")))
        response = await transport.get("https://api.test/tpl", {"response_type": "text"})
        assert response.payload == "<document/>"

    async def test_invalid_json_payload_is_none(self) -> None:
        transport = Transport(client=_client(lambda r: httpx.Response(200, text="not json")))
        response = await transport.get("https://api.test/x")
        assert response.payload is None

    async def test_error_status_raises_with_response(self) -> None:
        transport = Transport(client=_client(lambda r: httpx.Response(500, json={"message": "down"})))
        with pytest.raises(TransportError) as exc_info:
            await transport.get("https://api.test/x")
        assert exc_info.value.status == 500
        assert exc_info.value.payload == {"message": "down"}

    async def test_network_error_raises_without_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = Transport(client=_client(handler))
        with pytest.raises(TransportError) as exc_info:
            await transport.get("https://api.test/x")
        assert exc_info.value.response is None
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    async def test_base_url_and_headers(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["accept"] = request.headers["Accept"]
            return httpx.Response(200, json={})

        transport = Transport("https://api.test/v1/", client=_client(handler))
        await transport.get("/movies", {"headers": {"Accept": "application/json"}})
        assert seen == {"url": "https://api.test/v1/movies", "accept": "application/json"}

    async def test_post_sends_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            return httpx.Response(201, json=json.loads(request.content))

        transport = Transport(client=_client(handler))
        response = await transport.post("https://api.test/fav", {"data": {"id": 7}})
        assert response.payload == {"id": 7}

    async def test_method_option_overrides_verb(self) -> None:
        transport = Transport(client=_client(lambda r: httpx.Response(200, json={"m": r.method})))
        response = await transport.get("https://api.test/x", {"method": "delete"})
        assert response.payload == {"m": "DELETE"}

    async def test_basic_auth(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"auth": request.headers.get("Authorization", "")})

        transport = Transport(client=_client(handler))
        response = await transport.get("https://api.test/x", {"user": "u", "password": "p"})
        assert response.payload["auth"].startswith("Basic ")

    async def test_missing_url(self) -> None:
        with pytest.raises(TypeError):
            await Transport().get("")
