"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Tests for transports.
"""

import httpx
import pytest

from netstack.core.endpoint import RequestDescriptor
from netstack.transport.base import BaseTransport, TransportResponse
from netstack.transport import http as http_module
from netstack.transport.http import HttpTransport
from netstack.transport.mock import MockTransport


def _http_transport(handler, **kwargs) -> HttpTransport:
    transport = HttpTransport(**kwargs)
    transport._client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        headers=transport._headers,
    )
    return transport


class TestMockTransport:
    def test_is_connected(self):
        transport = MockTransport()
        assert isinstance(transport, BaseTransport)
        assert transport.is_connected is True

    @pytest.mark.asyncio
    async def test_send_returns_matched_response(self):
        expected = TransportResponse(status_code=200, body=b'{"ok": true}', elapsed_ms=0.5)
        transport = MockTransport(responses={("POST", "https://api.test/items"): expected})

        req = RequestDescriptor(method="POST", url="https://api.test/items")
        result = await transport.send(req)
        assert result is expected

    @pytest.mark.asyncio
    async def test_send_raises_registered_exception(self):
        transport = MockTransport()
        transport.add("get", "https://api.test/down", httpx.ConnectError("refused"))

        with pytest.raises(httpx.ConnectError):
            await transport.send(RequestDescriptor(method="GET", url="https://api.test/down"))

    @pytest.mark.asyncio
    async def test_send_returns_404_for_unmocked(self):
        transport = MockTransport()
        result = await transport.send(RequestDescriptor(method="GET", url="https://api.test/unknown"))
        assert result.status_code == 404
        assert result.body == b'{"error": "not mocked"}'

    @pytest.mark.asyncio
    async def test_tracks_sent_requests(self):
        transport = MockTransport()
        req = RequestDescriptor(method="DELETE", url="https://api.test/items/123", headers={"X-Test": "1"})
        await transport.send(req)
        assert transport.sent_requests == [req]

    @pytest.mark.asyncio
    async def test_aclose_clears_state(self):
        transport = MockTransport()
        await transport.send(RequestDescriptor(method="GET", url="https://api.test/x"))
        await transport.aclose()
        assert transport.sent_requests == []


class TestHttpTransport:
    def test_initialization(self):
        transport = HttpTransport(timeout=5, headers={"User-Agent": "netstack"})
        assert transport.is_connected is True
        assert transport._client is None

    def test_close(self):
        transport = HttpTransport()
        transport.close()
        assert transport.is_connected is False

    def test_close_with_open_client_warns_and_drops_it(self, monkeypatch):
        warnings = []

        class RecordingLogger:
            def warning(self, event, **kw):
                warnings.append(event)

        monkeypatch.setattr(http_module, "logger", RecordingLogger())
        transport = _http_transport(lambda request: httpx.Response(200))

        transport.close()

        assert transport._client is None
        assert transport.is_connected is False
        assert warnings == ["http_client_dropped_without_aclose"]

    @pytest.mark.asyncio
    async def test_aclose_closes_pool(self):
        transport = _http_transport(lambda request: httpx.Response(200))
        client = transport._client

        await transport.aclose()

        assert client.is_closed
        assert transport._client is None
        assert transport.is_connected is False

    @pytest.mark.asyncio
    async def test_send_returns_body_and_status(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b'{"id":1}', headers={"X-Server": "mock"})

        transport = _http_transport(handler, headers={"User-Agent": "netstack"})
        response = await transport.send(
            RequestDescriptor(
                method="GET",
                url="https://api.test/users?userId=1",
                headers={"Accept": "application/json"},
            )
        )

        assert response.status_code == 200
        assert response.body == b'{"id":1}'
        assert response.headers["x-server"] == "mock"
        assert response.elapsed_ms >= 0
        assert seen[0].url == httpx.URL("https://api.test/users?userId=1")
        assert seen[0].headers["Accept"] == "application/json"
        assert seen[0].headers["User-Agent"] == "netstack"
        await transport.aclose()
        assert transport.is_connected is False

    @pytest.mark.asyncio
    async def test_empty_body_is_reported_as_missing(self):
        transport = _http_transport(lambda request: httpx.Response(204))
        response = await transport.send(RequestDescriptor(method="DELETE", url="https://api.test/x"))
        assert response.status_code == 204
        assert response.body is None

    @pytest.mark.asyncio
    async def test_error_status_passes_through_by_default(self):
        transport = _http_transport(lambda request: httpx.Response(500, text="boom"))
        response = await transport.send(RequestDescriptor(method="GET", url="https://api.test/x"))
        assert response.status_code == 500
        assert response.body == b"boom"

    @pytest.mark.asyncio
    async def test_raise_for_status(self):
        transport = _http_transport(
            lambda request: httpx.Response(503, text="unavailable"),
            raise_for_status=True,
        )
        with pytest.raises(httpx.HTTPStatusError):
            await transport.send(RequestDescriptor(method="GET", url="https://api.test/x"))

    @pytest.mark.asyncio
    async def test_network_errors_propagate(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        transport = _http_transport(handler)
        with pytest.raises(httpx.ConnectError):
            await transport.send(RequestDescriptor(method="GET", url="https://api.test/x"))
