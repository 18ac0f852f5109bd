"""Tests for the asynchronous HTTP transport."""

import json

import httpx
import pytest

from convey.llm.errors import TransportError
from convey.llm.transport import async_request, encode_json


def test_encode_json_is_utf8():
    """Non-ASCII text is encoded as UTF-8, not escaped."""
    assert encode_json({"text": "ü"}) == '{"text": "ü"}'.encode("utf-8")


class TestAsyncRequest:
    """Tests for async_request."""

    @pytest.mark.asyncio
    async def test_post_json(self):
        """The body, headers and query parameters are sent."""
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={"ok": True})

        data = await async_request(
            "https://example.test/api",
            "POST",
            body={"a": 1},
            headers={"X-Test": "1"},
            params={"key": "k"},
            transport=httpx.MockTransport(handler),
        )
        request = seen["request"]
        assert data == {"ok": True}
        assert request.method == "POST"
        assert request.url.params["key"] == "k"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["x-test"] == "1"
        assert json.loads(request.content) == {"a": 1}

    @pytest.mark.asyncio
    async def test_error_status_json_is_returned(self):
        """JSON bodies of error statuses are returned for the caller to read."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(400, json={"error": {"message": "bad"}})
        )
        data = await async_request("https://example.test", transport=transport)
        assert data == {"error": {"message": "bad"}}

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """A non-JSON body raises TransportError with the HTTP status."""
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(TransportError) as excinfo:
            await async_request("https://example.test", transport=transport)
        assert excinfo.value.status == "INVALID_RESPONSE"
        assert excinfo.value.status_code == 500

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Timeouts raise TransportError with a TIMEOUT status."""

        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(TransportError) as excinfo:
            await async_request(
                "https://example.test", timeout=1, transport=httpx.MockTransport(handler)
            )
        assert excinfo.value.status == "TIMEOUT"
        assert excinfo.value.status_code is None

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Connection failures raise TransportError with a NETWORK_ERROR status."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError) as excinfo:
            await async_request("https://example.test", transport=httpx.MockTransport(handler))
        assert excinfo.value.status == "NETWORK_ERROR"

    @pytest.mark.asyncio
    async def test_unserializable_body(self):
        """A body json cannot encode raises TransportError before sending."""
        sent = []
        transport = httpx.MockTransport(lambda request: sent.append(request))
        with pytest.raises(TransportError) as excinfo:
            await async_request("https://example.test", body={"x": {1}}, transport=transport)
        assert excinfo.value.status == "REQUEST_ERROR"
        assert sent == []

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        """An unparsable URL raises TransportError instead of httpx.InvalidURL."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        with pytest.raises(TransportError) as excinfo:
            await async_request("http://[::1", body={}, transport=transport)
        assert excinfo.value.status == "REQUEST_ERROR"
