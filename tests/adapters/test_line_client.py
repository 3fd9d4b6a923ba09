"""Unit tests for LineMessagingClient."""

import asyncio

import aiohttp
import pytest
from unittest.mock import patch

from relaybot.adapters.line.client import (
    LINE_API_BASE,
    LINE_DATA_API_BASE,
    MAX_TEXT_LENGTH,
    LineMessagingClient,
)
from relaybot.config import LineConfig
from relaybot.domain.errors import DeliveryError


def _mock_aiohttp_session(responses, calls=None):
    """Return a class that replaces aiohttp.ClientSession.
    responses: list of (status, json_data, body_bytes) consumed in order;
    an Exception instance is raised instead of answering.
    """
    call_idx = 0
    calls = calls if calls is not None else []

    class FakeResponse:
        def __init__(self, status, data, body):
            self.status = status
            self._data = data
            self._body = body

        async def json(self, content_type="application/json"):
            if self._data is None:
                raise ValueError("not json")
            return self._data

        async def read(self):
            return self._body

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        def _request(self, method, url, **kwargs):
            nonlocal call_idx
            calls.append((method, url, kwargs))
            response = responses[call_idx]
            call_idx += 1
            if isinstance(response, Exception):
                raise response
            return FakeResponse(*response)

        def post(self, url, **kwargs):
            return self._request("POST", url, **kwargs)

        def get(self, url, **kwargs):
            return self._request("GET", url, **kwargs)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


@pytest.fixture
def client():
    return LineMessagingClient(LineConfig(channel_access_token="tok456"), timeout=5)


class TestIsConfigured:
    def test_configured(self, client):
        assert client.is_configured is True

    def test_unconfigured(self):
        assert LineMessagingClient(LineConfig()).is_configured is False


class TestTruncateText:
    def test_short_text(self):
        assert LineMessagingClient.truncate_text("hello") == "hello"

    def test_exact_limit(self):
        text = "a" * MAX_TEXT_LENGTH
        assert LineMessagingClient.truncate_text(text) == text

    def test_over_limit(self):
        result = LineMessagingClient.truncate_text("a" * (MAX_TEXT_LENGTH + 10))
        assert len(result) == MAX_TEXT_LENGTH
        assert result.endswith("...")


class TestPush:
    @pytest.mark.asyncio
    async def test_push_success(self, client):
        calls = []
        session = _mock_aiohttp_session([(200, {}, b"{}")], calls)
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            await client.push("U123", "hello")
        method, url, kwargs = calls[0]
        assert method == "POST"
        assert url == f"{LINE_API_BASE}/message/push"
        assert kwargs["headers"]["Authorization"] == "Bearer tok456"
        assert kwargs["json"] == {
            "to": "U123",
            "messages": [{"type": "text", "text": "hello"}],
        }

    @pytest.mark.asyncio
    async def test_push_truncates(self, client):
        calls = []
        session = _mock_aiohttp_session([(200, {}, b"")], calls)
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            await client.push("U123", "x" * 6000)
        sent = calls[0][2]["json"]["messages"][0]["text"]
        assert len(sent) == MAX_TEXT_LENGTH

    @pytest.mark.asyncio
    async def test_push_api_error(self, client):
        session = _mock_aiohttp_session([(401, {"message": "Authentication failed"}, b"")])
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            with pytest.raises(DeliveryError, match="Authentication failed"):
                await client.push("U123", "hello")

    @pytest.mark.asyncio
    async def test_push_non_json_error(self, client):
        session = _mock_aiohttp_session([(502, None, b"<html>")])
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            with pytest.raises(DeliveryError, match="HTTP 502"):
                await client.push("U123", "hello")

    @pytest.mark.asyncio
    async def test_push_network_error(self, client):
        session = _mock_aiohttp_session([aiohttp.ClientConnectionError("refused")])
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            with pytest.raises(DeliveryError, match="refused"):
                await client.push("U123", "hello")

    @pytest.mark.asyncio
    async def test_push_timeout(self, client):
        session = _mock_aiohttp_session([asyncio.TimeoutError()])
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            with pytest.raises(DeliveryError, match="TimeoutError"):
                await client.push("U123", "hello")


class TestFetchContent:
    @pytest.mark.asyncio
    async def test_fetch_success(self, client):
        calls = []
        session = _mock_aiohttp_session([(200, None, b"\x89PNG\r\n")], calls)
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            data = await client.fetch_content("m42")
        assert data == b"\x89PNG\r\n"
        method, url, kwargs = calls[0]
        assert method == "GET"
        assert url == f"{LINE_DATA_API_BASE}/message/m42/content"
        assert kwargs["headers"]["Authorization"] == "Bearer tok456"

    @pytest.mark.asyncio
    async def test_fetch_not_found(self, client):
        session = _mock_aiohttp_session([(404, {"message": "Not found"}, b"")])
        with patch("relaybot.adapters.line.client.aiohttp.ClientSession", session):
            with pytest.raises(DeliveryError, match="Not found"):
                await client.fetch_content("m42")
