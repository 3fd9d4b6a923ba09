"""LINE Messaging API client using aiohttp."""

import asyncio

import aiohttp

from relaybot.config import LineConfig
from relaybot.domain.errors import DeliveryError

LINE_API_BASE = "https://api.line.me/v2/bot"
LINE_DATA_API_BASE = "https://api-data.line.me/v2/bot"

# LINE rejects text messages longer than this.
MAX_TEXT_LENGTH = 5000


async def _error_detail(resp: aiohttp.ClientResponse) -> str:
    try:
        data = await resp.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        return f"HTTP {resp.status}"
    if isinstance(data, dict) and data.get("message"):
        return f"HTTP {resp.status}: {data['message']}"
    return f"HTTP {resp.status}"


class LineMessagingClient:
    """Push messages and fetch message content. Implements PushPort and ContentPort."""

    def __init__(self, config: LineConfig, timeout: float = 30.0):
        self._token = config.channel_access_token
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self._token)

    @staticmethod
    def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
        if len(text) <= limit:
            return text
        return text[: limit - 3] + "..."

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }

    async def push(self, user_id: str, text: str) -> None:
        url = f"{LINE_API_BASE}/message/push"
        payload = {
            "to": user_id,
            "messages": [{"type": "text", "text": self.truncate_text(text)}],
        }
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(url, json=payload, headers=self._headers()) as resp:
                    if resp.status >= 300:
                        raise DeliveryError(f"Push failed: {await _error_detail(resp)}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryError(f"Push failed: {type(e).__name__}: {e}") from e

    async def fetch_content(self, message_id: str) -> bytes:
        url = f"{LINE_DATA_API_BASE}/message/{message_id}/content"
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(url, headers=self._headers()) as resp:
                    if resp.status >= 300:
                        raise DeliveryError(f"Content fetch failed: {await _error_detail(resp)}")
                    return await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryError(f"Content fetch failed: {type(e).__name__}: {e}") from e
