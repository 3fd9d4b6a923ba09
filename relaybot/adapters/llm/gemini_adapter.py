"""Gemini adapters — text completion and image description over the REST API.

Both adapters are stateless: every call is a fresh single-turn request with
no history.
"""

import asyncio
import base64
from typing import Any, Dict, List, Optional

import aiohttp

from relaybot.config import GeminiConfig
from relaybot.domain.errors import AIServiceError

GENERATION_CONFIG = {
    "temperature": 0.5,
    "topK": 1,
    "topP": 1,
    "maxOutputTokens": 2048,
    "stopSequences": ["bbu"],
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_NONE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]

VISION_PROMPT = "請描述圖片內容"
VISION_MIME_TYPE = "image/png"


def extract_text(data: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate, or raise AIServiceError."""
    feedback = data.get("promptFeedback") or {}
    if feedback.get("blockReason"):
        raise AIServiceError(f"Prompt blocked: {feedback['blockReason']}")

    candidates = data.get("candidates") or []
    if not candidates:
        raise AIServiceError("Gemini returned no candidates")

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(part.get("text", "") for part in parts)
    if not text:
        reason = candidates[0].get("finishReason", "unknown")
        raise AIServiceError(f"Gemini returned no text (finishReason={reason})")
    return text


class _GeminiClient:
    def __init__(self, config: GeminiConfig, model: str, timeout: float = 30.0):
        self._config = config
        self.model = model
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    async def _generate(
        self,
        parts: List[Dict[str, Any]],
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        url = f"{self._config.base_url}/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self._config.api_key}
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}],
            "safetySettings": SAFETY_SETTINGS,
        }
        if generation_config:
            payload["generationConfig"] = generation_config

        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(url, json=payload, headers=headers) as resp:
                    try:
                        data = await resp.json(content_type=None)
                    except ValueError as e:
                        raise AIServiceError(f"Malformed Gemini response (HTTP {resp.status})") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AIServiceError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        if not isinstance(data, dict):
            raise AIServiceError(f"Malformed Gemini response (HTTP {resp.status})")
        if resp.status >= 300 or "error" in data:
            error = data.get("error")
            message = error.get("message", str(error)) if isinstance(error, dict) else str(data)
            raise AIServiceError(f"Gemini HTTP {resp.status}: {message}")
        return extract_text(data)


class GeminiCompletionAdapter(_GeminiClient):
    """Implements CompletionPort."""

    def __init__(self, config: GeminiConfig, timeout: float = 30.0):
        super().__init__(config, config.text_model, timeout)

    async def complete(self, text: str) -> str:
        return await self._generate([{"text": text}], GENERATION_CONFIG)


class GeminiVisionAdapter(_GeminiClient):
    """Implements VisionPort."""

    def __init__(self, config: GeminiConfig, timeout: float = 30.0):
        super().__init__(config, config.vision_model, timeout)

    async def describe(self, image: bytes) -> str:
        parts = [
            {"text": VISION_PROMPT},
            {
                "inlineData": {
                    "mimeType": VISION_MIME_TYPE,
                    "data": base64.b64encode(image).decode("ascii"),
                }
            },
        ]
        return await self._generate(parts)
