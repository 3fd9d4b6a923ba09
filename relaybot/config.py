"""Configuration — read once from the environment at startup."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from relaybot.domain.errors import ConfigError

load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str = ""
    text_model: str = "gemini-2.0-flash"
    vision_model: str = "gemini-2.0-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class LineConfig:
    channel_access_token: str = ""
    channel_secret: str = ""

    @property
    def verifies_signature(self) -> bool:
        return bool(self.channel_secret)


@dataclass(frozen=True)
class AppConfig:
    """Immutable process-wide settings, passed explicitly to every component."""

    call_sign: str
    process_image_msg: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    http_timeout_seconds: float = 30.0
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    line: LineConfig = field(default_factory=LineConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables."""
        env = os.environ if environ is None else environ

        call_sign = env.get("callSign", "")
        if not call_sign:
            raise ConfigError("callSign is required")

        try:
            port = int(env.get("PORT", "3000"))
            timeout = float(env.get("HTTP_TIMEOUT_SECONDS", "30"))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e
        if timeout <= 0:
            raise ConfigError("HTTP_TIMEOUT_SECONDS must be positive")

        return cls(
            call_sign=call_sign,
            process_image_msg=env.get("processImageMsg", "false").strip().lower() in _TRUTHY,
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            http_timeout_seconds=timeout,
            gemini=GeminiConfig(
                api_key=env.get("GGAI_API_KEY", ""),
                text_model=env.get("GEMINI_TEXT_MODEL", GeminiConfig.text_model),
                vision_model=env.get("GEMINI_VISION_MODEL", GeminiConfig.vision_model),
            ),
            line=LineConfig(
                channel_access_token=env.get("CHANNEL_ACCESS_TOKEN", ""),
                channel_secret=env.get("LINE_CHANNEL_SECRET", ""),
            ),
        )
