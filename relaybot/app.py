"""Application wiring and startup."""

import sys
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI

from relaybot.adapters.line import LineMessagingClient
from relaybot.adapters.llm import GeminiCompletionAdapter, GeminiVisionAdapter
from relaybot.adapters.web import create_app
from relaybot.config import AppConfig
from relaybot.domain.dispatcher import Dispatcher


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


def build_dispatcher(config: AppConfig) -> Dispatcher:
    timeout = config.http_timeout_seconds
    line = LineMessagingClient(config.line, timeout=timeout)
    completion = GeminiCompletionAdapter(config.gemini, timeout=timeout)

    vision = None
    if config.process_image_msg:
        vision = GeminiVisionAdapter(config.gemini, timeout=timeout)

    if not line.is_configured:
        _log("CHANNEL_ACCESS_TOKEN not set, pushes will fail")
    if not completion.is_configured:
        _log("GGAI_API_KEY not set, Gemini calls will fail")

    return Dispatcher(config, completion=completion, push=line, vision=vision, content=line)


def build_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or AppConfig.from_env()
    return create_app(config, build_dispatcher(config))


def main():
    config = AppConfig.from_env()
    app = build_app(config)
    _log(f"Server is running on port {config.port}")
    _log(f"Call sign: {config.call_sign!r}, image messages: {'on' if config.process_image_msg else 'off'}")
    uvicorn.run(app, host=config.host, port=config.port, log_level="info")
