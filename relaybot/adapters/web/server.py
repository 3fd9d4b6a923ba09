"""FastAPI application exposing the LINE webhook."""

import sys
from datetime import datetime
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, ValidationError

from relaybot.adapters.line.signature import verify_signature
from relaybot.config import AppConfig
from relaybot.domain.dispatcher import Dispatcher, settle_outcomes
from relaybot.domain.events import parse_events


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


class WebhookRequest(BaseModel):
    destination: Optional[str] = None
    events: List[Any]


def create_app(config: AppConfig, dispatcher: Dispatcher) -> FastAPI:
    app = FastAPI(title="relaybot")

    @app.post("/webhook")
    async def webhook(request: Request):
        """Receive LINE events, relay them, then acknowledge with 200."""
        raw_body = await request.body()

        if config.line.verifies_signature:
            signature = request.headers.get("X-Line-Signature", "")
            if not verify_signature(config.line.channel_secret, raw_body, signature):
                _log("LINE webhook signature mismatch")
                raise HTTPException(status_code=403, detail="Invalid signature")

        try:
            body = WebhookRequest.model_validate_json(raw_body)
        except ValidationError:
            raise HTTPException(status_code=400, detail="Invalid webhook body")

        outcomes = await dispatcher.handle_webhook(parse_events(body.events))
        settle_outcomes(outcomes)
        return Response(status_code=200)

    return app
