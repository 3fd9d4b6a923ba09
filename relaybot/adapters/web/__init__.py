"""Web adapter — FastAPI webhook endpoint."""

from relaybot.adapters.web.server import WebhookRequest, create_app

__all__ = ["WebhookRequest", "create_app"]
