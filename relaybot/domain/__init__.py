"""Domain layer — event model, call-sign gate and dispatcher."""

from relaybot.domain.call_sign import has_call_sign, strip_call_sign
from relaybot.domain.errors import AIServiceError, ConfigError, DeliveryError, RelayError
from relaybot.domain.events import parse_event, parse_events
from relaybot.domain.models import (
    EventOutcome,
    ImageMessage,
    MessageEvent,
    OtherEvent,
    TextMessage,
    UnsupportedMessage,
)

__all__ = [
    "AIServiceError",
    "ConfigError",
    "DeliveryError",
    "EventOutcome",
    "ImageMessage",
    "MessageEvent",
    "OtherEvent",
    "RelayError",
    "TextMessage",
    "UnsupportedMessage",
    "has_call_sign",
    "parse_event",
    "parse_events",
    "strip_call_sign",
]
