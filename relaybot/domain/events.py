"""Parse LINE webhook payloads into domain events."""

from typing import Any, Dict, Iterable, List

from relaybot.domain.models import (
    ImageMessage,
    InboundEvent,
    Message,
    MessageEvent,
    OtherEvent,
    TextMessage,
    UnsupportedMessage,
)


def parse_message(raw: Dict[str, Any]) -> Message:
    message_type = str(raw.get("type", ""))
    message_id = str(raw.get("id", ""))
    if message_type == "text":
        return TextMessage(id=message_id, text=str(raw.get("text", "")))
    if message_type == "image":
        return ImageMessage(id=message_id)
    return UnsupportedMessage(id=message_id, message_type=message_type)


def parse_event(raw: Dict[str, Any]) -> InboundEvent:
    """Convert one webhook event object. Anything that is not a message is OtherEvent."""
    event_type = str(raw.get("type", ""))
    message = raw.get("message")
    if event_type != "message" or not isinstance(message, dict):
        return OtherEvent(event_type=event_type)

    source = raw.get("source") or {}
    user_id = source.get("userId") if isinstance(source, dict) else None
    return MessageEvent(
        user_id=user_id or None,
        message=parse_message(message),
    )


def parse_events(raw_events: Iterable[Any]) -> List[InboundEvent]:
    """Parse events in delivery order; non-object entries become OtherEvent."""
    events: List[InboundEvent] = []
    for raw in raw_events:
        if isinstance(raw, dict):
            events.append(parse_event(raw))
        else:
            events.append(OtherEvent(event_type=""))
    return events
