"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Optional, Union


# ── Messages ────────────────────────────────────────────────


@dataclass(frozen=True)
class TextMessage:
    id: str
    text: str


@dataclass(frozen=True)
class ImageMessage:
    """Image whose bytes are fetched separately by message id."""

    id: str


@dataclass(frozen=True)
class UnsupportedMessage:
    """Sticker, video, audio, file, location... never answered."""

    id: str
    message_type: str


Message = Union[TextMessage, ImageMessage, UnsupportedMessage]


# ── Events ──────────────────────────────────────────────────


@dataclass(frozen=True)
class MessageEvent:
    user_id: Optional[str]
    message: Message


@dataclass(frozen=True)
class OtherEvent:
    """follow, unfollow, postback, join... ignored by the dispatcher."""

    event_type: str


InboundEvent = Union[MessageEvent, OtherEvent]


# ── Outcomes ────────────────────────────────────────────────

IGNORED = "ignored"
REPLIED = "replied"
FALLBACK = "fallback"
FAILED = "failed"

OUTCOME_STATUSES = (IGNORED, REPLIED, FALLBACK, FAILED)


@dataclass(frozen=True)
class EventOutcome:
    """Result of relaying one event.

    ``error`` is the failure that triggered the fallback reply, and
    ``delivery_error`` the failure of that fallback push (status FAILED).
    """

    status: str
    user_id: Optional[str] = None
    error: Optional[str] = None
    delivery_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (IGNORED, REPLIED)
