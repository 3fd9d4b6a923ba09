"""Dispatcher — routes webhook events to the AI backends and pushes replies.

Every event is resolved on its own: failures become a fallback reply and an
EventOutcome, never an exception. The webhook acknowledgement does not depend
on any outcome.
"""

import sys
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from relaybot.config import AppConfig
from relaybot.domain.call_sign import strip_call_sign
from relaybot.domain.models import (
    FAILED,
    FALLBACK,
    IGNORED,
    OUTCOME_STATUSES,
    REPLIED,
    EventOutcome,
    ImageMessage,
    InboundEvent,
    MessageEvent,
    OtherEvent,
    TextMessage,
    UnsupportedMessage,
)
from relaybot.ports.outbound import CompletionPort, ContentPort, PushPort, VisionPort

TEXT_FALLBACK = "對不起，處理消息時出錯。"
IMAGE_FALLBACK = "對不起，處理圖片時出錯。"


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


class Dispatcher:
    def __init__(
        self,
        config: AppConfig,
        completion: CompletionPort,
        push: PushPort,
        vision: Optional[VisionPort] = None,
        content: Optional[ContentPort] = None,
    ):
        if config.process_image_msg and (vision is None or content is None):
            raise ValueError("Image processing needs both a vision and a content adapter")
        self._config = config
        self._completion = completion
        self._push = push
        self._vision = vision
        self._content = content

    async def handle_webhook(self, events: Iterable[InboundEvent]) -> List[EventOutcome]:
        """Process events strictly in order; relay failures never propagate."""
        outcomes = []
        for event in events:
            outcomes.append(await self.handle_event(event))
        return outcomes

    async def handle_event(self, event: InboundEvent) -> EventOutcome:
        if isinstance(event, OtherEvent):
            return EventOutcome(IGNORED)
        if not isinstance(event, MessageEvent):
            raise TypeError(f"Unknown event: {event!r}")

        message = event.message
        if isinstance(message, TextMessage):
            return await self._handle_text(event.user_id, message)
        if isinstance(message, ImageMessage):
            return await self._handle_image(event.user_id, message)
        if isinstance(message, UnsupportedMessage):
            return EventOutcome(IGNORED, user_id=event.user_id)
        raise TypeError(f"Unknown message: {message!r}")

    async def _handle_text(self, user_id: Optional[str], message: TextMessage) -> EventOutcome:
        user_input = strip_call_sign(message.text, self._config.call_sign)
        if user_input is None:
            return EventOutcome(IGNORED, user_id=user_id)
        if not user_id:
            _log("Text message without userId, no reply target")
            return EventOutcome(IGNORED)

        _log(f"UserInput: [{user_id}] {user_input}")
        try:
            reply = await self._completion.complete(user_input)
            _log(f"Response: [{user_id}] {reply}")
            await self._push.push(user_id, reply)
        except Exception as e:
            return await self._fallback(user_id, TEXT_FALLBACK, e)
        return EventOutcome(REPLIED, user_id=user_id)

    async def _handle_image(self, user_id: Optional[str], message: ImageMessage) -> EventOutcome:
        if not self._config.process_image_msg:
            return EventOutcome(IGNORED, user_id=user_id)
        if not user_id:
            _log("Image message without userId, no reply target")
            return EventOutcome(IGNORED)

        try:
            image = await self._content.fetch_content(message.id)
            _log(f"UserInput: [{user_id}] image {message.id} ({len(image)} bytes)")
            reply = await self._vision.describe(image)
            _log(f"Response: [{user_id}] {reply}")
            await self._push.push(user_id, reply)
        except Exception as e:
            return await self._fallback(user_id, IMAGE_FALLBACK, e)
        return EventOutcome(REPLIED, user_id=user_id)

    async def _fallback(self, user_id: str, text: str, error: Exception) -> EventOutcome:
        """Push the fixed error text once. A failed fallback push is not retried."""
        _log(f"Error relaying for [{user_id}]: {type(error).__name__}: {error}")
        try:
            await self._push.push(user_id, text)
        except Exception as e:
            return EventOutcome(
                FAILED,
                user_id=user_id,
                error=str(error),
                delivery_error=f"{type(e).__name__}: {e}",
            )
        return EventOutcome(FALLBACK, user_id=user_id, error=str(error))


def settle_outcomes(outcomes: Iterable[EventOutcome]) -> Dict[str, int]:
    """Log failed outcomes and count them by status.

    The counts are informational only and never decide the webhook response.
    """
    counts = {status: 0 for status in OUTCOME_STATUSES}
    for outcome in outcomes:
        counts[outcome.status] = counts.get(outcome.status, 0) + 1
        if outcome.ok:
            continue
        if outcome.status == FALLBACK:
            _log(f"Fallback sent to [{outcome.user_id}] after: {outcome.error}")
        elif outcome.status == FAILED:
            _log(
                f"Reply lost for [{outcome.user_id}]: {outcome.error}; "
                f"fallback push failed: {outcome.delivery_error}"
            )
    return counts
