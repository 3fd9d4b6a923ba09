"""Outbound ports — interfaces for external system adapters."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionPort(Protocol):
    """Text generation backend. Raises AIServiceError on failure."""

    async def complete(self, text: str) -> str: ...


@runtime_checkable
class VisionPort(Protocol):
    """Image description backend. Raises AIServiceError on failure."""

    async def describe(self, image: bytes) -> str: ...


@runtime_checkable
class PushPort(Protocol):
    """Sends a text message to a user. Raises DeliveryError on failure."""

    async def push(self, user_id: str, text: str) -> None: ...


@runtime_checkable
class ContentPort(Protocol):
    """Fetches the binary content of an inbound message. Raises DeliveryError."""

    async def fetch_content(self, message_id: str) -> bytes: ...
