"""Port interfaces (Hexagonal Architecture)."""

from relaybot.ports.outbound import CompletionPort, ContentPort, PushPort, VisionPort

__all__ = [
    "CompletionPort",
    "ContentPort",
    "PushPort",
    "VisionPort",
]
