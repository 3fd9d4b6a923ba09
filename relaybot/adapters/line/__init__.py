"""LINE adapters — push, content fetch and webhook signatures."""

from relaybot.adapters.line.client import LineMessagingClient
from relaybot.adapters.line.signature import compute_signature, verify_signature

__all__ = [
    "LineMessagingClient",
    "compute_signature",
    "verify_signature",
]
