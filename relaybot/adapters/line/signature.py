"""X-Line-Signature verification."""

import base64
import hashlib
import hmac


def compute_signature(channel_secret: str, body: bytes) -> str:
    digest = hmac.new(channel_secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_signature(channel_secret: str, body: bytes, signature: str) -> bool:
    """True when ``signature`` is base64(HMAC-SHA256(secret, body))."""
    if not signature:
        return False
    expected = compute_signature(channel_secret, body).encode()
    # Header values are latin-1 decoded and may hold non-ASCII characters.
    return hmac.compare_digest(expected, signature.encode("utf-8", "surrogateescape"))
