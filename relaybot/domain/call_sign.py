"""Call-sign gate: only messages starting with the prefix reach the AI."""

import re
from typing import Optional


def has_call_sign(text: str, call_sign: str) -> bool:
    """Literal, case-sensitive prefix check. No trimming."""
    return text.startswith(call_sign)


def strip_call_sign(text: str, call_sign: str) -> Optional[str]:
    """Return the user input after the call sign, or None if it does not match.

    The prefix is escaped so characters like ``.`` or ``(`` only match
    themselves. The prefix and the whitespace right after it are removed and
    the remainder is trimmed.
    """
    if not has_call_sign(text, call_sign):
        return None
    pattern = re.compile("^" + re.escape(call_sign) + r"\s*")
    return pattern.sub("", text, count=1).strip()
