"""LLM adapters — Gemini text and vision."""

from relaybot.adapters.llm.gemini_adapter import (
    GeminiCompletionAdapter,
    GeminiVisionAdapter,
    extract_text,
)

__all__ = [
    "GeminiCompletionAdapter",
    "GeminiVisionAdapter",
    "extract_text",
]
