"""Adapters — LINE, Gemini and the FastAPI web surface."""
