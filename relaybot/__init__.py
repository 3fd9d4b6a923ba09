"""relaybot — LINE webhook relay to Gemini."""

__version__ = "0.1.0"
