"""Error types shared by the domain and adapters."""


class RelayError(Exception):
    """Base class for failures while relaying a single event."""


class AIServiceError(RelayError):
    """The Gemini completion or vision call failed."""


class DeliveryError(RelayError):
    """A LINE push or content fetch failed."""


class ConfigError(Exception):
    """Startup configuration is missing or invalid."""
