"""Rate limiting configuration for the agency API."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from agencyhub.core.config import settings

# In-memory storage; each worker keeps its own counters.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
)


def api_rate_limit() -> str:
    """Per-client limit for write routes, read from settings on every request."""
    return f"{max(settings.RATE_LIMIT_API, 1)}/minute"


def rate_limit_disabled() -> bool:
    """RATE_LIMIT_API <= 0 turns limiting off."""
    return settings.RATE_LIMIT_API <= 0
