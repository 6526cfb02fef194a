"""Structured logging helpers (PII-safe)."""

import logging
from typing import Any

from agencyhub.core.config import settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once at process start."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def build_log_context(
    *,
    user_id: str | None = None,
    agency_id: str | None = None,
    subaccount_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict with ids only (never emails or names)."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if agency_id:
        context["agency_id"] = agency_id
    if subaccount_id:
        context["subaccount_id"] = subaccount_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    return context
