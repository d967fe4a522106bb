"""Structured logging helpers."""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the API process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def build_log_context(
    *,
    user_id: int | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    operation: str | None = None,
    entity_id: int | str | None = None,
) -> dict[str, Any]:
    """Return a log context dict for ``extra=``, skipping empty values."""
    context: dict[str, Any] = {}
    if user_id is not None:
        context["user_id"] = user_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if operation:
        context["operation"] = operation
    if entity_id is not None:
        context["entity_id"] = entity_id
    return context
