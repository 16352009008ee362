"""Structured logging helpers for the crawl intake service."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that keeps its component field alongside per-call extras."""

    def process(self, msg, kwargs):
        # Per-call extra wins over the adapter defaults
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a logger, optionally tagging every record with a component.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier injected into all records

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="dispatch")
        >>> logger.info("Task queued", extra={"event": "dispatch.task.queued"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
