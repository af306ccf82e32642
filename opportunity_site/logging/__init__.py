"""Structured logging helpers shared by every build component."""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags records with a component and keeps call extras."""

    def process(self, msg, kwargs):
        """Merge the adapter's component into the call's ``extra`` (call wins)."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger, optionally tagged with a component field.

    Args:
        name: Logger name (typically __name__)
        component: Component identifier injected into every record
            (e.g. "heuristics", "classification", "feed")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="feed")
        >>> logger.info("Feed assembled", extra={"event": "feed.assembled"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
