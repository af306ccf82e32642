"""Scoped logging context.

Fields pushed here are injected into every log record emitted inside the
scope by ``ContextualFilter``. The build uses it to tag records with the
``build_id`` of the current run and the ``category``/``slug`` of the page
being rendered. Backed by contextvars, so worker threads started with a
copied context see the fields of their parent.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the active context.

    Args:
        **kwargs: Fields to add; they shadow existing fields of the same name

    Returns:
        Token for ``pop_log_context``

    Example:
        >>> token = push_log_context(build_id="b-1", category="jobs")
        >>> pop_log_context(token)
    """
    current = LogContextVar.get()
    return LogContextVar.set({**current, **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by ``token``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields (test helper)."""
    LogContextVar.set({})


class log_context:
    """Context manager that pushes fields on entry and restores on exit.

    Example:
        >>> with log_context(category="projects", slug="smart-attendance"):
        ...     logger.info("Rendering detail page")
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
