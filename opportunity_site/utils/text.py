"""Text normalization shared by classification and search.

The classifier and the search index both match against ``normalize`` output.
"""

import re
from typing import Any, Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: Any) -> str:
    """Lowercase and collapse every run of non ``[a-z0-9]`` characters to one space.

    Non-ASCII letters are treated as separators; they are not folded.

    Args:
        text: Value to normalize; None yields an empty string and other
            non-string values are converted with ``str``

    Returns:
        Normalized text with no leading or trailing whitespace

    Example:
        >>> normalize("  AI/ML Engineer (Remote)! ")
        'ai ml engineer remote'
    """
    if text is None:
        return ""
    return _NON_ALNUM.sub(" ", str(text).lower()).strip()


def normalize_join(values: Iterable[Any]) -> str:
    """Normalize each value and join the non-empty results with a space."""
    return " ".join(part for part in (normalize(value) for value in values) if part)


def is_blank(value: Any) -> bool:
    """True for None, whitespace-only strings and empty lists."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def first_text(*values: Any, default: str = "") -> str:
    """Return the first non-blank value as a stripped string."""
    for value in values:
        if not is_blank(value):
            return str(value).strip()
    return default
