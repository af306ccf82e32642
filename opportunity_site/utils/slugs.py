"""Slug and id helpers used when listings are imported or enriched."""

import re
from typing import Any, Iterable, List, Mapping, Optional, Set

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_DASH_RUN = re.compile(r"-{2,}")


def slugify(value: Any) -> str:
    """Turn free text into a URL-safe slug.

    Lowercases, spells ``&`` as ``and``, replaces each run of characters
    outside ``[a-z0-9]`` with a dash, then trims and collapses dashes.

    Example:
        >>> slugify("R&D Intern / Summer 2025")
        'r-and-d-intern-summer-2025'
    """
    text = str(value or "").lower().replace("&", " and ")
    text = _NON_SLUG.sub("-", text).strip("-")
    return _DASH_RUN.sub("-", text)


def unique_slug(base: str, taken: Set[str]) -> str:
    """Return ``base`` or the first free ``base-N`` (N starting at 2) and reserve it.

    Args:
        base: Preferred slug
        taken: Slugs already used in the category; updated in place

    Returns:
        A slug not previously in ``taken``
    """
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


def assign_slugs(titles: Iterable[Any], taken: Optional[Set[str]] = None) -> List[str]:
    """Slugify a batch of titles, resolving collisions within the batch.

    Example:
        >>> assign_slugs(["AI/ML Project", "AI/ML Project"])
        ['ai-ml-project', 'ai-ml-project-2']
    """
    reserved = set(taken or ())
    return [unique_slug(slugify(title) or "listing", reserved) for title in titles]


def next_listing_id(listings: Iterable[Mapping[str, Any]]) -> int:
    """Return max seen numeric ``id`` plus one (1 for an empty set)."""
    highest = 0
    for listing in listings:
        try:
            highest = max(highest, int(listing.get("id") or 0))
        except (TypeError, ValueError):
            continue
    return highest + 1
