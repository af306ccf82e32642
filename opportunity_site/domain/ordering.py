"""Recency ordering and duplicate detection shared by feeds and detail pages."""

from datetime import datetime
from typing import Any, Dict, Iterable, List

from opportunity_site.heuristics.dates import parse_datetime
from opportunity_site.utils.timestamps import EPOCH

from .models import Listing


def as_record(item: Any) -> Dict[str, Any]:
    """camelCase dict view of a Listing or mapping."""
    if isinstance(item, Listing):
        return item.to_record()
    return dict(item or {})


def effective_timestamp(item: Any) -> datetime:
    """``postedAt`` if parseable, else ``postedDate``, else the Unix epoch."""
    record = as_record(item)
    for key in ("postedAt", "postedDate"):
        parsed = parse_datetime(record.get(key))
        if parsed is not None:
            return parsed
    return EPOCH


def numeric_id(item: Any) -> int:
    """Listing id as int; 0 when absent or not numeric."""
    try:
        return int(as_record(item).get("id") or 0)
    except (TypeError, ValueError):
        return 0


def sort_by_recency(items: Iterable[Any]) -> List[Any]:
    """Newest first; equal timestamps ordered by descending numeric id.

    Items are returned as given (Listing or mapping), only reordered.
    """
    return sorted(items, key=lambda item: (effective_timestamp(item), numeric_id(item)), reverse=True)


def dedupe_key(item: Any) -> str:
    """Identity of a listing for duplicate detection.

    The first non-empty of applyLink, slug, or ``type|title|company``,
    lowercased and trimmed.
    """
    record = as_record(item)
    for key in ("applyLink", "slug"):
        value = str(record.get(key) or "").strip().lower()
        if value:
            return value
    return "|".join(
        str(record.get(key) or "").strip().lower() for key in ("type", "title", "company")
    )


def dedupe(items: Iterable[Any]) -> List[Any]:
    """Drop later items whose ``dedupe_key`` was already seen."""
    seen = set()
    unique = []
    for item in items:
        key = dedupe_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
