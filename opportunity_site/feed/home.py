"""Home page feed payload (``home-feed.json``)."""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from opportunity_site.domain.models import Category, NOT_SPECIFIED
from opportunity_site.domain.ordering import as_record, effective_timestamp, sort_by_recency
from opportunity_site.utils.timestamps import EPOCH, format_timestamp

from .assembler import HOME_SECTION_LIMIT


def pick_fields(item: Any) -> Dict[str, Any]:
    """Display fields of a listing as stored in the home payload."""
    record = as_record(item)
    return {
        "title": record.get("title") or "",
        "company": record.get("company") or "",
        "slug": record.get("slug") or "",
        "type": record.get("type") or "",
        "location": record.get("location") or NOT_SPECIFIED,
        "postedDate": record.get("postedDate") or "",
        "postedAt": record.get("postedAt") or None,
        "excerpt": record.get("excerpt") or "",
        "experience": record.get("experience") or NOT_SPECIFIED,
        "domain": record.get("domain") or "",
        "duration": record.get("duration") or "",
        "difficulty": record.get("difficulty") or "",
        "teamSize": record.get("teamSize") or "",
    }


def latest_timestamp(items: Iterable[Any]) -> Optional[str]:
    """ISO timestamp of the most recent item, or None when nothing is dated."""
    latest = max((effective_timestamp(item) for item in items), default=EPOCH)
    if latest <= EPOCH:
        return None
    return format_timestamp(latest)


def build_home_feed(
    listings_by_category: Mapping[Any, Iterable[Any]], limit: int = HOME_SECTION_LIMIT
) -> Dict[str, Any]:
    """Build the home page payload.

    Items whose ``type`` does not match their category are ignored.

    Args:
        listings_by_category: Listings keyed by Category or category name
        limit: Items kept per category

    Returns:
        Mapping with ``updatedAt``, per-category ``counts`` and ``latest`` items
    """
    filtered: Dict[Category, List[Any]] = {}
    for category in Category:
        items = listings_by_category.get(category) or listings_by_category.get(category.value) or []
        filtered[category] = [item for item in items if as_record(item).get("type") == category.listing_type]

    every_item = [item for items in filtered.values() for item in items]
    return {
        "updatedAt": latest_timestamp(every_item),
        "counts": {category.value: len(items) for category, items in filtered.items()},
        "latest": {
            category.value: [pick_fields(item) for item in sort_by_recency(items)[:limit]]
            for category, items in filtered.items()
        },
    }
