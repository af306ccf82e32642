"""Test helper utilities for opportunity site tests."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from opportunity_site.domain.models import Category

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

_DEFAULTS = {
    Category.JOBS: {"title": "Software Engineer", "company": "Acme Corp", "location": "Bengaluru, Karnataka"},
    Category.INTERNSHIPS: {"title": "SDE Intern", "company": "Globex", "location": "Remote"},
    Category.HACKATHONS: {"title": "Code Sprint", "company": "DevClub", "location": "Online"},
    Category.PROJECTS: {"title": "Smart Attendance System", "company": "Mentor Org", "location": "Remote"},
}


def fixed_clock(now: datetime = FIXED_NOW):
    """Clock returning a constant time."""
    return lambda: now


def make_listing(category: Category = Category.JOBS, **overrides: Any) -> Dict[str, Any]:
    """Build a listing record (camelCase keys) of ``category``.

    The slug defaults to one derived from the title and id.
    """
    record: Dict[str, Any] = {
        "id": 1,
        "type": category.listing_type,
        "postedDate": "2026-02-20",
        **_DEFAULTS[category],
    }
    record.update(overrides)
    record.setdefault("slug", f"{category.listing_type}-{record['id']}")
    return record


def write_data_dir(
    root: Path,
    listings: Mapping[Category, Iterable[Mapping[str, Any]]],
    details: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Path:
    """Write ``<category>.json`` files and ``content/<slug>.json`` records under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for category, items in listings.items():
        (root / f"{category.value}.json").write_text(json.dumps(list(items)), encoding="utf-8")

    content_dir = root / "content"
    content_dir.mkdir(exist_ok=True)
    for slug, record in (details or {}).items():
        (content_dir / f"{slug}.json").write_text(json.dumps(dict(record)), encoding="utf-8")
    return root


__all__ = ["FIXED_NOW", "fixed_clock", "make_listing", "write_data_dir"]
