"""Related-opportunity selection for detail pages."""

from dataclasses import dataclass
from typing import Any, Iterable, List

from opportunity_site.domain.models import PLACEHOLDER_COMPANY, PLACEHOLDER_TITLE
from opportunity_site.domain.ordering import as_record, dedupe, sort_by_recency
from opportunity_site.heuristics.dates import format_display_date
from opportunity_site.utils.text import first_text


@dataclass(frozen=True)
class RelatedLink:
    """Card data for one related opportunity."""

    title: str
    company: str
    posted: str
    href: str


def related_listings(listings: Iterable[Any], current_slug: str, limit: int = 4) -> List[Any]:
    """Pick the related items shown under a detail page.

    Items of the same category other than the current one, newest first
    (numeric id breaks timestamp ties), duplicates removed by
    applyLink, slug or ``type|title|company``.

    Args:
        listings: Listings of the page's category (Listing or mapping)
        current_slug: Slug of the page being rendered
        limit: Maximum number of items

    Returns:
        At most ``limit`` items, in display order
    """
    others = [item for item in listings if as_record(item).get("slug") != current_slug]
    return dedupe(sort_by_recency(others))[:limit]


def related_link(item: Any, href: str) -> RelatedLink:
    record = as_record(item)
    return RelatedLink(
        title=first_text(record.get("title"), default=PLACEHOLDER_TITLE),
        company=first_text(record.get("company"), default=PLACEHOLDER_COMPANY),
        posted=format_display_date(record.get("postedDate")),
        href=href,
    )
