"""Client-side search support.

The haystack of a listing is the normalized text of its searchable fields; a
listing matches a query when the normalized query is a substring of its
haystack. The index is built once per listing set and queried many times.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Tuple

from opportunity_site.domain.models import Category
from opportunity_site.domain.ordering import as_record
from opportunity_site.rendering.paths import detail_path
from opportunity_site.utils.text import first_text, normalize, normalize_join

SEARCH_FIELDS: Tuple[str, ...] = (
    "title",
    "company",
    "location",
    "excerpt",
    "type",
    "experience",
    "domain",
    "duration",
    "difficulty",
    "teamSize",
    "postedDate",
)


def haystack(item: Any) -> str:
    """Normalized searchable text of one listing."""
    record = as_record(item)
    return normalize_join(record.get(key) for key in SEARCH_FIELDS)


@dataclass(frozen=True)
class SearchEntry:
    item: Any
    haystack: str


class SearchIndex:
    """Precomputed haystacks over a fixed listing set."""

    def __init__(self, items: Iterable[Any]):
        """Build the index.

        Args:
            items: Listings (Listing or mapping) in display order
        """
        self.entries: List[SearchEntry] = [SearchEntry(item, haystack(item)) for item in items]

    def __len__(self) -> int:
        return len(self.entries)

    def search(self, query: Any) -> List[Any]:
        """Items matching ``query``, in index order.

        An empty (or punctuation-only) query matches every item.

        Example:
            >>> SearchIndex([{"title": "SDE", "company": "Acme Corp"}]).search("acme")
            [{'title': 'SDE', 'company': 'Acme Corp'}]
        """
        needle = normalize(query)
        if not needle:
            return [entry.item for entry in self.entries]
        return [entry.item for entry in self.entries if needle in entry.haystack]

    def export(self, link_for: Callable[[Category, str], str] = detail_path) -> List[Dict[str, Any]]:
        """Records for the browser search box: display fields, href and haystack."""
        records = []
        for entry in self.entries:
            record = as_record(entry.item)
            category = Category.from_type(record.get("type")) or Category.JOBS
            slug = first_text(record.get("slug"))
            records.append({
                "title": first_text(record.get("title")),
                "company": first_text(record.get("company")),
                "type": first_text(record.get("type")),
                "slug": slug,
                "postedDate": first_text(record.get("postedDate")),
                "href": link_for(category, slug),
                "haystack": entry.haystack,
            })
        return records

    def to_json(self, link_for: Callable[[Category, str], str] = detail_path) -> str:
        return json.dumps(self.export(link_for), ensure_ascii=False, indent=2)
