"""Feed assembly, search and the home page payload."""

from .assembler import (
    EMPTY_FEED_MESSAGE,
    HOME_SECTION_LIMIT,
    Feed,
    FeedAssembler,
    FeedCard,
    FeedRenderer,
    FeedSection,
    filter_for_context,
    is_new_job,
    latest_job_date,
)
from .context import PageContext, page_context_from_path
from .fallback import SAMPLE_LISTINGS, fallback_items
from .home import build_home_feed, pick_fields
from .search import SEARCH_FIELDS, SearchIndex, haystack

__all__ = [
    "PageContext",
    "page_context_from_path",
    "Feed",
    "FeedSection",
    "FeedCard",
    "FeedAssembler",
    "FeedRenderer",
    "filter_for_context",
    "latest_job_date",
    "is_new_job",
    "HOME_SECTION_LIMIT",
    "EMPTY_FEED_MESSAGE",
    "fallback_items",
    "SAMPLE_LISTINGS",
    "SearchIndex",
    "SEARCH_FIELDS",
    "haystack",
    "build_home_feed",
    "pick_fields",
]
