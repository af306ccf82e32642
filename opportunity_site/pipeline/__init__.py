"""Static site build orchestration."""

from .builder import HOME_FEED_FILE, SEARCH_INDEX_FILE, SiteBuilder, complete_identity
from .models import BuildResult, CategoryBuildStats

__all__ = [
    "SiteBuilder",
    "BuildResult",
    "CategoryBuildStats",
    "complete_identity",
    "HOME_FEED_FILE",
    "SEARCH_INDEX_FILE",
]
