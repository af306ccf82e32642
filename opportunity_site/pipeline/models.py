"""Data models for build tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional


@dataclass
class CategoryBuildStats:
    """
    Statistics for one category within a build.

    Attributes:
        category: Category name
        loaded_count: Valid listings loaded
        skipped_count: Records dropped as invalid
        slugged_count: Listings that had no slug and were given one
        pages_written: Detail pages written
        page_errors: Detail pages that could not be rendered or written
        fetch_failed: Whether fetching the category failed
        missing: Whether the category file was absent or unreadable
        error_message: Fetch error, if any
    """

    category: str
    loaded_count: int = 0
    skipped_count: int = 0
    slugged_count: int = 0
    pages_written: int = 0
    page_errors: int = 0
    fetch_failed: bool = False
    missing: bool = False
    error_message: Optional[str] = None

    @property
    def had_errors(self) -> bool:
        return self.fetch_failed or self.page_errors > 0


@dataclass
class BuildResult:
    """
    Aggregate results of a site build.

    Attributes:
        build_id: Unique id of the build (also on every log record of the build)
        started_at: UTC timestamp when the build began
        finished_at: UTC timestamp when the build completed
        duration_seconds: Total build time
        category_stats: Per-category statistics
        total_listings: Listings loaded across categories
        total_pages: Detail pages written
        total_errors: Page errors plus failed category fetches
        feeds_written: Feed pages and JSON payloads written
        query_page_written: Whether the query-form page was written
        files: Every file written, in write order
        had_errors: Whether any category had errors
    """

    build_id: str
    started_at: datetime
    finished_at: datetime
    duration_seconds: float = 0.0
    category_stats: List[CategoryBuildStats] = field(default_factory=list)
    total_listings: int = 0
    total_pages: int = 0
    total_errors: int = 0
    feeds_written: int = 0
    query_page_written: bool = False
    files: List[Path] = field(default_factory=list)
    had_errors: bool = False

    def __post_init__(self):
        """Compute aggregates from category stats if not already set."""
        if self.category_stats and self.total_listings == 0:
            self.total_listings = sum(s.loaded_count for s in self.category_stats)
            self.total_pages = sum(s.pages_written for s in self.category_stats)
            self.total_errors = sum(
                s.page_errors + (1 if s.fetch_failed else 0) for s in self.category_stats
            )
            self.had_errors = any(s.had_errors for s in self.category_stats)

        if self.duration_seconds == 0.0:
            delta = self.finished_at - self.started_at
            self.duration_seconds = delta.total_seconds()

    def stats_for(self, category: str) -> Optional[CategoryBuildStats]:
        for stats in self.category_stats:
            if stats.category == category:
                return stats
        return None
