"""Feed page contexts and their detection from a URL path."""

from enum import Enum
from typing import Optional

from opportunity_site.domain.models import Category


class PageContext(str, Enum):
    """Which feed a page shows."""

    HOME = "home"
    OPPORTUNITIES = "opportunities"
    JOBS = "jobs"
    INTERNSHIPS = "internships"
    HACKATHONS = "hackathons"
    PROJECTS = "projects"

    @property
    def category(self) -> Optional[Category]:
        """Category of a single-category page; None for home and all."""
        try:
            return Category(self.value)
        except ValueError:
            return None

    @property
    def is_aggregate(self) -> bool:
        return self.category is None

    @classmethod
    def for_category(cls, category: Category) -> "PageContext":
        return cls(category.value)


# Checked in order; the first segment found in the path wins
_PATH_RULES = (
    ("/opportunities/", PageContext.OPPORTUNITIES),
    ("/internships/", PageContext.INTERNSHIPS),
    ("/hackathons/", PageContext.HACKATHONS),
    ("/projects/", PageContext.PROJECTS),
    ("/jobs/", PageContext.JOBS),
)


def page_context_from_path(path: str) -> PageContext:
    """Detect the feed context of a page path.

    Example:
        >>> page_context_from_path("/internships/")
        <PageContext.INTERNSHIPS: 'internships'>
        >>> page_context_from_path("/about.html")
        <PageContext.HOME: 'home'>
    """
    if path in ("/", "/index.html"):
        return PageContext.HOME
    for segment, context in _PATH_RULES:
        if segment in path:
            return context
    return PageContext.HOME
