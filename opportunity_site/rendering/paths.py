"""Detail page paths and URL resolution.

Every listing has two equivalent addresses:
- directory form ``/{category}/{slug}/`` (canonical)
- query form ``/opportunity.html?category={category}&slug={slug}``
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import parse_qs, quote, urlencode, urlsplit

from opportunity_site.config.models import PathStyle
from opportunity_site.domain.models import Category
from opportunity_site.logging import get_logger

logger = get_logger(__name__, component="rendering")

QUERY_PAGE = "opportunity.html"


def category_path(category: Category) -> str:
    """Listing page path of a category, e.g. ``/jobs/``."""
    return f"/{category.value}/"


def detail_path(category: Category, slug: str, style: Any = PathStyle.DIRECTORY) -> str:
    """Site path of a detail page in the requested form."""
    if PathStyle(style) is PathStyle.QUERY:
        return f"/{QUERY_PAGE}?{urlencode({'category': category.value, 'slug': slug})}"
    return f"/{category.value}/{quote(slug, safe='')}/"


def canonical_url(base_url: str, category: Category, slug: str) -> str:
    """Absolute canonical URL (always the directory form)."""
    return f"{base_url.rstrip('/')}{detail_path(category, slug)}"


def absolute_url(base_url: str, path: str) -> str:
    """Prefix a site path with ``base_url``; absolute URLs pass through."""
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def output_file_for(output_dir: Path, category: Category, slug: str) -> Path:
    """File that serves the directory form of a detail page."""
    return Path(output_dir) / category.value / slug / "index.html"


@dataclass(frozen=True)
class PageRequest:
    """A detail page address resolved to category and slug."""

    category: Category
    slug: str


def resolve_page_request(url: str) -> Optional[PageRequest]:
    """Resolve either path form to a PageRequest.

    The query form falls back to jobs when its category parameter is
    missing or unknown. Returns None when no slug can be found.

    Example:
        >>> resolve_page_request("/opportunity.html?category=projects&slug=x")
        PageRequest(category=<Category.PROJECTS: 'projects'>, slug='x')
        >>> resolve_page_request("/projects/x/")
        PageRequest(category=<Category.PROJECTS: 'projects'>, slug='x')
    """
    parts = urlsplit(url or "")
    segments = [segment for segment in parts.path.split("/") if segment]

    if segments and segments[-1] == QUERY_PAGE:
        params = parse_qs(parts.query)
        slug = (params.get("slug") or [""])[0].strip()
        if not slug:
            return None
        raw_category = (params.get("category") or [""])[0].strip().lower()
        try:
            category = Category(raw_category)
        except ValueError:
            category = Category.JOBS
        return PageRequest(category=category, slug=slug)

    if len(segments) < 2:
        return None
    try:
        category = Category(segments[0].lower())
    except ValueError:
        return None
    slug = segments[1]
    if slug.endswith(".html"):
        slug = slug[: -len(".html")]
    return PageRequest(category=category, slug=slug) if slug and slug != "index" else None


class PathExistenceCache:
    """Memo of path existence checks.

    Owned by the caller and passed to DetailPathResolver, so separate builds
    (and tests) never share results.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, bool] = {}
        self.hits = 0
        self.misses = 0

    def get(self, path: str) -> Optional[bool]:
        if path in self._entries:
            self.hits += 1
            return self._entries[path]
        self.misses += 1
        return None

    def set(self, path: str, exists: bool) -> None:
        self._entries[path] = exists

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


class DetailPathResolver:
    """Chooses the link used for a detail page.

    The directory form is used when a page exists at that path; otherwise
    the query form is used, served by the ``opportunity.html`` page the
    build writes.
    """

    def __init__(
        self,
        exists: Callable[[str], bool],
        cache: Optional[PathExistenceCache] = None,
        logger_instance: Optional[logging.LoggerAdapter] = None,
    ):
        """Initialize resolver.

        Args:
            exists: Returns whether a site path is served (e.g. a file check)
            cache: Memo for ``exists`` results
            logger_instance: Optional logger (defaults to module logger)
        """
        self.exists = exists
        self.cache = cache if cache is not None else PathExistenceCache()
        self.logger = logger_instance or logger

    def resolve(self, category: Category, slug: str) -> str:
        """Site path to link to for one listing."""
        directory = detail_path(category, slug, PathStyle.DIRECTORY)
        known = self.cache.get(directory)
        if known is None:
            try:
                known = bool(self.exists(directory))
            except OSError as e:
                self.logger.warning(
                    f"Path check failed for {directory}: {e}",
                    extra={"event": "rendering.path.check_failed", "path": directory},
                )
                known = False
            self.cache.set(directory, known)
        return directory if known else detail_path(category, slug, PathStyle.QUERY)


def output_dir_exists_check(output_dir: Path) -> Callable[[str], bool]:
    """``exists`` callable answering from a built output directory."""
    root = Path(output_dir)

    def exists(site_path: str) -> bool:
        relative = site_path.strip("/")
        return (root / relative / "index.html").is_file()

    return exists
