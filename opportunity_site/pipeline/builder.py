"""Static site build: load listings, render detail pages and feeds, write files."""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from opportunity_site.config.models import AppConfig, PathStyle
from opportunity_site.data.repository import ListingRepository, ListingSet
from opportunity_site.data.sources import DataSource, build_data_source
from opportunity_site.domain.models import Category, Listing
from opportunity_site.domain.ordering import sort_by_recency
from opportunity_site.feed import FeedAssembler, FeedRenderer, PageContext, SearchIndex, build_home_feed
from opportunity_site.logging import get_logger
from opportunity_site.logging.context import log_context
from opportunity_site.rendering.detail import DetailPageService, DetailRenderer
from opportunity_site.rendering.exceptions import TemplateRenderError
from opportunity_site.rendering.paths import (
    QUERY_PAGE,
    DetailPathResolver,
    PathExistenceCache,
    detail_path,
    output_file_for,
)
from opportunity_site.rendering.templates import TemplateRenderer
from opportunity_site.utils.slugs import assign_slugs, next_listing_id
from opportunity_site.utils.timestamps import Clock, utc_now

from .models import BuildResult, CategoryBuildStats

logger = get_logger(__name__, component="pipeline")

HOME_FEED_FILE = "home-feed.json"
SEARCH_INDEX_FILE = "search-index.json"

FEED_TITLES = {
    PageContext.HOME: "Student Opportunities",
    PageContext.OPPORTUNITIES: "All Opportunities",
}


def complete_identity(listings: List[Listing]) -> List[Listing]:
    """Give listings without a slug or id one, leaving the others untouched.

    New slugs come from the title and never collide with slugs already used
    in the category; new ids continue after the highest id seen.
    """
    missing_slug = [listing for listing in listings if not listing.slug]
    missing_id = [listing for listing in listings if listing.id is None]
    if not missing_slug and not missing_id:
        return listings

    taken = {listing.slug for listing in listings if listing.slug}
    new_slugs = iter(assign_slugs([listing.title for listing in missing_slug], taken))
    next_id = next_listing_id(listing.to_record() for listing in listings)

    completed = []
    for listing in listings:
        update: Dict[str, Any] = {}
        if not listing.slug:
            update["slug"] = next(new_slugs)
        if listing.id is None:
            update["id"] = next_id
            next_id += 1
        completed.append(listing.model_copy(update=update) if update else listing)
    return completed


class SiteBuilder:
    """
    Builds the static site into the configured output directory.

    Output layout:
        {category}/{slug}/index.html    detail pages
        opportunity.html                query-form address of every detail page
        {category}/index.html           category feed pages
        opportunities/index.html        all-opportunities feed
        index.html                      home feed
        home-feed.json                  home payload
        search-index.json               search box index
    """

    def __init__(
        self,
        app_config: AppConfig,
        source: Optional[DataSource] = None,
        clock: Clock = utc_now,
        templates: Optional[TemplateRenderer] = None,
    ):
        """
        Initialize the builder.

        Args:
            app_config: Application configuration
            source: Data source (defaults to the one configured in app_config.data)
            clock: Current time for build timestamps and undated metadata
            templates: Template renderer shared by pages and feeds
        """
        self.app_config = app_config
        self.source = source or build_data_source(app_config.data)
        self.clock = clock
        self.templates = templates or TemplateRenderer()
        self.output_dir = Path(app_config.output.output_dir)
        self.repository = ListingRepository(self.source, max_workers=app_config.data.max_workers)

    def run(self) -> BuildResult:
        """
        Execute a complete build.

        Returns:
            BuildResult with per-category statistics and written files

        Raises:
            No exceptions are raised for data or page failures; they are
            captured in the result. Only failures to create the output
            directory propagate.
        """
        started_at = self.clock()
        build_start = time.time()
        build_id = uuid4().hex
        files: List[Path] = []

        with log_context(build_id=build_id):
            logger.info(
                "Build started",
                extra={
                    "event": "pipeline.build.started",
                    "source": self.source.describe(),
                    "output_dir": str(self.output_dir),
                },
            )
            self.output_dir.mkdir(parents=True, exist_ok=True)

            listing_set = self.repository.load_all()
            slugged: Dict[Category, int] = {}
            for category, load in listing_set.loads.items():
                slugged[category] = sum(1 for listing in load.listings if not listing.slug)
                load.listings = complete_identity(load.listings)

            link_for = self._link_builder(listing_set)
            served: Dict[Category, Dict[str, str]] = {}
            category_stats = [
                self._build_category(category, listing_set, link_for, files, served, slugged.get(category, 0))
                for category in Category
            ]
            feeds_written = self._build_feeds(listing_set, link_for, files)
            query_page_written = self._build_query_page(served, files)

            result = BuildResult(
                build_id=build_id,
                started_at=started_at,
                finished_at=self.clock(),
                duration_seconds=time.time() - build_start,
                category_stats=category_stats,
                feeds_written=feeds_written,
                query_page_written=query_page_written,
                files=files,
            )

            logger.info(
                "Build completed",
                extra={
                    "event": "pipeline.build.completed",
                    "duration_ms": int(result.duration_seconds * 1000),
                    "total_listings": result.total_listings,
                    "total_pages": result.total_pages,
                    "feeds_written": result.feeds_written,
                    "total_errors": result.total_errors,
                    "had_errors": result.had_errors,
                },
            )
            return result

    def _link_builder(self, listing_set: ListingSet):
        """Link form for detail pages: directory when the page is built, else query."""
        if PathStyle(self.app_config.output.path_style) is PathStyle.QUERY:
            return lambda category, slug: detail_path(category, slug, PathStyle.QUERY)

        planned = {
            detail_path(category, listing.slug)
            for category in Category
            for listing in listing_set.listings(category)
            if listing.slug
        }
        resolver = DetailPathResolver(exists=planned.__contains__, cache=PathExistenceCache())
        return resolver.resolve

    def _build_category(
        self,
        category: Category,
        listing_set: ListingSet,
        link_for,
        files: List[Path],
        served: Dict[Category, Dict[str, str]],
        slugged_count: int = 0,
    ) -> CategoryBuildStats:
        load = listing_set.loads[category]
        stats = CategoryBuildStats(
            category=category.value,
            loaded_count=len(load.listings),
            skipped_count=load.skipped,
            slugged_count=slugged_count,
            fetch_failed=load.failed,
            missing=load.missing,
            error_message=load.error_message,
        )

        renderer = DetailRenderer(
            site=self.app_config.site,
            templates=self.templates,
            clock=self.clock,
            link_for=link_for,
        )
        service = DetailPageService(
            self.repository,
            renderer=renderer,
            related_limit=self.app_config.feed.related_limit,
        )

        for listing in load.listings:
            result = service.render_slug(category, listing.slug, listings=load.listings)
            if not result.succeeded:
                stats.page_errors += 1
                continue
            path = output_file_for(self.output_dir, category, listing.slug)
            if self._write(path, result.document, files):
                stats.pages_written += 1
                served.setdefault(category, {})[listing.slug] = detail_path(category, listing.slug)
            else:
                stats.page_errors += 1

        logger.info(
            f"Built {stats.pages_written} {category.value} pages",
            extra={
                "event": "pipeline.category.completed",
                "category": category.value,
                "pages_written": stats.pages_written,
                "page_errors": stats.page_errors,
                "fetch_failed": stats.fetch_failed,
            },
        )
        return stats

    def _build_feeds(self, listing_set: ListingSet, link_for, files: List[Path]) -> int:
        assembler = FeedAssembler(
            home_limit=self.app_config.feed.home_section_limit,
            link_for=link_for,
            recent_days=self.app_config.feed.recent_days,
            clock=self.clock,
        )
        feed_renderer = FeedRenderer(self.templates)
        written = 0

        for context in PageContext:
            feed = assembler.assemble_from(listing_set, context)
            fragments = feed_renderer.render(feed)
            title = FEED_TITLES.get(context) or context.category.label
            document = self.templates.render("page.html.j2", {
                "head": {
                    "title": f"{title} | {self.app_config.site.name}",
                    "description": "",
                    "canonical_url": f"{self.app_config.site.base_url}{self._feed_path(context)}",
                    "open_graph": {},
                    "twitter": {},
                    "json_ld": "",
                },
                "breadcrumb": None,
                "content": "\n".join(fragments[section.key] for section in feed.sections),
            })
            path = self.output_dir / self._feed_path(context).strip("/") / "index.html"
            if self._write(path, document, files):
                written += 1

        home_feed = build_home_feed(
            {category: listing_set.listings(category) for category in Category},
            limit=self.app_config.feed.home_section_limit,
        )
        if self._write(self.output_dir / HOME_FEED_FILE, json.dumps(home_feed, ensure_ascii=False, indent=2) + "\n", files):
            written += 1

        index = SearchIndex(sort_by_recency(listing_set.listings()))
        if self._write(self.output_dir / SEARCH_INDEX_FILE, index.to_json(link_for) + "\n", files):
            written += 1

        return written

    def _build_query_page(self, served: Dict[Category, Dict[str, str]], files: List[Path]) -> bool:
        """Write the query-form page that forwards to the directory pages in ``served``."""
        renderer = DetailRenderer(site=self.app_config.site, templates=self.templates, clock=self.clock)
        try:
            document = renderer.render_query_page(served)
        except TemplateRenderError as e:
            logger.error(
                f"Failed to render {QUERY_PAGE}: {e}",
                extra={"event": "pipeline.query_page.failed", "error": str(e)},
            )
            return False
        return self._write(self.output_dir / QUERY_PAGE, document, files)

    @staticmethod
    def _feed_path(context: PageContext) -> str:
        if context is PageContext.HOME:
            return "/"
        return f"/{context.value}/"

    def _write(self, path: Path, content: str, files: List[Path]) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(
                f"Failed to write {path}: {e}",
                extra={"event": "pipeline.file.write_failed", "path": str(path), "error": str(e)},
            )
            return False
        files.append(path)
        return True
