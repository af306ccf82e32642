"""Detail page rendering.

``render_detail_page`` is pure: a merged record in, markup and metadata out.
``DetailPageService`` wraps it with data loading and drives the page state
machine:

    LOADING -> FOUND -> RENDERED
    LOADING -> NOT_FOUND -> ERROR_DISPLAYED
    LOADING | FOUND -> FAILED -> ERROR_DISPLAYED
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence
from urllib.parse import quote_plus

from opportunity_site.classification import DomainClassifier
from opportunity_site.config.models import SiteConfig
from opportunity_site.content.merge import merge
from opportunity_site.content.templates import enrich_project_detail, generated_excerpt
from opportunity_site.data.repository import ListingRepository
from opportunity_site.domain.models import Category, Listing, NOT_SPECIFIED
from opportunity_site.domain.ordering import as_record
from opportunity_site.heuristics.dates import format_display_date
from opportunity_site.logging import get_logger
from opportunity_site.logging.context import log_context
from opportunity_site.utils.text import first_text
from opportunity_site.utils.timestamps import Clock, utc_now

from .exceptions import TemplateRenderError
from .labels import labels_for
from .metadata import PageMetadata, build_page_metadata, default_image_path, image_path
from .paths import category_path, detail_path, resolve_page_request
from .related import related_link, related_listings
from .sections import (
    OverviewRow,
    Section,
    closing_sections,
    listing_sections,
    overview_rows,
    project_sections,
)
from .templates import TemplateRenderer

logger = get_logger(__name__, component="rendering")

NOT_FOUND_MESSAGE = "Content not found for this page."
FAILED_MESSAGE = "Failed to load content. Please try again."

LinkBuilder = Callable[[Category, str], str]


class PageState(str, Enum):
    """Lifecycle of a detail page request."""

    LOADING = "loading"
    FOUND = "found"
    RENDERED = "rendered"
    NOT_FOUND = "not_found"
    FAILED = "failed"
    ERROR_DISPLAYED = "error_displayed"


TRANSITIONS: Dict[PageState, frozenset] = {
    PageState.LOADING: frozenset({PageState.FOUND, PageState.NOT_FOUND, PageState.FAILED}),
    PageState.FOUND: frozenset({PageState.RENDERED, PageState.FAILED}),
    PageState.NOT_FOUND: frozenset({PageState.ERROR_DISPLAYED}),
    PageState.FAILED: frozenset({PageState.ERROR_DISPLAYED}),
    PageState.RENDERED: frozenset(),
    PageState.ERROR_DISPLAYED: frozenset(),
}


@dataclass
class RenderedPage:
    """Output of the pure renderer.

    Attributes:
        html: Page body fragment (the ``<article>``, or the message paragraph)
        metadata: Head metadata; None for message pages
        sections: Sections in display order
        state: RENDERED, or NOT_FOUND when there was no record to render
        category: Page category
        slug: Page slug
    """

    html: str
    metadata: Optional[PageMetadata]
    sections: List[Section] = field(default_factory=list)
    state: PageState = PageState.RENDERED
    category: Category = Category.JOBS
    slug: str = ""


@dataclass
class DetailPageResult:
    """Outcome of serving one detail page request.

    ``state`` is the outcome (RENDERED, NOT_FOUND or FAILED); ``history``
    holds every state passed through, ending in RENDERED or ERROR_DISPLAYED.
    """

    category: Category
    slug: str
    history: List[PageState] = field(default_factory=lambda: [PageState.LOADING])
    page: Optional[RenderedPage] = None
    document: str = ""
    message: Optional[str] = None

    @property
    def state(self) -> PageState:
        for state in reversed(self.history):
            if state is not PageState.ERROR_DISPLAYED:
                return state
        return PageState.LOADING

    @property
    def succeeded(self) -> bool:
        return self.state is PageState.RENDERED

    def advance(self, state: PageState) -> None:
        """Move to ``state``.

        Raises:
            ValueError: If the transition is not allowed from the current state
        """
        current = self.history[-1]
        if state not in TRANSITIONS[current]:
            raise ValueError(f"Invalid page transition {current.value} -> {state.value}")
        self.history.append(state)


def architecture_search_url(title: str) -> str:
    """Image search link for a project's architecture diagrams."""
    return "https://www.google.com/search?tbm=isch&q=" + quote_plus(f"{title} system architecture diagram")


class DetailRenderer:
    """Pure detail page renderer.

    Holds only configuration (site settings, templates, clock and the link
    builder for related items); rendering reads nothing but its arguments.
    """

    def __init__(
        self,
        site: Optional[SiteConfig] = None,
        templates: Optional[TemplateRenderer] = None,
        clock: Clock = utc_now,
        link_for: LinkBuilder = detail_path,
        classifier: Optional[DomainClassifier] = None,
    ):
        """Initialize renderer.

        Args:
            site: Site identity (defaults to SiteConfig())
            templates: Template renderer (one is created if omitted)
            clock: Current time, used for metadata dates a record lacks
            link_for: Builds the href of a related listing
            classifier: Project domain classifier
        """
        self.site = site or SiteConfig()
        self.templates = templates or TemplateRenderer()
        self.clock = clock
        self.link_for = link_for
        self.classifier = classifier or DomainClassifier()

    def render(
        self,
        merged: Optional[Mapping[str, Any]],
        category: Any,
        related: Iterable[Any] = (),
        slug: Optional[str] = None,
    ) -> RenderedPage:
        """Render the body and metadata of one detail page.

        Args:
            merged: Merged record (listing plus detail record); None when the
                slug was not found
            category: Page category; unknown values use the jobs labels
            related: Already selected related listings
            slug: Page slug (defaults to the record's slug)

        Returns:
            RenderedPage; a NOT_FOUND page carries only the message

        Raises:
            TemplateRenderError: If a template fails
        """
        resolved = Category.parse(category) or Category.JOBS
        if merged is None:
            return self.render_message(NOT_FOUND_MESSAGE, resolved, slug or "", PageState.NOT_FOUND)

        record = as_record(merged)
        page_slug = first_text(slug, record.get("slug"))
        metadata = build_page_metadata(record, resolved, page_slug, self.site, now=self.clock)
        view = self._base_view(record, resolved, page_slug, metadata, related)

        if resolved is Category.PROJECTS:
            sections = self._project_view(record, view)
            template_name = "project_detail.html.j2"
        else:
            labels = labels_for(resolved)
            sections = listing_sections(record, labels, generated_excerpt(record, resolved))
            view["overview"] = overview_rows(resolved, record, resolved.label)
            view["intro"] = first_text(record.get("intro"), record.get("excerpt"))
            template_name = "detail.html.j2"

        view["sections"] = sections
        html = self.templates.render(template_name, {"page": view})
        return RenderedPage(
            html=html,
            metadata=metadata,
            sections=sections,
            state=PageState.RENDERED,
            category=resolved,
            slug=page_slug,
        )

    def render_message(
        self, message: str, category: Category, slug: str, state: PageState
    ) -> RenderedPage:
        """Message-only page used for NOT_FOUND and FAILED outcomes."""
        html = self.templates.render("message.html.j2", {"message": message})
        return RenderedPage(html=html, metadata=None, state=state, category=category, slug=slug)

    def render_document(self, page: RenderedPage) -> str:
        """Wrap a rendered body in the full HTML document with head metadata."""
        if page.metadata is not None:
            head = {
                "title": page.metadata.title,
                "description": page.metadata.description,
                "canonical_url": page.metadata.canonical_url,
                "open_graph": page.metadata.open_graph,
                "twitter": page.metadata.twitter,
                "json_ld": page.metadata.json_ld_script(),
            }
            title = page.metadata.open_graph.get("og:title", "")
        else:
            head = {
                "title": f"{page.category.label} | {self.site.name}",
                "description": "",
                "canonical_url": "",
                "open_graph": {},
                "twitter": {},
                "json_ld": "",
            }
            title = ""
        breadcrumb = {"label": page.category.label, "href": category_path(page.category), "title": title}
        return self.templates.render("page.html.j2", {"head": head, "breadcrumb": breadcrumb, "content": page.html})

    def render_query_page(self, served: Mapping[Category, Mapping[str, str]]) -> str:
        """Document served at the query-form address (``/opportunity.html``).

        A static host ignores the query string, so a small script maps
        ``category``/``slug`` onto the directory-form page when it was built.
        Otherwise the not-found message stays on screen. Unknown categories
        read as jobs, as in ``resolve_page_request``.

        Args:
            served: Built pages per category, slug to directory-form path
        """
        pages = {category.value: dict(served.get(category, {})) for category in Category}
        content = self.templates.render("query_page.html.j2", {
            "message": NOT_FOUND_MESSAGE,
            "browse_href": "/opportunities/",
            "served_json": json.dumps(pages, ensure_ascii=False, sort_keys=True).replace("</", "<\\/"),
            "default_category": Category.JOBS.value,
        })
        head = {
            "title": f"Opportunity | {self.site.name}",
            "description": "",
            "canonical_url": "",
            "open_graph": {},
            "twitter": {},
            "json_ld": "",
        }
        return self.templates.render("page.html.j2", {"head": head, "breadcrumb": None, "content": content})

    def _base_view(
        self,
        record: Dict[str, Any],
        category: Category,
        slug: str,
        metadata: PageMetadata,
        related: Iterable[Any],
    ) -> Dict[str, Any]:
        return {
            "category": category.value,
            "category_label": category.label,
            "slug": slug,
            "title": first_text(record.get("title"), default="Opportunity"),
            "company": first_text(record.get("company"), default=NOT_SPECIFIED),
            "location": first_text(record.get("location"), default=NOT_SPECIFIED),
            "posted": format_display_date(record.get("postedDate")),
            "image": image_path(record, slug, self.site),
            "image_alt": metadata.image_alt,
            "default_image": default_image_path(category, self.site),
            "apply_link": first_text(record.get("applyLink")),
            "intro": "",
            "overview": [],
            "related": [
                related_link(item, self.link_for(category, first_text(as_record(item).get("slug"))))
                for item in related
            ],
        }

    def _project_view(self, record: Dict[str, Any], view: Dict[str, Any]) -> List[Section]:
        inferred = self.classifier.classify(record)
        facts = {
            "title": first_text(record.get("title"), default="Project"),
            "company": first_text(record.get("company"), default="Organizer"),
            "domain": inferred.domain,
        }
        view["facts"] = [
            OverviewRow("Domain", inferred.domain),
            OverviewRow("Duration", inferred.duration),
            OverviewRow("Difficulty", inferred.difficulty),
            OverviewRow("Team Size", inferred.team_size),
        ]
        view["commitment"] = first_text(record.get("commitment"), default="6-8 hours/week")
        view["architecture_search_url"] = architecture_search_url(facts["title"])
        labels = labels_for(Category.PROJECTS)
        return project_sections(record, facts, labels) + closing_sections(record, labels)


def render_detail_page(
    merged: Optional[Mapping[str, Any]],
    category: Any,
    related: Iterable[Any] = (),
    settings: Optional[SiteConfig] = None,
    slug: Optional[str] = None,
    clock: Clock = utc_now,
) -> RenderedPage:
    """Render one detail page with a default renderer.

    Example:
        >>> page = render_detail_page({"title": "SDE Intern", "slug": "sde"}, "internships")
        >>> page.metadata.title
        'SDE Intern | StudentTechProjects'
    """
    return DetailRenderer(site=settings, clock=clock).render(merged, category, related=related, slug=slug)


class DetailPageService:
    """Serves detail pages from a repository: load, merge, render."""

    def __init__(
        self,
        repository: ListingRepository,
        renderer: Optional[DetailRenderer] = None,
        related_limit: int = 4,
        enrich_projects: bool = True,
        logger_instance: Optional[logging.LoggerAdapter] = None,
    ):
        """Initialize service.

        Args:
            repository: Listing repository
            renderer: Detail renderer (defaults to DetailRenderer())
            related_limit: Maximum related items per page
            enrich_projects: Fill project gaps from the generated project template
            logger_instance: Optional logger (defaults to module logger)
        """
        self.repository = repository
        self.renderer = renderer or DetailRenderer()
        self.related_limit = related_limit
        self.enrich_projects = enrich_projects
        self.logger = logger_instance or logger

    def merged_record(self, listing: Listing, category: Category) -> Dict[str, Any]:
        """Listing merged with its detail record (projects also enriched)."""
        base = listing.to_record()
        merged = merge(base, self.repository.load_detail(listing.slug or ""))
        if category is Category.PROJECTS and self.enrich_projects:
            merged = enrich_project_detail(base, merged)
        return merged

    def render_slug(
        self, category: Category, slug: str, listings: Optional[Sequence[Listing]] = None
    ) -> DetailPageResult:
        """Serve the page of ``slug`` within ``category``.

        Args:
            category: Page category
            slug: Page slug
            listings: Already-loaded listings of the category (skips a fetch)

        Returns:
            DetailPageResult; never raises
        """
        result = DetailPageResult(category=category, slug=slug)

        with log_context(category=category.value, slug=slug):
            try:
                if listings is None:
                    load = self.repository.load_category(category)
                    if load.failed:
                        return self._fail(result, load.error_message or "category fetch failed")
                    listings = load.listings

                listing = self.repository.find(category, slug, list(listings))
                if listing is None:
                    return self._not_found(result)

                result.advance(PageState.FOUND)
                merged = self.merged_record(listing, category)
                related = related_listings(listings, slug, self.related_limit)
                page = self.renderer.render(merged, category, related=related, slug=slug)
                result.page = page
                result.document = self.renderer.render_document(page)
                result.advance(PageState.RENDERED)
            except TemplateRenderError as e:
                return self._fail(result, str(e))

            self.logger.info(
                f"Rendered {category.value}/{slug}",
                extra={"event": "rendering.detail.rendered", "sections": len(result.page.sections)},
            )
            return result

    def render_path(self, url: str) -> DetailPageResult:
        """Serve a page addressed by either path form."""
        request = resolve_page_request(url)
        if request is None:
            result = DetailPageResult(category=Category.JOBS, slug="")
            with log_context(path=url):
                return self._not_found(result)
        return self.render_slug(request.category, request.slug)

    def _not_found(self, result: DetailPageResult) -> DetailPageResult:
        result.advance(PageState.NOT_FOUND)
        self.logger.warning(
            f"No listing for {result.category.value}/{result.slug}",
            extra={"event": "rendering.detail.not_found"},
        )
        return self._display_error(result, NOT_FOUND_MESSAGE)

    def _fail(self, result: DetailPageResult, reason: str) -> DetailPageResult:
        result.advance(PageState.FAILED)
        self.logger.error(
            f"Failed to render {result.category.value}/{result.slug}: {reason}",
            extra={"event": "rendering.detail.failed", "error": reason},
        )
        return self._display_error(result, FAILED_MESSAGE)

    def _display_error(self, result: DetailPageResult, message: str) -> DetailPageResult:
        result.message = message
        try:
            result.page = self.renderer.render_message(message, result.category, result.slug, result.state)
            result.document = self.renderer.render_document(result.page)
        except TemplateRenderError:
            result.document = message
        result.advance(PageState.ERROR_DISPLAYED)
        return result
