"""Feed assembly: filtering, ordering, capping and card view models.

A feed is the list of cards shown on the home page, the all-opportunities
page or one category page. Home shows an "all" section plus one section per
category, each capped; every other page shows a single uncapped section.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from opportunity_site.data.repository import ListingSet
from opportunity_site.domain.models import Category, Listing, NOT_SPECIFIED, PLACEHOLDER_COMPANY, PLACEHOLDER_TITLE
from opportunity_site.domain.ordering import as_record, sort_by_recency
from opportunity_site.heuristics.dates import format_display_date, is_recent
from opportunity_site.logging import get_logger
from opportunity_site.rendering.labels import experience_label
from opportunity_site.rendering.paths import detail_path
from opportunity_site.rendering.templates import TemplateRenderer
from opportunity_site.utils.text import first_text
from opportunity_site.utils.timestamps import Clock, utc_now

from .context import PageContext
from .fallback import fallback_items

logger = get_logger(__name__, component="feed")

HOME_SECTION_LIMIT = 9
EMPTY_FEED_MESSAGE = "No opportunities found. Check back later!"

PROJECT_CHIP_DEFAULTS = {
    "duration": "8-12 weeks",
    "difficulty": "Intermediate",
    "teamSize": "2-4 members",
}

LinkBuilder = Callable[[Category, str], str]


@dataclass
class FeedCard:
    """View model of one listing card."""

    slug: str
    type: str
    type_label: str
    title: str
    company: str
    location: str
    posted: str
    excerpt: str
    href: str
    cta: str
    is_new: bool = False
    is_recent: bool = False
    chips: List[str] = field(default_factory=list)
    experience: str = ""


@dataclass
class FeedSection:
    """One rendered list of cards.

    Attributes:
        key: Section id ("all" or a category name)
        heading: Section heading (empty for single-section pages)
        items: Listings in display order
        cards: Card view models for ``items``
    """

    key: str
    heading: str
    items: List[Any] = field(default_factory=list)
    cards: List[FeedCard] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass
class Feed:
    """Assembled feed of one page context."""

    context: PageContext
    sections: List[FeedSection] = field(default_factory=list)
    latest_job_date: Optional[str] = None
    used_fallback: bool = False

    def section(self, key: str) -> Optional[FeedSection]:
        for section in self.sections:
            if section.key == key:
                return section
        return None


def filter_for_context(items: Iterable[Any], context: PageContext) -> List[Any]:
    """Keep items whose ``type`` matches a category page; aggregate pages keep all."""
    category = context.category
    if category is None:
        return list(items)
    return [item for item in items if as_record(item).get("type") == category.listing_type]


def latest_job_date(items: Iterable[Any]) -> Optional[str]:
    """``postedDate`` string of the most recent job, or None when there are no jobs."""
    jobs = sort_by_recency(item for item in items if as_record(item).get("type") == Category.JOBS.listing_type)
    if not jobs:
        return None
    return as_record(jobs[0]).get("postedDate") or None


def is_new_job(item: Any, latest_date: Optional[str]) -> bool:
    """NEW badge rule: a job whose postedDate string equals the latest job date."""
    record = as_record(item)
    return bool(latest_date) and record.get("type") == Category.JOBS.listing_type and record.get("postedDate") == latest_date


class FeedAssembler:
    """Builds feeds for page contexts."""

    def __init__(
        self,
        home_limit: int = HOME_SECTION_LIMIT,
        link_for: LinkBuilder = detail_path,
        recent_days: int = 14,
        clock: Clock = utc_now,
        logger_instance: Optional[logging.LoggerAdapter] = None,
    ):
        """Initialize assembler.

        Args:
            home_limit: Cards per home page section
            link_for: Builds a card's detail page href
            recent_days: Age in days under which a card is flagged recent
            clock: Current time for the recent flag
            logger_instance: Optional logger (defaults to module logger)
        """
        self.home_limit = home_limit
        self.link_for = link_for
        self.recent_days = recent_days
        self.clock = clock
        self.logger = logger_instance or logger

    def assemble(self, items: Sequence[Any], context: PageContext, used_fallback: bool = False) -> Feed:
        """Assemble the feed of ``context`` from loaded items.

        Args:
            items: Listings (Listing or mapping) of every category the page needs
            context: Page context
            used_fallback: Whether ``items`` are placeholder samples

        Returns:
            Feed with cards built
        """
        feed = Feed(context=context, used_fallback=used_fallback)

        if context is PageContext.HOME:
            feed.latest_job_date = latest_job_date(items)
            feed.sections.append(
                FeedSection("all", "Latest Opportunities", sort_by_recency(items)[: self.home_limit])
            )
            for category in Category:
                selected = filter_for_context(items, PageContext.for_category(category))
                feed.sections.append(
                    FeedSection(category.value, f"Latest {category.label}", sort_by_recency(selected)[: self.home_limit])
                )
        else:
            feed.sections.append(FeedSection(context.value, "", sort_by_recency(filter_for_context(items, context))))

        for section in feed.sections:
            section.cards = [self.card(item, context, feed.latest_job_date) for item in section.items]

        self.logger.debug(
            f"Assembled {context.value} feed",
            extra={
                "event": "feed.assembled",
                "context": context.value,
                "sections": {section.key: len(section.items) for section in feed.sections},
                "used_fallback": used_fallback,
            },
        )
        return feed

    def assemble_from(self, listing_set: ListingSet, context: PageContext) -> Feed:
        """Assemble from repository results, degrading to samples on fetch failure.

        A category page whose fetch failed shows its sample listing. Aggregate
        pages drop failed categories and fall back to samples only when every
        category failed.
        """
        category = context.category
        if category is not None:
            failed = category in listing_set.failed_categories
            items: List[Listing] = listing_set.listings(category)
        else:
            failed = listing_set.all_failed
            items = listing_set.listings()

        if failed:
            self.logger.warning(
                f"Feed data unavailable for {context.value}, showing samples",
                extra={"event": "feed.fallback_used", "context": context.value},
            )
            return self.assemble(fallback_items(context), context, used_fallback=True)
        return self.assemble(items, context)

    def card(self, item: Any, context: PageContext, latest_date: Optional[str] = None) -> FeedCard:
        """Card view model of one listing."""
        record = as_record(item)
        listing_type = str(record.get("type") or "")
        category = context.category or Category.from_type(listing_type) or Category.JOBS
        slug = first_text(record.get("slug"))
        is_project = listing_type == Category.PROJECTS.listing_type

        chips: List[str] = []
        if is_project:
            chips = ["Project"] + [
                first_text(record.get(key), default=default) for key, default in PROJECT_CHIP_DEFAULTS.items()
            ]

        experience = first_text(record.get("experience"))
        if experience.lower() == NOT_SPECIFIED.lower():
            experience = ""

        return FeedCard(
            slug=slug,
            type=listing_type,
            type_label=listing_type.capitalize() or category.label,
            title=first_text(record.get("title"), default=PLACEHOLDER_TITLE),
            company=first_text(record.get("company"), default=PLACEHOLDER_COMPANY),
            location=first_text(record.get("location"), default=NOT_SPECIFIED),
            posted=format_display_date(record.get("postedDate")),
            excerpt=first_text(record.get("excerpt")),
            href=self.link_for(category, slug),
            cta="View Details" if is_project else "View Details & Apply",
            is_new=context is PageContext.HOME and is_new_job(record, latest_date),
            is_recent=is_recent(
                first_text(record.get("postedAt"), record.get("postedDate")), now=self.clock(), days=self.recent_days
            ),
            chips=chips,
            experience=experience_label(experience) if experience else "",
        )


class FeedRenderer:
    """Renders feed sections to HTML fragments."""

    def __init__(self, templates: Optional[TemplateRenderer] = None):
        self.templates = templates or TemplateRenderer()

    def render_section(self, section: FeedSection, context: PageContext) -> str:
        return self.templates.render("feed.html.j2", {
            "feed": {
                "context": context.value,
                "heading": section.heading,
                "cards": section.cards,
                "empty_message": EMPTY_FEED_MESSAGE,
            },
        })

    def render(self, feed: Feed) -> Dict[str, str]:
        """HTML fragment per section key."""
        return {section.key: self.render_section(section, feed.context) for section in feed.sections}
