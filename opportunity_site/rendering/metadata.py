"""SEO metadata for detail pages: title, description, Open Graph and JSON-LD.

Every value here is a pure function of the merged record, its category and
slug, the site settings and the injected clock (used only when a record has
no parseable posted date).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from opportunity_site.config.models import SiteConfig
from opportunity_site.content.templates import generated_excerpt
from opportunity_site.domain.models import Category, NOT_SPECIFIED
from opportunity_site.heuristics import parse_location, parse_salary, to_iso_date, to_iso_datetime_end_of_day
from opportunity_site.utils.text import first_text
from opportunity_site.utils.timestamps import Clock, utc_now

from .paths import absolute_url, canonical_url

SCHEMA_CONTEXT = "https://schema.org/"


@dataclass
class PageMetadata:
    """Head metadata of one rendered page."""

    title: str
    description: str
    canonical_url: str
    image_url: str
    image_alt: str
    open_graph: Dict[str, str] = field(default_factory=dict)
    twitter: Dict[str, str] = field(default_factory=dict)
    json_ld: Dict[str, Any] = field(default_factory=dict)

    def json_ld_script(self) -> str:
        """JSON-LD serialized for embedding in a ``<script>`` element."""
        return json.dumps(self.json_ld, ensure_ascii=False, sort_keys=False).replace("</", "<\\/")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "canonicalUrl": self.canonical_url,
            "imageUrl": self.image_url,
            "imageAlt": self.image_alt,
            "openGraph": dict(self.open_graph),
            "twitter": dict(self.twitter),
            "jsonLd": self.json_ld,
        }


def prune_empty(value: Any) -> Any:
    """Recursively drop None, blank strings and empty containers from mappings.

    Example:
        >>> prune_empty({"a": None, "b": {"c": ""}, "d": 1})
        {'d': 1}
    """
    if isinstance(value, Mapping):
        pruned = {}
        for key, item in value.items():
            item = prune_empty(item)
            if item is None or item == "" or item == {} or item == []:
                continue
            pruned[key] = item
        return pruned
    if isinstance(value, list):
        return [prune_empty(item) for item in value if item is not None]
    return value


def _known(value: Any) -> Optional[str]:
    text = first_text(value)
    if not text or text.lower() == NOT_SPECIFIED.lower():
        return None
    return text


def page_description(record: Mapping[str, Any], category: Category) -> str:
    """Meta description: excerpt, else intro, else the generated excerpt."""
    return first_text(record.get("excerpt"), record.get("intro")) or generated_excerpt(record, category)


def image_path(record: Mapping[str, Any], slug: str, site: SiteConfig) -> str:
    return first_text(record.get("image"), default=f"{site.image_dir}/{slug}.svg")


def default_image_path(category: Category, site: SiteConfig) -> str:
    """Image shown when a listing's own image fails to load."""
    return f"{site.image_dir}/{category.value}-default.svg"


def build_json_ld(
    record: Mapping[str, Any],
    category: Category,
    slug: str,
    site: SiteConfig,
    now: Clock = utc_now,
) -> Dict[str, Any]:
    """Structured data block for a detail page.

    Jobs get a ``JobPosting`` (salary and location parsed from free text),
    projects an ``Article`` and every other category a ``WebPage``.
    Unresolved fields are omitted rather than emitted as null.

    Args:
        record: Merged record
        category: Page category
        slug: Page slug
        site: Site settings (name, base URL, image directory)
        now: Clock used for the posted date when the record has none

    Returns:
        JSON-LD mapping
    """
    description = page_description(record, category)
    canonical = canonical_url(site.base_url, category, slug)
    image = absolute_url(site.base_url, image_path(record, slug, site))
    posted = to_iso_date(record.get("postedDate")) or now().date().isoformat()

    if category is Category.JOBS:
        location = parse_location(_known(record.get("location")))
        salary = parse_salary(record.get("salary"))
        document: Dict[str, Any] = {
            "@context": SCHEMA_CONTEXT,
            "@type": "JobPosting",
            "title": first_text(record.get("title"), default="Opportunity"),
            "description": first_text(record.get("jobDescription"), record.get("excerpt"), default=description),
            "image": image,
            "datePosted": posted,
            "validThrough": to_iso_datetime_end_of_day(record.get("lastDate")),
            "employmentType": "FULL_TIME",
            "baseSalary": salary.to_schema() if salary else None,
            "hiringOrganization": {
                "@type": "Organization",
                "name": _known(record.get("company")) or "Company",
                "sameAs": first_text(record.get("applyLink")) or None,
            },
            "applicantLocationRequirements": {"@type": "Country", "name": location.country_name},
            "jobLocationType": "TELECOMMUTE" if location.remote else None,
            "jobLocation": None if location.remote else {
                "@type": "Place",
                "address": location.to_postal_address(),
            },
        }
    elif category is Category.PROJECTS:
        document = {
            "@context": SCHEMA_CONTEXT,
            "@type": "Article",
            "headline": first_text(record.get("title"), default="Project"),
            "description": description,
            "image": image,
            "datePublished": posted,
            "author": {
                "@type": "Organization",
                "name": _known(record.get("company")) or site.name,
            },
            "mainEntityOfPage": canonical,
        }
    else:
        document = {
            "@context": SCHEMA_CONTEXT,
            "@type": "WebPage",
            "name": first_text(record.get("title"), default="Opportunity"),
            "description": description,
            "url": canonical,
        }

    return prune_empty(document)


def build_page_metadata(
    record: Mapping[str, Any],
    category: Category,
    slug: str,
    site: SiteConfig,
    now: Clock = utc_now,
) -> PageMetadata:
    """Assemble all head metadata for a detail page."""
    title = first_text(record.get("title"), default="Opportunity")
    description = page_description(record, category)
    canonical = canonical_url(site.base_url, category, slug)
    image = absolute_url(site.base_url, image_path(record, slug, site))

    return PageMetadata(
        title=f"{title} | {site.name}",
        description=description,
        canonical_url=canonical,
        image_url=image,
        image_alt=first_text(
            record.get("imageAlt"),
            default=f"{title} - {first_text(record.get('company'), default=site.name)}",
        ),
        open_graph={
            "og:title": title,
            "og:description": description,
            "og:url": canonical,
            "og:image": image,
        },
        twitter={
            "twitter:card": "summary_large_image",
            "twitter:title": title,
            "twitter:description": description,
            "twitter:image": image,
        },
        json_ld=build_json_ld(record, category, slug, site, now=now),
    )
