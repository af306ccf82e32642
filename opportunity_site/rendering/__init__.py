"""Detail page rendering: sections, SEO metadata, paths and templates."""

from .detail import (
    FAILED_MESSAGE,
    NOT_FOUND_MESSAGE,
    DetailPageResult,
    DetailPageService,
    DetailRenderer,
    PageState,
    RenderedPage,
    architecture_search_url,
    render_detail_page,
)
from .exceptions import TemplateRenderError
from .labels import CATEGORY_LABELS, CategoryLabels, category_for_type, category_label, experience_label, labels_for
from .metadata import PageMetadata, build_json_ld, build_page_metadata, prune_empty
from .paths import (
    DetailPathResolver,
    PageRequest,
    PathExistenceCache,
    canonical_url,
    category_path,
    detail_path,
    resolve_page_request,
)
from .related import RelatedLink, related_listings
from .sections import FaqEntry, OverviewRow, Section, SectionKind, bullet_items, build_faq, overview_rows
from .templates import TemplateRenderer

__all__ = [
    # Detail pages
    "render_detail_page",
    "DetailRenderer",
    "DetailPageService",
    "DetailPageResult",
    "RenderedPage",
    "PageState",
    "NOT_FOUND_MESSAGE",
    "FAILED_MESSAGE",
    "architecture_search_url",
    # Labels
    "CategoryLabels",
    "CATEGORY_LABELS",
    "labels_for",
    "category_label",
    "category_for_type",
    "experience_label",
    # Sections
    "Section",
    "SectionKind",
    "FaqEntry",
    "OverviewRow",
    "bullet_items",
    "build_faq",
    "overview_rows",
    "related_listings",
    "RelatedLink",
    # Metadata
    "PageMetadata",
    "build_page_metadata",
    "build_json_ld",
    "prune_empty",
    # Paths
    "detail_path",
    "category_path",
    "canonical_url",
    "PageRequest",
    "resolve_page_request",
    "PathExistenceCache",
    "DetailPathResolver",
    # Templates
    "TemplateRenderer",
    "TemplateRenderError",
]
