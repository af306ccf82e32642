"""Utility functions for text normalization, slugs and time handling."""

from .slugs import assign_slugs, next_listing_id, slugify, unique_slug
from .text import first_text, is_blank, normalize, normalize_join
from .timestamps import (
    EPOCH,
    Clock,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    # Text
    "normalize",
    "normalize_join",
    "is_blank",
    "first_text",
    # Slugs
    "slugify",
    "unique_slug",
    "assign_slugs",
    "next_listing_id",
    # Timestamps
    "Clock",
    "EPOCH",
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "format_timestamp",
]
