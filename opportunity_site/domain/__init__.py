"""Domain models for opportunity listings."""

from .models import (
    NOT_SPECIFIED,
    PLACEHOLDER_COMPANY,
    PLACEHOLDER_TITLE,
    Category,
    Listing,
)

__all__ = [
    "Category",
    "Listing",
    "NOT_SPECIFIED",
    "PLACEHOLDER_COMPANY",
    "PLACEHOLDER_TITLE",
]
