"""Core domain models for opportunity listings.

This module defines:
- Category: the four listing buckets (one JSON file and one route each)
- Listing: one opportunity record as stored in a category file
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

PLACEHOLDER_TITLE = "Untitled"
PLACEHOLDER_COMPANY = "Unknown"
NOT_SPECIFIED = "Not specified"


class Category(str, Enum):
    """Listing category; the value is the file stem and route segment."""

    JOBS = "jobs"
    INTERNSHIPS = "internships"
    HACKATHONS = "hackathons"
    PROJECTS = "projects"

    @property
    def listing_type(self) -> str:
        """Singular ``type`` value carried by listings of this category."""
        return _TYPE_BY_CATEGORY[self]

    @property
    def label(self) -> str:
        """Human-readable plural label (e.g. "Internships")."""
        return self.value.capitalize()

    @classmethod
    def from_type(cls, listing_type: Optional[str]) -> Optional["Category"]:
        """Map a singular listing type ("job") to its category."""
        if not listing_type:
            return None
        wanted = str(listing_type).strip().lower()
        for category, type_name in _TYPE_BY_CATEGORY.items():
            if type_name == wanted:
                return category
        return None

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Resolve a category from its name or a listing type; None if unknown."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            return cls.from_type(text)


_TYPE_BY_CATEGORY = {
    Category.JOBS: "job",
    Category.INTERNSHIPS: "internship",
    Category.HACKATHONS: "hackathon",
    Category.PROJECTS: "project",
}


class Listing(BaseModel):
    """One opportunity record.

    Field names follow the camelCase keys of the JSON data files; snake_case
    names are accepted too. Unknown keys are kept so that a merged view can
    carry them through to rendering.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[int] = Field(None, description="Numeric id, sort tie-break")
    title: str = Field(PLACEHOLDER_TITLE, description="Listing title")
    company: str = Field(PLACEHOLDER_COMPANY, description="Company or organizer")
    slug: Optional[str] = Field(None, description="URL-safe id, unique per category")
    type: Optional[str] = Field(None, description="job, internship, hackathon or project")
    location: str = Field(NOT_SPECIFIED, description="Free-text location")
    posted_date: Optional[str] = Field(None, alias="postedDate", description="Calendar date")
    posted_at: Optional[str] = Field(None, alias="postedAt", description="Precise timestamp")
    excerpt: Optional[str] = Field(None, description="Short summary")
    apply_link: Optional[str] = Field(None, alias="applyLink", description="Application URL")

    # Jobs and internships
    qualification: Optional[str] = None
    experience: Optional[str] = None
    salary: Optional[str] = None
    batch: Optional[str] = None

    # Projects
    domain: Optional[str] = None
    duration: Optional[str] = None
    difficulty: Optional[str] = None
    team_size: Optional[str] = Field(None, alias="teamSize")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Optional[int]:
        """Accept numeric strings; anything else non-numeric becomes None."""
        if v is None or isinstance(v, bool):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @field_validator(
        "slug", "type", "posted_date", "posted_at", "excerpt", "apply_link",
        "qualification", "experience", "salary", "batch",
        "domain", "duration", "difficulty", "team_size",
        mode="before",
    )
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        """Strip text, turn numbers into text and blanks into None."""
        if v is None or isinstance(v, (list, dict)):
            return None
        text = str(v).strip()
        return text or None

    @field_validator("type")
    @classmethod
    def lowercase_type(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("title", "company", "location", mode="before")
    @classmethod
    def apply_placeholder(cls, v: Any, info: ValidationInfo) -> str:
        """Blank display fields fall back to their placeholder text."""
        text = "" if v is None or isinstance(v, (list, dict)) else str(v).strip()
        if text:
            return text
        return {
            "title": PLACEHOLDER_TITLE,
            "company": PLACEHOLDER_COMPANY,
        }.get(info.field_name, NOT_SPECIFIED)

    @property
    def category(self) -> Optional[Category]:
        """Category implied by ``type``."""
        return Category.from_type(self.type)

    @property
    def effective_posted(self) -> Optional[str]:
        """``postedAt`` when present, else ``postedDate``."""
        return self.posted_at or self.posted_date

    def to_record(self) -> Dict[str, Any]:
        """Dump to a camelCase dict, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
