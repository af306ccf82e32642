"""Per-category section titles and fallback copy."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from opportunity_site.domain.models import Category, NOT_SPECIFIED


@dataclass(frozen=True)
class CategoryLabels:
    """Section titles and fallback text for one category's detail page."""

    description: str
    responsibilities: str
    qualifications: str
    preferred: str
    timeline: str
    apply: str
    tips: str
    description_fallback: str
    tips_fallback: Tuple[str, ...]
    required_modules: Optional[str] = None


CATEGORY_LABELS: Dict[Category, CategoryLabels] = {
    Category.JOBS: CategoryLabels(
        description="Job Description",
        responsibilities="Responsibilities",
        qualifications="Minimum Qualifications",
        preferred="Preferred Qualifications",
        timeline="Important Timeline",
        apply="How to Apply",
        tips="Preparation Tips",
        description_fallback="Role details will be updated soon.",
        tips_fallback=(
            "Keep your resume updated and tailored to this role.",
            "Highlight relevant projects, internships, or hackathon work.",
            "Review core technical topics and practice problem-solving before assessments.",
        ),
    ),
    Category.INTERNSHIPS: CategoryLabels(
        description="Internship Description",
        responsibilities="Key Responsibilities",
        qualifications="Eligibility",
        preferred="Preferred Skills",
        timeline="Important Timeline",
        apply="How to Apply",
        tips="Internship Preparation Tips",
        description_fallback="Internship details will be updated soon.",
        tips_fallback=(
            "Prepare a concise resume with projects and academic strengths.",
            "Review fundamentals related to the internship domain.",
            "Apply early and track updates from the official portal.",
        ),
    ),
    Category.HACKATHONS: CategoryLabels(
        description="Hackathon Details",
        responsibilities="What You Will Work On",
        qualifications="Eligibility",
        preferred="Recommended Skills",
        timeline="Event Timeline",
        apply="How to Register",
        tips="Participation Tips",
        description_fallback="Hackathon details will be updated soon.",
        tips_fallback=(
            "Build a small team with complementary skills.",
            "Prepare a practical idea aligned with the problem statement.",
            "Focus on a working prototype and clear demo flow.",
        ),
    ),
    Category.PROJECTS: CategoryLabels(
        description="Project Description",
        responsibilities="Project Tasks",
        qualifications="Prerequisites",
        preferred="Recommended Skills",
        timeline="Project Timeline",
        apply="How to Join",
        tips="Execution Tips",
        description_fallback="Project details will be updated soon.",
        tips_fallback=(
            "Define scope and milestones before you start.",
            "Document your work and commits regularly.",
            "Showcase your final output with clear problem-solution impact.",
        ),
        required_modules="Necessary Modules / Stack",
    ),
}


def labels_for(category: Any) -> CategoryLabels:
    """Labels for a category; unknown categories get the jobs table."""
    resolved = Category.parse(category)
    return CATEGORY_LABELS[resolved] if resolved else CATEGORY_LABELS[Category.JOBS]


def category_label(category: Any) -> str:
    """Plural display label ("Jobs", "Internships", ...); unknown reads as "Jobs"."""
    return (Category.parse(category) or Category.JOBS).label


_FRESHER = re.compile(r"fresher|freshers|0\s*[-–]?\s*1?\s*year", re.IGNORECASE)


def experience_label(experience: Any) -> str:
    """Badge text for a listing's experience requirement.

    Example:
        >>> experience_label("0-1 years")
        'Fresher Friendly'
    """
    value = str(experience or "").strip()
    if not value or value.lower() == NOT_SPECIFIED.lower():
        return f"Experience: {NOT_SPECIFIED}"
    if _FRESHER.search(value):
        return "Fresher Friendly"
    return f"Experience: {value}"


def category_for_type(listing_type: Any) -> Category:
    """Category of a singular listing type; unknown types read as jobs."""
    return Category.from_type(listing_type) or Category.JOBS
