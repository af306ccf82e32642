"""Placeholder listings shown when feed data cannot be fetched."""

from typing import Dict, List

from opportunity_site.domain.models import Category, Listing

from .context import PageContext

SAMPLE_POSTED_DATE = "2026-02-20"

SAMPLE_LISTINGS: Dict[Category, Dict[str, str]] = {
    Category.JOBS: {
        "title": "Sample Software Engineer Role",
        "company": "Company",
        "location": "Remote",
        "excerpt": "Jobs data is currently unavailable.",
        "slug": "sample-job",
    },
    Category.INTERNSHIPS: {
        "title": "Sample Internship Role",
        "company": "Company",
        "location": "Remote",
        "excerpt": "Internships data is currently unavailable.",
        "slug": "sample-internship",
    },
    Category.HACKATHONS: {
        "title": "Sample Hackathon",
        "company": "Organizer",
        "location": "Online",
        "excerpt": "Hackathons data is currently unavailable.",
        "slug": "sample-hackathon",
    },
    Category.PROJECTS: {
        "title": "Sample Project Opportunity",
        "company": "Mentor Org",
        "location": "Remote",
        "excerpt": "Projects data is currently unavailable.",
        "slug": "sample-project",
    },
}


def sample_listing(category: Category) -> Listing:
    return Listing.model_validate({
        **SAMPLE_LISTINGS[category],
        "type": category.listing_type,
        "postedDate": SAMPLE_POSTED_DATE,
    })


def fallback_items(context: PageContext) -> List[Listing]:
    """Sample listings for a context: one per category on aggregate pages."""
    if context.category is not None:
        return [sample_listing(context.category)]
    return [sample_listing(category) for category in Category]
