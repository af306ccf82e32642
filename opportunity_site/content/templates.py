"""Generated content for listings that lack hand-written detail records."""

from typing import Any, Dict, Mapping, Optional

from opportunity_site.classification import DomainClassifier
from opportunity_site.domain.models import Category, NOT_SPECIFIED
from opportunity_site.logging import get_logger
from opportunity_site.utils.text import first_text

from .merge import fill_missing

logger = get_logger(__name__, component="content")

_classifier = DomainClassifier()


def generated_excerpt(record: Mapping[str, Any], category: Any) -> str:
    """One-sentence summary used when a listing has no excerpt or intro.

    Args:
        record: Listing or merged record (camelCase keys)
        category: Category (or its name); unknown values read as jobs

    Returns:
        Category-specific summary sentence
    """
    title = first_text(record.get("title"), default="Opportunity")
    company = first_text(record.get("company"), default="the organization")
    resolved = Category.parse(category) or Category.JOBS

    if resolved is Category.PROJECTS:
        domain = first_text(record.get("domain")) or _classifier.classify(record).domain
        return (
            f"{title} is a college student project title in {domain} by {company}. "
            "Build a structured solution with clear modules, outcomes, and future enhancements."
        )
    if resolved is Category.HACKATHONS:
        return (
            f"{company} is organizing {title}. "
            "Review problem statement, eligibility, timeline, and submit before deadline."
        )
    if resolved is Category.INTERNSHIPS:
        return (
            f"{company} is offering {title}. "
            "Check eligibility, required skills, and application process."
        )
    return (
        f"{company} is hiring for {title}. "
        "Check role details, qualifications, and official application steps."
    )


def build_project_template(project: Mapping[str, Any]) -> Dict[str, Any]:
    """Full detail record for a project, derived from its listing.

    Domain, duration, difficulty and team size come from the classifier,
    with the listing's own values taking precedence.

    Args:
        project: Project listing (camelCase keys)

    Returns:
        Detail record with every project section populated
    """
    title = first_text(project.get("title"), default="Project")
    company = first_text(project.get("company"), default="Organizer")
    slug = first_text(project.get("slug"))
    inferred = _classifier.classify(project)

    return {
        "intro": first_text(
            project.get("excerpt"),
            default=f"{title} focuses on solving a practical problem using a structured implementation approach.",
        ),
        "lastDate": NOT_SPECIFIED,
        "jobDescription": f"Detailed implementation plan for {title} at {company}.",
        "projectIntroduction": (
            f"{title} is designed as an industry-aligned project to build practical skills "
            "and deployable outcomes."
        ),
        "problemStatement": (
            f"{company} and similar organizations require scalable, measurable, and "
            "data-driven project execution approaches."
        ),
        **inferred.to_fields(),
        "commitment": "6-8 hours/week",
        "projectObjectives": [
            "Analyze project requirements and define clear scope.",
            "Design and implement a robust technical solution.",
            "Measure outcomes using objective metrics.",
            "Present results through a structured dashboard/report.",
        ],
        "projectMethodology": [
            {"title": "Step 1: Requirement Analysis", "points": [
                "Identify business/technical goals.", "Define measurable success criteria."]},
            {"title": "Step 2: Data & Resource Preparation", "points": [
                "Collect required inputs and datasets.",
                "Prepare development and deployment environment."]},
            {"title": "Step 3: Core Implementation", "points": [
                "Build the main processing/business logic.",
                "Validate core outputs with test scenarios."]},
            {"title": "Step 4: Advanced Optimization", "points": [
                "Improve performance, scalability, and reliability.",
                "Refine architecture and edge-case handling."]},
            {"title": "Step 5: Evaluation & Validation", "points": [
                "Evaluate with relevant KPIs and metrics.",
                "Compare approaches and finalize best version."]},
            {"title": "Step 6: Visualization & Documentation", "points": [
                "Prepare clear visual reports/dashboard.",
                "Document architecture, setup, and outcomes."]},
        ],
        "systemArchitecture": [
            "Input Layer",
            "Preprocessing / Validation Layer",
            "Core Processing Layer",
            "Evaluation Layer",
            "Visualization & Reporting Layer",
        ],
        "projectModules": [
            {"name": "Input Module", "description": "Collects and validates required project inputs."},
            {"name": "Core Logic Module", "description": "Implements the main project algorithm/workflow."},
            {"name": "Output Module", "description": "Generates insights, dashboards, and final outcomes."},
        ],
        "skillsYouGain": [
            "Problem decomposition and project scoping",
            "Architecture design and implementation",
            "Evaluation and result communication",
            "Portfolio presentation skills",
        ],
        "weeklyMilestones": [
            {"week": "Week 1-2", "goal": "Scope, architecture, and setup completion"},
            {"week": "Week 3-4", "goal": "Core module development and baseline output"},
            {"week": "Week 5-6", "goal": "Optimization, integration, and validation"},
            {"week": "Week 7-8", "goal": "Documentation, dashboard, and final demo"},
        ],
        "projectDeliverables": [
            "Source code repository with README",
            "Architecture and module documentation",
            "Output dashboard/screenshots",
            "Final presentation or walkthrough",
        ],
        "resumeHighlights": [
            "Built a structured end-to-end project with measurable outcomes.",
            "Implemented module-wise architecture and optimization workflow.",
            "Delivered dashboard-driven results and final documentation.",
        ],
        "expectedOutcomes": [
            "Deliver practical and measurable project output.",
            "Improve execution efficiency and decision support.",
            "Create portfolio-ready implementation and documentation.",
        ],
        "toolsAndTechnologies": [
            {"category": "Programming Language", "tools": "Python / JavaScript"},
            {"category": "Frameworks/Libraries", "tools": "As per project requirement"},
            {"category": "Visualization", "tools": "Plotly / Matplotlib / Chart.js"},
            {"category": "Deployment", "tools": "Flask / Streamlit / Node.js"},
            {"category": "Database", "tools": "MongoDB / PostgreSQL / CSV"},
        ],
        "innovationAspect": [
            "Combines practical engineering and data-driven validation.",
            "Focuses on measurable outcomes and usability.",
            "Supports scalable future enhancements.",
        ],
        "futureEnhancements": [
            "Integrate external APIs and real-time input streams.",
            "Add automation and recommendation capabilities.",
            "Improve module-level analytics and alerting.",
        ],
        "whyGoodProject": [
            "Strong real-world relevance and industry applicability.",
            "Demonstrates architecture, implementation, and evaluation skills.",
            "Creates high-value portfolio impact for students.",
        ],
        "howToApply": "Use the official apply link provided below.",
        "author": "StudentTechProjects Team",
        "imageAlt": f"{title} at {company}",
    }


def enrich_project_detail(
    project: Mapping[str, Any], existing: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Fill gaps in a project's detail record from its generated template.

    Args:
        project: Project listing
        existing: Current detail record, if any

    Returns:
        Detail record; existing non-empty values are kept as they were
    """
    template = build_project_template(project)
    enriched = fill_missing(existing, template)

    logger.debug(
        f"Enriched project detail: {project.get('slug')}",
        extra={
            "event": "content.project.enriched",
            "slug": project.get("slug"),
            "filled_fields": sorted(
                key for key in template if enriched.get(key) is template[key]
            ),
        },
    )
    return enriched
