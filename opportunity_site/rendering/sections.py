"""Detail page section blocks built from a merged record.

Section builders are pure: they read a merged record (camelCase keys) and
return view models. Every list section falls back to placeholder content, so
a page never renders an empty block.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from opportunity_site.domain.models import Category, NOT_SPECIFIED
from opportunity_site.heuristics.dates import format_display_date
from opportunity_site.utils.text import first_text, is_blank

from .labels import CategoryLabels

DETAILS_NOT_SPECIFIED = "Details not specified"
MODULE_DETAILS_FALLBACK = "Module details will be expanded based on project scope."
REQUIRED_MODULES_FALLBACK = (
    "Frontend framework/library for UI development.",
    "Backend API/service layer for business logic.",
    "Database and deployment tooling as per project scope.",
)


class SectionKind(str, Enum):
    """How a section body is laid out."""

    PARAGRAPH = "paragraph"
    BULLETS = "bullets"
    CHECKLIST = "checklist"
    STEPS = "steps"
    MODULES = "modules"
    MILESTONES = "milestones"
    TOOLS = "tools"
    FAQ = "faq"


@dataclass
class Section:
    """One titled block of a detail page.

    Attributes:
        key: Stable identifier (also the HTML anchor)
        title: Heading text
        kind: Body layout
        text: Body for PARAGRAPH sections
        items: Body for every other kind
    """

    key: str
    title: str
    kind: SectionKind
    text: str = ""
    items: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class FaqEntry:
    question: str
    answer: str


@dataclass(frozen=True)
class OverviewRow:
    label: str
    value: str


def _present(value: Any) -> bool:
    return not is_blank(value) and str(value).strip().lower() != NOT_SPECIFIED.lower()


def bullet_items(values: Any, fallback: Union[str, Sequence[str]] = ()) -> List[str]:
    """Normalize a list field into bullet texts.

    Args:
        values: List of strings, a single string, or nothing
        fallback: Bullet(s) used when ``values`` has no non-blank item; a
            plain string yields exactly one bullet

    Returns:
        Non-empty bullet list unless the fallback is empty too

    Example:
        >>> bullet_items([], "Details not specified")
        ['Details not specified']
    """
    if isinstance(values, str):
        values = [values]
    items: List[str] = []
    if isinstance(values, (list, tuple)):
        items = [str(item).strip() for item in values if not is_blank(item) and not isinstance(item, (dict, list))]
    if items:
        return items
    if isinstance(fallback, str):
        return [fallback] if fallback else []
    return list(fallback)


def _mapping_items(values: Any, fallback: Sequence[Dict[str, Any]]) -> List[Any]:
    if isinstance(values, (list, tuple)):
        items = [item for item in values if not is_blank(item)]
        if items:
            return items
    return [dict(item) for item in fallback]


def build_faq(record: Mapping[str, Any]) -> List[FaqEntry]:
    """FAQ entries for a page.

    Explicit ``faq`` entries are used when at least one carries both a
    question and an answer (``q``/``a`` or ``question``/``answer``).
    Otherwise three entries are synthesized from the record's qualification,
    location and apply fields.
    """
    explicit: List[FaqEntry] = []
    raw_faq = record.get("faq")
    if isinstance(raw_faq, list):
        for entry in raw_faq:
            if not isinstance(entry, Mapping):
                continue
            question = first_text(entry.get("q"), entry.get("question"))
            answer = first_text(entry.get("a"), entry.get("answer"))
            if question and answer:
                explicit.append(FaqEntry(question=question, answer=answer))
    if explicit:
        return explicit

    qualification = record.get("qualification")
    location = record.get("location")
    if _present(qualification):
        who = f"Candidates with {str(qualification).strip()} who meet the listed eligibility criteria can apply."
    else:
        who = "Candidates meeting the listed qualifications and eligibility criteria can apply."
    if _present(location):
        where = f"Location mentioned: {str(location).strip()}. Please verify on the official page."
    else:
        where = "Please check the official link for location details."
    how = first_text(record.get("howToApply"), default="Use the official apply link provided on this page.")

    return [
        FaqEntry("Who can apply for this opportunity?", who),
        FaqEntry("Is this opportunity remote or on-site?", where),
        FaqEntry("How should I apply?", how),
    ]


def overview_rows(category: Category, record: Mapping[str, Any], type_label: str) -> List[OverviewRow]:
    """Key facts table shown at the top of a listing page."""

    def value(key: str) -> str:
        return first_text(record.get(key), default=NOT_SPECIFIED)

    rows = [
        OverviewRow("Company", value("company")),
        OverviewRow("Type", type_label),
    ]
    if category in (Category.JOBS, Category.INTERNSHIPS):
        rows.extend([
            OverviewRow("Qualification", value("qualification")),
            OverviewRow("Experience", value("experience")),
            OverviewRow("Batch", value("batch")),
            OverviewRow("Salary", value("salary")),
        ])
    rows.extend([
        OverviewRow("Location", value("location")),
        OverviewRow("Last Date", value("lastDate")),
    ])
    return rows


def description_text(record: Mapping[str, Any], generated: str, labels: CategoryLabels) -> str:
    return first_text(
        record.get("jobDescription"),
        record.get("description"),
        record.get("excerpt"),
        generated,
        default=labels.description_fallback,
    )


def listing_sections(record: Mapping[str, Any], labels: CategoryLabels, generated: str) -> List[Section]:
    """Sections of a job, internship or hackathon page, in display order.

    Args:
        record: Merged record
        labels: Category label table
        generated: Generated excerpt used when no description exists

    Returns:
        Ordered sections; the preferred-qualifications block only when present
    """
    company = record.get("company")
    about_fallback = (
        f"{company if _present(company) else 'This organization'} offers opportunities for "
        "students to build practical skills and real-world experience. Check the official "
        "link for complete details and updates."
    )

    sections = [
        Section("description", labels.description, SectionKind.PARAGRAPH,
                text=description_text(record, generated, labels)),
        Section("about", "About the Company / Organizer", SectionKind.PARAGRAPH,
                text=first_text(record.get("aboutCompany"), default=about_fallback)),
        Section("responsibilities", labels.responsibilities, SectionKind.BULLETS,
                items=bullet_items(record.get("responsibilities"), DETAILS_NOT_SPECIFIED)),
        Section("qualifications", labels.qualifications, SectionKind.BULLETS,
                items=bullet_items(record.get("minQualifications"), DETAILS_NOT_SPECIFIED)),
    ]

    preferred = bullet_items(record.get("prefQualifications"))
    if preferred:
        sections.append(Section("preferred", labels.preferred, SectionKind.BULLETS, items=preferred))

    sections.extend([
        Section("timeline", labels.timeline, SectionKind.BULLETS, items=[
            f"Posted on: {format_display_date(record.get('postedDate'))}",
            f"Last date: {first_text(record.get('lastDate'), default=NOT_SPECIFIED)}",
            "Shortlisting and next steps are communicated by the organizer/company.",
        ]),
        Section("apply", labels.apply, SectionKind.PARAGRAPH,
                text=first_text(record.get("howToApply"), default="Use the official link to apply.")),
    ])
    sections.extend(closing_sections(record, labels))
    return sections


def closing_sections(record: Mapping[str, Any], labels: CategoryLabels) -> List[Section]:
    """Tips and FAQ blocks shared by every page type."""
    return [
        Section("tips", labels.tips, SectionKind.BULLETS,
                items=bullet_items(record.get("tips"), labels.tips_fallback)),
        Section("faq", "Frequently Asked Questions", SectionKind.FAQ, items=build_faq(record)),
    ]


# Project page defaults used when neither the record nor its detail file has the field
PROJECT_DEFAULTS: Dict[str, Any] = {
    "projectObjectives": [
        "Analyze the problem domain using available historical and contextual data.",
        "Design and implement a robust project solution workflow.",
        "Evaluate outcomes using measurable technical and business metrics.",
        "Build a usable dashboard or output layer for decision-making support.",
    ],
    "projectMethodology": [
        {"title": "Step 1: Data Collection", "points": [
            "Collect historical and operational data relevant to project scope.",
            "Gather external factors where applicable."]},
        {"title": "Step 2: Data Preprocessing", "points": [
            "Handle missing values and outliers.",
            "Normalize and transform the data for model/logic readiness."]},
        {"title": "Step 3: Core Model / Logic Design", "points": [
            "Implement baseline approach for project objectives.",
            "Define evaluation baseline and expected output format."]},
        {"title": "Step 4: Advanced Implementation", "points": [
            "Add advanced models or optimization techniques.",
            "Improve performance and reliability through tuning."]},
        {"title": "Step 5: Evaluation", "points": [
            "Measure output quality with objective metrics.",
            "Compare methods and select best-performing approach."]},
        {"title": "Step 6: Visualization & Dashboard", "points": [
            "Create visual insights for trends, outputs, and comparisons.",
            "Build user-friendly dashboard pages for final presentation."]},
    ],
    "systemArchitecture": [
        "Data Input Layer",
        "Data Preprocessing Module",
        "Core Processing / Modeling Module",
        "Evaluation Module",
        "Visualization & Web Dashboard",
    ],
    "projectModules": [
        {"name": "Core Module", "description": "Implements the primary project workflow and business logic."},
        {"name": "Interface Module", "description": "Provides user-facing screens and interactions."},
        {"name": "Data Module", "description": "Handles data ingestion, validation, persistence, and retrieval."},
    ],
    "skillsYouGain": [
        "Problem decomposition and project scoping",
        "Architecture design and implementation",
        "Testing, evaluation, and result storytelling",
        "Portfolio presentation and technical communication",
    ],
    "weeklyMilestones": [
        {"week": "Week 1-2", "goal": "Requirement analysis, dataset/resources setup, architecture planning"},
        {"week": "Week 3-4", "goal": "Core module development and baseline output generation"},
        {"week": "Week 5-6", "goal": "Advanced improvements, optimization, and integration"},
        {"week": "Week 7-8", "goal": "Evaluation, dashboard, documentation, and final presentation"},
    ],
    "expectedOutcomes": [
        "Deliver accurate and actionable project outputs.",
        "Improve planning and decision support.",
        "Reduce inefficiencies in execution.",
        "Provide reusable and scalable project structure.",
    ],
    "toolsAndTechnologies": [
        {"category": "Programming Language", "tools": "Python / JavaScript"},
        {"category": "Libraries / Frameworks", "tools": "Pandas, NumPy, Scikit-learn, React (as needed)"},
        {"category": "Visualization", "tools": "Matplotlib, Seaborn, Plotly / Chart.js"},
        {"category": "Deployment", "tools": "Flask / Streamlit / Node.js"},
        {"category": "Database", "tools": "MongoDB / PostgreSQL / CSV"},
    ],
    "innovationAspect": [
        "Hybrid approach combining statistical and ML techniques where applicable.",
        "Comparative evaluation for selecting best solution path.",
        "Dashboard-driven insights for practical decision support.",
    ],
    "futureEnhancements": [
        "Integrate real-time external APIs.",
        "Add recommendation/automation features.",
        "Enable deeper module-level predictions and alerts.",
        "Integrate with enterprise management systems.",
    ],
    "projectDeliverables": [
        "Source code repository with clean README",
        "Architecture diagram and module documentation",
        "Results dashboard/screenshots",
        "Final presentation or demo video",
    ],
    "whyGoodProject": [
        "Strong technical foundation and real-world relevance.",
        "Clear evaluation metrics and measurable outcomes.",
        "High industry applicability and portfolio value.",
    ],
    "resumeHighlights": [
        "Built an end-to-end project with structured modules and measurable outcomes.",
        "Implemented evaluation-driven improvements and presented comparative results.",
        "Created production-style documentation and project dashboard for decision support.",
    ],
}


def project_modules(values: Any) -> List[Dict[str, str]]:
    """Normalize module entries; bare strings become named modules."""
    modules = []
    for item in _mapping_items(values, PROJECT_DEFAULTS["projectModules"]):
        if isinstance(item, Mapping):
            modules.append({
                "name": first_text(item.get("name"), default="Module"),
                "description": first_text(item.get("description"), default=MODULE_DETAILS_FALLBACK),
            })
        else:
            modules.append({"name": str(item).strip(), "description": MODULE_DETAILS_FALLBACK})
    return modules


def _methodology(values: Any) -> List[Dict[str, Any]]:
    steps = []
    for step in _mapping_items(values, PROJECT_DEFAULTS["projectMethodology"]):
        if isinstance(step, Mapping):
            steps.append({
                "title": first_text(step.get("title"), default="Step"),
                "points": bullet_items(step.get("points"), "Details will be updated soon."),
            })
        else:
            steps.append({"title": str(step).strip(), "points": ["Details will be updated soon."]})
    return steps


def _pairs(values: Any, default_key: str, first: str, second: str, defaults: Dict[str, str]) -> List[Dict[str, str]]:
    rows = []
    for item in _mapping_items(values, PROJECT_DEFAULTS[default_key]):
        if isinstance(item, Mapping):
            rows.append({
                first: first_text(item.get(first), default=defaults[first]),
                second: first_text(item.get(second), default=defaults[second]),
            })
    return rows or [dict(row) for row in PROJECT_DEFAULTS[default_key]]


def project_sections(
    record: Mapping[str, Any], facts: Mapping[str, str], labels: CategoryLabels
) -> List[Section]:
    """Sections of a project page, in display order.

    Args:
        record: Merged (and possibly enriched) project record
        facts: Resolved project facts (domain, company, title)
        labels: Category label table

    Returns:
        Ordered sections, numbered like the page navigation
    """
    title = facts["title"]
    company = facts["company"]
    domain = facts["domain"]

    def bullets(key: str) -> List[str]:
        return bullet_items(record.get(key), PROJECT_DEFAULTS[key])

    return [
        Section("sec-intro", "1. Introduction", SectionKind.PARAGRAPH, text=first_text(
            record.get("projectIntroduction"),
            default=(
                f"{title} is a college student project title designed to solve practical "
                f"{domain} problems through a structured implementation approach."
            ),
        )),
        Section("sec-problem", "2. Problem Statement", SectionKind.PARAGRAPH, text=first_text(
            record.get("problemStatement"),
            default=(
                f"{company} needs a scalable and measurable {domain} solution with clear "
                "architecture and execution milestones."
            ),
        )),
        Section("sec-objectives", "3. Objectives of the Project", SectionKind.BULLETS,
                items=bullets("projectObjectives")),
        Section("sec-methodology", "4. Proposed Methodology", SectionKind.STEPS,
                items=_methodology(record.get("projectMethodology"))),
        Section("sec-architecture", "5. System Architecture Overview", SectionKind.BULLETS,
                items=bullets("systemArchitecture")),
        Section("sec-modules", "6. Project Modules", SectionKind.MODULES,
                items=project_modules(record.get("projectModules"))),
        Section("sec-stack", labels.required_modules or "Necessary Modules / Stack", SectionKind.BULLETS,
                items=bullet_items(record.get("requiredModules"), REQUIRED_MODULES_FALLBACK)),
        Section("sec-skills", "Student Skills You Will Gain", SectionKind.BULLETS,
                items=bullets("skillsYouGain")),
        Section("sec-milestones", "Weekly Milestones", SectionKind.MILESTONES,
                items=_pairs(record.get("weeklyMilestones"), "weeklyMilestones", "week", "goal",
                             {"week": "Week", "goal": "Milestone details will be updated soon."})),
        Section("sec-outcomes", "7. Expected Outcomes", SectionKind.BULLETS,
                items=bullets("expectedOutcomes")),
        Section("sec-tools", "8. Tools & Technologies", SectionKind.TOOLS,
                items=_pairs(record.get("toolsAndTechnologies"), "toolsAndTechnologies", "category", "tools",
                             {"category": "Category", "tools": "Tools"})),
        Section("sec-innovation", "9. Innovation Aspect", SectionKind.BULLETS,
                items=bullets("innovationAspect")),
        Section("sec-future", "10. Scope for Future Enhancement", SectionKind.BULLETS,
                items=bullets("futureEnhancements")),
        Section("sec-deliverables", "Project Deliverables Checklist", SectionKind.CHECKLIST,
                items=bullets("projectDeliverables")),
        Section("sec-why", "11. Why This Is a Good Project", SectionKind.BULLETS,
                items=bullets("whyGoodProject")),
        Section("sec-resume", "Resume-Ready Highlights", SectionKind.BULLETS,
                items=bullets("resumeHighlights")),
    ]


def section_by_key(sections: Sequence[Section], key: str) -> Optional[Section]:
    for section in sections:
        if section.key == key:
            return section
    return None
