"""Unit tests for category labels and detail page section builders."""

import pytest

from opportunity_site.domain.models import Category
from opportunity_site.rendering.labels import (
    CATEGORY_LABELS,
    category_for_type,
    category_label,
    experience_label,
    labels_for,
)
from opportunity_site.rendering.sections import (
    DETAILS_NOT_SPECIFIED,
    REQUIRED_MODULES_FALLBACK,
    FaqEntry,
    SectionKind,
    bullet_items,
    build_faq,
    closing_sections,
    listing_sections,
    overview_rows,
    project_modules,
    project_sections,
    section_by_key,
)


class TestLabels:
    """Test per-category labels."""

    def test_every_category_has_labels(self):
        """Test the label table covers all categories."""
        assert set(CATEGORY_LABELS) == set(Category)

    def test_unknown_category_uses_job_labels(self):
        """Test unknown categories fall back to jobs."""
        assert labels_for("blog") is CATEGORY_LABELS[Category.JOBS]
        assert labels_for("internship").qualifications == "Eligibility"

    def test_category_label(self):
        """Test plural display labels."""
        assert category_label("hackathons") == "Hackathons"
        assert category_label(None) == "Jobs"

    def test_category_for_type(self):
        """Test singular type mapping with the jobs fallback."""
        assert category_for_type("project") is Category.PROJECTS
        assert category_for_type("unknown") is Category.JOBS

    @pytest.mark.parametrize(
        "experience,expected",
        [
            ("Fresher", "Fresher Friendly"),
            ("Freshers can apply", "Fresher Friendly"),
            ("0-1 years", "Fresher Friendly"),
            ("0 year", "Fresher Friendly"),
            ("2-4 years", "Experience: 2-4 years"),
            ("", "Experience: Not specified"),
            ("not specified", "Experience: Not specified"),
            (None, "Experience: Not specified"),
        ],
    )
    def test_experience_label(self, experience, expected):
        """Test experience badge text."""
        assert experience_label(experience) == expected


class TestBullets:
    """Test list normalization with fallbacks."""

    def test_keeps_non_blank_items(self):
        """Test blank and structured entries are dropped."""
        assert bullet_items(["a", " ", None, {"x": 1}, " b "]) == ["a", "b"]

    def test_string_value_is_one_bullet(self):
        """Test a plain string becomes a single bullet."""
        assert bullet_items("Only one") == ["Only one"]

    def test_string_fallback_is_one_bullet(self):
        """Test an empty list with a text fallback."""
        assert bullet_items([], DETAILS_NOT_SPECIFIED) == [DETAILS_NOT_SPECIFIED]
        assert bullet_items(None, DETAILS_NOT_SPECIFIED) == [DETAILS_NOT_SPECIFIED]

    def test_sequence_fallback(self):
        """Test a list fallback is used whole."""
        assert bullet_items([], ("a", "b")) == ["a", "b"]

    def test_no_fallback(self):
        """Test empty input without fallback stays empty."""
        assert bullet_items([]) == []


class TestFaq:
    """Test FAQ entries."""

    def test_explicit_entries(self):
        """Test q/a and question/answer keys are both accepted."""
        faq = build_faq({"faq": [
            {"q": "Is it paid?", "a": "Yes."},
            {"question": "Duration?", "answer": "Six months."},
            {"q": "Missing answer"},
        ]})
        assert faq == [FaqEntry("Is it paid?", "Yes."), FaqEntry("Duration?", "Six months.")]

    def test_synthesized_entries(self):
        """Test three entries derived from the record."""
        faq = build_faq({
            "qualification": "B.Tech CSE",
            "location": "Pune",
            "howToApply": "Apply on the careers portal.",
        })
        assert [entry.question for entry in faq] == [
            "Who can apply for this opportunity?",
            "Is this opportunity remote or on-site?",
            "How should I apply?",
        ]
        assert "B.Tech CSE" in faq[0].answer
        assert faq[1].answer == "Location mentioned: Pune. Please verify on the official page."
        assert faq[2].answer == "Apply on the careers portal."

    def test_synthesized_defaults(self):
        """Test answers when the record lacks the fields."""
        faq = build_faq({"location": "Not specified", "faq": [{"q": ""}]})
        assert faq[0].answer == "Candidates meeting the listed qualifications and eligibility criteria can apply."
        assert faq[1].answer == "Please check the official link for location details."
        assert faq[2].answer == "Use the official apply link provided on this page."


class TestListingSections:
    """Test job, internship and hackathon sections."""

    def test_overview_rows_for_jobs(self):
        """Test the job overview includes the job-only rows."""
        rows = overview_rows(Category.JOBS, {"company": "Acme", "salary": "₹3-5 LPA"}, "Jobs")
        assert [row.label for row in rows] == [
            "Company", "Type", "Qualification", "Experience", "Batch", "Salary", "Location", "Last Date",
        ]
        assert rows[5].value == "₹3-5 LPA"
        assert rows[2].value == "Not specified"

    def test_overview_rows_for_hackathons(self):
        """Test hackathons skip the job-only rows."""
        rows = overview_rows(Category.HACKATHONS, {}, "Hackathons")
        assert [row.label for row in rows] == ["Company", "Type", "Location", "Last Date"]

    def test_section_order_and_fallbacks(self):
        """Test sections appear in order with fallback content."""
        record = {"title": "SDE", "company": "Acme", "postedDate": "2026-02-20"}
        sections = listing_sections(record, labels_for(Category.JOBS), "Generated summary.")

        assert [s.key for s in sections] == [
            "description", "about", "responsibilities", "qualifications",
            "timeline", "apply", "tips", "faq",
        ]
        assert section_by_key(sections, "description").text == "Generated summary."
        assert section_by_key(sections, "about").text.startswith("Acme offers opportunities")
        assert section_by_key(sections, "responsibilities").items == [DETAILS_NOT_SPECIFIED]
        assert section_by_key(sections, "timeline").items[0] == "Posted on: February 20, 2026"
        assert section_by_key(sections, "timeline").items[1] == "Last date: Not specified"
        assert section_by_key(sections, "apply").text == "Use the official link to apply."
        assert len(section_by_key(sections, "tips").items) == 3

    def test_preferred_only_when_present(self):
        """Test the preferred block appears only with content."""
        record = {"prefQualifications": ["Go experience"], "jobDescription": "Write code."}
        sections = listing_sections(record, labels_for(Category.INTERNSHIPS), "")
        preferred = section_by_key(sections, "preferred")
        assert preferred.title == "Preferred Skills"
        assert preferred.items == ["Go experience"]
        assert section_by_key(sections, "description").text == "Write code."

    def test_about_fallback_without_company(self):
        """Test the about text when no company is known."""
        sections = listing_sections({}, labels_for(Category.JOBS), "")
        assert section_by_key(sections, "about").text.startswith("This organization offers")

    def test_explicit_tips_replace_defaults(self):
        """Test record tips replace the category defaults."""
        tips, faq = closing_sections({"tips": ["Practice DSA"]}, labels_for(Category.JOBS))
        assert tips.items == ["Practice DSA"]
        assert faq.kind is SectionKind.FAQ


class TestProjectSections:
    """Test project page sections."""

    @pytest.fixture
    def facts(self):
        return {"title": "Smart Attendance", "company": "Mentor Org", "domain": "Computer Vision"}

    def test_section_keys_in_order(self, facts):
        """Test the full project section sequence."""
        sections = project_sections({}, facts, labels_for(Category.PROJECTS))
        assert [s.key for s in sections] == [
            "sec-intro", "sec-problem", "sec-objectives", "sec-methodology", "sec-architecture",
            "sec-modules", "sec-stack", "sec-skills", "sec-milestones", "sec-outcomes", "sec-tools",
            "sec-innovation", "sec-future", "sec-deliverables", "sec-why", "sec-resume",
        ]

    def test_defaults_fill_empty_record(self, facts):
        """Test every project section has content without a detail record."""
        sections = project_sections({}, facts, labels_for(Category.PROJECTS))
        assert all(section.text or section.items for section in sections)
        intro = section_by_key(sections, "sec-intro")
        assert "Computer Vision" in intro.text
        assert section_by_key(sections, "sec-stack").items == list(REQUIRED_MODULES_FALLBACK)
        assert section_by_key(sections, "sec-deliverables").kind is SectionKind.CHECKLIST

    def test_record_values_used(self, facts):
        """Test detail record values replace defaults."""
        record = {
            "projectIntroduction": "Custom intro.",
            "projectObjectives": ["Objective A"],
            "weeklyMilestones": [{"week": "Week 1", "goal": "Setup"}],
            "toolsAndTechnologies": [{"category": "Language", "tools": "Python"}],
        }
        sections = project_sections(record, facts, labels_for(Category.PROJECTS))
        assert section_by_key(sections, "sec-intro").text == "Custom intro."
        assert section_by_key(sections, "sec-objectives").items == ["Objective A"]
        assert section_by_key(sections, "sec-milestones").items == [{"week": "Week 1", "goal": "Setup"}]
        assert section_by_key(sections, "sec-tools").items == [{"category": "Language", "tools": "Python"}]

    def test_string_modules(self):
        """Test bare module names get the fallback description."""
        modules = project_modules(["Auth", {"name": "Reports"}])
        assert modules[0] == {
            "name": "Auth",
            "description": "Module details will be expanded based on project scope.",
        }
        assert modules[1]["name"] == "Reports"

    def test_numbered_titles(self, facts):
        """Test navigation titles are numbered one through eleven."""
        sections = project_sections({}, facts, labels_for(Category.PROJECTS))
        numbered = [s.title for s in sections if s.title[0].isdigit()]
        assert numbered[0] == "1. Introduction"
        assert numbered[-1] == "11. Why This Is a Good Project"
        assert len(numbered) == 11
