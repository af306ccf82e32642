"""Tests for the static site build pipeline.

Covers:
- Files written for detail pages, feed pages and JSON payloads
- Slug and id completion for listings that lack them
- Degraded builds (missing category files, failed fetches)
- Link form selection (directory or query)
"""

import html
import json
import re
from urllib.parse import urlsplit

import pytest

from opportunity_site.config.models import AppConfig, DataConfig, OutputConfig
from opportunity_site.data import DataSourceHTTPError, FileDataSource
from opportunity_site.domain.models import Category, Listing
from opportunity_site.pipeline import (
    HOME_FEED_FILE,
    SEARCH_INDEX_FILE,
    BuildResult,
    CategoryBuildStats,
    SiteBuilder,
    complete_identity,
)
from opportunity_site.rendering.paths import QUERY_PAGE, resolve_page_request
from tests.helpers import FIXED_NOW, fixed_clock, make_listing, write_data_dir


class FlakySource(FileDataSource):
    """File source whose jobs fetch always fails."""

    def fetch_category(self, category):
        if category is Category.JOBS:
            raise DataSourceHTTPError("jobs unavailable", location="jobs.json", status_code=503)
        return super().fetch_category(category)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def data_dir(tmp_path):
    """Jobs (one without slug or id), one internship, one project, no hackathons file."""
    return write_data_dir(
        tmp_path / "data",
        {
            Category.JOBS: [
                make_listing(Category.JOBS, id=1, slug="sde-acme", postedDate="2026-02-25"),
                make_listing(Category.JOBS, id=None, slug=None, title="Data Analyst"),
            ],
            Category.INTERNSHIPS: [make_listing(Category.INTERNSHIPS, id=1, slug="sde-intern")],
            Category.PROJECTS: [
                make_listing(Category.PROJECTS, id=1, slug="chatbot", title="Chatbot for College FAQs"),
            ],
        },
        details={"sde-acme": {"jobDescription": "Build payment services."}},
    )


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "dist"


def _config(data_dir, output_dir, **output):
    return AppConfig(
        data=DataConfig(data_dir=data_dir),
        output=OutputConfig(output_dir=output_dir, **output),
    )


HREF_PATTERN = re.compile(r'href="([^"]+)"')
SERVED_PATTERN = re.compile(r'<script type="application/json" id="served-pages">(.*?)</script>', re.DOTALL)


def _detail_hrefs(output_dir):
    """Detail page links in the search index and every written HTML page."""
    hrefs = {record["href"] for record in json.loads((output_dir / SEARCH_INDEX_FILE).read_text(encoding="utf-8"))}
    for page in output_dir.rglob("*.html"):
        for href in HREF_PATTERN.findall(page.read_text(encoding="utf-8")):
            href = html.unescape(href)
            if href.startswith("/") and resolve_page_request(href) is not None:
                hrefs.add(href)
    return hrefs


def _served_file(output_dir, href):
    """File a static host ends up showing for ``href``.

    Query-form links load the query page, which forwards to the directory
    page it lists for the category and slug.
    """
    if not urlsplit(href).path.endswith(QUERY_PAGE):
        return output_dir / urlsplit(href).path.strip("/") / "index.html"

    query_page = output_dir / QUERY_PAGE
    served = json.loads(SERVED_PATTERN.search(query_page.read_text(encoding="utf-8")).group(1))
    request = resolve_page_request(href)
    target = served[request.category.value].get(request.slug)
    return output_dir / target.strip("/") / "index.html" if target else query_page


@pytest.fixture
def build(data_dir, output_dir):
    """Run a build with a fixed clock."""
    return SiteBuilder(_config(data_dir, output_dir), clock=fixed_clock()).run()


# ============================================================================
# Successful build
# ============================================================================


class TestSiteBuild:
    """Test a build over a local data directory."""

    def test_result_totals(self, build):
        """Test aggregate counts."""
        assert isinstance(build, BuildResult)
        assert build.total_listings == 4
        assert build.total_pages == 4
        assert build.feeds_written == 8
        assert build.total_errors == 0
        assert build.had_errors is False
        assert build.started_at == FIXED_NOW
        assert len(build.build_id) == 32

    def test_detail_pages_written(self, build, output_dir):
        """Test one directory-form page per listing."""
        page = output_dir / "jobs" / "sde-acme" / "index.html"
        assert page.is_file()
        html = page.read_text(encoding="utf-8")
        assert "Build payment services." in html
        assert 'rel="canonical"' in html
        assert (output_dir / "projects" / "chatbot" / "index.html").is_file()

    def test_missing_slug_and_id_completed(self, build, output_dir):
        """Test a listing without slug gets one derived from its title."""
        stats = build.stats_for("jobs")
        assert stats.slugged_count == 1
        assert (output_dir / "jobs" / "data-analyst" / "index.html").is_file()

    def test_feed_pages_written(self, build, output_dir):
        """Test home, all-opportunities and category feed pages."""
        for relative in ("index.html", "opportunities/index.html", "jobs/index.html", "hackathons/index.html"):
            assert (output_dir / relative).is_file(), relative

        home = (output_dir / "index.html").read_text(encoding="utf-8")
        assert "<title>Student Opportunities | StudentTechProjects</title>" in home
        assert 'href="/jobs/sde-acme/"' in home

    def test_missing_category_is_not_an_error(self, build, output_dir):
        """Test an absent hackathons file yields an empty feed page."""
        stats = build.stats_for("hackathons")
        assert stats.missing is True
        assert stats.had_errors is False
        assert "No opportunities found" in (output_dir / "hackathons" / "index.html").read_text(encoding="utf-8")

    def test_home_feed_payload(self, build, output_dir):
        """Test the home payload counts and timestamp."""
        payload = json.loads((output_dir / HOME_FEED_FILE).read_text(encoding="utf-8"))
        assert payload["counts"] == {"jobs": 2, "internships": 1, "hackathons": 0, "projects": 1}
        assert payload["updatedAt"] == "2026-02-25T00:00:00Z"
        assert payload["latest"]["jobs"][0]["slug"] == "sde-acme"

    def test_search_index(self, build, output_dir):
        """Test the search index lists every listing with its link."""
        records = json.loads((output_dir / SEARCH_INDEX_FILE).read_text(encoding="utf-8"))
        assert len(records) == 4
        assert records[0]["href"] == "/jobs/sde-acme/"
        assert all(record["haystack"] for record in records)

    def test_files_recorded(self, build, output_dir):
        """Test every written file is listed once."""
        assert build.query_page_written is True
        assert len(build.files) == len(set(build.files)) == build.total_pages + build.feeds_written + 1
        assert output_dir / HOME_FEED_FILE in build.files
        assert output_dir / QUERY_PAGE in build.files


# ============================================================================
# Degraded and alternative builds
# ============================================================================


class TestDegradedBuild:
    """Test builds with failing data."""

    def test_failed_fetch_uses_samples(self, data_dir, output_dir):
        """Test a failed category shows its sample and marks the build."""
        config = _config(data_dir, output_dir)
        result = SiteBuilder(config, source=FlakySource(data_dir), clock=fixed_clock()).run()

        stats = result.stats_for("jobs")
        assert stats.fetch_failed is True
        assert stats.error_message == "jobs unavailable"
        assert result.had_errors is True
        assert result.total_errors == 1

        jobs_feed = (output_dir / "jobs" / "index.html").read_text(encoding="utf-8")
        assert "Sample Software Engineer Role" in jobs_feed
        assert not (output_dir / "jobs" / "sde-acme").exists()

    def test_query_links(self, data_dir, output_dir):
        """Test the query path style in feeds and the search index."""
        config = _config(data_dir, output_dir, path_style="query")
        SiteBuilder(config, clock=fixed_clock()).run()

        home = (output_dir / "index.html").read_text(encoding="utf-8")
        assert 'href="/opportunity.html?category=jobs&amp;slug=sde-acme"' in home
        records = json.loads((output_dir / SEARCH_INDEX_FILE).read_text(encoding="utf-8"))
        assert records[0]["href"] == "/opportunity.html?category=jobs&slug=sde-acme"


# ============================================================================
# Served links
# ============================================================================


class TestServedLinks:
    """Test every detail link in the built site reaches a written page."""

    @pytest.mark.parametrize("path_style", ["directory", "query"])
    def test_every_link_reaches_a_detail_page(self, data_dir, output_dir, path_style):
        """Test links in both path styles lead to a written detail page."""
        SiteBuilder(_config(data_dir, output_dir, path_style=path_style), clock=fixed_clock()).run()

        hrefs = _detail_hrefs(output_dir)
        assert len(hrefs) == 4
        for href in hrefs:
            target = _served_file(output_dir, href)
            assert target.is_file(), href
            assert target.name == "index.html", href

    def test_query_page_lists_built_pages(self, build, output_dir):
        """Test the query page maps category and slug onto directory pages."""
        query_page = (output_dir / QUERY_PAGE).read_text(encoding="utf-8")
        served = json.loads(SERVED_PATTERN.search(query_page).group(1))

        assert served["jobs"] == {"data-analyst": "/jobs/data-analyst/", "sde-acme": "/jobs/sde-acme/"}
        assert served["hackathons"] == {}
        assert "Content not found for this page." in query_page

    def test_sample_links_reach_query_page(self, data_dir, output_dir):
        """Test sample listings shown after a failed fetch link to the not-found page."""
        config = _config(data_dir, output_dir)
        SiteBuilder(config, source=FlakySource(data_dir), clock=fixed_clock()).run()

        jobs_feed = html.unescape((output_dir / "jobs" / "index.html").read_text(encoding="utf-8"))
        assert "/opportunity.html?category=jobs&slug=sample-job" in jobs_feed
        assert _served_file(output_dir, "/opportunity.html?category=jobs&slug=sample-job") == output_dir / QUERY_PAGE
        assert (output_dir / QUERY_PAGE).is_file()


# ============================================================================
# Helpers and models
# ============================================================================


class TestCompleteIdentity:
    """Test slug and id completion."""

    def test_untouched_when_complete(self):
        """Test complete listings are returned unchanged."""
        listings = [Listing.model_validate({"id": 1, "slug": "a", "title": "A"})]
        assert complete_identity(listings) is listings

    def test_slugs_avoid_existing(self):
        """Test new slugs never collide with slugs in the category."""
        listings = [
            Listing.model_validate({"id": 4, "slug": "data-analyst", "title": "Data Analyst"}),
            Listing.model_validate({"title": "Data Analyst"}),
            Listing.model_validate({"title": "Data Analyst"}),
        ]
        completed = complete_identity(listings)
        assert [listing.slug for listing in completed] == ["data-analyst", "data-analyst-2", "data-analyst-3"]
        assert [listing.id for listing in completed] == [4, 5, 6]


def test_build_result_aggregates():
    """Test BuildResult computes totals from category stats."""
    result = BuildResult(
        build_id="b-1",
        started_at=FIXED_NOW,
        finished_at=FIXED_NOW,
        category_stats=[
            CategoryBuildStats(category="jobs", loaded_count=3, pages_written=2, page_errors=1),
            CategoryBuildStats(category="projects", loaded_count=1, pages_written=1, fetch_failed=True),
        ],
    )
    assert result.total_listings == 4
    assert result.total_pages == 3
    assert result.total_errors == 2
    assert result.had_errors is True
    assert result.duration_seconds == 0.0
    assert result.stats_for("hackathons") is None
