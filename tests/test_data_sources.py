"""Unit tests for listing data sources and the repository."""

from unittest.mock import MagicMock, Mock

import pytest
import requests

from opportunity_site.config.models import DataConfig
from opportunity_site.data import (
    DataSourceError,
    DataSourceFormatError,
    DataSourceHTTPError,
    DataSourceNotFoundError,
    FileDataSource,
    HttpDataSource,
    ListingRepository,
    build_data_source,
)
from opportunity_site.domain.models import Category
from tests.helpers import make_listing, write_data_dir


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with jobs and projects, and one detail record."""
    return write_data_dir(
        tmp_path / "data",
        {
            Category.JOBS: [
                make_listing(Category.JOBS, id=1, slug="sde-acme"),
                make_listing(Category.JOBS, id=2, slug="qa-acme", title="QA Engineer"),
            ],
            Category.PROJECTS: [make_listing(Category.PROJECTS, id=1, slug="attendance")],
        },
        details={"sde-acme": {"jobDescription": "Build services."}},
    )


@pytest.fixture
def mock_session():
    """Mock requests session."""
    session = MagicMock()
    session.headers = {}
    return session


def _response(status_code=200, payload=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


# ============================================================================
# FileDataSource
# ============================================================================


class TestFileDataSource:
    """Test reading listing files from disk."""

    def test_fetch_category(self, data_dir):
        """Test reading a category array."""
        items = FileDataSource(data_dir).fetch_category(Category.JOBS)
        assert [item["slug"] for item in items] == ["sde-acme", "qa-acme"]

    def test_missing_category_file(self, data_dir):
        """Test a missing file raises DataSourceNotFoundError."""
        with pytest.raises(DataSourceNotFoundError):
            FileDataSource(data_dir).fetch_category(Category.HACKATHONS)

    def test_invalid_json(self, data_dir):
        """Test corrupt JSON raises DataSourceFormatError."""
        (data_dir / "internships.json").write_text("[{not json", encoding="utf-8")
        with pytest.raises(DataSourceFormatError):
            FileDataSource(data_dir).fetch_category(Category.INTERNSHIPS)

    def test_non_array_payload(self, data_dir):
        """Test an object where an array is expected."""
        (data_dir / "internships.json").write_text('{"items": []}', encoding="utf-8")
        with pytest.raises(DataSourceFormatError):
            FileDataSource(data_dir).fetch_category(Category.INTERNSHIPS)

    def test_fetch_detail(self, data_dir):
        """Test reading a detail record from the content directory."""
        assert FileDataSource(data_dir).fetch_detail("sde-acme") == {"jobDescription": "Build services."}

    def test_unsafe_slug_rejected(self, data_dir):
        """Test path traversal slugs are treated as not found."""
        with pytest.raises(DataSourceNotFoundError):
            FileDataSource(data_dir).fetch_detail("../jobs")

    def test_describe(self, data_dir):
        """Test the source description used in logs."""
        assert FileDataSource(data_dir).describe() == f"file:{data_dir}"


# ============================================================================
# HttpDataSource
# ============================================================================


class TestHttpDataSource:
    """Test fetching listing files over HTTP."""

    def test_fetch_category(self, mock_session):
        """Test a successful category fetch."""
        mock_session.get.return_value = _response(payload=[{"slug": "a"}])
        source = HttpDataSource("https://data.example.com/", timeout=10, session=mock_session)

        assert source.fetch_category(Category.JOBS) == [{"slug": "a"}]
        mock_session.get.assert_called_once_with("https://data.example.com/jobs.json", timeout=10)

    def test_user_agent_header(self, mock_session):
        """Test the configured User-Agent is set on the session."""
        HttpDataSource("https://data.example.com", user_agent="Tester/1.0", session=mock_session)
        assert mock_session.headers["User-Agent"] == "Tester/1.0"

    def test_fetch_detail_url(self, mock_session):
        """Test detail records are read from the content path."""
        mock_session.get.return_value = _response(payload={"intro": "x"})
        source = HttpDataSource("https://data.example.com", session=mock_session)

        assert source.fetch_detail("sde-acme") == {"intro": "x"}
        assert mock_session.get.call_args[0][0] == "https://data.example.com/content/sde-acme.json"

    def test_404_is_not_found(self, mock_session):
        """Test HTTP 404 maps to DataSourceNotFoundError."""
        mock_session.get.return_value = _response(status_code=404, reason="Not Found")
        source = HttpDataSource("https://data.example.com", session=mock_session)

        with pytest.raises(DataSourceNotFoundError):
            source.fetch_category(Category.JOBS)

    def test_server_error(self, mock_session):
        """Test 5xx responses raise DataSourceHTTPError with the status."""
        mock_session.get.return_value = _response(status_code=503, reason="Service Unavailable")
        source = HttpDataSource("https://data.example.com", session=mock_session)

        with pytest.raises(DataSourceHTTPError) as exc_info:
            source.fetch_category(Category.JOBS)
        assert exc_info.value.status_code == 503

    def test_timeout(self, mock_session):
        """Test timeouts raise DataSourceHTTPError."""
        mock_session.get.side_effect = requests.exceptions.Timeout("slow")
        source = HttpDataSource("https://data.example.com", session=mock_session)

        with pytest.raises(DataSourceHTTPError) as exc_info:
            source.fetch_category(Category.JOBS)
        assert exc_info.value.status_code == 0

    def test_connection_error(self, mock_session):
        """Test connection failures raise DataSourceHTTPError."""
        mock_session.get.side_effect = requests.exceptions.ConnectionError("refused")
        source = HttpDataSource("https://data.example.com", session=mock_session)

        with pytest.raises(DataSourceHTTPError):
            source.fetch_category(Category.JOBS)

    def test_invalid_json_body(self, mock_session):
        """Test an undecodable body raises DataSourceFormatError."""
        mock_session.get.return_value = _response(payload=ValueError("bad json"))
        source = HttpDataSource("https://data.example.com", session=mock_session)

        with pytest.raises(DataSourceFormatError):
            source.fetch_category(Category.JOBS)


def test_build_data_source_prefers_http(tmp_path):
    """Test the HTTP source is chosen when a base URL is configured."""
    http_source = build_data_source(DataConfig(data_dir=tmp_path, base_url="https://data.example.com/"))
    file_source = build_data_source(DataConfig(data_dir=tmp_path))

    assert isinstance(http_source, HttpDataSource)
    assert http_source.base_url == "https://data.example.com"
    assert isinstance(file_source, FileDataSource)
    assert file_source.content_dir == tmp_path / "content"


# ============================================================================
# ListingRepository
# ============================================================================


class TestListingRepository:
    """Test validation and failure handling in the repository."""

    def test_load_category(self, data_dir):
        """Test a clean category load."""
        load = ListingRepository(FileDataSource(data_dir)).load_category(Category.JOBS)
        assert [listing.slug for listing in load.listings] == ["sde-acme", "qa-acme"]
        assert load.skipped == 0
        assert not load.failed and not load.missing

    def test_invalid_and_mismatched_records_skipped(self, tmp_path):
        """Test non-objects and wrong-type records are dropped."""
        data_dir = write_data_dir(tmp_path, {
            Category.JOBS: [
                make_listing(Category.JOBS, id=1, slug="ok"),
                "not an object",
                make_listing(Category.INTERNSHIPS, id=2, slug="wrong-type"),
            ],
        })
        load = ListingRepository(FileDataSource(data_dir)).load_category(Category.JOBS)
        assert [listing.slug for listing in load.listings] == ["ok"]
        assert load.skipped == 2

    def test_missing_file_is_missing_not_failed(self, data_dir):
        """Test an absent category file degrades to an empty load."""
        load = ListingRepository(FileDataSource(data_dir)).load_category(Category.HACKATHONS)
        assert load.listings == []
        assert load.missing is True
        assert load.failed is False

    def test_http_failure_is_failed(self):
        """Test fetch errors mark the category failed."""
        source = Mock()
        source.fetch_category.side_effect = DataSourceHTTPError("boom", location="u", status_code=500)
        load = ListingRepository(source).load_category(Category.JOBS)
        assert load.failed is True
        assert load.error_message == "boom"

    def test_unexpected_error_is_contained(self):
        """Test unexpected exceptions never escape."""
        source = Mock()
        source.fetch_category.side_effect = RuntimeError("surprise")
        load = ListingRepository(source).load_category(Category.JOBS)
        assert load.failed is True

    def test_load_all(self, data_dir):
        """Test loading every category concurrently."""
        listing_set = ListingRepository(FileDataSource(data_dir), max_workers=2).load_all()
        assert set(listing_set.loads) == set(Category)
        assert listing_set.counts() == {"jobs": 2, "internships": 0, "hackathons": 0, "projects": 1}
        assert [listing.slug for listing in listing_set.listings()] == ["sde-acme", "qa-acme", "attendance"]
        assert listing_set.failed_categories == set()
        assert listing_set.all_failed is False

    def test_all_failed(self):
        """Test all_failed when every fetch fails."""
        source = Mock()
        source.fetch_category.side_effect = DataSourceHTTPError("down")
        listing_set = ListingRepository(source).load_all()
        assert listing_set.all_failed is True
        assert listing_set.failed_categories == set(Category)

    def test_find(self, data_dir):
        """Test lookup by slug within a category."""
        repository = ListingRepository(FileDataSource(data_dir))
        assert repository.find(Category.JOBS, "qa-acme").title == "QA Engineer"
        assert repository.find(Category.JOBS, "nope") is None

    def test_load_detail(self, data_dir):
        """Test detail records, with {} for absent or unreadable ones."""
        (data_dir / "content" / "broken.json").write_text("{", encoding="utf-8")
        repository = ListingRepository(FileDataSource(data_dir))

        assert repository.load_detail("sde-acme") == {"jobDescription": "Build services."}
        assert repository.load_detail("qa-acme") == {}
        assert repository.load_detail("broken") == {}

    def test_source_errors_share_base(self):
        """Test every source error shares one base class."""
        assert issubclass(DataSourceFormatError, DataSourceError)
        assert issubclass(DataSourceHTTPError, DataSourceError)
        assert issubclass(DataSourceNotFoundError, DataSourceError)
