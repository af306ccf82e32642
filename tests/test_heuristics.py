"""Unit tests for date, salary and location heuristics."""

from datetime import date, datetime, timezone

import pytest

from opportunity_site.heuristics.dates import (
    format_display_date,
    is_placeholder_date,
    is_recent,
    parse_date,
    parse_datetime,
    to_iso_date,
    to_iso_datetime_end_of_day,
)
from opportunity_site.heuristics.location import parse_location
from opportunity_site.heuristics.salary import SalaryRange, detect_multiplier, parse_salary


# ============================================================================
# Dates
# ============================================================================


class TestDateParsing:
    """Test free-text date parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2025-03-05", date(2025, 3, 5)),
            ("2025-03-05T18:30:00Z", date(2025, 3, 5)),
            ("March 5, 2025", date(2025, 3, 5)),
            ("5 Mar 2025", date(2025, 3, 5)),
            ("05-03-2025 10:15 AM", date(2025, 3, 5)),
        ],
    )
    def test_parse_date_formats(self, raw, expected):
        """Test that every supported shape resolves to the same calendar date."""
        assert parse_date(raw) == expected

    @pytest.mark.parametrize("raw", ["March 5", "5th", "2", "2025", "March 2025"])
    def test_incomplete_dates_rejected(self, raw):
        """Test text missing a year, month or day is not completed from today's date."""
        assert parse_datetime(raw) is None
        assert format_display_date(raw) == "Not specified"

    def test_import_feed_format_pm(self):
        """Test the DD-MM-YYYY hh:mm AM/PM format, interpreted as UTC."""
        assert parse_datetime("05-03-2025 02:30:15 PM") == datetime(
            2025, 3, 5, 14, 30, 15, tzinfo=timezone.utc
        )

    def test_import_feed_format_midnight(self):
        """Test that 12 AM is hour zero."""
        assert parse_datetime("05-03-2025 12:00 AM") == datetime(2025, 3, 5, 0, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["ASAP", "tbd", "N/A", "na", "Not specified", "", None, "garbage text"])
    def test_unparseable_values(self, raw):
        """Test that placeholders and junk yield None."""
        assert parse_datetime(raw) is None

    def test_placeholder_detection(self):
        """Test placeholder tokens are recognized case-insensitively."""
        assert is_placeholder_date(" ASAP ")
        assert not is_placeholder_date("2025-01-01")

    def test_date_objects(self):
        """Test that date and datetime objects are accepted."""
        assert parse_datetime(date(2025, 1, 2)) == datetime(2025, 1, 2, tzinfo=timezone.utc)
        assert parse_datetime(datetime(2025, 1, 2, 3, 4)) == datetime(2025, 1, 2, 3, 4, tzinfo=timezone.utc)


class TestDateFormatting:
    """Test date output helpers."""

    def test_to_iso_date(self):
        """Test ISO calendar date output."""
        assert to_iso_date("March 5, 2025") == "2025-03-05"
        assert to_iso_date("ASAP") is None

    def test_end_of_day(self):
        """Test deadline timestamps end at 23:59:59Z."""
        assert to_iso_datetime_end_of_day("2025-03-05") == "2025-03-05T23:59:59Z"
        assert to_iso_datetime_end_of_day("TBD") is None

    def test_display_date(self):
        """Test display format without zero padding."""
        assert format_display_date("2025-03-05") == "March 5, 2025"

    def test_display_date_fallback(self):
        """Test unparseable dates display as Not specified."""
        assert format_display_date("whenever") == "Not specified"
        assert format_display_date(None) == "Not specified"

    def test_is_recent(self):
        """Test the recency window."""
        now = datetime(2026, 3, 1, tzinfo=timezone.utc)
        assert is_recent("2026-02-20", now=now, days=14)
        assert not is_recent("2026-01-01", now=now, days=14)
        assert not is_recent("ASAP", now=now)


# ============================================================================
# Salary
# ============================================================================


class TestSalaryParsing:
    """Test salary text parsing."""

    def test_inr_lpa_range(self):
        """Test lakh-per-annum ranges."""
        assert parse_salary("₹3-5 LPA") == SalaryRange("INR", 300000, 500000, "YEAR")

    def test_usd_k_per_month(self):
        """Test k multiplier and monthly unit."""
        assert parse_salary("$50k/month") == SalaryRange("USD", 50000, 50000, "MONTH")

    def test_usd_plain_range(self):
        """Test comma-grouped numbers with a currency on each bound."""
        assert parse_salary("$90,000 - $120,000") == SalaryRange("USD", 90000, 120000, "YEAR")

    def test_inr_code_and_crore(self):
        """Test INR code detection and crore multiplier."""
        assert parse_salary("INR 1.2 crore") == SalaryRange("INR", 12000000, 12000000, "YEAR")

    def test_range_with_to(self):
        """Test ranges written with 'to'."""
        assert parse_salary("₹ 20000 to 30000 per month") == SalaryRange("INR", 20000, 30000, "MONTH")

    def test_bounds_are_ordered(self):
        """Test that a reversed range is reordered."""
        parsed = parse_salary("₹8-6 LPA")
        assert (parsed.min_value, parsed.max_value) == (600000, 800000)

    @pytest.mark.parametrize("raw", ["Competitive", "50000", "", None, "As per industry standards"])
    def test_unparseable(self, raw):
        """Test that text without a number or a currency yields None."""
        assert parse_salary(raw) is None

    def test_multiplier_precedence(self):
        """Test that k is checked before crore and lakh."""
        assert detect_multiplier("5k lakh") == 1000
        assert detect_multiplier("2 cr") == 10_000_000
        assert detect_multiplier("4 lakhs") == 100_000
        assert detect_multiplier("4000") == 1

    def test_to_schema(self):
        """Test the schema.org MonetaryAmount shape."""
        schema = parse_salary("₹3-5 LPA").to_schema()
        assert schema == {
            "@type": "MonetaryAmount",
            "currency": "INR",
            "value": {
                "@type": "QuantitativeValue",
                "minValue": 300000,
                "maxValue": 500000,
                "unitText": "YEAR",
            },
        }


# ============================================================================
# Location
# ============================================================================


class TestLocationParsing:
    """Test location text parsing."""

    def test_remote_worldwide(self):
        """Test remote detection."""
        info = parse_location("Remote, Worldwide")
        assert info.remote is True
        assert info.locality == "Remote"
        assert info.region == "Worldwide"

    def test_indian_address(self):
        """Test locality, region and postal code extraction."""
        info = parse_location("Bengaluru, Karnataka, 560001")
        assert info.remote is False
        assert info.locality == "Bengaluru"
        assert info.region == "Karnataka"
        assert info.postal_code == "560001"
        assert info.country_code == "IN"
        assert info.country_name == "India"

    def test_us_location(self):
        """Test country rule matching."""
        info = parse_location("Austin, TX, USA")
        assert info.country_code == "US"
        assert info.country_name == "United States"

    def test_country_word_inside_other_word_ignored(self):
        """Test that short country codes only match as whole words."""
        assert parse_location("Chicago").country_code == "IN"

    def test_single_part(self):
        """Test text without commas becomes the locality."""
        info = parse_location("Pune")
        assert info.locality == "Pune"
        assert info.region is None
        assert info.postal_code is None

    def test_empty(self):
        """Test empty input defaults to a non-remote India location."""
        info = parse_location("")
        assert info.remote is False
        assert info.locality is None
        assert info.country_code == "IN"

    def test_postal_address_drops_unknown_parts(self):
        """Test that None parts are left out of the PostalAddress."""
        address = parse_location("Pune").to_postal_address()
        assert address == {
            "@type": "PostalAddress",
            "streetAddress": "Pune",
            "addressLocality": "Pune",
            "addressCountry": "IN",
        }
