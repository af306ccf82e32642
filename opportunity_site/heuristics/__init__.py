"""Total parsers for free-text date, salary and location fields."""

from .dates import (
    format_display_date,
    is_placeholder_date,
    is_recent,
    parse_date,
    parse_datetime,
    to_iso_date,
    to_iso_datetime_end_of_day,
)
from .location import COUNTRY_RULES, LocationInfo, match_country, parse_location
from .salary import (
    CURRENCY_RULES,
    MULTIPLIER_RULES,
    SalaryRange,
    detect_currency,
    detect_multiplier,
    parse_salary,
)

__all__ = [
    # Dates
    "parse_datetime",
    "parse_date",
    "to_iso_date",
    "to_iso_datetime_end_of_day",
    "format_display_date",
    "is_placeholder_date",
    "is_recent",
    # Salary
    "SalaryRange",
    "parse_salary",
    "detect_currency",
    "detect_multiplier",
    "CURRENCY_RULES",
    "MULTIPLIER_RULES",
    # Location
    "LocationInfo",
    "parse_location",
    "match_country",
    "COUNTRY_RULES",
]
