"""Free-text date parsing.

Listing data carries dates in several shapes: ISO dates and timestamps,
the ``DD-MM-YYYY HH:mm[:ss] AM/PM`` format emitted by one import feed, and
natural language ("March 5, 2025", "5 Mar 2025"). Every function here is
total: anything that cannot be read as a date yields None, and display
helpers turn that into "Not specified".
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from opportunity_site.domain.models import NOT_SPECIFIED
from opportunity_site.logging import get_logger
from opportunity_site.utils.timestamps import ensure_utc, parse_iso_datetime, utc_now

logger = get_logger(__name__, component="heuristics")

_PLACEHOLDER_DATE = re.compile(r"^(asap|tbd|n/a|na|not specified)$", re.IGNORECASE)

_IMPORT_FEED_FORMAT = re.compile(
    r"^(\d{1,2})-(\d{1,2})-(\d{4})\s+(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AP]M)$",
    re.IGNORECASE,
)

_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

# Two defaults that differ in year, month and day: text that parses to
# different results under them is missing one of those fields.
_DEFAULT_PAIR = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def is_placeholder_date(text: Any) -> bool:
    """True for tokens such as "ASAP" or "TBD" that stand in for a date."""
    return bool(_PLACEHOLDER_DATE.match(str(text or "").strip()))


def _parse_import_feed_format(text: str) -> Optional[datetime]:
    match = _IMPORT_FEED_FORMAT.match(text)
    if not match:
        return None

    day, month, year, hour, minute, second, meridiem = match.groups()
    hour_value = int(hour) % 12
    if meridiem.upper() == "PM":
        hour_value += 12

    try:
        return datetime(
            int(year), int(month), int(day),
            hour_value, int(minute), int(second or 0),
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a date-like value into a UTC datetime.

    Tried in order:
    1. datetime/date objects (dates become UTC midnight)
    2. ISO 8601 dates and timestamps
    3. ``DD-MM-YYYY HH:mm[:ss] AM/PM`` (interpreted as UTC)
    4. Natural language via dateutil, only when the text names year,
       month and day ("March 5" or "2025" alone would otherwise borrow
       fields from a default date)

    Args:
        value: Raw value from listing or detail data

    Returns:
        Timezone-aware UTC datetime, or None for blanks, placeholder tokens
        (asap, tbd, n/a, na, not specified), unparseable text and text
        missing a year, month or day
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()
    if not text or is_placeholder_date(text):
        return None

    if _ISO_DATE_PREFIX.match(text):
        parsed = parse_iso_datetime(text)
        if parsed is not None:
            return parsed

    parsed = _parse_import_feed_format(text)
    if parsed is not None:
        return parsed

    try:
        candidates = {date_parser.parse(text, default=default) for default in _DEFAULT_PAIR}
    except (ValueError, OverflowError) as e:
        logger.debug(
            f"Unparseable date: {text!r}",
            extra={"event": "heuristics.date.unparseable", "raw_value": text, "error": str(e)},
        )
        return None

    if len(candidates) > 1:
        logger.debug(
            f"Incomplete date: {text!r}",
            extra={"event": "heuristics.date.incomplete", "raw_value": text},
        )
        return None
    return ensure_utc(candidates.pop())


def parse_date(value: Any) -> Optional[date]:
    """Calendar date of ``parse_datetime(value)``, or None."""
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def to_iso_date(value: Any) -> Optional[str]:
    """Format as ``YYYY-MM-DD`` or return None when unparseable."""
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else None


def to_iso_datetime_end_of_day(value: Any) -> Optional[str]:
    """Format as ``YYYY-MM-DDT23:59:59Z`` (deadline semantics) or None."""
    iso_date = to_iso_date(value)
    return f"{iso_date}T23:59:59Z" if iso_date else None


def format_display_date(value: Any) -> str:
    """Format as "March 5, 2025", falling back to "Not specified"."""
    parsed = parse_date(value)
    if parsed is None:
        return NOT_SPECIFIED
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def is_recent(value: Any, now: Optional[datetime] = None, days: int = 14) -> bool:
    """True when the date lies within ``days`` before ``now`` (future dates count)."""
    parsed = parse_datetime(value)
    if parsed is None:
        return False
    reference = ensure_utc(now) if now else utc_now()
    return reference - parsed <= timedelta(days=days)
