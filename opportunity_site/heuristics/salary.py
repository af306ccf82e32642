"""Salary text parsing into a structured amount range."""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Pattern, Tuple

from opportunity_site.logging import get_logger

logger = get_logger(__name__, component="heuristics")

_NUMBER = r"\d[\d,]*(?:\.\d+)?"

# "3-5", "3 to 5", "50k-60k", "$90,000 - $120,000" or a single "50"
_AMOUNT_RANGE = re.compile(
    rf"({_NUMBER})\s*k?\s*(?:(?:-|–|—|to)\s*[₹$]?\s*({_NUMBER}))?",
    re.IGNORECASE,
)

# (pattern, currency code); first match wins
CURRENCY_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"₹|(?<![a-z])inr(?![a-z])", re.IGNORECASE), "INR"),
    (re.compile(r"\$"), "USD"),
]

# (pattern, multiplier); first match wins
MULTIPLIER_RULES: List[Tuple[Pattern[str], int]] = [
    (re.compile(r"\d\s*k\b", re.IGNORECASE), 1_000),
    (re.compile(r"(?<![a-z])(?:crores?|cr)\b", re.IGNORECASE), 10_000_000),
    (re.compile(r"(?<![a-z])(?:lakhs?|lacs?|lpa)\b", re.IGNORECASE), 100_000),
]

_MONTHLY = re.compile(r"month", re.IGNORECASE)


@dataclass(frozen=True)
class SalaryRange:
    """A parsed salary range.

    Attributes:
        currency: ISO currency code (INR or USD)
        min_value: Lower bound in whole currency units
        max_value: Upper bound in whole currency units
        unit_text: Pay period, MONTH or YEAR
    """

    currency: str
    min_value: int
    max_value: int
    unit_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "minValue": self.min_value,
            "maxValue": self.max_value,
            "unitText": self.unit_text,
        }

    def to_schema(self) -> Dict[str, Any]:
        """schema.org ``MonetaryAmount`` block for a JobPosting ``baseSalary``."""
        return {
            "@type": "MonetaryAmount",
            "currency": self.currency,
            "value": {
                "@type": "QuantitativeValue",
                "minValue": self.min_value,
                "maxValue": self.max_value,
                "unitText": self.unit_text,
            },
        }


def _first_rule(text: str, rules: List[Tuple[Pattern[str], Any]], default: Any) -> Any:
    for pattern, result in rules:
        if pattern.search(text):
            return result
    return default


def _to_decimal(raw: str) -> Optional[Decimal]:
    try:
        return Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None


def detect_currency(text: str) -> Optional[str]:
    """Currency code signalled by the text, or None."""
    return _first_rule(text, CURRENCY_RULES, None)


def detect_multiplier(text: str) -> int:
    """Magnitude implied by units such as "k", "LPA" or "crore" (1 when absent)."""
    return _first_rule(text, MULTIPLIER_RULES, 1)


def parse_salary(value: Any) -> Optional[SalaryRange]:
    """Parse free-text salary into a SalaryRange.

    A currency signal is mandatory: "50000" alone yields None.

    Args:
        value: Raw salary text (e.g. "₹3-5 LPA", "$50k/month")

    Returns:
        SalaryRange, or None when there is no number or no currency

    Example:
        >>> parse_salary("₹3-5 LPA").to_dict()
        {'currency': 'INR', 'minValue': 300000, 'maxValue': 500000, 'unitText': 'YEAR'}
    """
    text = str(value or "").strip()
    if not text:
        return None

    match = _AMOUNT_RANGE.search(text)
    if not match:
        return None

    currency = detect_currency(text)
    if currency is None:
        logger.debug(
            "Salary has no currency signal",
            extra={"event": "heuristics.salary.no_currency", "raw_value": text},
        )
        return None

    first = _to_decimal(match.group(1))
    second = _to_decimal(match.group(2)) if match.group(2) else first
    if first is None or second is None:
        return None

    multiplier = Decimal(detect_multiplier(text))
    low, high = sorted((first, second))

    def scale(amount: Decimal) -> int:
        return int((amount * multiplier).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return SalaryRange(
        currency=currency,
        min_value=scale(low),
        max_value=scale(high),
        unit_text="MONTH" if _MONTHLY.search(text) else "YEAR",
    )
