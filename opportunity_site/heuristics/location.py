"""Free-text location parsing."""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern, Tuple

_REMOTE = re.compile(r"remote|worldwide|anywhere|global", re.IGNORECASE)
_POSTAL_CODE = re.compile(r"\b(\d{5,6})\b")

DEFAULT_COUNTRY: Tuple[str, str] = ("IN", "India")

# (pattern on lowercased text, (country code, country name)); first match wins
COUNTRY_RULES: List[Tuple[Pattern[str], Tuple[str, str]]] = [
    (re.compile(r"\busa\b|\bunited states\b|\bus\b"), ("US", "United States")),
    (re.compile(r"\bcanada\b|\bca\b"), ("CA", "Canada")),
    (re.compile(r"\bgermany\b|\bde\b"), ("DE", "Germany")),
    (re.compile(r"\beurope\b"), ("EU", "Europe")),
    (re.compile(r"\bphilippines\b"), ("PH", "Philippines")),
    (re.compile(r"\bsouth africa\b"), ("ZA", "South Africa")),
    (re.compile(r"\bjamaica\b"), ("JM", "Jamaica")),
    (re.compile(r"\bisrael\b"), ("IL", "Israel")),
    (re.compile(r"\bindia\b|\bin\b"), ("IN", "India")),
]


@dataclass(frozen=True)
class LocationInfo:
    """Structured view of a location string.

    Attributes:
        remote: Whether the text advertises remote work
        locality: First comma-separated part (the whole text when there is no comma)
        region: Second comma-separated part, if any
        postal_code: 5 or 6 digit postal code, if any
        street_address: The original text
        country_code: Two-letter code (EU for Europe)
        country_name: Display name of the country
    """

    remote: bool
    locality: Optional[str]
    region: Optional[str]
    postal_code: Optional[str]
    street_address: Optional[str]
    country_code: str
    country_name: str

    def to_postal_address(self) -> Dict[str, Any]:
        """schema.org ``PostalAddress`` with unresolved parts left out."""
        address = {
            "@type": "PostalAddress",
            "streetAddress": self.street_address or self.locality,
            "addressLocality": self.locality,
            "addressRegion": self.region,
            "postalCode": self.postal_code,
            "addressCountry": self.country_code,
        }
        return {key: value for key, value in address.items() if value is not None}


def match_country(text: str) -> Tuple[str, str]:
    """Return (code, name) of the first country rule matching ``text``."""
    lowered = text.lower()
    for pattern, country in COUNTRY_RULES:
        if pattern.search(lowered):
            return country
    return DEFAULT_COUNTRY


def parse_location(value: Any) -> LocationInfo:
    """Parse a location string.

    Args:
        value: Raw location text (e.g. "Bengaluru, Karnataka, 560001")

    Returns:
        LocationInfo; empty input yields a non-remote India location with no parts
    """
    text = str(value or "").strip()
    if not text:
        code, name = DEFAULT_COUNTRY
        return LocationInfo(
            remote=False,
            locality=None,
            region=None,
            postal_code=None,
            street_address=None,
            country_code=code,
            country_name=name,
        )

    parts = [part.strip() for part in text.split(",") if part.strip()]
    postal = _POSTAL_CODE.search(text)
    code, name = match_country(text)

    return LocationInfo(
        remote=bool(_REMOTE.search(text)),
        locality=parts[0] if parts else text,
        region=parts[1] if len(parts) > 1 else None,
        postal_code=postal.group(1) if postal else None,
        street_address=text,
        country_code=code,
        country_name=name,
    )
