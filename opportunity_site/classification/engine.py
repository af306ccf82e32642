"""Keyword-weighted domain classifier for project listings.

The classifier:
1. Normalizes title and excerpt into one padded text
2. Scores every domain profile by summing the weights of keywords found
3. Picks the strictly highest score (earlier profile wins ties), or the
   fallback profile when nothing matched
4. Applies the advanced overlay when the text mentions advanced techniques
5. Lets explicit listing fields override every inferred value
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from opportunity_site.domain.models import Listing
from opportunity_site.logging import get_logger
from opportunity_site.utils.text import is_blank, normalize_join

from .models import ClassificationResult, DomainProfile
from .profiles import (
    ADVANCED_BOOST,
    ADVANCED_DIFFICULTY,
    ADVANCED_DURATION,
    ADVANCED_TEAM_SIZE,
    DOMAIN_PROFILES,
    FALLBACK_PROFILE,
)

logger = get_logger(__name__, component="classification")

# Listing field (camelCase) -> ClassificationResult attribute
_EXPLICIT_FIELDS = {
    "domain": "domain",
    "difficulty": "difficulty",
    "duration": "duration",
    "teamSize": "team_size",
}


class DomainClassifier:
    """Assigns a project to a domain profile.

    Deterministic: the same title and excerpt always produce the same result.
    """

    def __init__(
        self,
        profiles: Optional[Sequence[DomainProfile]] = None,
        fallback: DomainProfile = FALLBACK_PROFILE,
        logger_instance: Optional[logging.LoggerAdapter] = None,
    ):
        """Initialize DomainClassifier.

        Args:
            profiles: Ordered profiles (defaults to DOMAIN_PROFILES)
            fallback: Profile used when no keyword matches
            logger_instance: Optional logger (defaults to module logger)
        """
        self.profiles = list(profiles if profiles is not None else DOMAIN_PROFILES)
        self.fallback = fallback
        self.logger = logger_instance or logger

    def classify_text(self, title: Any, excerpt: Any = None) -> ClassificationResult:
        """Classify from free text alone.

        Args:
            title: Project title
            excerpt: Project summary

        Returns:
            ClassificationResult with inferred fields
        """
        text = f" {normalize_join([title, excerpt])} "

        best = self.fallback
        best_score = 0
        best_matched: List[str] = []
        scores: Dict[str, int] = {}

        for profile in self.profiles:
            score, matched = profile.score(text)
            scores[profile.name] = score
            if score > best_score:
                best, best_score, best_matched = profile, score, matched

        result = ClassificationResult(
            domain=best.name,
            difficulty=best.difficulty,
            duration=best.duration,
            team_size=best.team_size,
            score=best_score,
            matched_keywords=best_matched,
            scores=scores,
        )

        if ADVANCED_BOOST.search(text):
            result.difficulty = ADVANCED_DIFFICULTY
            result.duration = ADVANCED_DURATION
            result.team_size = ADVANCED_TEAM_SIZE
            result.boosted = True

        return result

    def classify(self, listing: Any) -> ClassificationResult:
        """Classify a project listing, keeping its explicit fields.

        Args:
            listing: Listing model or camelCase mapping

        Returns:
            ClassificationResult where non-blank listing fields replace inference
        """
        record = listing.to_record() if isinstance(listing, Listing) else dict(listing or {})
        result = self.classify_text(record.get("title"), record.get("excerpt"))

        for key, attribute in _EXPLICIT_FIELDS.items():
            value = record.get(key)
            if not is_blank(value):
                setattr(result, attribute, str(value).strip())
                result.explicit_fields.append(key)

        if result.is_fallback:
            self.logger.debug(
                f"No domain keywords for project: {record.get('slug') or record.get('title')}",
                extra={
                    "event": "classification.profile.fallback",
                    "slug": record.get("slug"),
                    "domain": result.domain,
                    "boosted": result.boosted,
                },
            )
        else:
            self.logger.debug(
                f"Project classified: {result.summary()}",
                extra={
                    "event": "classification.profile.selected",
                    "slug": record.get("slug"),
                    "domain": result.domain,
                    "score": result.score,
                    "matched_keywords": result.matched_keywords,
                    "boosted": result.boosted,
                    "explicit_fields": result.explicit_fields,
                },
            )

        return result

    def enrich(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``record`` with domain, difficulty, duration and teamSize set."""
        enriched = dict(record)
        enriched.update(self.classify(record).to_fields())
        return enriched


_default_classifier = DomainClassifier()


def classify_project(listing: Any) -> ClassificationResult:
    """Classify with the default profile table."""
    return _default_classifier.classify(listing)
