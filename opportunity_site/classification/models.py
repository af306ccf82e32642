"""Data models for project domain classification."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DomainProfile:
    """A project domain and the defaults it implies.

    Attributes:
        name: Domain label shown on project pages
        keywords: Normalized keyword (or phrase) to weight
        difficulty: Default difficulty label
        duration: Default duration label
        team_size: Default team size label
    """

    name: str
    keywords: Tuple[Tuple[str, int], ...]
    difficulty: str = "Intermediate"
    duration: str = "8-12 weeks"
    team_size: str = "2-4 members"

    def score(self, normalized_text: str) -> Tuple[int, List[str]]:
        """Sum the weights of keywords found in ``normalized_text``.

        Args:
            normalized_text: Output of ``normalize``

        Returns:
            Tuple of (score, matched keywords in declaration order)
        """
        total = 0
        matched: List[str] = []
        for keyword, weight in self.keywords:
            if keyword in normalized_text:
                total += weight
                matched.append(keyword)
        return total, matched


@dataclass
class ClassificationResult:
    """Outcome of classifying one project.

    Attributes:
        domain: Winning profile name (or the fallback profile's)
        difficulty: Resolved difficulty
        duration: Resolved duration
        team_size: Resolved team size
        score: Winning profile score (0 for the fallback)
        matched_keywords: Keywords of the winning profile found in the text
        boosted: Whether the advanced overlay was applied
        scores: Score of every profile, keyed by name
        explicit_fields: Fields taken from the listing instead of inference
    """

    domain: str
    difficulty: str
    duration: str
    team_size: str
    score: int = 0
    matched_keywords: List[str] = field(default_factory=list)
    boosted: bool = False
    scores: Dict[str, int] = field(default_factory=dict)
    explicit_fields: List[str] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return self.score == 0

    def to_fields(self) -> Dict[str, str]:
        """Listing fields in camelCase (domain, difficulty, duration, teamSize)."""
        return {
            "domain": self.domain,
            "difficulty": self.difficulty,
            "duration": self.duration,
            "teamSize": self.team_size,
        }

    def summary(self) -> Optional[str]:
        """One-line explanation for logs; None for the fallback profile."""
        if self.is_fallback:
            return None
        keywords = ", ".join(self.matched_keywords)
        suffix = " (advanced)" if self.boosted else ""
        return f"{self.domain} score={self.score} via {keywords}{suffix}"
