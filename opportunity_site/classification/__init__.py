"""Project domain classification."""

from .engine import DomainClassifier, classify_project
from .models import ClassificationResult, DomainProfile
from .profiles import ADVANCED_BOOST, DOMAIN_PROFILES, FALLBACK_PROFILE

__all__ = [
    "DomainClassifier",
    "DomainProfile",
    "ClassificationResult",
    "classify_project",
    "DOMAIN_PROFILES",
    "FALLBACK_PROFILE",
    "ADVANCED_BOOST",
]
