"""Content merging and generated detail content."""

from .merge import fill_missing, is_empty_value, merge
from .templates import build_project_template, enrich_project_detail, generated_excerpt

__all__ = [
    "merge",
    "fill_missing",
    "is_empty_value",
    "generated_excerpt",
    "build_project_template",
    "enrich_project_detail",
]
