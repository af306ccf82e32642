"""Right-biased merge of listing and detail records.

An override value wins only when it is non-empty. None, "" and [] never
replace a base value, so merging the same override twice gives the same
result as merging it once.
"""

from typing import Any, Dict, Mapping, Optional


def is_empty_value(value: Any) -> bool:
    """True for values that must not win a merge: None, "" and empty lists."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def merge(base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge ``override`` onto a copy of ``base``.

    Args:
        base: Record providing defaults (left untouched)
        override: Record whose non-empty values replace base values

    Returns:
        New dict. A key whose override value is empty keeps the base value,
        or stays absent when the base lacks it too.

    Example:
        >>> merge({"title": "A", "tips": ["x"]}, {"title": "", "tips": ["y"], "faq": []})
        {'title': 'A', 'tips': ['y']}
    """
    merged: Dict[str, Any] = dict(base or {})
    for key, value in (override or {}).items():
        if not is_empty_value(value):
            merged[key] = value
    return merged


def fill_missing(existing: Optional[Mapping[str, Any]], template: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill the empty or absent fields of ``existing`` from ``template``.

    Existing non-empty values are never overwritten. Keys that are empty in
    both stay as they were in ``existing``.
    """
    merged = merge(template, existing)
    for key, value in (existing or {}).items():
        if key not in merged:
            merged[key] = value
    return merged
