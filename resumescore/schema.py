from typing import Any, Dict, List, Tuple

from .normalize import is_ongoing, parse_date, parse_year
from .tables import KEYWORD_CATEGORIES

LIST_FIELDS = ["work", "skills", "education", "projects", "certifications"]
OPTIONAL_STR_FIELDS = ["name", "summary"]

WORK_REQUIRED_STR_FIELDS = ["company", "title"]
EDUCATION_REQUIRED_STR_FIELDS = ["degree", "institution"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_entries(data: Dict[str, Any], section: str, required: List[str], errors: List[str]) -> None:
    entries = data.get(section)
    if not isinstance(entries, list):
        return
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"{section}[{i}] must be an object")
            continue
        for f in required:
            if not _is_non_empty_str(entry.get(f)):
                errors.append(f"{section}[{i}].{f} must be a non-empty string")


def validate_resume(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Shape checks only; scorers tolerate anything that passes.
    """
    if not isinstance(data, dict):
        return ["Resume must be a JSON object"]

    errors: List[str] = []

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in LIST_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], list):
            errors.append(f"Field '{f}' must be a list if provided")

    _check_entries(data, "work", WORK_REQUIRED_STR_FIELDS, errors)
    _check_entries(data, "education", EDUCATION_REQUIRED_STR_FIELDS, errors)
    _check_entries(data, "certifications", ["name"], errors)
    _check_entries(data, "projects", ["name"], errors)

    for i, w in enumerate(data.get("work") or []):
        if isinstance(w, dict) and w.get("bullets") is not None and not isinstance(w["bullets"], list):
            errors.append(f"work[{i}].bullets must be a list if provided")

    if isinstance(data.get("skills"), list) and not all(isinstance(s, str) for s in data["skills"]):
        errors.append("Field 'skills' must contain only strings")

    return errors


def validate_resume_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Strict validation: shape checks plus parseable dates.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = validate_resume(data)
    if not isinstance(data, dict):
        return False, errors

    for i, w in enumerate(data.get("work") or []):
        if not isinstance(w, dict):
            continue
        start = w.get("from")
        if start and parse_date(str(start)) is None:
            errors.append(f"work[{i}].from is not a recognizable date: {start!r}")
        end = w.get("to")
        if end and not is_ongoing(str(end)) and parse_date(str(end)) is None:
            errors.append(f"work[{i}].to is not a recognizable date: {end!r}")

    for i, c in enumerate(data.get("certifications") or []):
        if not isinstance(c, dict):
            continue
        for f in ("date", "expiryDate"):
            if c.get(f) and parse_year(str(c[f])) is None:
                errors.append(f"certifications[{i}].{f} has no 4-digit year")

    return len(errors) == 0, errors


def validate_extracted_keywords(data: Dict[str, Any]) -> List[str]:
    """Checks the external keyword extractor payload."""
    if not isinstance(data, dict):
        return ["Keywords payload must be a JSON object"]
    errors: List[str] = []
    keywords = data.get("keywords")
    if not isinstance(keywords, list):
        return ["Field 'keywords' must be a list"]
    for i, k in enumerate(keywords):
        if not isinstance(k, dict):
            errors.append(f"keywords[{i}] must be an object")
            continue
        if not _is_non_empty_str(k.get("term")):
            errors.append(f"keywords[{i}].term must be a non-empty string")
        if k.get("category") is not None and k["category"] not in KEYWORD_CATEGORIES:
            errors.append(f"keywords[{i}].category is unknown: {k['category']!r}")
        for f in ("importance", "frequency", "confidence"):
            if k.get(f) is not None and (isinstance(k[f], bool) or not isinstance(k[f], (int, float))):
                errors.append(f"keywords[{i}].{f} must be a number")
        if k.get("variations") is not None and not isinstance(k["variations"], list):
            errors.append(f"keywords[{i}].variations must be a list")
    return errors
