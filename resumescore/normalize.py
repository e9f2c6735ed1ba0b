import re
from datetime import datetime, timezone
from typing import Optional

import dateparser

from .models import ResumeData

ONGOING_SYNS = {"present", "current", "now", "ongoing", "today"}

DATEPARSER_SETTINGS = {
    "PARSERS": ["custom-formats", "absolute-time"],
    "PREFER_DAY_OF_MONTH": "first",
    "PREFER_MONTH_OF_YEAR": "first",
    "REQUIRE_PARTS": ["year"],
}

EPOCH = datetime(1970, 1, 1)

_YEAR_RE = re.compile(r"(\d{4})")
_NUMERIC_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})(?:-(\d{1,2}))?")


def normalize_text(s: str) -> str:
    return " ".join((s or "").strip().lower().split())


def is_ongoing(value: Optional[str]) -> bool:
    """True for an absent/empty end date or a word like 'Present'."""
    if value is None:
        return True
    norm = normalize_text(value)
    return norm == "" or norm in ONGOING_SYNS


def _naive(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a resume date string ('2020-01-01', 'Jan 2020', 'March 2019').

    Returns None for empty or unparseable input, for relative expressions
    ("now", "2 years ago") and for out-of-range numeric dates ("2020-13-01").
    Partial dates resolve to the first day of the first month available.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    if normalize_text(text) in ONGOING_SYNS:
        return None
    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        pass
    if re.fullmatch(r"\d{4}", text):
        return datetime(int(text), 1, 1)
    m = _NUMERIC_DATE_RE.fullmatch(text)
    if m:
        year, month, day = m.group(1), m.group(2), m.group(3) or "1"
        try:
            return datetime(int(year), int(month), int(day))
        except ValueError:
            return None
    parsed = dateparser.parse(text, settings=DATEPARSER_SETTINGS)
    return _naive(parsed) if parsed is not None else None


def parse_end_date(value: Optional[str], now: datetime) -> datetime:
    """End of a role: ongoing or unparseable values resolve to now."""
    if is_ongoing(value):
        return now
    parsed = parse_date(value)
    return parsed if parsed is not None else now


def parse_year(value: Optional[str]) -> Optional[int]:
    """First 4-digit run anywhere in the string."""
    if not value:
        return None
    m = _YEAR_RE.search(value)
    return int(m.group(1)) if m else None


def timestamp(dt: Optional[datetime]) -> float:
    """Seconds since epoch for ordering; None sorts as epoch."""
    if dt is None:
        return 0.0
    return (dt - EPOCH).total_seconds()


def flatten_resume(resume: ResumeData) -> str:
    """Flatten structured resume data into plain text for full-text scoring."""
    parts = []
    if resume.summary:
        parts.append(f"Summary: {resume.summary}")
    for w in resume.work:
        parts.append(f"Worked at {w.company} as {w.title}")
        if w.bullets:
            parts.append(f"Key achievements: {', '.join(w.bullets)}")
    if resume.skills:
        parts.append(f"Skills: {', '.join(resume.skills)}")
    for e in resume.education:
        parts.append(f"Education: {e.degree} at {e.institution}")
    for p in resume.projects:
        parts.append(f"Project {p.name}: {p.description}")
    return ". ".join(parts)
