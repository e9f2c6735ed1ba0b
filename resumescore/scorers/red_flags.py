"""
Career red-flag detection: employment gaps, overlapping roles, short tenures.

Roles without a parseable start date are left out of every check. An end date
that is missing, ongoing ("Present") or unparseable counts as now.
Both the warning list and the score use the same thresholds from tables.py.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..logger import get_logger
from ..models import ResumeData
from ..normalize import is_ongoing, parse_date, parse_end_date
from ..tables import GAP_THRESHOLD_DAYS, RED_FLAG_SCORE_LADDER, SHORT_TENURE_DAYS
from .common import round_half_up

logger = get_logger()

GAP = "gap"
OVERLAP = "overlap"
SHORT_TENURE = "short_tenure"

SCORED_KINDS = (GAP, SHORT_TENURE)

SECONDS_PER_DAY = 60 * 60 * 24


@dataclass(frozen=True)
class RedFlag:
    kind: str
    message: str


@dataclass(frozen=True)
class _DatedRole:
    title: str
    company: str
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        return f"{self.title} at {self.company}"


def _days(delta) -> float:
    return delta.total_seconds() / SECONDS_PER_DAY


def _dated_roles(resume: ResumeData, now: datetime) -> List[_DatedRole]:
    roles = []
    for w in resume.work:
        start = parse_date(w.start)
        if start is None:
            if w.start:
                logger.record_degraded_input("unparseable_date")
                logger.debug("Skipping role with unparseable start date", title=w.title, start=w.start)
            continue
        if not is_ongoing(w.end) and parse_date(w.end) is None:
            logger.record_degraded_input("unparseable_date")
            logger.debug("Unparseable end date, treating role as ongoing", title=w.title, end=w.end)
        roles.append(_DatedRole(w.title, w.company, start, parse_end_date(w.end, now)))
    roles.sort(key=lambda r: r.start)
    return roles


def detect_red_flags(resume: ResumeData, now: Optional[datetime] = None) -> List[RedFlag]:
    """Typed red flags: gaps and overlaps in start order, then short tenures."""
    now = now or datetime.now()
    roles = _dated_roles(resume, now)
    flags: List[RedFlag] = []

    for prev, curr in zip(roles, roles[1:]):
        gap_days = _days(curr.start - prev.end)
        if gap_days > GAP_THRESHOLD_DAYS:
            flags.append(RedFlag(
                GAP,
                f"Significant gap of {round_half_up(gap_days)} days between {prev.label} and {curr.label}.",
            ))
        if curr.start < prev.end:
            flags.append(RedFlag(OVERLAP, f"Overlap detected between {prev.label} and {curr.label}."))

    for role in roles:
        duration = _days(role.end - role.start)
        if duration < SHORT_TENURE_DAYS:
            flags.append(RedFlag(SHORT_TENURE, f"{role.label} lasted only {round_half_up(duration)} days."))

    return flags


def extract_red_flags(resume: ResumeData, now: Optional[datetime] = None) -> List[str]:
    """Human-readable warnings for the work history."""
    return [f.message for f in detect_red_flags(resume, now=now)]


def red_flags_score(resume: ResumeData, now: Optional[datetime] = None) -> float:
    """
    Map the count of gap and short-tenure flags to a discrete score.

    0 flags -> 100, 1 -> 75, 2 -> 50, 3 -> 25, 4+ -> 0. No work history -> 100.
    Overlaps are reported by extract_red_flags but do not lower the score.
    """
    if not resume.work:
        return 100.0
    count = sum(1 for f in detect_red_flags(resume, now=now) if f.kind in SCORED_KINDS)
    if count < len(RED_FLAG_SCORE_LADDER):
        return float(RED_FLAG_SCORE_LADDER[count])
    return 0.0
