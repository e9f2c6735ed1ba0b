"""Experience alignment scorer: recency-weighted seniority against a target title."""

from ..logger import get_logger
from ..models import ResumeData
from ..normalize import parse_date, timestamp
from ..tables import DEFAULT_SENIORITY_LEVEL, SENIORITY_LADDER, ladder_level
from .common import clamp, round2

logger = get_logger()


def seniority_level(title: str) -> int:
    """Map a job title to a seniority rung (intern=1 ... chief=8, default 3)."""
    return ladder_level(title, SENIORITY_LADDER, DEFAULT_SENIORITY_LEVEL)


def experience_alignment_score(resume: ResumeData, target_title: str) -> float:
    """
    Recency-weighted seniority of the work history relative to the target title.

    Roles are ranked newest first by start date (missing or unparseable start
    dates rank oldest) and weighted 1/(rank+1).
    """
    if not resume.work:
        return 0.0
    target_level = seniority_level(target_title)
    if target_level <= 0:
        return 0.0

    entries = []
    for w in resume.work:
        start = parse_date(w.start)
        if start is None and w.start:
            logger.record_degraded_input("unparseable_date")
            logger.debug("Unparseable start date, ranking role as oldest", title=w.title, start=w.start)
        entries.append((seniority_level(w.title), timestamp(start)))

    entries.sort(key=lambda e: e[1], reverse=True)
    weights = [1 / (rank + 1) for rank in range(len(entries))]
    weighted_level = sum(level * w for (level, _), w in zip(entries, weights)) / sum(weights)
    return round2(clamp(weighted_level / target_level * 100))
