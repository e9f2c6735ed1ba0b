"""
Education & certifications scorer.

Weighted composite of degree level (40%), field match (20%), certification
relevance (25%) and certification recency (10%).
"""

from datetime import datetime
from typing import Dict, Optional

from ..keywords import extract_keywords
from ..logger import get_logger
from ..models import ResumeData
from ..normalize import parse_year
from ..tables import (
    CERT_RECENCY_YEARS,
    DEFAULT_DEGREE_LEVEL,
    DEFAULT_TARGET_DEGREE_LEVEL,
    DEGREE_LADDER,
    JD_DEGREE_LADDER,
    ladder_level,
)
from .common import percentage, round2

logger = get_logger()

WEIGHTS = {"degree": 0.4, "field": 0.2, "certification": 0.25, "recency": 0.1}


def degree_level(degree: str) -> int:
    return ladder_level(degree, DEGREE_LADDER, DEFAULT_DEGREE_LEVEL)


def target_degree_level(job_description: str) -> int:
    """Level of the first ladder keyword found in the job description."""
    jd = (job_description or "").lower()
    for keyword, level in JD_DEGREE_LADDER:
        if keyword in jd:
            return level
    return DEFAULT_TARGET_DEGREE_LEVEL


def education_breakdown(
    resume: ResumeData, job_description: str, now: Optional[datetime] = None
) -> Dict[str, float]:
    """Sub-scores keyed degree, field, certification, recency (each 0-100)."""
    now = now or datetime.now()
    jd_keywords = extract_keywords(job_description)

    candidate_level = max((degree_level(e.degree) for e in resume.education), default=0)
    target_level = target_degree_level(job_description)
    raw_degree = candidate_level / target_level * 100 if target_level > 0 else 0.0
    degree_score = round2(min(100.0, raw_degree))

    # No stated field means no penalty
    field_score = 100.0
    fields = [e.field_of_study for e in resume.education if e.field_of_study and e.field_of_study.strip()]
    if fields:
        matches = sum(1 for f in fields if extract_keywords(f) & jd_keywords)
        field_score = round2(percentage(matches, len(fields)))

    certs = resume.certifications
    cert_score = 0.0
    recency_score = 100.0
    if certs:
        relevant = sum(1 for c in certs if c.name and any(kw in c.name.lower() for kw in jd_keywords))
        cert_score = round2(percentage(relevant, len(certs)))

        recent = 0
        for c in certs:
            year = parse_year(c.expiry_date or c.date or "")
            if year is None:
                if c.expiry_date or c.date:
                    logger.record_degraded_input("certification_year")
                    logger.debug("No year in certification date", name=c.name, date=c.expiry_date or c.date)
                year = now.year
            if now.year - year <= CERT_RECENCY_YEARS:
                recent += 1
        recency_score = round2(percentage(recent, len(certs)))

    return {
        "degree": degree_score,
        "field": field_score,
        "certification": cert_score,
        "recency": recency_score,
    }


def education_certifications_score(
    resume: ResumeData, job_description: str, now: Optional[datetime] = None
) -> float:
    parts = education_breakdown(resume, job_description, now=now)
    composite = sum(parts[k] * w for k, w in WEIGHTS.items())
    return round2(min(100.0, composite))
