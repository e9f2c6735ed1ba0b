"""
Keyword extraction and keyword-coverage scoring.

Keyword sets are lower-cased, de-duplicated and order-irrelevant.
"""

import re
from typing import Iterable, List, Sequence, Set

from .models import ResumeData
from .scorers.common import round2

_KEYWORD_RE = re.compile(r"\b[a-z]{4,}\b", re.ASCII)


def extract_keywords(text: str) -> Set[str]:
    """Unique lower-cased tokens of four or more letters. Never raises."""
    if not text:
        return set()
    return set(_KEYWORD_RE.findall(text.lower()))


def keyword_match_score(resume_text: str, jd_keywords: Sequence[str]) -> float:
    """
    Percentage of job-description keywords present in the resume text.

    jd_keywords are expected already normalized (see extract_keywords).
    Returns 0 when there are no job keywords.
    """
    jd_keywords = list(jd_keywords)
    if not jd_keywords:
        return 0.0
    resume_tokens = extract_keywords(resume_text)
    matched = sum(1 for kw in jd_keywords if kw in resume_tokens)
    return round2(matched / len(jd_keywords) * 100)


def skill_coverage_score(resume: ResumeData, requirements: Iterable[str]) -> float:
    """Percentage of requirements listed verbatim (case-insensitive) in the skills list."""
    requirements = [r for r in requirements if isinstance(r, str)]
    if not requirements:
        return 0.0
    skills = {s.lower() for s in resume.skills}
    matched = sum(1 for req in requirements if req.lower() in skills)
    return round2(matched / len(requirements) * 100)


def extract_requirements_from_text(job_description: str) -> List[str]:
    """Fallback requirement list: bullet lines ('-' or '•') of the job description."""
    requirements = []
    for line in (job_description or "").splitlines():
        line = line.strip()
        if line.startswith("-") or line.startswith("•"):
            requirements.append(re.sub(r"^[-•]\s*", "", line))
    return requirements
