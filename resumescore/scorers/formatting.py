"""
Formatting & structure scorer.

Equal-weight mean of section presence, section order, skills-list length,
and two placeholder sub-scores (indentation, noise) that are always 100
until the core receives layout information from the document parser.
"""

from typing import Dict, List

from ..models import ResumeData
from ..normalize import flatten_resume
from ..tables import SECTION_MARKERS, SKILLS_DECAY_PIVOT, SKILLS_IDEAL_MAX, SKILLS_IDEAL_MIN
from .common import clamp, mean, percentage, round2


def present_sections(resume: ResumeData) -> List[str]:
    """Names of the present sections, in canonical order."""
    presence = {
        "Summary": bool(resume.summary and resume.summary.strip()),
        "Experience": len(resume.work) > 0,
        "Education": len(resume.education) > 0,
        "Skills": len(resume.skills) > 0,
        "Projects": len(resume.projects) > 0,
    }
    return [name for name, _ in SECTION_MARKERS if presence[name]]


def skills_length_score(count: int) -> float:
    if count <= 0:
        return 0.0
    if SKILLS_IDEAL_MIN <= count <= SKILLS_IDEAL_MAX:
        return 100.0
    if count < SKILLS_IDEAL_MIN:
        raw = count / SKILLS_IDEAL_MIN * 100
    else:
        raw = SKILLS_DECAY_PIVOT / count * 100
    return round2(clamp(raw))


def section_order_score(resume: ResumeData, present: List[str]) -> float:
    """Share of present sections whose first marker appears in canonical position."""
    if not present:
        return 100.0
    flat = flatten_resume(resume)
    markers = dict(SECTION_MARKERS)
    actual = sorted(present, key=lambda name: flat.find(markers[name]))
    matches = sum(1 for want, got in zip(present, actual) if want == got)
    return percentage(matches, len(present))


def formatting_breakdown(resume: ResumeData) -> Dict[str, float]:
    present = present_sections(resume)
    return {
        "presence": percentage(len(present), len(SECTION_MARKERS)),
        "order": section_order_score(resume, present),
        "skills_length": skills_length_score(len(resume.skills)),
        "indentation": 100.0,
        "noise": 100.0,
    }


def formatting_score(resume: ResumeData) -> float:
    return round2(mean(formatting_breakdown(resume).values()))
