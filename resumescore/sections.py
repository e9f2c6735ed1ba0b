"""
Per-section resume scoring and ATS compatibility checks.

Each section (experience, skills, education, summary) gets a SectionScore
from heuristics over the structured resume and the extracted job keywords.
The ATS check deducts points for missing contact details and for plain-text
traits that trip up applicant tracking systems. Both feed the analysis
overall score and the fallback recommendations.
"""

import re
from typing import Dict, List, Optional

from .models import (
    ATSCompatibility,
    ATSIssue,
    ExtractedKeywords,
    JobKeyword,
    KeywordAnalysis,
    Recommendation,
    ResumeData,
    SectionScore,
    WorkEntry,
)
from .normalize import flatten_resume
from .scorers.common import mean, percentage, round2, round_half_up
from .tables import (
    ANALYSIS_WEIGHTS,
    MIN_STANDARD_SECTIONS,
    QUANTIFIER_PATTERNS,
    SPARSE_WORD_COUNT,
    STANDARD_SECTION_HEADERS,
    STRONG_ACTION_VERBS,
)

SKILL_CATEGORIES = ("hard_skill", "soft_skill", "tool")

_QUANTIFIER_RES = [re.compile(p, re.IGNORECASE) for p in QUANTIFIER_PATTERNS]
_HEADER_RES = [re.compile(rf"\b{h}\b", re.IGNORECASE) for h in STANDARD_SECTION_HEADERS]
_COMPLEX_FORMATTING_RES = [
    re.compile(r"\s{4,}"),
    re.compile(r"\t{2,}"),
    re.compile(r"[^\x20-\x7E\s]"),
]


def has_quantified_results(text: str) -> bool:
    return any(r.search(text or "") for r in _QUANTIFIER_RES)


def has_strong_action_verbs(bullets: List[str]) -> bool:
    text = " ".join(bullets).lower()
    return any(verb in text for verb in STRONG_ACTION_VERBS)


def has_complex_formatting(text: str) -> bool:
    """Runs of spaces or tabs, or characters outside printable ASCII."""
    return any(r.search(text or "") for r in _COMPLEX_FORMATTING_RES)


def has_standard_sections(text: str) -> bool:
    found = sum(1 for r in _HEADER_RES if r.search(text or ""))
    return found >= MIN_STANDARD_SECTIONS


def is_content_too_sparse(text: str) -> bool:
    return len((text or "").split(" ")) < SPARSE_WORD_COUNT


def _mentions(text: str, keyword: JobKeyword) -> bool:
    if keyword.term.lower() in text:
        return True
    return any(v.lower() in text for v in keyword.variations if v)


def check_ats_compatibility(resume: ResumeData) -> ATSCompatibility:
    """Start at 100 and deduct the impact of every detected issue. Never below 0."""
    issues: List[ATSIssue] = []

    if not resume.email or "@" not in resume.email:
        issues.append(ATSIssue(
            "parsing", "high",
            "Email address not properly detected",
            "Ensure email is clearly formatted (e.g., john@email.com)",
            15,
        ))
    if not resume.phone:
        issues.append(ATSIssue(
            "parsing", "medium",
            "Phone number not detected",
            "Use standard phone format (e.g., (555) 123-4567)",
            10,
        ))

    text = flatten_resume(resume)
    if has_complex_formatting(text):
        issues.append(ATSIssue(
            "formatting", "medium",
            "Complex formatting detected that may confuse ATS systems",
            "Use simple, clean formatting with standard fonts",
            10,
        ))
    if not has_standard_sections(text):
        issues.append(ATSIssue(
            "structure", "medium",
            "Non-standard section headers may reduce ATS parsing accuracy",
            'Use standard headers like "Experience", "Education", "Skills"',
            8,
        ))
    if is_content_too_sparse(text):
        issues.append(ATSIssue(
            "content", "low",
            "Resume content appears sparse",
            "Add more detailed descriptions and quantified achievements",
            5,
        ))

    score = 100 - sum(i.impact for i in issues)
    return ATSCompatibility(score=max(0, score), issues=issues)


def experience_quality(work: List[WorkEntry]) -> float:
    """
    Completeness of the work entries, 0-100 averaged over roles.

    Bullet text longer than 50 characters stands in for a role description.
    """
    if not work:
        return 0.0
    totals = []
    for w in work:
        score = 0
        bullets_text = " ".join(w.bullets)
        if w.company and w.title:
            score += 25
        if w.start:
            score += 15
        if len(bullets_text) > 50:
            score += 20
        if w.bullets:
            score += 25
        if has_quantified_results(bullets_text):
            score += 15
        totals.append(score)
    return round2(mean(totals))


def score_experience_section(resume: ResumeData, keywords: List[JobKeyword]) -> SectionScore:
    if not resume.work:
        return SectionScore(0, "No experience section found",
                            suggestions=["Add work experience with detailed descriptions"])

    role_scores = []
    keyword_matches = 0
    suggestions: List[str] = []
    for w in resume.work:
        score = 50
        text = " ".join(w.bullets)
        if has_quantified_results(text):
            score += 20
        else:
            suggestions.append(f"Add quantified results to {w.title} role")

        relevant = [k for k in keywords if _mentions(text.lower(), k)]
        keyword_matches += len(relevant)
        if len(relevant) > 2:
            score += 15

        if has_strong_action_verbs(w.bullets):
            score += 10
        else:
            suggestions.append(f"Use stronger action verbs in {w.title} achievements")
        role_scores.append(min(100, score))

    density = percentage(keyword_matches, len(keywords))
    return SectionScore(
        score=round_half_up(mean(role_scores)),
        feedback=f"Experience section shows {len(resume.work)} roles with {density:.1f}% keyword coverage",
        keyword_density=round2(density),
        quality_score=experience_quality(resume.work),
        suggestions=suggestions[:3],
    )


def score_skills_section(resume: ResumeData, keywords: List[JobKeyword]) -> SectionScore:
    skills = resume.skills
    if not skills:
        return SectionScore(0, "No skills section found",
                            suggestions=["Add a skills section with relevant technical and soft skills"])

    skills_text = " ".join(skills).lower()
    relevant = [k for k in keywords if k.category in SKILL_CATEGORIES]
    matched = [k for k in relevant if _mentions(skills_text, k)]
    density = percentage(len(matched), len(relevant))
    breadth = 20 if len(skills) > 5 else len(skills) * 4

    suggestions = []
    if density < 50:
        suggestions.append("Add more job-relevant technical skills")
    if len(skills) < 8:
        suggestions.append("Include both technical and soft skills")

    return SectionScore(
        score=round_half_up(min(100, density * 0.8 + breadth)),
        feedback=f"Skills section contains {len(skills)} skills with {density:.1f}% job relevance",
        keyword_density=round2(density),
        quality_score=min(100, len(skills) * 10),
        suggestions=suggestions,
    )


def score_education_section(resume: ResumeData, keywords: List[JobKeyword]) -> SectionScore:
    education = resume.education
    if not education:
        return SectionScore(30, "No education section found",
                            suggestions=["Consider adding education background if relevant"])

    score = 60
    suggestions = []
    education_text = " ".join(
        f"{e.degree} {e.field_of_study or ''} {e.institution}" for e in education
    ).lower()
    relevant = [
        k for k in keywords
        if k.category == "certification" or k.term.lower() in education_text
    ]
    if relevant:
        score += 25

    complete = all(e.degree and e.institution for e in education)
    if complete:
        score += 15
    else:
        suggestions.append("Ensure all education entries have degree and institution")

    return SectionScore(
        score=min(100, score),
        feedback=f"Education section shows {len(education)} entries",
        keyword_density=round2(len(relevant) / max(1, len(keywords)) * 100),
        quality_score=100 if complete else 70,
        suggestions=suggestions,
    )


def score_summary_section(resume: ResumeData, keywords: List[JobKeyword]) -> SectionScore:
    summary = resume.summary or ""
    if not summary.strip():
        return SectionScore(0, "No professional summary found",
                            suggestions=["Add a compelling professional summary (2-3 sentences)"])

    score = 40
    suggestions = []
    word_count = len(summary.split(" "))
    if 30 <= word_count <= 100:
        score += 20
    elif word_count < 30:
        suggestions.append("Expand summary to 30-100 words for better impact")
    else:
        suggestions.append("Shorten summary to 30-100 words for better readability")

    relevant = [k for k in keywords if _mentions(summary.lower(), k)]
    density = percentage(len(relevant), len(keywords))
    if density > 10:
        score += 25
    else:
        suggestions.append("Include more job-relevant keywords in summary")

    if has_quantified_results(summary):
        score += 15
    else:
        suggestions.append("Include quantified achievements in summary")

    return SectionScore(
        score=min(100, score),
        feedback=f"Professional summary is {word_count} words with {density:.1f}% keyword relevance",
        keyword_density=round2(density),
        quality_score=round2(min(100, word_count / 75 * 100)),
        suggestions=suggestions,
    )


def score_sections(resume: ResumeData, extracted: ExtractedKeywords) -> Dict[str, SectionScore]:
    """Section scores keyed experience, skills, education, summary (in that order)."""
    keywords = extracted.keywords
    return {
        "experience": score_experience_section(resume, keywords),
        "skills": score_skills_section(resume, keywords),
        "education": score_education_section(resume, keywords),
        "summary": score_summary_section(resume, keywords),
    }


def calculate_overall_score(
    coverage: float,
    similarity_score: Optional[float],
    ats: ATSCompatibility,
    section_scores: Dict[str, SectionScore],
) -> int:
    """Keyword coverage 30%, semantic similarity 25%, ATS 25%, section mean 20%.

    A missing similarity contributes 0.
    """
    semantic = (similarity_score or 0.0) * 100
    section_avg = mean(s.score for s in section_scores.values())
    total = (
        coverage * ANALYSIS_WEIGHTS["keywords"]
        + semantic * ANALYSIS_WEIGHTS["semantic"]
        + ats.score * ANALYSIS_WEIGHTS["ats"]
        + section_avg * ANALYSIS_WEIGHTS["sections"]
    )
    return round_half_up(total)


def fallback_recommendations(
    analysis: KeywordAnalysis, section_scores: Dict[str, SectionScore]
) -> List[Recommendation]:
    """Rule-based recommendations for hosts without a generative provider."""
    recommendations = []
    if analysis.missing:
        top_missing = [k.term for k in analysis.missing[:3]]
        recommendations.append(Recommendation(
            section="skills",
            type="add",
            suggestion=f"Add missing key skills: {', '.join(top_missing)}",
            reasoning="These skills are highly valued in the job description",
            impact=15,
            keywords=top_missing,
        ))

    experience = section_scores.get("experience")
    if experience is not None and experience.score < 70:
        recommendations.append(Recommendation(
            section="experience",
            type="modify",
            suggestion="Add quantified achievements and impact metrics to work experience",
            reasoning="Quantified results demonstrate concrete value to employers",
            impact=20,
        ))
    return recommendations
