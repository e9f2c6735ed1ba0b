"""
Keyword match analysis against externally extracted job keywords.

Each job keyword is classified as matched, partial or missing against the
resume text using direct matches, known variations, word-bounded frequency
and contextual placement. Keyword extraction itself (usually an LLM) happens
outside this package; its output arrives as ExtractedKeywords.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .cache import AnalysisCache, cache_key
from .logger import StructuredLogger, get_logger
from .models import (
    ATSCompatibility,
    ExtractedKeywords,
    Insights,
    JobAnalysis,
    JobKeyword,
    KeywordAnalysis,
    KeywordMatch,
    Recommendation,
    ResumeData,
    SectionScore,
)
from .normalize import flatten_resume
from .scorers.common import round2
from .sections import (
    calculate_overall_score,
    check_ats_compatibility,
    fallback_recommendations,
    score_sections,
)
from .tables import (
    DEFAULT_EXPERIENCE_LEVEL,
    DEFAULT_INDUSTRY,
    EXPERIENCE_LEVEL_CUES,
    INDUSTRY_CUES,
)

CRITICAL_IMPORTANCE = 9
PREFERRED_IMPORTANCE = 7
HIGH_VALUE_IMPORTANCE = 8
HIGH_SIMILARITY = 0.8
STRONG_SECTION_SCORE = 80
WEAK_SECTION_SCORE = 60


@dataclass
class AnalysisReport:
    job: JobAnalysis
    keywords: KeywordAnalysis
    coverage_score: float
    insights: Insights
    similarity_score: Optional[float] = None
    ats_compatibility: Optional[ATSCompatibility] = None
    section_scores: Dict[str, SectionScore] = field(default_factory=dict)
    recommendations: List[Recommendation] = field(default_factory=list)
    overall_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "job": self.job.to_dict(),
            "keywordMatches": self.keywords.to_dict(),
            "coverageScore": self.coverage_score,
            "similarityScore": self.similarity_score,
            "atsCompatibility": self.ats_compatibility.to_dict() if self.ats_compatibility else None,
            "sectionScores": {name: s.to_dict() for name, s in self.section_scores.items()},
            "recommendations": [r.to_dict() for r in self.recommendations],
            "insights": self.insights.to_dict(),
        }


def keyword_frequency(text: str, terms: List[str]) -> int:
    """Total word-bounded, case-insensitive occurrences of every term."""
    count = 0
    for term in terms:
        if not term:
            continue
        count += len(re.findall(rf"\b{re.escape(term)}\b", text, re.IGNORECASE))
    return count


def categorize_requirements(keywords: ExtractedKeywords) -> Dict[str, List[str]]:
    return {
        "critical": [k.term for k in keywords.keywords if k.importance >= CRITICAL_IMPORTANCE],
        "preferred": [
            k.term for k in keywords.keywords
            if PREFERRED_IMPORTANCE <= k.importance < CRITICAL_IMPORTANCE
        ],
        "nice_to_have": [k.term for k in keywords.keywords if k.importance < PREFERRED_IMPORTANCE],
    }


def determine_experience_level(job_description: str) -> str:
    text = (job_description or "").lower()
    for cues, level in EXPERIENCE_LEVEL_CUES:
        if any(c in text for c in cues):
            return level
    return DEFAULT_EXPERIENCE_LEVEL


def extract_industry_context(job_description: str) -> str:
    text = (job_description or "").lower()
    for cues, industry in INDUSTRY_CUES:
        if any(c in text for c in cues):
            return industry
    return DEFAULT_INDUSTRY


def section_context_match(resume: Optional[ResumeData], keyword: JobKeyword) -> bool:
    """Is the keyword placed where its category belongs (skills list, work bullets)?"""
    if resume is None:
        return False
    term = keyword.term.lower()
    if keyword.category in ("hard_skill", "tool"):
        return any(term in s.lower() for s in resume.skills)
    if keyword.category == "responsibility":
        return any(term in b.lower() for b in resume.all_bullets())
    return False


def keyword_coverage_score(analysis: KeywordAnalysis) -> float:
    """Matched keywords count fully, partial ones half. 0 when there are no keywords."""
    if analysis.total == 0:
        return 0.0
    return round2((len(analysis.matched) + len(analysis.partial) * 0.5) / analysis.total * 100)


class KeywordMatchAnalyzer:
    """
    Stateless apart from the injected cache.

    Pass an AnalysisCache (or SqlAnalysisCache) to share job-description
    analyses between calls; without one, each analyzer gets a private cache.
    """

    def __init__(self, cache=None, logger: Optional[StructuredLogger] = None):
        self.logger = logger or get_logger()
        self.cache = cache if cache is not None else AnalysisCache(logger=self.logger)

    def analyze_job_description(self, job_description: str, extracted: ExtractedKeywords) -> JobAnalysis:
        """
        Industry and experience level are cached per job description. Requirement
        tiers come from the extracted keywords and are recomputed on every call.
        """
        key = cache_key("job_analysis", job_description)

        def compute() -> Dict[str, Any]:
            return {
                "industry_context": extract_industry_context(job_description),
                "experience_level": determine_experience_level(job_description),
            }

        cached = self.cache.get_or_compute(key, compute)
        return JobAnalysis(
            keywords=extracted,
            requirements=categorize_requirements(extracted),
            industry_context=cached["industry_context"],
            experience_level=cached["experience_level"],
        )

    def analyze_keywords(
        self,
        resume_text: str,
        keywords: List[JobKeyword],
        resume: Optional[ResumeData] = None,
        context_matches: Optional[Mapping[str, bool]] = None,
    ) -> KeywordAnalysis:
        """
        Classify each job keyword against the resume text.

        context_matches maps a term to an externally judged relevance and takes
        precedence over the section-placement check.
        """
        text = (resume_text or "").lower()
        analysis = KeywordAnalysis()

        for keyword in keywords:
            term = keyword.term.lower()
            variations = [v.lower() for v in keyword.variations if v]

            direct = bool(term) and term in text
            via_variation = any(v in text for v in variations)
            frequency = keyword_frequency(text, [term, *variations])
            if context_matches is not None and keyword.term in context_matches:
                context = bool(context_matches[keyword.term])
            else:
                context = section_context_match(resume, keyword)

            match = KeywordMatch(
                term=keyword.term,
                category=keyword.category,
                found=direct or via_variation,
                frequency=frequency,
                importance=keyword.importance,
                confidence=keyword.confidence,
                variations=list(keyword.variations),
                context_match=context,
            )

            if direct or (via_variation and frequency > 0):
                analysis.matched.append(match)
            elif frequency > 0 or context:
                analysis.partial.append(match)
            else:
                analysis.missing.append(match)

        self.logger.record_analysis()
        self.logger.debug(
            "Keyword analysis complete",
            matched=len(analysis.matched),
            partial=len(analysis.partial),
            missing=len(analysis.missing),
        )
        return analysis

    def generate_insights(
        self,
        analysis: KeywordAnalysis,
        similarity_score: Optional[float] = None,
        section_scores: Optional[Dict[str, SectionScore]] = None,
    ) -> Insights:
        insights = Insights()
        for name, section in (section_scores or {}).items():
            if section.score >= STRONG_SECTION_SCORE:
                insights.strength_areas.append(f"Strong {name} section ({section.score}%)")
            elif section.score < WEAK_SECTION_SCORE:
                insights.improvement_areas.append(f"{name} section needs improvement ({section.score}%)")

        match_rate = len(analysis.matched) / analysis.total * 100 if analysis.total else 0.0

        if match_rate >= 70:
            insights.strength_areas.append(f"High keyword match rate ({match_rate:.1f}%)")
        elif match_rate < 40:
            insights.improvement_areas.append(f"Low keyword coverage ({match_rate:.1f}%)")

        insights.keyword_gaps.extend(
            [k.term for k in analysis.missing if k.importance >= HIGH_VALUE_IMPORTANCE][:5]
        )

        high_value = [k.term for k in analysis.matched if k.importance >= HIGH_VALUE_IMPORTANCE]
        if high_value:
            insights.competitive_advantages.append(f"Strong in high-value skills: {', '.join(high_value[:3])}")

        if similarity_score is not None and similarity_score >= HIGH_SIMILARITY:
            insights.competitive_advantages.append("High semantic alignment with job requirements")

        return insights

    def analyze(
        self,
        resume: ResumeData,
        job_description: str,
        extracted: ExtractedKeywords,
        similarity_score: Optional[float] = None,
        context_matches: Optional[Mapping[str, bool]] = None,
    ) -> AnalysisReport:
        """
        Full match report. similarity_score is an external cosine value in [0, 1];
        without one the semantic share of the overall score is 0.
        """
        if similarity_score is not None:
            similarity_score = max(0.0, min(1.0, float(similarity_score)))
        job = self.analyze_job_description(job_description, extracted)
        keywords = self.analyze_keywords(flatten_resume(resume), extracted.keywords, resume, context_matches)
        coverage = keyword_coverage_score(keywords)
        ats = check_ats_compatibility(resume)
        sections = score_sections(resume, extracted)
        overall = calculate_overall_score(coverage, similarity_score, ats, sections)

        self.logger.info(
            "Resume analysis complete",
            overall_score=overall,
            coverage_score=coverage,
            ats_score=ats.score,
        )
        return AnalysisReport(
            job=job,
            keywords=keywords,
            coverage_score=coverage,
            insights=self.generate_insights(keywords, similarity_score, sections),
            similarity_score=similarity_score,
            ats_compatibility=ats,
            section_scores=sections,
            recommendations=fallback_recommendations(keywords, sections),
            overall_score=overall,
        )
