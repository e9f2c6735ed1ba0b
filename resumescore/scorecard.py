"""
Scorecard builder and weighted aggregation.

build_scorecard compares two plain texts on three text metrics.
build_resume_scorecard compares two structured resumes on the eight weighted
metrics of METRIC_WEIGHTS and derives the overall scores from them.
"""

from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence

from .keywords import (
    extract_keywords,
    extract_requirements_from_text,
    keyword_match_score,
    skill_coverage_score,
)
from .logger import StructuredLogger, get_logger
from .models import ExternalScores, ResumeData, Scorecard, ScoreMetric
from .normalize import flatten_resume
from .scorers.common import clamp, mean, round2, round_half_up
from .scorers.education import education_certifications_score
from .scorers.experience import experience_alignment_score
from .scorers.formatting import formatting_score
from .scorers.red_flags import extract_red_flags
from .scorers.text import bullet_strength_score, sentence_length_score, verb_strength_score
from .tables import METRIC_WEIGHTS

KEYWORD_MATCH = "Keyword Match"
ACTION_VERB_STRENGTH = "Action Verb Strength"
SENTENCE_LENGTH = "Sentence Length"
EXPERIENCE_ALIGNMENT = "Experience Alignment"
BULLET_STRENGTH = "Bullet Strength"
ROLE_ALIGNMENT = "Role Alignment"
SKILLS_MATCH = "Skills Match"
EDUCATION_CERTIFICATIONS = "Education & Certifications"
FORMATTING_STRUCTURE = "Formatting & Structure"
CUSTOMIZATION_LEVEL = "Customization Level"


def weighted_average(metrics: Iterable[ScoreMetric], weights: Optional[Mapping[str, float]] = None) -> float:
    """
    Weighted mean of optimized scores.

    Metrics missing from the weight table weigh 0. Returns 0 when the total
    weight is 0.
    """
    weights = METRIC_WEIGHTS if weights is None else weights
    metrics = list(metrics)
    total_weight = sum(weights.get(m.name, 0) for m in metrics)
    if total_weight == 0:
        return 0.0
    weighted_sum = sum(m.optimized_score * weights.get(m.name, 0) for m in metrics)
    return round2(weighted_sum / total_weight)


def overall_from_metrics(metrics: Sequence[ScoreMetric], weights: Optional[Mapping[str, float]] = None) -> int:
    return round_half_up(weighted_average(metrics, weights))


def original_overall_from_metrics(metrics: Sequence[ScoreMetric], weights: Optional[Mapping[str, float]] = None) -> int:
    as_original = [ScoreMetric(m.name, m.original_score, m.original_score) for m in metrics]
    return round_half_up(weighted_average(as_original, weights))


def build_scorecard(
    original_text: str,
    optimized_text: str,
    job_description: str,
    ideal_sentence_length: float = 20,
    sentence_sigma: float = 10,
    logger: Optional[StructuredLogger] = None,
) -> Scorecard:
    """Keyword match, verb strength and sentence length for two texts against one JD."""
    logger = logger or get_logger()
    jd_keywords = sorted(extract_keywords(job_description))

    orig_keyword = keyword_match_score(original_text, jd_keywords)
    opt_keyword = keyword_match_score(optimized_text, jd_keywords)
    orig_verb = verb_strength_score(original_text)
    opt_verb = verb_strength_score(optimized_text)
    orig_sent = sentence_length_score(original_text, ideal_sentence_length, sentence_sigma)
    opt_sent = sentence_length_score(optimized_text, ideal_sentence_length, sentence_sigma)

    logger.record_scorecard()
    return Scorecard(
        overall_score=round_half_up(mean([opt_keyword, opt_verb, opt_sent])),
        metrics=[
            ScoreMetric(KEYWORD_MATCH, orig_keyword, opt_keyword),
            ScoreMetric(ACTION_VERB_STRENGTH, orig_verb, opt_verb),
            ScoreMetric(SENTENCE_LENGTH, orig_sent, opt_sent),
        ],
    )


def _external_pair(pair, scale: float = 1.0):
    if pair is None:
        return 0.0, 0.0
    return round2(clamp(pair[0] * scale)), round2(clamp(pair[1] * scale))


def build_resume_scorecard(
    original: ResumeData,
    optimized: ResumeData,
    job_description: str,
    jd_keywords: Optional[Sequence[str]] = None,
    requirements: Optional[Sequence[str]] = None,
    optimized_bullets: Optional[Sequence[str]] = None,
    target_title: Optional[str] = None,
    external: Optional[ExternalScores] = None,
    now: Optional[datetime] = None,
    ideal_bullet_length: float = 20,
    bullet_sigma: float = 10,
    logger: Optional[StructuredLogger] = None,
) -> Scorecard:
    """
    Eight-metric scorecard for an original and an optimized structured resume.

    Args:
        jd_keywords: Normalized job keywords (default: extracted from the JD)
        requirements: Skill requirements (default: bullet lines of the JD)
        optimized_bullets: Rewritten bullets (default: the optimized resume's bullets)
        target_title: Title for seniority alignment (default: the whole JD)
        external: Scores produced outside the core; absent values score 0
            except fallbacks, which only replace a heuristic score of 0
    """
    logger = logger or get_logger()
    external = external or ExternalScores()

    orig_flat = flatten_resume(original)
    opt_flat = flatten_resume(optimized)

    keywords = list(jd_keywords) if jd_keywords else sorted(extract_keywords(job_description))
    reqs = list(requirements) if requirements else extract_requirements_from_text(job_description)

    orig_keyword = keyword_match_score(orig_flat, keywords)
    opt_keyword = keyword_match_score(opt_flat, keywords)
    if (orig_keyword == 0 or opt_keyword == 0) and external.keyword_match_fallback is not None:
        logger.info("Using external keyword match scores", original=orig_keyword, optimized=opt_keyword)
        orig_keyword, opt_keyword = _external_pair(external.keyword_match_fallback)

    orig_skill = skill_coverage_score(original, reqs)
    opt_skill = skill_coverage_score(optimized, reqs)
    if (orig_skill == 0 or opt_skill == 0) and external.skills_match_fallback is not None:
        logger.info("Using external skills match scores", original=orig_skill, optimized=opt_skill)
        orig_skill, opt_skill = _external_pair(external.skills_match_fallback)

    title = target_title if target_title else job_description
    if external.experience_alignment is not None:
        orig_exp, opt_exp = _external_pair(external.experience_alignment)
    else:
        orig_exp = experience_alignment_score(original, title)
        opt_exp = experience_alignment_score(optimized, title)

    bullets = list(optimized_bullets) if optimized_bullets is not None else optimized.all_bullets()
    orig_bullet = bullet_strength_score(original.all_bullets(), ideal_bullet_length, bullet_sigma)
    opt_bullet = bullet_strength_score(bullets, ideal_bullet_length, bullet_sigma)

    orig_role, opt_role = _external_pair(external.role_alignment)
    orig_custom, opt_custom = _external_pair(external.similarity, scale=100)

    metrics: List[ScoreMetric] = [
        ScoreMetric(KEYWORD_MATCH, orig_keyword, opt_keyword),
        ScoreMetric(EXPERIENCE_ALIGNMENT, orig_exp, opt_exp),
        ScoreMetric(BULLET_STRENGTH, orig_bullet, opt_bullet),
        ScoreMetric(ROLE_ALIGNMENT, orig_role, opt_role),
        ScoreMetric(SKILLS_MATCH, orig_skill, opt_skill),
        ScoreMetric(
            EDUCATION_CERTIFICATIONS,
            education_certifications_score(original, job_description, now=now),
            education_certifications_score(optimized, job_description, now=now),
        ),
        ScoreMetric(FORMATTING_STRUCTURE, formatting_score(original), formatting_score(optimized)),
        ScoreMetric(CUSTOMIZATION_LEVEL, orig_custom, opt_custom),
    ]

    scorecard = Scorecard(
        overall_score=overall_from_metrics(metrics),
        metrics=metrics,
        original_overall_score=original_overall_from_metrics(metrics),
        red_flags=extract_red_flags(optimized, now=now),
    )
    logger.record_scorecard()
    logger.debug(
        "Resume scorecard built",
        overall=scorecard.overall_score,
        original_overall=scorecard.original_overall_score,
        red_flags=len(scorecard.red_flags),
    )
    return scorecard
