"""
Text-level scorers: action verb strength, bullet strength, sentence length.

Two neutral-verb policies coexist on purpose. verb_strength_score ignores
words missing from the verb table; bullet_strength_score gives an unknown
first word NEUTRAL_VERB_STRENGTH.
"""

import re
from typing import Dict, List, Sequence

from ..tables import (
    BLOAT_WORD_THRESHOLD,
    FLUFF_OPENERS,
    NEUTRAL_VERB_STRENGTH,
    VERB_STRENGTH,
    max_verb_strength,
)
from .common import gaussian_score, mean, percentage, round2

_WORD_RE = re.compile(r"\b[a-z]+\b", re.ASCII)
_NON_LETTER_RE = re.compile(r"[^a-z]")
_DIGIT_RE = re.compile(r"\d")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_FLUFF_RE = re.compile(r"^(" + "|".join(re.escape(p) for p in FLUFF_OPENERS) + r")", re.IGNORECASE)
# Verb -> action -> outcome, e.g. "Cut costs by 20%"
_PATTERN_RE = re.compile(r"^[A-Z]\w+ .+ by \d+%", re.ASCII)


def verb_strength_score(text: str) -> float:
    """Normalized average strength of recognized action verbs, 0-100.

    Words missing from the verb table are ignored. Returns 0 when no
    recognized verb appears.
    """
    tokens = _WORD_RE.findall((text or "").lower())
    strengths = [VERB_STRENGTH[t] for t in tokens if t in VERB_STRENGTH]
    if not strengths:
        return 0.0
    return round2(mean(strengths) / max_verb_strength() * 100)


def _first_word(bullet: str) -> str:
    words = bullet.strip().split()
    first = words[0] if words else ""
    return _NON_LETTER_RE.sub("", first.lower())


def _word_count(s: str) -> int:
    return len(s.split())


def bullet_strength_breakdown(
    bullets: Sequence[str], ideal_len: float = 20, sigma: float = 10
) -> Dict[str, float]:
    """
    The six bullet sub-scores, each 0-100.

    Keys: verb_impact, quantification, conciseness, fluff, bloat, pattern.
    An empty bullet list yields all zeros.
    """
    bullets = [b if isinstance(b, str) else str(b) for b in bullets]
    total = len(bullets)
    if total == 0:
        return {k: 0.0 for k in ("verb_impact", "quantification", "conciseness", "fluff", "bloat", "pattern")}

    verb_scores = [VERB_STRENGTH.get(_first_word(b), NEUTRAL_VERB_STRENGTH) for b in bullets]
    verb_impact = mean(verb_scores) / max_verb_strength() * 100

    quant_count = sum(1 for b in bullets if _DIGIT_RE.search(b))

    lengths = [_word_count(b) for b in bullets]
    conciseness = round2(gaussian_score(mean(lengths), ideal_len, sigma))

    fluff_count = sum(1 for b in bullets if _FLUFF_RE.match(b.strip()))
    bloat_count = sum(1 for n in lengths if n > BLOAT_WORD_THRESHOLD)
    pattern_count = sum(1 for b in bullets if _PATTERN_RE.match(b.strip()))

    return {
        "verb_impact": verb_impact,
        "quantification": percentage(quant_count, total),
        "conciseness": conciseness,
        "fluff": round2(percentage(total - fluff_count, total)),
        "bloat": round2(percentage(total - bloat_count, total)),
        "pattern": round2(percentage(pattern_count, total)),
    }


def bullet_strength_score(bullets: Sequence[str], ideal_len: float = 20, sigma: float = 10) -> float:
    """Equal-weight composite of the six bullet sub-scores. 0 for no bullets."""
    if not bullets:
        return 0.0
    parts = bullet_strength_breakdown(bullets, ideal_len, sigma)
    return round2(mean(parts.values()))


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text or "") if s.strip()]


def sentence_length_score(text: str, ideal: float = 20, sigma: float = 10) -> float:
    """Gaussian score of the mean sentence word count around ideal. 0 for no sentences."""
    sentences = split_sentences(text)
    if not sentences:
        return 0.0
    avg = mean(_word_count(s) for s in sentences)
    return round2(gaussian_score(avg, ideal, sigma))
