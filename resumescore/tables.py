"""
Lookup tables shared by the scorers.

Every heuristic ladder lives here so scorers only hold the arithmetic.
Ladders are ordered: the first matching entry wins.
"""

from typing import Dict, List, Tuple

# Action verb -> strength (1-10)
VERB_STRENGTH: Dict[str, int] = {
    "lead": 10,
    "execute": 9,
    "build": 9,
    "manage": 8,
    "optimize": 8,
    "support": 5,
    "help": 4,
    "assist": 4,
    "work": 3,
}

# Strength given to a bullet whose first word is not in VERB_STRENGTH
NEUTRAL_VERB_STRENGTH = 5

FLUFF_OPENERS = ["Responsible for", "Worked with", "Assisted in"]

BLOAT_WORD_THRESHOLD = 60

# Degree string -> level, checked against a resume's degree
DEGREE_LADDER: List[Tuple[Tuple[str, ...], int]] = [
    (("phd", "doctor"), 5),
    (("master",), 4),
    (("bachelor",), 3),
    (("associate",), 2),
    (("high school",), 1),
]
DEFAULT_DEGREE_LEVEL = 3

# Keyword -> level, scanned in order against the job description
JD_DEGREE_LADDER: List[Tuple[str, int]] = [
    ("phd", 5),
    ("doctor", 5),
    ("master", 4),
    ("bachelor", 3),
    ("associate", 2),
    ("high school", 1),
]
DEFAULT_TARGET_DEGREE_LEVEL = 3

CERT_RECENCY_YEARS = 5

SENIORITY_LADDER: List[Tuple[Tuple[str, ...], int]] = [
    (("intern",), 1),
    (("associate", "jr"), 2),
    (("senior", "sr"), 3),
    (("lead",), 4),
    (("manager", "mgr"), 5),
    (("director",), 6),
    (("vp", "vice president"), 7),
    (("chief", "c-level"), 8),
]
DEFAULT_SENIORITY_LEVEL = 3

GAP_THRESHOLD_DAYS = 180
SHORT_TENURE_DAYS = 180

# Flag count -> red flags score; counts past the end map to 0
RED_FLAG_SCORE_LADDER = [100, 75, 50, 25]

# Canonical section order and the marker each section leaves in flatten_resume()
SECTION_MARKERS: List[Tuple[str, str]] = [
    ("Summary", "Summary:"),
    ("Experience", "Worked at"),
    ("Education", "Education:"),
    ("Skills", "Skills:"),
    ("Projects", "Project "),
]

SKILLS_IDEAL_MIN = 5
SKILLS_IDEAL_MAX = 15
SKILLS_DECAY_PIVOT = 20

METRIC_WEIGHTS: Dict[str, float] = {
    "Keyword Match": 30,
    "Experience Alignment": 20,
    "Bullet Strength": 15,
    "Role Alignment": 10,
    "Skills Match": 10,
    "Education & Certifications": 5,
    "Formatting & Structure": 5,
    "Customization Level": 5,
}

# Job description phrases -> experience level, checked in order
EXPERIENCE_LEVEL_CUES: List[Tuple[Tuple[str, ...], str]] = [
    (("entry level", "junior", "0-2 years"), "entry"),
    (("senior", "lead", "7+ years"), "senior"),
    (("director", "vp", "executive"), "executive"),
]
DEFAULT_EXPERIENCE_LEVEL = "mid"

INDUSTRY_CUES: List[Tuple[Tuple[str, ...], str]] = [
    (("software", "technology"), "Technology"),
    (("finance", "banking"), "Finance"),
    (("healthcare", "medical"), "Healthcare"),
    (("marketing", "advertising"), "Marketing"),
]
DEFAULT_INDUSTRY = "General"

KEYWORD_CATEGORIES = {
    "hard_skill",
    "soft_skill",
    "tool",
    "certification",
    "domain",
    "responsibility",
}


def max_verb_strength() -> int:
    return max(VERB_STRENGTH.values())


def ladder_level(text: str, ladder: List[Tuple[Tuple[str, ...], int]], default: int) -> int:
    """Return the level of the first ladder rung with a keyword contained in text."""
    lowered = (text or "").lower()
    for keywords, level in ladder:
        if any(k in lowered for k in keywords):
            return level
    return default

# Verbs that mark a work entry's bullets as achievement-oriented
STRONG_ACTION_VERBS = [
    "achieved", "developed", "implemented", "led", "managed", "created",
    "improved", "increased", "reduced", "optimized", "delivered", "built",
    "designed", "launched", "scaled", "drove", "established", "executed",
]

# Any match marks text as carrying a quantified result
QUANTIFIER_PATTERNS = [
    r"\d+%",
    r"\$\d+",
    r"\d+\+",
    r"\d+k",
    r"\d+m",
    r"\d+ million",
    r"increased.*\d+",
    r"decreased.*\d+",
    r"improved.*\d+",
]

STANDARD_SECTION_HEADERS = ["experience", "education", "skills", "summary", "contact"]
MIN_STANDARD_SECTIONS = 3
SPARSE_WORD_COUNT = 200

# Section -> share of the analysis overall score
ANALYSIS_WEIGHTS: Dict[str, float] = {
    "keywords": 0.30,
    "semantic": 0.25,
    "ats": 0.25,
    "sections": 0.20,
}
