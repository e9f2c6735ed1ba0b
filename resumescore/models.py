"""
Data shapes consumed and produced by the scoring core.

Inputs arrive as JSON-like dicts from a host application (camelCase keys,
snake_case also accepted). Outputs serialize back to camelCase via to_dict().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in data and data[k] is not None:
            return data[k]
    return default


def _str_or_none(v: Any) -> Optional[str]:
    if v is None:
        return None
    return v if isinstance(v, str) else str(v)


def _str_list(v: Any) -> List[str]:
    if not isinstance(v, (list, tuple)):
        return []
    return [x if isinstance(x, str) else str(x) for x in v if x is not None]


def _mapping_list(v: Any) -> List[Mapping[str, Any]]:
    if not isinstance(v, (list, tuple)):
        return []
    return [x for x in v if isinstance(x, Mapping)]


@dataclass
class WorkEntry:
    company: str = ""
    title: str = ""
    start: Optional[str] = None
    end: Optional[str] = None
    bullets: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkEntry":
        return cls(
            company=_str_or_none(data.get("company")) or "",
            title=_str_or_none(data.get("title")) or "",
            start=_str_or_none(_get(data, "from", "start")),
            end=_str_or_none(_get(data, "to", "end")),
            bullets=_str_list(data.get("bullets")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "title": self.title,
            "from": self.start,
            "to": self.end,
            "bullets": list(self.bullets),
        }


@dataclass
class EducationEntry:
    degree: str = ""
    institution: str = ""
    field_of_study: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationEntry":
        return cls(
            degree=_str_or_none(data.get("degree")) or "",
            institution=_str_or_none(data.get("institution")) or "",
            field_of_study=_str_or_none(data.get("field")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"degree": self.degree, "institution": self.institution, "field": self.field_of_study}


@dataclass
class CertificationEntry:
    name: str = ""
    issuer: Optional[str] = None
    date: Optional[str] = None
    expiry_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CertificationEntry":
        return cls(
            name=_str_or_none(data.get("name")) or "",
            issuer=_str_or_none(data.get("issuer")),
            date=_str_or_none(data.get("date")),
            expiry_date=_str_or_none(_get(data, "expiryDate", "expiry_date")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "issuer": self.issuer, "date": self.date, "expiryDate": self.expiry_date}


@dataclass
class ProjectEntry:
    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectEntry":
        return cls(
            name=_str_or_none(data.get("name")) or "",
            description=_str_or_none(data.get("description")) or "",
            technologies=_str_list(data.get("technologies")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "technologies": list(self.technologies)}


@dataclass
class ResumeData:
    """Structured resume. The scoring core reads it and never mutates it."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    summary: Optional[str] = None
    work: List[WorkEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    certifications: List[CertificationEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeData":
        """Build from parser output. Malformed list items are skipped.

        Raises:
            ValueError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Resume data must be an object, got {type(data).__name__}")
        contact = data.get("contact")
        if not isinstance(contact, Mapping):
            contact = {}
        return cls(
            name=_str_or_none(data.get("name")),
            email=_str_or_none(_get(data, "email") or contact.get("email")),
            phone=_str_or_none(_get(data, "phone") or contact.get("phone")),
            summary=_str_or_none(data.get("summary")),
            work=[WorkEntry.from_dict(w) for w in _mapping_list(data.get("work"))],
            skills=_str_list(data.get("skills")),
            education=[EducationEntry.from_dict(e) for e in _mapping_list(data.get("education"))],
            projects=[ProjectEntry.from_dict(p) for p in _mapping_list(data.get("projects"))],
            certifications=[CertificationEntry.from_dict(c) for c in _mapping_list(data.get("certifications"))],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "summary": self.summary,
            "work": [w.to_dict() for w in self.work],
            "skills": list(self.skills),
            "education": [e.to_dict() for e in self.education],
            "projects": [p.to_dict() for p in self.projects],
            "certifications": [c.to_dict() for c in self.certifications],
        }

    def all_bullets(self) -> List[str]:
        return [b for w in self.work for b in w.bullets]


@dataclass
class ScoreMetric:
    name: str
    original_score: float
    optimized_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "originalScore": self.original_score, "optimizedScore": self.optimized_score}


@dataclass
class Scorecard:
    overall_score: int
    metrics: List[ScoreMetric]
    original_overall_score: Optional[int] = None
    red_flags: List[str] = field(default_factory=list)

    def metric(self, name: str) -> Optional[ScoreMetric]:
        for m in self.metrics:
            if m.name == name:
                return m
        return None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "overallScore": self.overall_score,
            "metrics": [m.to_dict() for m in self.metrics],
        }
        if self.original_overall_score is not None:
            out["originalOverallScore"] = self.original_overall_score
            out["redFlags"] = list(self.red_flags)
        return out


@dataclass
class JobKeyword:
    """One keyword from an external job-description extractor."""

    term: str
    category: str = "hard_skill"
    importance: int = 5
    frequency: int = 0
    confidence: float = 1.0
    variations: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobKeyword":
        importance = _get(data, "importance", default=5)
        confidence = _get(data, "confidence", default=1.0)
        return cls(
            term=_str_or_none(data.get("term")) or "",
            category=_str_or_none(data.get("category")) or "hard_skill",
            importance=min(10, max(1, int(importance))),
            frequency=int(_get(data, "frequency", default=0)),
            confidence=min(1.0, max(0.0, float(confidence))),
            variations=_str_list(data.get("variations")),
        )


@dataclass
class ExtractedKeywords:
    keywords: List[JobKeyword] = field(default_factory=list)
    requirements: List[str] = field(default_factory=list)
    preferences: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedKeywords":
        return cls(
            keywords=[JobKeyword.from_dict(k) for k in _mapping_list(data.get("keywords")) if k.get("term")],
            requirements=_str_list(data.get("requirements")),
            preferences=_str_list(data.get("preferences")),
        )

    def terms(self) -> List[str]:
        return [k.term.lower() for k in self.keywords]


@dataclass
class KeywordMatch:
    term: str
    category: str
    found: bool
    frequency: int
    importance: int
    confidence: float
    variations: List[str]
    context_match: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "term": self.term,
            "category": self.category,
            "found": self.found,
            "frequency": self.frequency,
            "importance": self.importance,
            "confidence": self.confidence,
            "variations": list(self.variations),
            "contextMatch": self.context_match,
        }


@dataclass
class KeywordAnalysis:
    matched: List[KeywordMatch] = field(default_factory=list)
    partial: List[KeywordMatch] = field(default_factory=list)
    missing: List[KeywordMatch] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.partial) + len(self.missing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": [m.to_dict() for m in self.matched],
            "partial": [m.to_dict() for m in self.partial],
            "missing": [m.to_dict() for m in self.missing],
        }


@dataclass
class JobAnalysis:
    keywords: ExtractedKeywords
    requirements: Dict[str, List[str]]
    industry_context: str
    experience_level: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requirements": {
                "critical": list(self.requirements.get("critical", [])),
                "preferred": list(self.requirements.get("preferred", [])),
                "niceToHave": list(self.requirements.get("nice_to_have", [])),
            },
            "industryContext": self.industry_context,
            "experienceLevel": self.experience_level,
        }


@dataclass
class Insights:
    strength_areas: List[str] = field(default_factory=list)
    improvement_areas: List[str] = field(default_factory=list)
    keyword_gaps: List[str] = field(default_factory=list)
    competitive_advantages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strengthAreas": list(self.strength_areas),
            "improvementAreas": list(self.improvement_areas),
            "keywordGaps": list(self.keyword_gaps),
            "competitiveAdvantages": list(self.competitive_advantages),
        }


@dataclass
class SectionScore:
    score: float
    feedback: str
    keyword_density: float = 0.0
    quality_score: float = 0.0
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "feedback": self.feedback,
            "keywordDensity": self.keyword_density,
            "qualityScore": self.quality_score,
            "suggestions": list(self.suggestions),
        }


@dataclass
class ATSIssue:
    type: str
    severity: str
    description: str
    suggestion: str
    impact: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity,
            "description": self.description,
            "suggestion": self.suggestion,
            "impact": self.impact,
        }


@dataclass
class ATSCompatibility:
    score: int
    issues: List[ATSIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "issues": [i.to_dict() for i in self.issues]}


@dataclass
class Recommendation:
    section: str
    type: str
    suggestion: str
    reasoning: str
    impact: int
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "section": self.section,
            "type": self.type,
            "suggestion": self.suggestion,
            "reasoning": self.reasoning,
            "impact": self.impact,
            "keywords": list(self.keywords),
        }


ScorePair = Tuple[float, float]


@dataclass
class ExternalScores:
    """
    Values computed outside the core (LLM judges, embedding services).

    Pairs are (original, optimized). Similarities are cosine values in [0, 1];
    every other pair is already on the 0-100 scale.
    """

    role_alignment: Optional[ScorePair] = None
    similarity: Optional[ScorePair] = None
    experience_alignment: Optional[ScorePair] = None
    keyword_match_fallback: Optional[ScorePair] = None
    skills_match_fallback: Optional[ScorePair] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExternalScores":
        if not isinstance(data, Mapping):
            raise ValueError(f"External scores must be an object, got {type(data).__name__}")

        def pair(*keys: str) -> Optional[ScorePair]:
            v = _get(data, *keys)
            if isinstance(v, Mapping):
                return (float(v.get("original", 0) or 0), float(v.get("optimized", 0) or 0))
            if isinstance(v, (list, tuple)) and len(v) == 2:
                return (float(v[0] or 0), float(v[1] or 0))
            return None

        return cls(
            role_alignment=pair("roleAlignment", "role_alignment"),
            similarity=pair("similarity"),
            experience_alignment=pair("experienceAlignment", "experience_alignment"),
            keyword_match_fallback=pair("keywordMatch", "keyword_match_fallback"),
            skills_match_fallback=pair("skillsMatch", "skills_match_fallback"),
        )
