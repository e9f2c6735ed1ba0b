"""
Tests for scorecard building and weighted aggregation.
"""

from datetime import datetime

import pytest

from resumescore.models import ExternalScores, ResumeData, ScoreMetric
from resumescore.scorecard import (
    ACTION_VERB_STRENGTH,
    BULLET_STRENGTH,
    CUSTOMIZATION_LEVEL,
    EDUCATION_CERTIFICATIONS,
    EXPERIENCE_ALIGNMENT,
    FORMATTING_STRUCTURE,
    KEYWORD_MATCH,
    ROLE_ALIGNMENT,
    SENTENCE_LENGTH,
    SKILLS_MATCH,
    build_resume_scorecard,
    build_scorecard,
    original_overall_from_metrics,
    overall_from_metrics,
    weighted_average,
)
from resumescore.scorers.common import mean, round_half_up

NOW = datetime(2026, 1, 1)

WEIGHTED_METRICS = [
    KEYWORD_MATCH,
    EXPERIENCE_ALIGNMENT,
    BULLET_STRENGTH,
    ROLE_ALIGNMENT,
    SKILLS_MATCH,
    EDUCATION_CERTIFICATIONS,
    FORMATTING_STRUCTURE,
    CUSTOMIZATION_LEVEL,
]


class TestWeightedAverage:
    """Test metric aggregation."""

    def test_uniform_scores(self):
        metrics = [ScoreMetric(name, 10, 70) for name in WEIGHTED_METRICS]
        assert weighted_average(metrics) == 70.0

    def test_weights_applied(self):
        metrics = [ScoreMetric(KEYWORD_MATCH, 0, 100), ScoreMetric(BULLET_STRENGTH, 0, 50)]
        # (100 * 30 + 50 * 15) / 45
        assert weighted_average(metrics) == 83.33

    def test_unknown_metric_weighs_zero(self):
        metrics = [ScoreMetric(KEYWORD_MATCH, 0, 80), ScoreMetric("Mystery", 0, 0)]
        assert weighted_average(metrics) == 80.0

    def test_no_weighted_metrics(self):
        assert weighted_average([ScoreMetric("Mystery", 0, 55)]) == 0.0
        assert weighted_average([]) == 0.0

    @pytest.mark.parametrize("weights", [
        {KEYWORD_MATCH: 1},
        {KEYWORD_MATCH: 3, SKILLS_MATCH: 7, "Mystery": 2},
        None,
    ])
    def test_idempotent_for_any_weights(self, weights):
        metrics = [ScoreMetric(name, 0, 42.5) for name in WEIGHTED_METRICS + ["Mystery"]]
        assert weighted_average(metrics, weights) == 42.5

    def test_custom_weights(self):
        metrics = [ScoreMetric("a", 0, 100), ScoreMetric("b", 0, 0)]
        assert weighted_average(metrics, {"a": 1, "b": 3}) == 25.0

    def test_overall_rounding(self):
        metrics = [ScoreMetric(KEYWORD_MATCH, 40, 82.5)]
        assert overall_from_metrics(metrics) == 83
        assert original_overall_from_metrics(metrics) == 40


class TestBuildScorecard:
    """Test the three-metric text scorecard."""

    def test_metrics_and_overall(self, quiet_logger):
        card = build_scorecard("I help.", "I lead python projects.", "python projects", logger=quiet_logger)

        assert [m.name for m in card.metrics] == [KEYWORD_MATCH, ACTION_VERB_STRENGTH, SENTENCE_LENGTH]
        keyword = card.metric(KEYWORD_MATCH)
        verb = card.metric(ACTION_VERB_STRENGTH)
        assert (keyword.original_score, keyword.optimized_score) == (0.0, 100.0)
        assert (verb.original_score, verb.optimized_score) == (40.0, 100.0)
        assert card.overall_score == round_half_up(mean(m.optimized_score for m in card.metrics))
        assert quiet_logger.get_metrics()["scorecards_built"] == 1

    def test_original_overall_absent(self, quiet_logger):
        card = build_scorecard("a", "b", "c", logger=quiet_logger)
        data = card.to_dict()

        assert card.original_overall_score is None
        assert "originalOverallScore" not in data
        assert "redFlags" not in data

    def test_empty_inputs(self, quiet_logger):
        card = build_scorecard("", "", "", logger=quiet_logger)
        assert card.overall_score == 0
        assert all(m.original_score == 0 and m.optimized_score == 0 for m in card.metrics)


class TestBuildResumeScorecard:
    """Test the eight-metric structured scorecard."""

    def test_metric_names_and_bounds(self, sample_resume, job_description, quiet_logger):
        card = build_resume_scorecard(sample_resume, sample_resume, job_description, now=NOW, logger=quiet_logger)

        assert [m.name for m in card.metrics] == WEIGHTED_METRICS
        for m in card.metrics:
            assert 0 <= m.original_score <= 100
            assert 0 <= m.optimized_score <= 100
        assert 0 <= card.overall_score <= 100

    def test_overall_derived_from_metrics(self, sample_resume, job_description, quiet_logger):
        card = build_resume_scorecard(sample_resume, sample_resume, job_description, now=NOW, logger=quiet_logger)

        assert card.overall_score == round_half_up(weighted_average(card.metrics))
        assert card.original_overall_score == original_overall_from_metrics(card.metrics)

    def test_requirements_from_jd_bullets(self, sample_resume, job_description, quiet_logger):
        """Python, Kubernetes and Terraform of four JD bullets are listed skills."""
        card = build_resume_scorecard(sample_resume, sample_resume, job_description, now=NOW, logger=quiet_logger)
        assert card.metric(SKILLS_MATCH).optimized_score == 75.0

    def test_explicit_keywords_and_requirements(self, sample_resume, quiet_logger):
        card = build_resume_scorecard(
            sample_resume,
            sample_resume,
            "irrelevant",
            jd_keywords=["python", "cobol"],
            requirements=["Docker"],
            now=NOW,
            logger=quiet_logger,
        )
        assert card.metric(KEYWORD_MATCH).optimized_score == 50.0
        assert card.metric(SKILLS_MATCH).optimized_score == 100.0

    def test_external_scores(self, sample_resume, job_description, quiet_logger):
        external = ExternalScores(role_alignment=(55, 80), similarity=(0.5, 0.9))
        card = build_resume_scorecard(
            sample_resume, sample_resume, job_description, external=external, now=NOW, logger=quiet_logger
        )

        role = card.metric(ROLE_ALIGNMENT)
        custom = card.metric(CUSTOMIZATION_LEVEL)
        assert (role.original_score, role.optimized_score) == (55.0, 80.0)
        assert (custom.original_score, custom.optimized_score) == (50.0, 90.0)

    def test_missing_external_scores_zero(self, sample_resume, job_description, quiet_logger):
        card = build_resume_scorecard(sample_resume, sample_resume, job_description, now=NOW, logger=quiet_logger)

        assert card.metric(ROLE_ALIGNMENT).optimized_score == 0.0
        assert card.metric(CUSTOMIZATION_LEVEL).optimized_score == 0.0

    def test_keyword_fallback_only_when_zero(self, sample_resume, quiet_logger):
        external = ExternalScores(keyword_match_fallback=(11, 22))

        hit = build_resume_scorecard(
            sample_resume, sample_resume, "x", jd_keywords=["python"],
            external=external, now=NOW, logger=quiet_logger,
        )
        miss = build_resume_scorecard(
            sample_resume, sample_resume, "x", jd_keywords=["cobol"],
            external=external, now=NOW, logger=quiet_logger,
        )

        assert hit.metric(KEYWORD_MATCH).optimized_score == 100.0
        assert (miss.metric(KEYWORD_MATCH).original_score, miss.metric(KEYWORD_MATCH).optimized_score) == (11.0, 22.0)

    def test_skills_fallback_only_when_zero(self, sample_resume, quiet_logger):
        external = ExternalScores(skills_match_fallback=(30, 60))
        card = build_resume_scorecard(
            sample_resume, sample_resume, "x", requirements=["Haskell"],
            external=external, now=NOW, logger=quiet_logger,
        )
        assert card.metric(SKILLS_MATCH).optimized_score == 60.0

    def test_external_experience_overrides(self, sample_resume, quiet_logger):
        external = ExternalScores(experience_alignment=(12, 34))
        card = build_resume_scorecard(
            sample_resume, sample_resume, "x", target_title="Senior Engineer",
            external=external, now=NOW, logger=quiet_logger,
        )
        exp = card.metric(EXPERIENCE_ALIGNMENT)
        assert (exp.original_score, exp.optimized_score) == (12.0, 34.0)

    def test_target_title(self, sample_resume, quiet_logger):
        card = build_resume_scorecard(
            sample_resume, sample_resume, "x", target_title="Senior Engineer", now=NOW, logger=quiet_logger
        )
        assert card.metric(EXPERIENCE_ALIGNMENT).optimized_score == 100.0

    def test_optimized_bullets_override(self, sample_resume, quiet_logger):
        card = build_resume_scorecard(
            sample_resume, sample_resume, "x", optimized_bullets=[], now=NOW, logger=quiet_logger
        )
        bullet = card.metric(BULLET_STRENGTH)
        assert bullet.optimized_score == 0.0
        assert bullet.original_score > 0

    def test_red_flags_from_optimized_resume(self, sample_resume, quiet_logger):
        optimized = ResumeData.from_dict({
            "work": [
                {"company": "Acme", "title": "Engineer", "from": "2019-01-01", "to": "2020-01-01"},
                {"company": "Beta", "title": "Senior Engineer", "from": "2021-01-01", "to": "2023-01-01"},
            ]
        })
        card = build_resume_scorecard(sample_resume, optimized, "x", now=NOW, logger=quiet_logger)

        assert card.red_flags == [
            "Significant gap of 366 days between Engineer at Acme and Senior Engineer at Beta."
        ]
        assert card.to_dict()["redFlags"] == card.red_flags

    def test_improvement_reflected(self, quiet_logger):
        original = ResumeData.from_dict({
            "work": [{"company": "Acme", "title": "Engineer", "from": "2018-01-01",
                      "bullets": ["Responsible for stuff"]}],
        })
        optimized = ResumeData.from_dict({
            "summary": "Python engineer",
            "work": [{"company": "Acme", "title": "Engineer", "from": "2018-01-01",
                      "bullets": ["Optimized python pipelines cutting cost by 20%"]}],
            "skills": ["Python", "Kubernetes", "Docker", "Terraform", "SQL"],
        })
        card = build_resume_scorecard(
            original, optimized, "Need:\n- Python\n- Kubernetes\npython kubernetes engineer",
            now=NOW, logger=quiet_logger,
        )

        assert card.overall_score > card.original_overall_score
        for name in (KEYWORD_MATCH, BULLET_STRENGTH, SKILLS_MATCH, FORMATTING_STRUCTURE):
            m = card.metric(name)
            assert m.optimized_score > m.original_score

    def test_to_dict_camel_case(self, sample_resume, job_description, quiet_logger):
        data = build_resume_scorecard(
            sample_resume, sample_resume, job_description, now=NOW, logger=quiet_logger
        ).to_dict()

        assert set(data) == {"overallScore", "metrics", "originalOverallScore", "redFlags"}
        assert set(data["metrics"][0]) == {"name", "originalScore", "optimizedScore"}


class TestExternalScores:
    """Test parsing of externally computed scores."""

    def test_pairs_as_objects_and_lists(self):
        external = ExternalScores.from_dict({
            "roleAlignment": {"original": 40, "optimized": 70},
            "similarity": [0.2, 0.8],
            "skills_match_fallback": [10, None],
        })

        assert external.role_alignment == (40.0, 70.0)
        assert external.similarity == (0.2, 0.8)
        assert external.skills_match_fallback == (10.0, 0.0)
        assert external.experience_alignment is None

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            ExternalScores.from_dict([1, 2])
