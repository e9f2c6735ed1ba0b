"""
Tests for the education & certifications scorer.
"""

from datetime import datetime

import pytest

from resumescore.models import CertificationEntry, EducationEntry, ResumeData
from resumescore.scorers.education import (
    degree_level,
    education_breakdown,
    education_certifications_score,
    target_degree_level,
)

NOW = datetime(2026, 1, 1)


class TestDegreeLevels:
    """Test degree ladders."""

    @pytest.mark.parametrize("degree,level", [
        ("PhD in Physics", 5),
        ("Doctor of Medicine", 5),
        ("Master of Science", 4),
        ("Bachelor of Arts", 3),
        ("Associate of Applied Science", 2),
        ("High School Diploma", 1),
        ("MBA", 3),
    ])
    def test_degree_level(self, degree, level):
        assert degree_level(degree) == level

    def test_target_from_job_description(self):
        assert target_degree_level("Master's degree required") == 4
        assert target_degree_level("PhD or master preferred") == 5
        assert target_degree_level("No formal requirements") == 3


class TestEducationScore:
    """Test weighted composite."""

    def test_bachelor_against_master_requirement(self):
        """Bachelor resume against a master's JD, no field, no certifications."""
        resume = ResumeData(education=[EducationEntry(degree="Bachelor of Science", institution="State")])
        parts = education_breakdown(resume, "Requires a master's degree", now=NOW)

        assert parts["degree"] == 75.0
        assert parts["field"] == 100.0
        assert parts["certification"] == 0.0
        assert parts["recency"] == 100.0
        assert education_certifications_score(resume, "Requires a master's degree", now=NOW) == 60.0

    def test_no_education(self):
        assert education_certifications_score(ResumeData(), "bachelor degree", now=NOW) == 30.0

    def test_overqualified_capped(self):
        resume = ResumeData(education=[EducationEntry(degree="PhD", institution="MIT")])
        assert education_breakdown(resume, "Engineer wanted", now=NOW)["degree"] == 100.0

    def test_best_degree_counts(self):
        resume = ResumeData(education=[
            EducationEntry(degree="Associate", institution="CC"),
            EducationEntry(degree="Master of Science", institution="State"),
        ])
        assert education_breakdown(resume, "master", now=NOW)["degree"] == 100.0

    def test_field_match(self):
        resume = ResumeData(education=[
            EducationEntry(degree="BSc", institution="State", field_of_study="Computer Science"),
            EducationEntry(degree="BA", institution="State", field_of_study="Art History"),
        ])
        parts = education_breakdown(resume, "Degree in computer science", now=NOW)
        assert parts["field"] == 50.0

    def test_relevant_recent_certification(self, sample_resume, job_description):
        parts = education_breakdown(sample_resume, job_description, now=NOW)

        assert parts["certification"] == 100.0
        assert parts["recency"] == 100.0

    def test_stale_certification(self):
        resume = ResumeData(certifications=[CertificationEntry(name="Solutions Architect", date="2015")])
        parts = education_breakdown(resume, "solutions architect", now=NOW)

        assert parts["certification"] == 100.0
        assert parts["recency"] == 0.0

    def test_expiry_date_preferred(self):
        resume = ResumeData(certifications=[
            CertificationEntry(name="Cert", date="2010-01-01", expiry_date="2030-01-01"),
        ])
        assert education_breakdown(resume, "", now=NOW)["recency"] == 100.0

    def test_undated_certification_counts_as_recent(self):
        resume = ResumeData(certifications=[
            CertificationEntry(name="Cert"),
            CertificationEntry(name="Other", date="sometime"),
        ])
        assert education_breakdown(resume, "", now=NOW)["recency"] == 100.0

    def test_irrelevant_certification(self):
        resume = ResumeData(certifications=[CertificationEntry(name="Scuba Diving", date="2025")])
        assert education_breakdown(resume, "python engineer", now=NOW)["certification"] == 0.0

    def test_score_bounded(self, sample_resume, job_description):
        score = education_certifications_score(sample_resume, job_description, now=NOW)
        assert 0 <= score <= 100
