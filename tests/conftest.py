"""
Pytest configuration and shared fixtures.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import pytest

from resumescore.logger import StructuredLogger
from resumescore.models import ExtractedKeywords, ResumeData


@pytest.fixture
def fixed_now() -> datetime:
    """Pinned clock for date-dependent scorers."""
    return datetime(2026, 1, 1)


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    """Logger with no console output and a private metrics dict."""
    return StructuredLogger(name="resumescore-test", enable_console=False)


@pytest.fixture
def sample_resume_dict() -> Dict[str, Any]:
    """Parsed resume as a host application would send it."""
    return {
        "name": "Jane Doe",
        "summary": "Backend engineer focused on python services and data pipelines.",
        "work": [
            {
                "company": "Acme",
                "title": "Senior Software Engineer",
                "from": "2021-03-01",
                "to": "",
                "bullets": [
                    "Led migration of billing services to python by 40%",
                    "Built data pipelines processing 2M events per day",
                ],
            },
            {
                "company": "Beta",
                "title": "Software Engineer",
                "from": "2018-01-01",
                "to": "2021-02-01",
                "bullets": [
                    "Responsible for maintaining internal tools",
                    "Worked with product on reporting features",
                ],
            },
        ],
        "skills": ["Python", "PostgreSQL", "Docker", "Kubernetes", "Terraform", "AWS"],
        "education": [
            {"degree": "Bachelor of Science", "institution": "State University", "field": "Computer Science"}
        ],
        "projects": [
            {"name": "pipeline-kit", "description": "Open source ETL helpers", "technologies": ["python"]}
        ],
        "certifications": [
            {"name": "AWS Certified Solutions Architect", "date": "2024-05-01"}
        ],
    }


@pytest.fixture
def sample_resume(sample_resume_dict) -> ResumeData:
    return ResumeData.from_dict(sample_resume_dict)


@pytest.fixture
def job_description() -> str:
    return (
        "Senior Backend Engineer\n"
        "We are a software company building data platforms.\n"
        "Requirements:\n"
        "- Python\n"
        "- Kubernetes\n"
        "- Terraform\n"
        "- GraphQL\n"
        "Bachelor degree in computer science or similar. Experience with solutions architecture."
    )


@pytest.fixture
def extracted_keywords_dict() -> Dict[str, Any]:
    """Output of an external keyword extractor."""
    return {
        "keywords": [
            {"term": "Python", "category": "hard_skill", "importance": 9, "frequency": 3,
             "confidence": 0.95, "variations": ["py"]},
            {"term": "Kubernetes", "category": "tool", "importance": 8, "frequency": 1,
             "confidence": 0.9, "variations": ["k8s"]},
            {"term": "GraphQL", "category": "hard_skill", "importance": 8, "frequency": 1,
             "confidence": 0.8, "variations": []},
            {"term": "mentoring", "category": "responsibility", "importance": 6, "frequency": 1,
             "confidence": 0.7, "variations": ["mentored"]},
        ],
        "requirements": ["Python", "Kubernetes", "Terraform", "GraphQL"],
        "preferences": ["Go"],
    }


@pytest.fixture
def extracted_keywords(extracted_keywords_dict) -> ExtractedKeywords:
    return ExtractedKeywords.from_dict(extracted_keywords_dict)


@pytest.fixture
def resume_file(tmp_path, sample_resume_dict) -> Path:
    path = tmp_path / "resume.json"
    path.write_text(json.dumps(sample_resume_dict))
    return path


@pytest.fixture
def jd_file(tmp_path, job_description) -> Path:
    path = tmp_path / "jd.txt"
    path.write_text(job_description)
    return path


@pytest.fixture
def keywords_file(tmp_path, extracted_keywords_dict) -> Path:
    path = tmp_path / "keywords.json"
    path.write_text(json.dumps(extracted_keywords_dict))
    return path
