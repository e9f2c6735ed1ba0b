"""Deterministic resume-to-job-description scoring."""

__version__ = "0.3.0"
