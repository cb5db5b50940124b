"""Fuzzy search over TA / grader applicant survey exports."""

__version__ = "0.1.0"
