"""Validation rules and issue types for parsed .vna documents."""

from vna_engine.validation.issues import (
    IssueCode,
    Position,
    Range,
    Severity,
    ValidationIssue,
    count_by_severity,
    has_errors,
)
from vna_engine.validation.validator import validate

__all__ = [
    "IssueCode",
    "Position",
    "Range",
    "Severity",
    "ValidationIssue",
    "count_by_severity",
    "has_errors",
    "validate",
]
