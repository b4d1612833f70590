"""Severity-tagged findings reported by the validator."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import StrEnum


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(StrEnum):
    """Stable machine-readable identifiers for editor and CI tooling."""

    UNUSUAL_TEMPO = "unusual_tempo"
    UNUSUAL_GATI = "unusual_gati"
    EMPTY_TITLE = "empty_title"
    EMPTY_RAGA = "empty_raga"
    EMPTY_TALA = "empty_tala"
    INVALID_TALA_PATTERN = "invalid_tala_pattern"
    UNCOMMON_TALA_PATTERN = "uncommon_tala_pattern"
    EMPTY_SECTION_NAME = "empty_section_name"
    EMPTY_SWARA_LINE = "empty_swara_line"
    EMPTY_SAHITYA_LINE = "empty_sahitya_line"
    TOKEN_COUNT_MISMATCH = "token_count_mismatch"
    UNUSUAL_TOKEN_GATI = "unusual_token_gati"
    INVALID_TOKEN_GATI = "invalid_token_gati"
    TOKEN_UNIT_MISMATCH = "token_unit_mismatch"
    INVALID_PHRASE_ANALYSIS = "invalid_phrase_analysis"
    MIXED_CASE_SWARA = "mixed_case_swara"


@dataclass(frozen=True)
class Position:
    """0-based line/character position, as used by editor protocols."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True)
class ValidationIssue:
    """One finding. Created only by the validator and never modified.

    Attributes:
        severity: Error, warning or info.
        message: Human-readable description.
        line: 1-based source line.
        column: Optional 1-based column.
        code: Stable identifier of the rule.
        range: Optional precise 0-based span.
    """

    severity: Severity
    message: str
    line: int
    column: int | None = None
    code: IssueCode | None = None
    range: Range | None = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "code": self.code.value if self.code else None,
            "range": (
                {
                    "start": {"line": self.range.start.line, "character": self.range.start.character},
                    "end": {"line": self.range.end.line, "character": self.range.end.character},
                }
                if self.range
                else None
            ),
        }


def has_errors(issues: list[ValidationIssue]) -> bool:
    return any(i.severity == Severity.ERROR for i in issues)


def count_by_severity(issues: list[ValidationIssue]) -> dict[Severity, int]:
    """Count issues per severity; every severity is present in the result."""
    counts = Counter(i.severity for i in issues)
    return {severity: counts.get(severity, 0) for severity in Severity}
