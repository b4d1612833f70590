"""Fatal parse errors. The parser raises at most one per call."""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(Enum):
    """Structural problems that abort parsing.

    The value is the stable code string reported to external tooling.
    """

    MISSING_FRONTMATTER = "missing_frontmatter"
    EMPTY_FRONTMATTER = "empty_frontmatter"
    MALFORMED_METADATA = "malformed_metadata"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNEXPECTED_CONTENT = "unexpected_content"
    MISSING_BEAT_MARKERS = "missing_beat_markers"
    INCOMPLETE_PHRASE = "incomplete_phrase"
    INVALID_GATI = "invalid_gati"
    BEAT_MISALIGNMENT = "beat_misalignment"

    @property
    def code(self) -> str:
        return self.value


class ParseError(ValueError):
    """Raised by :func:`vna_engine.notation.parser.parse` on the first structural problem.

    Attributes:
        kind: Which structural rule was broken.
        line: 1-based source line of the offending content.
        message: Human-readable cause.
    """

    def __init__(self, kind: ParseErrorKind, line: int, message: str) -> None:
        super().__init__(f"line {line}: {message}")
        self.kind = kind
        self.line = line
        self.message = message

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name,
            "code": self.kind.code,
            "line": self.line,
            "message": self.message,
        }
