"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DocumentRequest(BaseModel):
    text: str = Field(..., description="Full .vna source text")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class CommentOut(BaseModel):
    text: str
    line_number: int
    comment_type: str


class MetadataOut(BaseModel):
    title: str
    raga: str
    tala: str
    composition_type: str | None = None
    tempo: int | None = None
    composer: str | None = None
    language: str | None = None
    key: str | None = None
    gati: int | None = None
    default_octave: str | None = None
    arohanam: str | None = None
    avarohanam: str | None = None


class PhraseOut(BaseModel):
    swaras: list[str]
    sahitya: list[str]
    line_number: int
    phrase_analysis: str | None = None
    preceding_comments: list[CommentOut]
    gati: int | None = None
    tala: str | None = None
    beat_positions: list[int]
    gati_line_number: int | None = None
    tala_line_number: int | None = None


class SectionOut(BaseModel):
    name: str
    line_number: int
    phrases: list[PhraseOut]
    comments: list[CommentOut]
    gati: int | None = None
    tala: str | None = None


class DocumentOut(BaseModel):
    """Parsed document tree returned by /parse."""

    metadata: MetadataOut
    sections: list[SectionOut]
    comments: list[CommentOut]


class ParseErrorOut(BaseModel):
    kind: str
    code: str
    line: int
    message: str


class PositionOut(BaseModel):
    line: int
    character: int


class RangeOut(BaseModel):
    start: PositionOut
    end: PositionOut


class IssueOut(BaseModel):
    severity: str
    message: str
    line: int
    column: int | None = None
    code: str | None = None
    range: RangeOut | None = None


class ValidationResponse(BaseModel):
    """Result of /validate. A parse failure is reported as a single error issue."""

    valid: bool
    error_count: int
    warning_count: int
    info_count: int
    issues: list[IssueOut]


class SectionSummaryOut(BaseModel):
    name: str
    line_number: int
    phrase_count: int
    token_count: int
    gati: int | None = None
    tala: str


class SummaryResponse(BaseModel):
    title: str
    raga: str
    tala: str
    tala_name: str | None = None
    tempo: int
    composer: str | None = None
    language: str | None = None
    phrase_count: int
    token_count: int
    sections: list[SectionSummaryOut]
    report: str


class TalaPatternOut(BaseModel):
    pattern: str
    name: str
