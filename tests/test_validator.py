"""Tests for the document validator and validation issue types."""

import pytest

from vna_engine.notation.models import Document, Metadata, Phrase, Section
from vna_engine.notation.parser import parse
from vna_engine.notation.serializer import document_to_dict
from vna_engine.sahitya.syllables import VowelHeuristicSegmenter
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

FRONTMATTER = """---
title: "Test Varnam"
raga: "mohanam"
tala: "+234+0+0"
tempo: 60
---
"""

HEURISTIC = VowelHeuristicSegmenter()


def _validate_text(body: str) -> list[ValidationIssue]:
    return validate(parse(FRONTMATTER + body), segmenter=HEURISTIC)


def _metadata(**overrides) -> Metadata:
    fields = {"title": "Test", "raga": "mohanam", "tala": "+234+0+0"}
    fields.update(overrides)
    return Metadata(**fields)


def _codes(issues: list[ValidationIssue]) -> list[IssueCode]:
    return [issue.code for issue in issues]


# ---------------------------------------------------------------------------
# Metadata rules
# ---------------------------------------------------------------------------


class TestMetadata:
    @pytest.mark.parametrize("tempo", [20, 60, 300])
    def test_tempo_in_range(self, tempo):
        assert validate(Document(metadata=_metadata(tempo=tempo))) == []

    @pytest.mark.parametrize("tempo", [19, 301, 0])
    def test_tempo_out_of_range(self, tempo):
        issues = validate(Document(metadata=_metadata(tempo=tempo)))
        assert len(issues) == 1
        assert issues[0].code == IssueCode.UNUSUAL_TEMPO
        assert issues[0].severity == Severity.WARNING
        assert issues[0].line == 1
        assert f"{tempo} BPM" in issues[0].message

    def test_missing_tempo_is_fine(self):
        assert validate(Document(metadata=_metadata())) == []

    def test_unusual_gati(self):
        issues = validate(Document(metadata=_metadata(gati=6)))
        assert _codes(issues) == [IssueCode.UNUSUAL_GATI]
        assert issues[0].severity == Severity.WARNING

    @pytest.mark.parametrize("gati", [3, 4, 5, 7, 9])
    def test_canonical_gati(self, gati):
        assert validate(Document(metadata=_metadata(gati=gati))) == []

    def test_empty_required_fields(self):
        issues = validate(Document(metadata=_metadata(title=" ", raga="", tala="")))
        assert _codes(issues) == [IssueCode.EMPTY_TITLE, IssueCode.EMPTY_RAGA, IssueCode.EMPTY_TALA]
        assert all(i.severity == Severity.ERROR and i.line == 1 for i in issues)


# ---------------------------------------------------------------------------
# Tala patterns
# ---------------------------------------------------------------------------


class TestTalaPattern:
    @pytest.mark.parametrize("pattern", ["+234+0+0", "0++234", "+230+00", "+23+0+0", "+0+0"])
    def test_known_patterns(self, pattern):
        assert validate(Document(metadata=_metadata(tala=pattern))) == []

    def test_uncommon_pattern_is_info(self):
        issues = validate(Document(metadata=_metadata(tala="+2345")))
        assert _codes(issues) == [IssueCode.UNCOMMON_TALA_PATTERN]
        assert issues[0].severity == Severity.INFO
        assert "+234+0+0 (Adi)" in issues[0].message

    def test_invalid_character(self):
        issues = validate(Document(metadata=_metadata(tala="+2x4")))
        assert _codes(issues) == [
            IssueCode.INVALID_TALA_PATTERN,
            IssueCode.UNCOMMON_TALA_PATTERN,
        ]
        assert issues[0].severity == Severity.ERROR
        assert "'x'" in issues[0].message
        assert "position 3" in issues[0].message

    def test_one_error_per_invalid_character(self):
        issues = validate(Document(metadata=_metadata(tala="a1")))
        invalid = [i for i in issues if i.code == IssueCode.INVALID_TALA_PATTERN]
        assert len(invalid) == 2


# ---------------------------------------------------------------------------
# Sections and overrides
# ---------------------------------------------------------------------------


class TestSections:
    def test_empty_section_name(self):
        issues = _validate_text("\n[]\nS R ||\nsa ri ||\n")
        assert _codes(issues) == [IssueCode.EMPTY_SECTION_NAME]
        assert issues[0].line == 8

    def test_section_and_phrase_gati(self):
        issues = _validate_text(
            "\n[pallavi]\n@gati: 6\n\n@gati: 11\nS R ||\nsa ri ||\n"
        )
        assert _codes(issues) == [IssueCode.UNUSUAL_GATI, IssueCode.UNUSUAL_GATI]
        assert [i.line for i in issues] == [8, 11]

    def test_section_tala_override_checked(self):
        issues = _validate_text("\n[pallavi]\n@tala: +2x\n\nS R ||\nsa ri ||\n")
        assert _codes(issues) == [
            IssueCode.INVALID_TALA_PATTERN,
            IssueCode.UNCOMMON_TALA_PATTERN,
        ]
        assert all(i.line == 8 for i in issues)

    def test_phrase_tala_override_checked(self):
        issues = _validate_text("\n[pallavi]\n@tala: +0+0\nS R ||\nsa ri ||\n")
        assert issues == []

    def test_phrase_annotations_reported_at_their_lines(self):
        issues = _validate_text("\n[pallavi]\n@gati: 6\n@tala: +2x\nS R ||\nsa ri ||\n")
        assert _codes(issues) == [
            IssueCode.UNUSUAL_GATI,
            IssueCode.INVALID_TALA_PATTERN,
            IssueCode.UNCOMMON_TALA_PATTERN,
        ]
        assert [i.line for i in issues] == [9, 10, 10]


# ---------------------------------------------------------------------------
# Phrase rules
# ---------------------------------------------------------------------------


class TestPhrases:
    def test_aligned_phrase(self):
        issues = _validate_text(
            "\n[pallavi]\nG , G , | R , , , ||\nni - nu - | ko - - - ||\n"
        )
        assert issues == []

    def test_manual_markers_align_with_compact_swaras(self):
        issues = _validate_text("\n[pallavi]\nG,G, | R ||\nni`nu`ko`ri | ra ||\n")
        assert issues == []

    def test_empty_lines(self):
        doc = Document(
            metadata=_metadata(),
            sections=[Section("pallavi", [Phrase([], [], line_number=9)], line_number=8)],
        )
        issues = validate(doc)
        assert _codes(issues) == [IssueCode.EMPTY_SWARA_LINE, IssueCode.EMPTY_SAHITYA_LINE]
        assert [i.line for i in issues] == [9, 10]

    def test_token_count_mismatch_short_circuits(self):
        doc = Document(
            metadata=_metadata(),
            sections=[
                Section(
                    "pallavi",
                    [Phrase(["SRG", "Pa"], ["sa"], line_number=9, phrase_analysis="xyz")],
                    line_number=8,
                )
            ],
        )
        issues = validate(doc, segmenter=HEURISTIC)
        assert _codes(issues) == [IssueCode.TOKEN_COUNT_MISMATCH]
        assert issues[0].line == 10
        assert "2 tokens" in issues[0].message
        assert "1" in issues[0].message

    def test_token_unit_mismatch(self):
        issues = _validate_text("\n[pallavi]\nSR G | P ||\nsa ga | pa ||\n")
        assert len(issues) == 1
        issue = issues[0]
        assert issue.code == IssueCode.TOKEN_UNIT_MISMATCH
        assert issue.severity == Severity.ERROR
        assert issue.line == 10
        assert issue.column == 1
        assert issue.range == Range(Position(9, 0), Position(9, 2))
        assert "position 1" in issue.message
        assert "(2 units)" in issue.message
        assert "(1 units)" in issue.message

    def test_unit_mismatch_column_points_at_sahitya_token(self):
        issues = _validate_text("\n[pallavi]\nS R | P ||\nsa ri | pa`- ||\n")
        assert _codes(issues) == [IssueCode.TOKEN_UNIT_MISMATCH]
        assert issues[0].column == 9
        assert issues[0].range == Range(Position(9, 8), Position(9, 12))

    def test_each_mismatched_token_reported(self):
        issues = _validate_text("\n[pallavi]\nSR GM ||\nsa ga ||\n")
        assert _codes(issues) == [IssueCode.TOKEN_UNIT_MISMATCH] * 2


# ---------------------------------------------------------------------------
# Per-token gati suffixes
# ---------------------------------------------------------------------------


class TestTokenGati:
    def test_canonical_suffix(self):
        assert _validate_text("\n[pallavi]\nSRG:3 ||\nsa`ri`ga ||\n") == []

    def test_unusual_suffix(self):
        issues = _validate_text("\n[pallavi]\nS SRG:6 ||\nsa sa`ri`ga ||\n")
        assert _codes(issues) == [IssueCode.UNUSUAL_TOKEN_GATI]
        assert issues[0].severity == Severity.WARNING
        assert issues[0].line == 9
        assert issues[0].column == 3

    @pytest.mark.parametrize("suffix", ["?", "", "300", "-1"])
    def test_invalid_suffix(self, suffix):
        issues = _validate_text(f"\n[pallavi]\nSRG:{suffix} ||\nsa`ri`ga ||\n")
        assert _codes(issues) == [IssueCode.INVALID_TOKEN_GATI]
        assert issues[0].severity == Severity.ERROR

    def test_suffix_excluded_from_unit_count(self):
        issues = _validate_text("\n[pallavi]\nSR:4 ||\nsa`ri`ga ||\n")
        assert _codes(issues) == [IssueCode.TOKEN_UNIT_MISMATCH]
        assert "swara 'SR'" in issues[0].message


# ---------------------------------------------------------------------------
# Phrase analysis and swara case
# ---------------------------------------------------------------------------


class TestAnalysisAndCase:
    def test_valid_analysis(self):
        issues = _validate_text("\n[pallavi]\nS R ||\nsa ri ||\nphrases = (_ *)* *\n")
        assert issues == []

    def test_invalid_analysis_character(self):
        issues = _validate_text("\n[pallavi]\nS R ||\nsa ri ||\nphrases = (_ *)* x\n")
        assert _codes(issues) == [IssueCode.INVALID_PHRASE_ANALYSIS]
        assert issues[0].line == 11
        assert issues[0].severity == Severity.WARNING
        assert "position 8" in issues[0].message

    def test_mixed_case_swara(self):
        issues = _validate_text("\n[pallavi]\nS Sa ||\nsa sa ||\n")
        assert _codes(issues) == [IssueCode.MIXED_CASE_SWARA]
        assert issues[0].line == 9
        assert issues[0].column == 3
        assert "position 2" in issues[0].message


# ---------------------------------------------------------------------------
# Whole-document behaviour
# ---------------------------------------------------------------------------


class TestDocument:
    BODY = "\n[pallavi]\nSR G:6 | Pa ||\nsa ga | pa ||\nphrases = q\n"

    def test_deterministic(self):
        first = _validate_text(self.BODY)
        second = _validate_text(self.BODY)
        assert first == second
        assert len(first) == 4

    def test_document_not_modified(self):
        doc = parse(FRONTMATTER + self.BODY)
        before = document_to_dict(doc)
        validate(doc, segmenter=HEURISTIC)
        assert document_to_dict(doc) == before

    def test_language_hint_does_not_affect_manual_tokens(self):
        body = "\n[pallavi]\nG,G, ||\nnin`-`nu`- ||\n"
        for language in ("telugu", "tamil", "sanskrit"):
            frontmatter = FRONTMATTER.replace("tempo: 60", f"language: {language}")
            assert validate(parse(frontmatter + body)) == []

    @pytest.mark.parametrize("language", ["kannada", "malayalam", "sanskrit", "telugu"])
    def test_conjunct_tokens_align_for_every_language(self, language):
        frontmatter = FRONTMATTER.replace("tempo: 60", f"language: {language}")
        body = "\n[pallavi]\nSRG | PDNS ||\nsaṅgīta | tyāgarāja ||\n"
        assert validate(parse(frontmatter + body)) == []


# ---------------------------------------------------------------------------
# Issue helpers
# ---------------------------------------------------------------------------


class TestIssues:
    def test_to_dict(self):
        issue = ValidationIssue(
            severity=Severity.ERROR,
            message="bad",
            line=3,
            column=2,
            code=IssueCode.TOKEN_UNIT_MISMATCH,
            range=Range(Position(2, 1), Position(2, 4)),
        )
        assert issue.to_dict() == {
            "severity": "error",
            "message": "bad",
            "line": 3,
            "column": 2,
            "code": "token_unit_mismatch",
            "range": {
                "start": {"line": 2, "character": 1},
                "end": {"line": 2, "character": 4},
            },
        }

    def test_to_dict_without_optional_fields(self):
        issue = ValidationIssue(Severity.INFO, "note", 1)
        assert issue.to_dict()["range"] is None
        assert issue.to_dict()["code"] is None

    def test_counts_and_has_errors(self):
        issues = [
            ValidationIssue(Severity.WARNING, "w", 1),
            ValidationIssue(Severity.WARNING, "w", 2),
            ValidationIssue(Severity.INFO, "i", 3),
        ]
        assert count_by_severity(issues) == {
            Severity.ERROR: 0,
            Severity.WARNING: 2,
            Severity.INFO: 1,
        }
        assert not has_errors(issues)
        assert has_errors(issues + [ValidationIssue(Severity.ERROR, "e", 4)])
