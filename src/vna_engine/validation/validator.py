"""Document validator — structural and alignment rules over a parsed .vna tree.

Every rule violation becomes a :class:`ValidationIssue`; validation never
aborts. The one short-circuit is per phrase: when the swara and sahitya
token counts differ, the per-token checks of that phrase are skipped so a
single misalignment does not cascade into one error per token.
"""

from __future__ import annotations

import logging

from vna_engine.notation.models import (
    Document,
    Metadata,
    Phrase,
    Section,
    canonical_gati_values,
    load_tala_patterns,
)
from vna_engine.sahitya.syllables import SyllableSegmenter, syllable_units
from vna_engine.swara.units import melodic_units, split_token_gati
from vna_engine.validation.issues import (
    IssueCode,
    Position,
    Range,
    Severity,
    ValidationIssue,
    count_by_severity,
)

logger = logging.getLogger(__name__)

MIN_TEMPO = 20
MAX_TEMPO = 300
METADATA_LINE = 1
TALA_CHARACTERS = frozenset("+023456789")
PHRASE_ANALYSIS_CHARACTERS = frozenset("_*() ")


def validate(
    document: Document,
    segmenter: SyllableSegmenter | None = None,
) -> list[ValidationIssue]:
    """Validate a parsed document and return every issue found, in source order.

    Args:
        document: The parsed document (not modified).
        segmenter: Syllabification strategy for automatic sahitya mode;
            defaults to the transliteration strategy with heuristic fallback.
    """
    issues = _Validator(document.metadata.language, segmenter).run(document)
    counts = count_by_severity(issues)
    logger.debug(
        "Validated %r: %d errors, %d warnings, %d info",
        document.metadata.title,
        counts[Severity.ERROR],
        counts[Severity.WARNING],
        counts[Severity.INFO],
    )
    return issues


class _Validator:
    def __init__(self, language: str | None, segmenter: SyllableSegmenter | None) -> None:
        self.issues: list[ValidationIssue] = []
        self.language = language
        self.segmenter = segmenter
        self.canonical_gati = canonical_gati_values()

    def run(self, document: Document) -> list[ValidationIssue]:
        self._check_metadata(document.metadata)
        for section in document.sections:
            self._check_section(section)
        return list(self.issues)

    def _add(
        self,
        severity: Severity,
        line: int,
        message: str,
        code: IssueCode,
        column: int | None = None,
        span: Range | None = None,
    ) -> None:
        self.issues.append(ValidationIssue(
            severity=severity,
            message=message,
            line=line,
            column=column,
            code=code,
            range=span,
        ))

    # -- shared rules ------------------------------------------------------

    def _check_gati(self, gati: int | None, line: int) -> None:
        if gati is not None and gati not in self.canonical_gati:
            self._add(
                Severity.WARNING,
                line,
                f"Unusual gati value: {gati} (typical values: 3, 4, 5, 7, 9)",
                IssueCode.UNUSUAL_GATI,
            )

    def _check_tala_pattern(self, pattern: str, line: int) -> None:
        for i, ch in enumerate(pattern):
            if ch not in TALA_CHARACTERS:
                self._add(
                    Severity.ERROR,
                    line,
                    f"Invalid character '{ch}' in tala pattern at position {i + 1}: "
                    "valid characters are +, 0, and 2-9",
                    IssueCode.INVALID_TALA_PATTERN,
                )

        known = load_tala_patterns()
        if pattern and pattern not in known:
            listing = ", ".join(f"{p} ({name})" for p, name in known.items())
            self._add(
                Severity.INFO,
                line,
                f"Uncommon tala pattern '{pattern}'. Common patterns include: {listing}",
                IssueCode.UNCOMMON_TALA_PATTERN,
            )

    # -- metadata ----------------------------------------------------------

    def _check_metadata(self, metadata: Metadata) -> None:
        if metadata.tempo is not None and not MIN_TEMPO <= metadata.tempo <= MAX_TEMPO:
            self._add(
                Severity.WARNING,
                METADATA_LINE,
                f"Unusual tempo: {metadata.tempo} BPM (typical range: {MIN_TEMPO}-{MAX_TEMPO})",
                IssueCode.UNUSUAL_TEMPO,
            )

        self._check_gati(metadata.gati, METADATA_LINE)

        for value, label, code in (
            (metadata.title, "Title", IssueCode.EMPTY_TITLE),
            (metadata.raga, "Raga", IssueCode.EMPTY_RAGA),
            (metadata.tala, "Tala", IssueCode.EMPTY_TALA),
        ):
            if not value.strip():
                self._add(Severity.ERROR, METADATA_LINE, f"{label} cannot be empty", code)

        self._check_tala_pattern(metadata.tala, METADATA_LINE)

    # -- sections ----------------------------------------------------------

    def _check_section(self, section: Section) -> None:
        if not section.name.strip():
            self._add(
                Severity.ERROR,
                section.line_number,
                "Section name cannot be empty",
                IssueCode.EMPTY_SECTION_NAME,
            )

        self._check_gati(section.gati, section.line_number)
        if section.tala is not None:
            self._check_tala_pattern(section.tala, section.line_number)

        for phrase in section.phrases:
            self._check_phrase(phrase)

    # -- phrases -----------------------------------------------------------

    def _check_phrase(self, phrase: Phrase) -> None:
        self._check_gati(phrase.gati, phrase.gati_line_number or phrase.line_number)
        if phrase.tala is not None:
            self._check_tala_pattern(phrase.tala, phrase.tala_line_number or phrase.line_number)

        if not phrase.swaras:
            self._add(
                Severity.ERROR,
                phrase.line_number,
                "Swara line cannot be empty",
                IssueCode.EMPTY_SWARA_LINE,
            )
        if not phrase.sahitya:
            self._add(
                Severity.ERROR,
                phrase.sahitya_line_number,
                "Sahitya line cannot be empty",
                IssueCode.EMPTY_SAHITYA_LINE,
            )

        if len(phrase.swaras) != len(phrase.sahitya):
            self._add(
                Severity.ERROR,
                phrase.sahitya_line_number,
                f"Token count mismatch: swara line has {len(phrase.swaras)} tokens, "
                f"sahitya line has {len(phrase.sahitya)}",
                IssueCode.TOKEN_COUNT_MISMATCH,
            )
            return

        for i, (swara, sahitya) in enumerate(zip(phrase.swaras, phrase.sahitya)):
            self._check_token_pair(phrase, i, swara, sahitya)

        if phrase.phrase_analysis is not None:
            self._check_phrase_analysis(phrase.phrase_analysis, phrase.analysis_line_number)

        for i, swara in enumerate(phrase.swaras):
            if any(c.islower() for c in swara) and any(c.isupper() for c in swara):
                self._add(
                    Severity.WARNING,
                    phrase.line_number,
                    f"Mixed case in swara '{swara}' at position {i + 1}",
                    IssueCode.MIXED_CASE_SWARA,
                    column=_column(phrase.swara_columns, i),
                )

    def _check_token_pair(self, phrase: Phrase, index: int, swara: str, sahitya: str) -> None:
        swara_text, gati_suffix = split_token_gati(swara)
        if gati_suffix is not None:
            if gati_suffix.isascii() and gati_suffix.isdigit() and int(gati_suffix) <= 255:
                gati = int(gati_suffix)
                if gati not in self.canonical_gati:
                    self._add(
                        Severity.WARNING,
                        phrase.line_number,
                        f"Unusual gati value in token '{swara}': {gati} "
                        "(typical values: 3, 4, 5, 7, 9)",
                        IssueCode.UNUSUAL_TOKEN_GATI,
                        column=_column(phrase.swara_columns, index),
                    )
            else:
                self._add(
                    Severity.ERROR,
                    phrase.line_number,
                    f"Invalid gati notation in token '{swara}': expected number after colon",
                    IssueCode.INVALID_TOKEN_GATI,
                    column=_column(phrase.swara_columns, index),
                )

        swara_count = len(melodic_units(swara_text))
        sahitya_count = len(syllable_units(sahitya, self.language, self.segmenter))
        if swara_count != sahitya_count:
            column = _column(phrase.sahitya_columns, index)
            span = None
            if column is not None:
                line = phrase.sahitya_line_number - 1
                span = Range(
                    start=Position(line, column - 1),
                    end=Position(line, column - 1 + len(sahitya)),
                )
            self._add(
                Severity.ERROR,
                phrase.sahitya_line_number,
                f"Token unit mismatch at position {index + 1}: swara '{swara_text}' "
                f"({swara_count} units) vs sahitya '{sahitya}' ({sahitya_count} units)",
                IssueCode.TOKEN_UNIT_MISMATCH,
                column=column,
                span=span,
            )

    def _check_phrase_analysis(self, analysis: str, line: int) -> None:
        for i, ch in enumerate(analysis):
            if ch not in PHRASE_ANALYSIS_CHARACTERS:
                self._add(
                    Severity.WARNING,
                    line,
                    f"Invalid character '{ch}' in phrase analysis at position {i + 1}",
                    IssueCode.INVALID_PHRASE_ANALYSIS,
                )


def _column(columns: list[int], index: int) -> int | None:
    return columns[index] if index < len(columns) else None
