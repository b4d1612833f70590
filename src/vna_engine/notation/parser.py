"""Line-oriented parser for .vna notation files.

A .vna file is a YAML frontmatter block followed by sections::

    ---
    title: "Ninnukori"
    raga: "mohanam"
    tala: "+234+0+0"
    ---

    [pallavi]
    # opening phrase
    @gati: 4
    G , G , | R , , , ||
    ni - nu - | ko - - - ||
    phrases = (_ *)* *

The parser walks the lines strictly forward and fails on the first
structural problem with a :class:`ParseError`; it never tries to recover,
since every line number after a broken construct would be unreliable.
"""

from __future__ import annotations

import logging
import re

from vna_engine.notation.errors import ParseError, ParseErrorKind
from vna_engine.notation.frontmatter import DELIMITER, decode_frontmatter
from vna_engine.notation.models import (
    Comment,
    CommentType,
    Document,
    Metadata,
    Phrase,
    Section,
)

logger = logging.getLogger(__name__)

BEAT_MARKER = "|"
PHRASE_END = "||"
COMMENT_PREFIX = "#"
GATI_ANNOTATION = "@gati:"
TALA_ANNOTATION = "@tala:"
ANALYSIS_PREFIX = "phrases ="

_GATI_RE = re.compile(r"\d+", re.ASCII)
_TOKEN_RE = re.compile(r"[^\s|]+")


def parse(content: str) -> Document:
    """Parse .vna source text into a :class:`Document`.

    Raises:
        ParseError: On the first structural problem, carrying its kind and
            1-based line number.
    """
    document = _Parser(content).parse()
    logger.debug(
        "Parsed document %r: %d sections, %d phrases",
        document.metadata.title,
        len(document.sections),
        document.phrase_count,
    )
    return document


def tokenize_notation_line(line: str) -> tuple[list[str], list[int]]:
    """Split a swara or sahitya line into tokens and beat positions.

    The trailing ``||`` is dropped, the rest is split on ``|`` into beats
    and each beat on whitespace. After every beat but the last, the running
    token count is recorded (beats before the first token record nothing).

    Returns:
        A tuple like ``(["G", ",", "G", ",", "R", ",", ",", ","], [4])``
        for ``"G , G , | R , , , ||"``.
    """
    clean = line.strip()
    if clean.endswith(PHRASE_END):
        clean = clean[: -len(PHRASE_END)].strip()

    tokens: list[str] = []
    beat_positions: list[int] = []
    beats = clean.split(BEAT_MARKER)
    for i, beat in enumerate(beats):
        tokens.extend(beat.split())
        if i < len(beats) - 1 and tokens:
            beat_positions.append(len(tokens))
    return tokens, beat_positions


def token_columns(raw_line: str) -> list[int]:
    """1-based column of every token of a notation line, as split by
    :func:`tokenize_notation_line`."""
    return [m.start() + 1 for m in _TOKEN_RE.finditer(raw_line)]


def _is_section_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def _is_annotation(line: str) -> bool:
    return line.startswith(GATI_ANNOTATION) or line.startswith(TALA_ANNOTATION)


def _comment(line: str, line_number: int) -> Comment:
    return Comment(
        text=line[len(COMMENT_PREFIX):].strip(),
        line_number=line_number,
        comment_type=CommentType.INLINE,
    )


def _parse_gati(raw: str, line_number: int) -> int:
    value = raw.strip()
    if not _GATI_RE.fullmatch(value) or not 1 <= int(value) <= 255:
        raise ParseError(
            ParseErrorKind.INVALID_GATI,
            line_number,
            f"Invalid gati value: {value!r} (expected a positive integer)",
        )
    return int(value)


def _parse_tala(raw: str) -> str:
    return raw.strip().strip('"')


class _Parser:
    """Cursor over the source lines. ``index`` is 0-based; errors report index + 1."""

    def __init__(self, content: str) -> None:
        self.lines = content.removeprefix("\ufeff").splitlines()
        self.index = 0

    # -- cursor helpers ----------------------------------------------------

    def _at_end(self) -> bool:
        return self.index >= len(self.lines)

    def _line(self, index: int | None = None) -> str:
        i = self.index if index is None else index
        if i < len(self.lines):
            return self.lines[i].strip()
        return ""

    def _line_number(self) -> int:
        return self.index + 1

    def _advance(self) -> None:
        self.index += 1

    def _skip_blank(self) -> None:
        while not self._at_end() and not self._line():
            self._advance()

    # -- document ----------------------------------------------------------

    def parse(self) -> Document:
        metadata = self._parse_frontmatter()
        sections, comments = self._parse_body()
        return Document(metadata=metadata, sections=sections, comments=comments)

    def _parse_frontmatter(self) -> Metadata:
        self._skip_blank()
        if self._at_end() or self._line() != DELIMITER:
            raise ParseError(
                ParseErrorKind.MISSING_FRONTMATTER,
                min(self._line_number(), max(len(self.lines), 1)),
                "Missing YAML frontmatter at start of file",
            )

        opening_line = self._line_number()
        self._advance()
        block: list[str] = []
        while not self._at_end():
            if self._line() == DELIMITER:
                break
            block.append(self.lines[self.index])
            self._advance()
        else:
            raise ParseError(
                ParseErrorKind.MALFORMED_METADATA,
                opening_line,
                "Frontmatter is never closed with '---'",
            )

        closing_line = self._line_number()
        self._advance()
        if not any(line.strip() for line in block):
            raise ParseError(
                ParseErrorKind.EMPTY_FRONTMATTER,
                closing_line,
                "Empty YAML frontmatter",
            )

        return decode_frontmatter(block, opening_line + 1)

    def _parse_body(self) -> tuple[list[Section], list[Comment]]:
        sections: list[Section] = []
        comments: list[Comment] = []

        while not self._at_end():
            line = self._line()

            if not line:
                self._advance()
                continue

            if line.startswith(COMMENT_PREFIX):
                comments.append(_comment(line, self._line_number()))
                self._advance()
                continue

            if _is_section_header(line):
                sections.append(self._parse_section())
                continue

            raise ParseError(
                ParseErrorKind.UNEXPECTED_CONTENT,
                self._line_number(),
                f"Unexpected content outside a section: {line}",
            )

        return sections, comments

    # -- sections ----------------------------------------------------------

    def _annotations_open_phrase(self) -> bool:
        """True when the annotation run at the cursor is directly followed by a swara line."""
        i = self.index
        while i < len(self.lines) and _is_annotation(self._line(i)):
            i += 1
        return i < len(self.lines) and BEAT_MARKER in self._line(i)

    def _parse_section(self) -> Section:
        header = self._line()
        section_line = self._line_number()
        name = header[1:-1]
        self._advance()

        phrases: list[Phrase] = []
        pending: list[Comment] = []
        section_comments: list[Comment] = []
        section_gati: int | None = None
        section_tala: str | None = None

        while not self._at_end():
            line = self._line()

            if not line:
                self._advance()
                continue

            if line.startswith(COMMENT_PREFIX):
                pending.append(_comment(line, self._line_number()))
                self._advance()
                continue

            if _is_section_header(line):
                break

            if _is_annotation(line) and not self._annotations_open_phrase():
                if line.startswith(GATI_ANNOTATION):
                    section_gati = _parse_gati(
                        line[len(GATI_ANNOTATION):], self._line_number()
                    )
                else:
                    section_tala = _parse_tala(line[len(TALA_ANNOTATION):])
                self._advance()
                continue

            if _is_annotation(line) or BEAT_MARKER in line:
                phrase = self._parse_phrase()
                phrase.preceding_comments = pending
                pending = []
                phrases.append(phrase)
                continue

            raise ParseError(
                ParseErrorKind.UNEXPECTED_CONTENT,
                self._line_number(),
                f"Unexpected content in section '{name}': {line}",
            )

        for comment in pending:
            comment.comment_type = CommentType.SECTION
        section_comments.extend(pending)

        return Section(
            name=name,
            phrases=phrases,
            line_number=section_line,
            comments=section_comments,
            gati=section_gati,
            tala=section_tala,
        )

    # -- phrases -----------------------------------------------------------

    def _parse_phrase(self) -> Phrase:
        gati: int | None = None
        tala: str | None = None
        gati_line: int | None = None
        tala_line: int | None = None

        while not self._at_end() and _is_annotation(self._line()):
            line = self._line()
            if line.startswith(GATI_ANNOTATION):
                gati = _parse_gati(line[len(GATI_ANNOTATION):], self._line_number())
                gati_line = self._line_number()
            else:
                tala = _parse_tala(line[len(TALA_ANNOTATION):])
                tala_line = self._line_number()
            self._advance()

        start_line = self._line_number()
        swara_line = self._line()
        if BEAT_MARKER not in swara_line:
            raise ParseError(
                ParseErrorKind.MISSING_BEAT_MARKERS,
                start_line,
                f"Swara line is missing beat markers: {swara_line}",
            )
        swaras, swara_beats = tokenize_notation_line(swara_line)
        swara_columns = token_columns(self.lines[self.index])
        self._advance()

        sahitya_line = self._line()
        if (
            self._at_end()
            or not sahitya_line
            or sahitya_line.startswith(COMMENT_PREFIX)
            or _is_section_header(sahitya_line)
        ):
            raise ParseError(
                ParseErrorKind.INCOMPLETE_PHRASE,
                start_line,
                "Incomplete phrase: a swara line must be followed by a sahitya line",
            )
        if BEAT_MARKER not in sahitya_line:
            raise ParseError(
                ParseErrorKind.MISSING_BEAT_MARKERS,
                self._line_number(),
                f"Sahitya line is missing beat markers: {sahitya_line}",
            )
        sahitya, sahitya_beats = tokenize_notation_line(sahitya_line)
        sahitya_columns = token_columns(self.lines[self.index])
        self._advance()

        phrase_analysis: str | None = None
        if not self._at_end() and self._line().startswith(ANALYSIS_PREFIX):
            phrase_analysis = self._line()[len(ANALYSIS_PREFIX):]
            if phrase_analysis.startswith(" "):
                phrase_analysis = phrase_analysis[1:]
            self._advance()

        if swara_beats != sahitya_beats:
            raise ParseError(
                ParseErrorKind.BEAT_MISALIGNMENT,
                start_line,
                "Beat markers misaligned between swara and sahitya lines "
                f"(swara beats at {swara_beats}, sahitya beats at {sahitya_beats})",
            )

        return Phrase(
            swaras=swaras,
            sahitya=sahitya,
            line_number=start_line,
            phrase_analysis=phrase_analysis,
            gati=gati,
            tala=tala,
            beat_positions=swara_beats,
            swara_columns=swara_columns,
            sahitya_columns=sahitya_columns,
            gati_line_number=gati_line,
            tala_line_number=tala_line,
        )
