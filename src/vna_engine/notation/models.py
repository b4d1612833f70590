"""Notation document model — the tree produced by the .vna parser.

Provides dataclasses for:
- YAML frontmatter metadata (title, raga, tala, tempo, gati, ...)
- Sections (pallavi, anupallavi, charanam, ...) with scoped overrides
- Phrases: a swara line aligned token-for-token with a sahitya line
- Comments attached to the document, a section, or the next phrase
- Effective gati/tala resolution across token, phrase, section and document
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from vna_engine.config import load_config


class CommentType(Enum):
    """Coarse classification of a ``#`` comment line."""

    INLINE = "inline"            # document comment or one preceding a phrase
    SECTION = "section"          # trailing comment of a section
    PERFORMANCE = "performance"  # performance note


@dataclass
class Comment:
    """A ``#`` comment. Purely advisory, never validated.

    Attributes:
        text: Comment text without the leading ``#``.
        line_number: 1-based source line.
        comment_type: Where the comment was attached.
    """

    text: str
    line_number: int
    comment_type: CommentType = CommentType.INLINE


@dataclass
class Metadata:
    """Frontmatter metadata of a composition.

    Attributes:
        title: Composition title (required).
        raga: Raga name (required).
        tala: Tala pattern string, e.g. "+234+0+0" (required).
        composition_type: Composition form (YAML key ``type``), e.g. "varnam".
        tempo: Beats per minute.
        composer: Composer name.
        language: Sahitya language; selects the syllabification script.
        key: Tonic / shruti.
        gati: Document-level rhythmic subdivision.
        default_octave: Default sthayi for unmarked swaras.
        arohanam: Ascending scale string.
        avarohanam: Descending scale string.
    """

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


@dataclass
class Phrase:
    """A swara line paired with a sahitya line.

    ``beat_positions`` holds the running token count at each ``|`` marker
    (the closing ``||`` is not recorded). The parser guarantees that the
    swara and sahitya lines produced identical positions.

    Attributes:
        swaras: Melodic tokens.
        sahitya: Lyric tokens.
        line_number: 1-based line of the swara line.
        phrase_analysis: Free text from an optional ``phrases = ...`` line.
        preceding_comments: Comments directly above the phrase.
        gati: Phrase-level gati override.
        tala: Phrase-level tala override.
        beat_positions: Token counts at each beat boundary.
        swara_columns: 1-based source column of each swara token.
        sahitya_columns: 1-based source column of each sahitya token.
        gati_line_number: 1-based line of the @gati: annotation, if any.
        tala_line_number: 1-based line of the @tala: annotation, if any.
    """

    swaras: list[str]
    sahitya: list[str]
    line_number: int
    phrase_analysis: str | None = None
    preceding_comments: list[Comment] = field(default_factory=list)
    gati: int | None = None
    tala: str | None = None
    beat_positions: list[int] = field(default_factory=list)
    swara_columns: list[int] = field(default_factory=list)
    sahitya_columns: list[int] = field(default_factory=list)
    gati_line_number: int | None = None
    tala_line_number: int | None = None

    @property
    def sahitya_line_number(self) -> int:
        return self.line_number + 1

    @property
    def analysis_line_number(self) -> int:
        return self.line_number + 2


@dataclass
class Section:
    """A named section, e.g. ``[pallavi]``.

    Attributes:
        name: Section name between the brackets.
        phrases: Phrases in source order.
        line_number: 1-based line of the section header.
        comments: Trailing comments not attached to any phrase.
        gati: Section-level gati override.
        tala: Section-level tala override.
    """

    name: str
    phrases: list[Phrase]
    line_number: int
    comments: list[Comment] = field(default_factory=list)
    gati: int | None = None
    tala: str | None = None


@dataclass
class Document:
    """A parsed .vna document. The validator reads it and never mutates it."""

    metadata: Metadata
    sections: list[Section] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    @property
    def phrase_count(self) -> int:
        return sum(len(s.phrases) for s in self.sections)


# ---------------------------------------------------------------------------
# Effective override resolution
# ---------------------------------------------------------------------------


def resolve_gati(
    document: Document,
    section: Section | None = None,
    phrase: Phrase | None = None,
    token_gati: int | None = None,
) -> int | None:
    """Return the gati in effect: token, then phrase, section, document."""
    for value in (
        token_gati,
        phrase.gati if phrase else None,
        section.gati if section else None,
        document.metadata.gati,
    ):
        if value is not None:
            return value
    return None


def resolve_tala(
    document: Document,
    section: Section | None = None,
    phrase: Phrase | None = None,
) -> str:
    """Return the tala pattern in effect: phrase, then section, document."""
    if phrase is not None and phrase.tala is not None:
        return phrase.tala
    if section is not None and section.tala is not None:
        return section.tala
    return document.metadata.tala


# ---------------------------------------------------------------------------
# Tala pattern table
# ---------------------------------------------------------------------------

_TALA_PATTERNS_CACHE: dict[str, str] | None = None


def load_tala_patterns() -> dict[str, str]:
    """Load the named canonical tala patterns from configs/talas.json.

    Returns an insertion-ordered dict mapping pattern -> name.
    """
    global _TALA_PATTERNS_CACHE  # noqa: PLW0603
    if _TALA_PATTERNS_CACHE is not None:
        return _TALA_PATTERNS_CACHE

    data = load_config("talas.json")
    _TALA_PATTERNS_CACHE = {
        entry["pattern"]: entry["name"] for entry in data["patterns"]
    }
    return _TALA_PATTERNS_CACHE


def canonical_gati_values() -> frozenset[int]:
    """The gati values considered typical (3, 4, 5, 7, 9)."""
    return frozenset(load_config("talas.json")["canonical_gati"])


def tala_pattern_name(pattern: str) -> str | None:
    """Return the conventional name of a tala pattern, or None if uncommon."""
    return load_tala_patterns().get(pattern)
