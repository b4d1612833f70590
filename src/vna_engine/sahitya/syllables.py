"""Sahitya syllabification — split a lyric token into units aligned with swaras.

Two modes:
- Manual: the token contains a backtick. Backticks mark every syllable
  boundary and no automatic segmentation is applied anywhere in the token
  (``nin`nu`ko`ri`` -> ``nin nu ko ri``).
- Automatic: each run of letters is segmented by a :class:`SyllableSegmenter`.
  The default strategy transliterates the ISO 15919 romanization into a
  native Indic script, takes one grapheme cluster per syllable and
  transliterates each cluster back. When that round trip fails the run is
  handed to a vowel-lookahead heuristic.

In both modes every dash is its own unit (a sustained syllable).
"""

from __future__ import annotations

import logging
from typing import Protocol

import regex
from indic_transliteration import sanscript

from vna_engine.config import load_config

logger = logging.getLogger(__name__)

BOUNDARY_MARKER = "`"
SUSTAIN = "-"

_GRAPHEME_RE = regex.compile(r"\X")

VOWELS = frozenset("aāiīuūeēoōAIUEO")

_LONG_VOWEL_PAIRS = frozenset({
    ("a", "a"), ("a", "ā"), ("ā", "a"),
    ("i", "i"), ("i", "ī"), ("ī", "i"),
    ("u", "u"), ("u", "ū"), ("ū", "u"),
    ("e", "e"), ("e", "ē"), ("ē", "e"),
    ("o", "o"), ("o", "ō"), ("ō", "o"),
})


class SegmentationError(Exception):
    """A segmentation strategy could not produce syllables for a run."""


class SyllableSegmenter(Protocol):
    """Strategy that splits a dash-free run of romanized text into syllables."""

    def segment(self, text: str, script: str) -> list[str]:
        ...


# ---------------------------------------------------------------------------
# Script selection
# ---------------------------------------------------------------------------


def script_for_language(language: str | None) -> str:
    """Map a metadata ``language`` hint to a target script name.

    Unknown or missing hints use the configured default (Devanagari).
    """
    config = load_config("scripts.json")
    if not language:
        return config["default_script"]
    return config["languages"].get(language.strip().lower(), config["default_script"])


def source_scheme() -> str:
    """Romanization scheme of sahitya text (ISO 15919)."""
    return load_config("scripts.json")["source_scheme"]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class VowelHeuristicSegmenter:
    """Close a syllable after each vowel, deciding by looking ahead.

    After appending a vowel:
    - a following vowel forming a long vowel (``aa``, ``iī``, ...) keeps
      the syllable open;
    - vowel-consonant-vowel closes before the consonant (``ka|la``);
    - vowel-consonant-consonant or vowel-consonant-end absorbs the
      consonant (``nin|nu``, ``kan``).
    The script hint is ignored.
    """

    def segment(self, text: str, script: str = "") -> list[str]:
        syllables: list[str] = []
        current = ""
        n = len(text)

        for i, ch in enumerate(text):
            current += ch
            if ch not in VOWELS:
                continue

            should_end = True
            if i + 1 < n:
                nxt = text[i + 1]
                if nxt in VOWELS:
                    if (ch, nxt) in _LONG_VOWEL_PAIRS:
                        should_end = False
                elif i + 2 < n:
                    should_end = text[i + 2] in VOWELS
                else:
                    should_end = False

            if should_end and current:
                syllables.append(current)
                current = ""

        if current:
            syllables.append(current)

        return syllables or [text]


class TransliterationSegmenter:
    """Round-trip through a native script and split on grapheme clusters.

    Raises :class:`SegmentationError` if the scheme is unsupported, the
    library fails, or the syllables do not rebuild the input exactly.
    """

    def __init__(self, scheme: str | None = None) -> None:
        self.scheme = scheme or source_scheme()

    def supports(self, script: str) -> bool:
        return self.scheme in sanscript.SCHEMES and script in sanscript.SCHEMES

    def segment(self, text: str, script: str) -> list[str]:
        if not self.supports(script):
            raise SegmentationError(f"Unsupported transliteration {self.scheme} -> {script}")

        try:
            native = sanscript.transliterate(text, self.scheme, script)
            clusters = _GRAPHEME_RE.findall(native)
            syllables = [
                sanscript.transliterate(cluster, script, self.scheme)
                for cluster in clusters
            ]
        except Exception as exc:  # noqa: BLE001
            raise SegmentationError(f"Transliteration failed for {text!r}: {exc}") from exc

        if not syllables or "".join(syllables) != text:
            raise SegmentationError(
                f"Round trip of {text!r} through {script} gave {syllables!r}"
            )
        return syllables


class FallbackSegmenter:
    """Try *primary*; on :class:`SegmentationError` use *fallback*."""

    def __init__(self, primary: SyllableSegmenter, fallback: SyllableSegmenter) -> None:
        self.primary = primary
        self.fallback = fallback

    def segment(self, text: str, script: str) -> list[str]:
        try:
            return self.primary.segment(text, script)
        except SegmentationError as exc:
            logger.debug("Falling back to vowel heuristic: %s", exc)
            return self.fallback.segment(text, script)


_DEFAULT_SEGMENTER: SyllableSegmenter | None = None


def transliteration_available() -> bool:
    """True when the transliteration library knows the source scheme."""
    return source_scheme() in sanscript.SCHEMES


def default_segmenter() -> SyllableSegmenter:
    """Transliteration with heuristic fallback when available, else the heuristic."""
    global _DEFAULT_SEGMENTER  # noqa: PLW0603
    if _DEFAULT_SEGMENTER is not None:
        return _DEFAULT_SEGMENTER

    if transliteration_available():
        _DEFAULT_SEGMENTER = FallbackSegmenter(
            TransliterationSegmenter(), VowelHeuristicSegmenter()
        )
    else:
        logger.warning(
            "Transliteration scheme %r unavailable; using vowel heuristic only",
            source_scheme(),
        )
        _DEFAULT_SEGMENTER = VowelHeuristicSegmenter()
    return _DEFAULT_SEGMENTER


# ---------------------------------------------------------------------------
# Token splitting
# ---------------------------------------------------------------------------


def split_on_dashes(segment: str) -> list[str]:
    """Split *segment* so every dash is a unit and each non-dash run is one unit."""
    units: list[str] = []
    current = ""
    for ch in segment:
        if ch == SUSTAIN:
            if current:
                units.append(current)
                current = ""
            units.append(SUSTAIN)
        else:
            current += ch
    if current:
        units.append(current)
    return units


def _manual_units(token: str) -> list[str]:
    units: list[str] = []
    for segment in token.split(BOUNDARY_MARKER):
        if segment:
            units.extend(split_on_dashes(segment))
    return units


def _automatic_units(token: str, script: str, segmenter: SyllableSegmenter) -> list[str]:
    units: list[str] = []
    for piece in split_on_dashes(token):
        if piece == SUSTAIN:
            units.append(piece)
        else:
            units.extend(segmenter.segment(piece, script))
    return units


def syllable_units(
    token: str,
    language: str | None = None,
    segmenter: SyllableSegmenter | None = None,
) -> list[str]:
    """Split a sahitya token into syllable units.

    Args:
        token: One whitespace-delimited sahitya token.
        language: Metadata language hint selecting the native script.
        segmenter: Strategy for automatic mode (defaults to
            :func:`default_segmenter`). Unused in manual mode.

    Returns:
        The units in order. Deterministic for identical input.
    """
    if BOUNDARY_MARKER in token:
        return _manual_units(token)

    if segmenter is None:
        segmenter = default_segmenter()
    return _automatic_units(token, script_for_language(language), segmenter)
