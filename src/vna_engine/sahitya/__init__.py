"""Split sahitya tokens into alignment units."""

from vna_engine.sahitya.syllables import (
    FallbackSegmenter,
    SegmentationError,
    SyllableSegmenter,
    TransliterationSegmenter,
    VowelHeuristicSegmenter,
    default_segmenter,
    script_for_language,
    syllable_units,
)

__all__ = [
    "FallbackSegmenter",
    "SegmentationError",
    "SyllableSegmenter",
    "TransliterationSegmenter",
    "VowelHeuristicSegmenter",
    "default_segmenter",
    "script_for_language",
    "syllable_units",
]
