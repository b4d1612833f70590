"""Tests for sahitya syllabification (manual markers, transliteration, vowel heuristic)."""

import pytest

from vna_engine.sahitya.syllables import (
    FallbackSegmenter,
    SegmentationError,
    TransliterationSegmenter,
    VowelHeuristicSegmenter,
    default_segmenter,
    script_for_language,
    split_on_dashes,
    syllable_units,
    transliteration_available,
)

requires_transliteration = pytest.mark.skipif(
    not transliteration_available(),
    reason="ISO 15919 scheme not available in indic_transliteration",
)


class _RecordingSegmenter:
    """Test double that records calls and returns the run unchanged."""

    def __init__(self):
        self.calls = []

    def segment(self, text, script):
        self.calls.append((text, script))
        return [text]


class _FailingSegmenter:
    def segment(self, text, script):
        raise SegmentationError("no script support")


# ---------------------------------------------------------------------------
# Manual mode
# ---------------------------------------------------------------------------


class TestManualMode:
    def test_backtick_boundaries(self):
        assert syllable_units("nin`nu") == ["nin", "nu"]
        assert syllable_units("ka`la") == ["ka", "la"]
        assert syllable_units("nin`nu`ko`ri") == ["nin", "nu", "ko", "ri"]

    def test_dashes_are_units(self):
        assert syllable_units("nin`nu-") == ["nin", "nu", "-"]
        assert syllable_units("yun`---") == ["yun", "-", "-", "-"]
        assert syllable_units("nā`---") == ["nā", "-", "-", "-"]

    def test_no_automatic_segmentation(self):
        segmenter = _RecordingSegmenter()
        assert syllable_units("ninnu`kori", segmenter=segmenter) == ["ninnu", "kori"]
        assert segmenter.calls == []

    def test_language_hint_ignored(self):
        token = "sa`ṅgī`ta-"
        results = {
            tuple(syllable_units(token, language))
            for language in (None, "telugu", "tamil", "sanskrit", "klingon")
        }
        assert results == {("sa", "ṅgī", "ta", "-")}

    def test_empty_segments_dropped(self):
        assert syllable_units("`ka``la`") == ["ka", "la"]


# ---------------------------------------------------------------------------
# Automatic mode
# ---------------------------------------------------------------------------


class TestAutomaticMode:
    def test_dashes_split_off(self):
        segmenter = _RecordingSegmenter()
        assert syllable_units("ri--", segmenter=segmenter) == ["ri", "-", "-"]
        assert segmenter.calls == [("ri", "devanagari")]

    def test_all_dashes(self):
        assert syllable_units("----") == ["-", "-", "-", "-"]

    def test_each_run_segmented_separately(self):
        segmenter = _RecordingSegmenter()
        syllable_units("nin-nu-", "telugu", segmenter)
        assert segmenter.calls == [("nin", "telugu"), ("nu", "telugu")]

    def test_single_syllables(self):
        assert syllable_units("ni---") == ["ni", "-", "-", "-"]
        assert syllable_units("khi") == ["khi"]
        assert syllable_units("nā---") == ["nā", "-", "-", "-"]

    @pytest.mark.parametrize("token", ["ninnukori", "saṅgīta", "kala", "rāma", "nth", "aa"])
    def test_coverage_reconstructs_token(self, token):
        units = syllable_units(token)
        assert units
        assert "".join(units) == token

    def test_deterministic(self):
        assert syllable_units("ninnukori", "telugu") == syllable_units("ninnukori", "telugu")


# ---------------------------------------------------------------------------
# Vowel heuristic
# ---------------------------------------------------------------------------


class TestVowelHeuristic:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("kala", ["ka", "la"]),
            ("ninnukori", ["ninnu", "ko", "ri"]),
            ("saṅgīta", ["saṅgī", "ta"]),
            ("kan", ["kan"]),
            ("aa", ["aa"]),
            ("ai", ["a", "i"]),
            ("nth", ["nth"]),
            ("rāma", ["rā", "ma"]),
        ],
    )
    def test_segmentation(self, text, expected):
        assert VowelHeuristicSegmenter().segment(text, "devanagari") == expected

    def test_script_ignored(self):
        segmenter = VowelHeuristicSegmenter()
        assert segmenter.segment("kala", "telugu") == segmenter.segment("kala", "tamil")


# ---------------------------------------------------------------------------
# Transliteration strategy
# ---------------------------------------------------------------------------


class TestTransliterationSegmenter:
    @requires_transliteration
    def test_simple_syllables_devanagari(self):
        assert TransliterationSegmenter().segment("kala", "devanagari") == ["ka", "la"]

    @requires_transliteration
    def test_single_syllable_telugu(self):
        assert TransliterationSegmenter().segment("ri", "telugu") == ["ri"]

    def test_unsupported_script_raises(self):
        with pytest.raises(SegmentationError):
            TransliterationSegmenter().segment("kala", "no-such-script")

    def test_fallback_on_failure(self):
        segmenter = FallbackSegmenter(_FailingSegmenter(), VowelHeuristicSegmenter())
        assert segmenter.segment("ninnukori", "devanagari") == ["ninnu", "ko", "ri"]

    def test_fallback_not_used_on_success(self):
        fallback = _RecordingSegmenter()
        segmenter = FallbackSegmenter(_RecordingSegmenter(), fallback)
        segmenter.segment("kala", "devanagari")
        assert fallback.calls == []

    def test_default_segmenter_is_cached(self):
        assert default_segmenter() is default_segmenter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_script_for_language(self):
        assert script_for_language("telugu") == "telugu"
        assert script_for_language("Tamil") == "tamil"
        assert script_for_language("sanskrit") == "devanagari"
        assert script_for_language("hindi") == "devanagari"
        assert script_for_language("kannada") == "devanagari"
        assert script_for_language("malayalam") == "devanagari"

    def test_script_defaults_to_devanagari(self):
        assert script_for_language(None) == "devanagari"
        assert script_for_language("") == "devanagari"
        assert script_for_language("english") == "devanagari"

    def test_split_on_dashes(self):
        assert split_on_dashes("ab-c--") == ["ab", "-", "c", "-", "-"]
        assert split_on_dashes("") == []
