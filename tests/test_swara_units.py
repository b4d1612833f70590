"""Tests for the swara unit tokenizer."""

from vna_engine.swara.units import melodic_units, split_token_gati


class TestMelodicUnits:
    def test_notes_and_sustains(self):
        assert melodic_units("G,G,") == ["G", ",", "G", ","]

    def test_single_note(self):
        assert melodic_units("S") == ["S"]

    def test_rest(self):
        assert melodic_units("P--") == ["P", "-", "-"]

    def test_variant_digit_absorbed(self):
        assert melodic_units("R2G3") == ["R2", "G3"]

    def test_only_one_variant_digit(self):
        assert melodic_units("R22") == ["R2"]

    def test_octave_marks_absorbed(self):
        assert melodic_units("S'N.") == ["S'", "N."]
        assert melodic_units("S''") == ["S''"]

    def test_variant_then_octave(self):
        assert melodic_units("D2.") == ["D2."]

    def test_unknown_characters_skipped(self):
        assert melodic_units("(S~R)") == ["S", "R"]
        assert melodic_units("xyz") == []

    def test_lowercase_letters_are_not_notes(self):
        assert melodic_units("sr") == []

    def test_empty(self):
        assert melodic_units("") == []


class TestSplitTokenGati:
    def test_no_suffix(self):
        assert split_token_gati("SRG") == ("SRG", None)

    def test_numeric_suffix(self):
        assert split_token_gati("SRG:3") == ("SRG", "3")

    def test_non_numeric_suffix(self):
        assert split_token_gati("SRG:x") == ("SRG", "x")

    def test_empty_suffix(self):
        assert split_token_gati("SRG:") == ("SRG", "")
