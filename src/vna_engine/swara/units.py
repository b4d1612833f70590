"""Swara unit tokenizer — split a melodic token into its atomic units.

One unit is one note (letter + optional variant digit + octave marks),
one sustain ``,`` or one rest ``-``. Characters outside that alphabet are
skipped, so annotation marks inside a token do not affect the count.
"""

from __future__ import annotations

SWARA_LETTERS = frozenset("SRGMPDN")
VARIANT_DIGITS = frozenset("123")
OCTAVE_MARKS = frozenset(".'")
SUSTAIN = ","
REST = "-"
GATI_SEPARATOR = ":"


def melodic_units(token: str) -> list[str]:
    """Split a swara token into units.

    Examples:
        "G,G," -> ["G", ",", "G", ","]
        "R2S'" -> ["R2", "S'"]
        "P.--" -> ["P.", "-", "-"]
    """
    units: list[str] = []
    i = 0
    n = len(token)
    while i < n:
        ch = token[i]
        i += 1
        if ch == SUSTAIN or ch == REST:
            units.append(ch)
        elif ch in SWARA_LETTERS:
            note = ch
            if i < n and token[i] in VARIANT_DIGITS:
                note += token[i]
                i += 1
            while i < n and token[i] in OCTAVE_MARKS:
                note += token[i]
                i += 1
            units.append(note)
    return units


def split_token_gati(token: str) -> tuple[str, str | None]:
    """Split a token-level gati suffix, e.g. "SRG:3" -> ("SRG", "3").

    The suffix is returned raw (possibly non-numeric); validation of the
    value is left to the caller. Tokens without ``:`` return ``None``.
    """
    text, sep, suffix = token.partition(GATI_SEPARATOR)
    if not sep:
        return token, None
    return text, suffix
