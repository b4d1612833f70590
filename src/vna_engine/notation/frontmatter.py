"""Decode the ``---`` delimited YAML block at the top of a .vna file."""

from __future__ import annotations

import re

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from vna_engine.notation.errors import ParseError, ParseErrorKind
from vna_engine.notation.models import Metadata

DELIMITER = "---"

REQUIRED_FIELDS = ("title", "raga", "tala")


class FrontmatterModel(BaseModel):
    """Typed shape of the frontmatter mapping. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: StrictStr | None = None
    raga: StrictStr | None = None
    tala: StrictStr | None = None
    composition_type: StrictStr | None = Field(default=None, alias="type")
    tempo: StrictInt | None = Field(default=None, ge=0)
    composer: StrictStr | None = None
    language: StrictStr | None = None
    key: StrictStr | None = None
    gati: StrictInt | None = Field(default=None, ge=0, le=255)
    default_octave: StrictStr | None = None
    arohanam: StrictStr | None = None
    avarohanam: StrictStr | None = None


def _key_line(lines: list[str], first_line: int, key: str) -> int:
    """Best-effort 1-based line of *key* inside the block, else the opening line."""
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*:")
    for offset, line in enumerate(lines):
        if pattern.match(line):
            return first_line + offset
    return first_line - 1


def decode_frontmatter(lines: list[str], first_line: int) -> Metadata:
    """Decode the lines between the delimiters into :class:`Metadata`.

    Args:
        lines: Raw lines strictly between the opening and closing ``---``.
        first_line: 1-based source line of ``lines[0]``.

    Raises:
        ParseError: ``MALFORMED_METADATA`` if the block is not a valid
            mapping of correctly typed values, ``MISSING_REQUIRED_FIELD`` if
            title, raga or tala is absent or blank.
    """
    try:
        raw = yaml.safe_load("\n".join(lines))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = first_line + mark.line if mark is not None else first_line - 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise ParseError(
            ParseErrorKind.MALFORMED_METADATA,
            line,
            f"Invalid YAML metadata: {problem}",
        ) from exc

    if not isinstance(raw, dict):
        raise ParseError(
            ParseErrorKind.MALFORMED_METADATA,
            first_line - 1,
            "Invalid YAML metadata: expected a mapping of key: value pairs",
        )

    try:
        model = FrontmatterModel.model_validate(raw)
    except ValidationError as exc:
        err = exc.errors()[0]
        key = str(err["loc"][0]) if err["loc"] else ""
        raise ParseError(
            ParseErrorKind.MALFORMED_METADATA,
            _key_line(lines, first_line, key) if key else first_line - 1,
            f"Invalid YAML metadata: field '{key}': {err['msg']}",
        ) from exc

    for name in REQUIRED_FIELDS:
        value = getattr(model, name)
        if value is None or not value.strip():
            raise ParseError(
                ParseErrorKind.MISSING_REQUIRED_FIELD,
                _key_line(lines, first_line, name),
                f"Missing required field: {name}",
            )

    return Metadata(
        title=model.title,
        raga=model.raga,
        tala=model.tala,
        composition_type=model.composition_type,
        tempo=model.tempo,
        composer=model.composer,
        language=model.language,
        key=model.key,
        gati=model.gati,
        default_octave=model.default_octave,
        arohanam=model.arohanam,
        avarohanam=model.avarohanam,
    )
