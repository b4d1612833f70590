"""Document serializer — export and reload parsed documents as JSON."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from vna_engine.notation.models import (
    Comment,
    CommentType,
    Document,
    Metadata,
    Phrase,
    Section,
)


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "text": comment.text,
        "line_number": comment.line_number,
        "comment_type": comment.comment_type.value,
    }


def _comment_from_dict(d: dict) -> Comment:
    return Comment(
        text=d["text"],
        line_number=d["line_number"],
        comment_type=CommentType(d.get("comment_type", "inline")),
    )


def _phrase_to_dict(phrase: Phrase) -> dict:
    return {
        "swaras": list(phrase.swaras),
        "sahitya": list(phrase.sahitya),
        "line_number": phrase.line_number,
        "phrase_analysis": phrase.phrase_analysis,
        "preceding_comments": [_comment_to_dict(c) for c in phrase.preceding_comments],
        "gati": phrase.gati,
        "tala": phrase.tala,
        "beat_positions": list(phrase.beat_positions),
        "swara_columns": list(phrase.swara_columns),
        "sahitya_columns": list(phrase.sahitya_columns),
        "gati_line_number": phrase.gati_line_number,
        "tala_line_number": phrase.tala_line_number,
    }


def _phrase_from_dict(d: dict) -> Phrase:
    return Phrase(
        swaras=list(d["swaras"]),
        sahitya=list(d["sahitya"]),
        line_number=d["line_number"],
        phrase_analysis=d.get("phrase_analysis"),
        preceding_comments=[_comment_from_dict(c) for c in d.get("preceding_comments", [])],
        gati=d.get("gati"),
        tala=d.get("tala"),
        beat_positions=list(d.get("beat_positions", [])),
        swara_columns=list(d.get("swara_columns", [])),
        sahitya_columns=list(d.get("sahitya_columns", [])),
        gati_line_number=d.get("gati_line_number"),
        tala_line_number=d.get("tala_line_number"),
    )


def _section_to_dict(section: Section) -> dict:
    return {
        "name": section.name,
        "line_number": section.line_number,
        "phrases": [_phrase_to_dict(p) for p in section.phrases],
        "comments": [_comment_to_dict(c) for c in section.comments],
        "gati": section.gati,
        "tala": section.tala,
    }


def _section_from_dict(d: dict) -> Section:
    return Section(
        name=d["name"],
        line_number=d["line_number"],
        phrases=[_phrase_from_dict(p) for p in d["phrases"]],
        comments=[_comment_from_dict(c) for c in d.get("comments", [])],
        gati=d.get("gati"),
        tala=d.get("tala"),
    )


def document_to_dict(document: Document) -> dict:
    """Convert a Document to a JSON-serializable dict."""
    return {
        "metadata": asdict(document.metadata),
        "sections": [_section_to_dict(s) for s in document.sections],
        "comments": [_comment_to_dict(c) for c in document.comments],
    }


def document_from_dict(d: dict) -> Document:
    """Reconstruct a Document from a dict (parsed JSON)."""
    return Document(
        metadata=Metadata(**d["metadata"]),
        sections=[_section_from_dict(s) for s in d["sections"]],
        comments=[_comment_from_dict(c) for c in d.get("comments", [])],
    )


def save_document(document: Document, path: str | Path) -> None:
    """Save a parsed document to a JSON file.

    Args:
        document: The Document to save.
        path: Output file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document_to_dict(document), f, indent=2, ensure_ascii=False)


def load_document(path: str | Path) -> Document:
    """Load a document previously written by :func:`save_document`.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return document_from_dict(data)
