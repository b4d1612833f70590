"""Notation document module — the .vna document tree and its parser.

Provides:
- Document, Metadata, Section, Phrase and Comment dataclasses
- The line-oriented parser with fail-fast ParseError reporting
- Effective gati/tala resolution across nested scopes
- JSON serialization of parsed documents
"""

from vna_engine.notation.errors import ParseError, ParseErrorKind
from vna_engine.notation.models import (
    Comment,
    CommentType,
    Document,
    Metadata,
    Phrase,
    Section,
    load_tala_patterns,
    resolve_gati,
    resolve_tala,
    tala_pattern_name,
)
from vna_engine.notation.parser import parse, tokenize_notation_line
from vna_engine.notation.serializer import (
    document_from_dict,
    document_to_dict,
    load_document,
    save_document,
)

__all__ = [
    "Comment",
    "CommentType",
    "Document",
    "Metadata",
    "ParseError",
    "ParseErrorKind",
    "Phrase",
    "Section",
    "document_from_dict",
    "document_to_dict",
    "load_document",
    "load_tala_patterns",
    "parse",
    "resolve_gati",
    "resolve_tala",
    "save_document",
    "tala_pattern_name",
    "tokenize_notation_line",
]
