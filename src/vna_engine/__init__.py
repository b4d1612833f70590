"""VNA Engine — parsing and validation for Veena Notation Archive (.vna) files."""

__version__ = "0.1.0"

from vna_engine.notation.errors import ParseError, ParseErrorKind  # noqa: E402
from vna_engine.notation.models import Document  # noqa: E402
from vna_engine.notation.parser import parse  # noqa: E402
from vna_engine.validation.issues import Severity, ValidationIssue  # noqa: E402
from vna_engine.validation.validator import validate  # noqa: E402

__all__ = [
    "Document",
    "ParseError",
    "ParseErrorKind",
    "Severity",
    "ValidationIssue",
    "__version__",
    "parse",
    "validate",
]
