"""POST /api/v1/parse, /validate and /info over submitted .vna text."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException, Request

from vna_engine.api.schemas import (
    DocumentOut,
    DocumentRequest,
    IssueOut,
    ParseErrorOut,
    SummaryResponse,
    ValidationResponse,
)
from vna_engine.logging_utils import log_event
from vna_engine.notation.errors import ParseError
from vna_engine.notation.parser import parse
from vna_engine.notation.serializer import document_to_dict
from vna_engine.summary import render_summary, summarize
from vna_engine.validation.issues import Severity, count_by_severity
from vna_engine.validation.validator import validate

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_size(body: DocumentRequest, request: Request) -> None:
    limit = request.app.state.max_document_bytes
    size = len(body.text.encode("utf-8"))
    if size > limit:
        raise HTTPException(
            413,
            f"Document too large ({size} bytes). Maximum: {limit}.",
        )


def _parse_or_422(text: str):
    try:
        return parse(text)
    except ParseError as exc:
        log_event(logger, "parse_failed", logging.INFO, kind=exc.kind.name, line=exc.line)
        raise HTTPException(422, ParseErrorOut(**exc.to_dict()).model_dump()) from exc


@router.post("/parse", response_model=DocumentOut)
async def parse_document(body: DocumentRequest, request: Request) -> DocumentOut:
    """Parse .vna text and return the document tree."""
    _check_size(body, request)
    document = _parse_or_422(body.text)
    return DocumentOut.model_validate(document_to_dict(document))


@router.post("/validate", response_model=ValidationResponse)
async def validate_document(body: DocumentRequest, request: Request) -> ValidationResponse:
    """Parse and validate .vna text.

    A parse failure is not an HTTP error here: it is reported as one
    error issue carrying the parse error code and line, the way an editor
    shows a single diagnostic for an unparseable file.
    """
    _check_size(body, request)
    start = time.perf_counter()

    try:
        document = parse(body.text)
    except ParseError as exc:
        return ValidationResponse(
            valid=False,
            error_count=1,
            warning_count=0,
            info_count=0,
            issues=[
                IssueOut(
                    severity=Severity.ERROR.value,
                    message=exc.message,
                    line=exc.line,
                    code=exc.kind.code,
                )
            ],
        )

    issues = validate(document)
    counts = count_by_severity(issues)
    log_event(
        logger,
        "document_validated",
        logging.DEBUG,
        title=document.metadata.title,
        issues=len(issues),
        elapsed_ms=int((time.perf_counter() - start) * 1000),
    )
    return ValidationResponse(
        valid=counts[Severity.ERROR] == 0,
        error_count=counts[Severity.ERROR],
        warning_count=counts[Severity.WARNING],
        info_count=counts[Severity.INFO],
        issues=[IssueOut.model_validate(issue.to_dict()) for issue in issues],
    )


@router.post("/info", response_model=SummaryResponse)
async def document_info(body: DocumentRequest, request: Request) -> SummaryResponse:
    """Return headline metadata and per-section structure of a document."""
    _check_size(body, request)
    summary = summarize(_parse_or_422(body.text))
    return SummaryResponse(
        title=summary.title,
        raga=summary.raga,
        tala=summary.tala,
        tala_name=summary.tala_name,
        tempo=summary.tempo,
        composer=summary.composer,
        language=summary.language,
        phrase_count=summary.phrase_count,
        token_count=summary.token_count,
        sections=[
            {
                "name": s.name,
                "line_number": s.line_number,
                "phrase_count": s.phrase_count,
                "token_count": s.token_count,
                "gati": s.gati,
                "tala": s.tala,
            }
            for s in summary.sections
        ],
        report=render_summary(summary),
    )
