"""GET endpoints for reference data (known tala patterns)."""

from __future__ import annotations

from fastapi import APIRouter, Request

from vna_engine.api.schemas import TalaPatternOut

router = APIRouter()


@router.get("/talas", response_model=list[TalaPatternOut])
async def get_tala_patterns(request: Request) -> list[TalaPatternOut]:
    """Return the tala patterns the validator recognizes as common."""
    return [
        TalaPatternOut(pattern=pattern, name=name)
        for pattern, name in request.app.state.tala_patterns.items()
    ]
