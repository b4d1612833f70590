"""VNA Engine — FastAPI application serving parse / validate / info over HTTP."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vna_engine.api.routes import documents, health, reference
from vna_engine.config import env_setting, load_config
from vna_engine.logging_utils import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the tala table and warm the syllabifier on startup."""
    from vna_engine.notation.models import load_tala_patterns
    from vna_engine.sahitya.syllables import default_segmenter

    app.state.tala_patterns = load_tala_patterns()
    default_segmenter()
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    config = load_config("api.json")

    app = FastAPI(
        title="VNA Engine",
        description="Parsing and validation API for Veena Notation Archive files",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.max_document_bytes = env_setting(
        "max_document_bytes", config["max_document_bytes"], int
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors_allow_origins"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(documents.router, prefix="/api/v1", tags=["documents"])
    app.include_router(reference.router, prefix="/api/v1", tags=["reference"])

    return app


app = create_app()
