"""
Formatting API — FastAPI application.

Endpoints:
    GET  /health              Liveness check
    POST /format              Run the pipeline on a text body
    POST /strip-annotation    Remove the auto-repair notice from a result

Endpoints are plain functions: formatting is CPU-bound, so FastAPI runs
each call on its worker thread pool.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import click
import structlog
import uvicorn
from fastapi import FastAPI

from jsonmend import __version__
from jsonmend.config import get_settings
from jsonmend.config.logging import setup_logging
from jsonmend.pipeline import (
    Diagnostic,
    PipelineResult,
    RepairedFormatted,
    format_json,
    strip_repair_annotation,
)

from .schemas import (
    FormatRequest,
    FormatResponse,
    HealthResponse,
    StageErrorResponse,
    StripRequest,
    StripResponse,
)

logger = structlog.get_logger(__name__)


# ── Lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Log effective settings on startup."""
    settings = get_settings()
    logger.info(
        "api_started",
        port=settings.port,
        default_indent=settings.default_indent.value,
        repair_max_chars=settings.repair_max_chars,
    )
    yield
    logger.info("api_shutdown")


# ── App ──────────────────────────────────────────────────────

app = FastAPI(
    title="jsonmend Formatting API",
    version=__version__,
    lifespan=lifespan,
)


# ── Helpers ──────────────────────────────────────────────────


def _result_to_response(result: PipelineResult) -> FormatResponse:
    """Convert a pipeline result to a response schema."""
    if isinstance(result, Diagnostic):
        return FormatResponse(
            kind=result.kind,
            text=result.describe(),
            primary=StageErrorResponse.from_error(result.primary),
            secondary=StageErrorResponse.from_error(result.secondary),
        )
    return FormatResponse(
        kind=result.kind,
        text=result.text,
        annotated=isinstance(result, RepairedFormatted),
    )


# ── Endpoints ────────────────────────────────────────────────


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness check."""
    return HealthResponse()


@app.post("/format", response_model=FormatResponse)
def format_document(body: FormatRequest) -> FormatResponse:
    """Format a document. Diagnostics are results, so this is always 200."""
    result = format_json(body.text, body.indent, settings=get_settings())
    return _result_to_response(result)


@app.post("/strip-annotation", response_model=StripResponse)
def strip_annotation(body: StripRequest) -> StripResponse:
    """Return a repaired result without its notice line."""
    return StripResponse(text=strip_repair_annotation(body.text))


# ── CLI ──────────────────────────────────────────────────────


@click.command()
@click.option("--host", default=None, help="Bind host (defaults to HOST env)")
@click.option("--port", default=None, type=int, help="Bind port (defaults to PORT env)")
def cli(host: str | None, port: int | None) -> None:
    """Start the formatting API server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(
        "apps.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
