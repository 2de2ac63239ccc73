"""Pydantic schemas for the formatting API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from jsonmend import __version__
from jsonmend.config.settings import IndentStyle
from jsonmend.pipeline.results import Stage, StageError


class FormatRequest(BaseModel):
    """Request body for POST /format."""

    text: str = Field(description="JSON or JSON-like text to normalize")
    indent: IndentStyle | None = Field(
        default=None,
        description="Output layout. Uses the server default if omitted",
    )


class StageErrorResponse(BaseModel):
    """One stage failure inside a diagnostic."""

    stage: Stage
    message: str
    position: int | None = None

    @classmethod
    def from_error(cls, error: StageError | None) -> StageErrorResponse | None:
        if error is None:
            return None
        return cls(stage=error.stage, message=error.message, position=error.position)


class FormatResponse(BaseModel):
    """Response body for POST /format."""

    kind: Literal["formatted", "repaired", "diagnostic"]
    text: str
    annotated: bool = False
    primary: StageErrorResponse | None = None
    secondary: StageErrorResponse | None = None


class StripRequest(BaseModel):
    """Request body for POST /strip-annotation."""

    text: str


class StripResponse(BaseModel):
    """Response body for POST /strip-annotation."""

    text: str


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str = "ok"
    version: str = __version__
