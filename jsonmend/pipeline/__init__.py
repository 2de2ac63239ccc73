"""Formatting pipeline — adapters, renderer, orchestrator and result types."""

from jsonmend.pipeline.orchestrator import ANNOTATION_MARKER, format_json, strip_repair_annotation
from jsonmend.pipeline.render import render
from jsonmend.pipeline.results import (
    Diagnostic,
    Formatted,
    PipelineResult,
    RepairedFormatted,
    Stage,
    StageError,
    StageFailure,
)

__all__ = [
    "ANNOTATION_MARKER",
    "Diagnostic",
    "Formatted",
    "PipelineResult",
    "RepairedFormatted",
    "Stage",
    "StageError",
    "StageFailure",
    "format_json",
    "render",
    "strip_repair_annotation",
]
