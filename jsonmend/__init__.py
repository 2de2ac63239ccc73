"""jsonmend — normalize relaxed or broken JSON into formatted JSON."""

from jsonmend.config.settings import IndentStyle
from jsonmend.pipeline import (
    ANNOTATION_MARKER,
    Diagnostic,
    Formatted,
    PipelineResult,
    RepairedFormatted,
    Stage,
    StageError,
    format_json,
    render,
    strip_repair_annotation,
)

__version__ = "0.1.0"

__all__ = [
    "ANNOTATION_MARKER",
    "Diagnostic",
    "Formatted",
    "IndentStyle",
    "PipelineResult",
    "RepairedFormatted",
    "Stage",
    "StageError",
    "format_json",
    "render",
    "strip_repair_annotation",
]
