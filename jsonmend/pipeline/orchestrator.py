"""
Pipeline orchestrator — lenient parse, repair, strict reparse, render.

Flow:  text → lenient_parse ─ok─→ render → Formatted
                    │ fail (E1)
                    ↓
                 repair ─fail (E2)─→ Diagnostic(E1, E2)
                    │ ok
                    ↓
              strict_parse ─fail (E3)─→ Diagnostic(E1, E3)
                    │ ok
                    ↓
         marker + render → RepairedFormatted

One repair attempt per call, no retries. Stage failures come back as
result data; ``format_json`` does not raise.
"""

from __future__ import annotations

import structlog

from jsonmend.config.settings import IndentStyle, Settings, get_settings
from jsonmend.pipeline.json_parse import lenient_parse, repair, strict_parse
from jsonmend.pipeline.render import render
from jsonmend.pipeline.results import (
    Diagnostic,
    Formatted,
    PipelineResult,
    RepairedFormatted,
    StageFailure,
)

logger = structlog.get_logger(__name__)

ANNOTATION_MARKER = "// NOTE: the input JSON was automatically repaired"


def format_json(
    text: str,
    indent: IndentStyle | None = None,
    *,
    settings: Settings | None = None,
) -> PipelineResult:
    """Normalize ``text`` into formatted JSON, or explain why it can't be."""
    settings = settings or get_settings()
    style = indent or settings.default_indent

    trimmed = text.strip()
    if not trimmed:
        return Formatted(text="")

    # 1) Relaxed grammar
    try:
        value = lenient_parse(trimmed)
    except StageFailure as exc:
        lenient_error = exc.error
        logger.debug(
            "lenient_parse_failed",
            chars=len(trimmed),
            position=lenient_error.position,
            error=lenient_error.message,
        )
    else:
        return Formatted(text=render(value, style))

    # 2) Single repair attempt
    try:
        repaired = repair(trimmed, max_chars=settings.repair_max_chars)
    except StageFailure as exc:
        logger.info(
            "repair_failed",
            chars=len(trimmed),
            position=exc.error.position,
            error=exc.error.message,
        )
        return Diagnostic(primary=lenient_error, secondary=exc.error)

    # 3) Repaired text must be standard JSON
    try:
        value = strict_parse(repaired)
    except StageFailure as exc:
        logger.warning(
            "repaired_text_invalid",
            chars=len(repaired),
            position=exc.error.position,
            error=exc.error.message,
        )
        return Diagnostic(primary=lenient_error, secondary=exc.error)

    logger.info("document_repaired", chars=len(trimmed), indent=style.value)
    return RepairedFormatted(text=f"{ANNOTATION_MARKER}\n{render(value, style)}")


def strip_repair_annotation(text: str) -> str:
    """Drop the leading annotation line, if present; otherwise return ``text``."""
    if text == ANNOTATION_MARKER:
        return ""
    line = ANNOTATION_MARKER + "\n"
    if text.startswith(line):
        return text[len(line):]
    return text
