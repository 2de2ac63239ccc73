"""Result and error types produced by the formatting pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class Stage(enum.StrEnum):
    """Pipeline stage an error originated from."""

    LENIENT_PARSE = "lenient_parse"
    REPAIR = "repair"
    POST_REPAIR_PARSE = "post_repair_parse"


@dataclass(frozen=True)
class StageError:
    """A single stage failure, kept as data."""

    stage: Stage
    message: str
    position: int | None = None  # offset into the text that stage received

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class StageFailure(Exception):
    """Raised by the parse/repair adapters; carries the StageError."""

    def __init__(self, error: StageError) -> None:
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Formatted:
    """Input parsed without repair."""

    kind: ClassVar[str] = "formatted"

    text: str


@dataclass(frozen=True)
class RepairedFormatted:
    """Input parsed only after repair; ``text`` starts with the annotation line."""

    kind: ClassVar[str] = "repaired"

    text: str
    annotated: bool = True


@dataclass(frozen=True)
class Diagnostic:
    """
    Unrecoverable input.

    ``primary`` is always the lenient-parse error; ``secondary`` is the error
    that ended the pipeline after it (repair failure, or the strict reparse
    of the repaired text).
    """

    kind: ClassVar[str] = "diagnostic"

    primary: StageError
    secondary: StageError | None = None

    def describe(self) -> str:
        """Human-readable explanation distinguishing the two causes."""
        if self.secondary is None:
            return f"Invalid JSON:\n{self.primary}"
        if self.secondary.stage is Stage.POST_REPAIR_PARSE:
            return (
                "JSON is still invalid after repair:\n"
                f"Original error: {self.primary}\n"
                f"Error after repair: {self.secondary}"
            )
        return f"Invalid JSON:\n{self.primary}\n\nAutomatic repair failed:\n{self.secondary}"


PipelineResult = Formatted | RepairedFormatted | Diagnostic
