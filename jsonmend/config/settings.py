"""
Pydantic Settings — single source of truth for all configuration.

Reads from environment variables (and .env file in dev).
The pipeline, CLI and HTTP service all resolve their config via `get_settings()`.
"""

from __future__ import annotations

import enum
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndentStyle(enum.StrEnum):
    """Output layouts supported by the formatter."""

    TWO_SPACE = "two-space"
    FOUR_SPACE = "four-space"
    TAB = "tab"
    COMPACT = "compact"  # single line, no insignificant whitespace

    @property
    def unit(self) -> str:
        """Whitespace added per nesting level ("" for compact)."""
        return _INDENT_UNITS[self]


_INDENT_UNITS = {
    IndentStyle.TWO_SPACE: "  ",
    IndentStyle.FOUR_SPACE: "    ",
    IndentStyle.TAB: "\t",
    IndentStyle.COMPACT: "",
}


class Settings(BaseSettings):
    """Application-wide settings loaded from env vars."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Formatting ───────────────────────────────────
    default_indent: IndentStyle = Field(
        default=IndentStyle.TWO_SPACE,
        description="Style used when the caller does not pick one",
    )

    # ── Repair ───────────────────────────────────────
    repair_max_chars: int = Field(
        default=262_144,
        gt=0,
        description="Inputs longer than this skip the repair heuristic and fail",
    )

    # ── Logging ──────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # ── HTTP service ─────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8080


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
