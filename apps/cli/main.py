"""
Formatter CLI — format a file or stdin.

The formatted document goes to stdout; a diagnostic goes to stderr with
exit status 1.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click
import structlog

from jsonmend.config import IndentStyle, get_settings
from jsonmend.config.logging import setup_logging
from jsonmend.pipeline import Diagnostic, format_json, strip_repair_annotation

logger = structlog.get_logger(__name__)


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--indent",
    type=click.Choice([style.value for style in IndentStyle]),
    default=None,
    help="Output layout. Defaults to DEFAULT_INDENT from the environment.",
)
@click.option(
    "--strip-annotation/--keep-annotation",
    default=False,
    help="Drop the auto-repair notice line from repaired output.",
)
def cli(source: TextIO, indent: str | None, strip_annotation: bool) -> None:
    """Normalize relaxed or broken JSON from SOURCE (default: stdin)."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, stream=sys.stderr)

    try:
        text = source.read()
    except UnicodeDecodeError as exc:
        raise click.BadParameter(
            f"not valid UTF-8 (byte {exc.start})", param_hint="SOURCE"
        ) from exc

    style = IndentStyle(indent) if indent else None
    result = format_json(text, style, settings=settings)

    if isinstance(result, Diagnostic):
        logger.debug("cli_diagnostic", primary=result.primary.stage.value)
        click.echo(result.describe(), err=True)
        sys.exit(1)

    output = strip_repair_annotation(result.text) if strip_annotation else result.text
    if output:
        click.echo(output)


if __name__ == "__main__":
    cli()
