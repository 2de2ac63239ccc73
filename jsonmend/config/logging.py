"""Structured logging for the CLI and the HTTP service.

Both entry points log through structlog on top of stdlib ``logging``, so
records from uvicorn and other libraries go through the same handler and
renderer as jsonmend's own events.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import orjson
import structlog

_NOISY_LOGGERS = ("asyncio", "uvicorn.access")


def _orjson_dumps(obj: Any, **kwargs: Any) -> str:
    return orjson.dumps(obj, **kwargs).decode("utf-8")


def _shared_processors(fmt: str) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if fmt == "json":
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
        ]
    else:
        # ConsoleRenderer formats exc_info itself
        processors.append(structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False))
    return processors


def _renderer(fmt: str, stream: TextIO) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer(serializer=_orjson_dumps)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def setup_logging(level: str = "INFO", fmt: str = "console", stream: TextIO | None = None) -> None:
    """Route structlog and stdlib logging to one stream.

    ``fmt`` is ``"json"`` (one object per line) or ``"console"``. ``stream``
    defaults to stdout; the CLI passes stderr so log lines never interleave
    with the document it prints.
    """
    stream = stream or sys.stdout
    shared = _shared_processors(fmt)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt, stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
