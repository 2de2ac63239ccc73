"""Parse and repair adapters over the third-party JSON stack.

Each adapter returns its product or raises ``StageFailure`` carrying a
``StageError``; the orchestrator turns those into result data.

Numbers that do not fit a native ``int`` or ``float`` (integers past the
interpreter's digit limit, doubles like ``1e400``) come back as
``decimal.Decimal`` so they survive formatting unchanged.
"""

from __future__ import annotations

import json
import re
from decimal import Decimal
from typing import Any

import json_repair
import pyjson5
import rapidjson

from jsonmend.pipeline.results import Stage, StageError, StageFailure

_TOLERANT = rapidjson.PM_COMMENTS | rapidjson.PM_TRAILING_COMMAS

# rapidjson: "Parse error at offset 12: ..." (0-based)
_OFFSET_RE = re.compile(r"\boffset\s+(\d+)")
# pyjson5: "Expected ... near 25, found U+005D" (1-based)
_NEAR_RE = re.compile(r"\bnear\s+(\d+)")

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = {"}": "{", "]": "["}


def _offset_from(exc: Exception) -> int | None:
    pos = getattr(exc, "pos", None)
    if isinstance(pos, int):
        return pos
    text = _message_from(exc)
    match = _OFFSET_RE.search(text)
    if match:
        return int(match.group(1))
    match = _NEAR_RE.search(text)
    if match:
        return max(int(match.group(1)) - 1, 0)
    return None


def _message_from(exc: Exception) -> str:
    # pyjson5 exceptions carry the partial parse result in args
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_wide_numbers(text: str, *, parse_mode: int) -> Any:
    """Retry a failed parse with Decimal numbers.

    rapidjson's decimal mode covers out-of-range doubles; integers longer
    than the interpreter's digit limit only get through the stdlib decoder,
    whose number hooks take the raw digits.
    """
    try:
        return rapidjson.loads(
            text, parse_mode=parse_mode, number_mode=rapidjson.NM_DECIMAL
        )
    except Exception:
        pass
    return json.loads(
        text,
        parse_int=Decimal,
        parse_float=Decimal,
        parse_constant=_reject_constant,
    )


def lenient_parse(text: str) -> Any:
    """Parse JSON with relaxed syntax.

    Order:
      1) tolerant + fast (rapidjson: comments + trailing commas)
      2) same, with Decimal numbers (out-of-range values)
      3) JSON5 (pyjson5: single quotes, unquoted keys, etc.)

    The error reported on failure is the JSON5 one, since that grammar
    accepts everything rapidjson's tolerant mode does.
    """
    # 1) Tolerant: standard JSON + comments + trailing commas
    try:
        return rapidjson.loads(text, parse_mode=_TOLERANT)
    except Exception:
        pass

    # 2) Wide numbers
    try:
        return _parse_wide_numbers(text, parse_mode=_TOLERANT)
    except Exception:
        pass

    # 3) JSON5
    try:
        return pyjson5.loads(text)
    except Exception as exc:
        raise StageFailure(
            StageError(Stage.LENIENT_PARSE, _message_from(exc), _offset_from(exc))
        ) from exc


def find_bracket_mismatch(text: str) -> tuple[int, str] | None:
    """Return ``(offset, message)`` for the first closing bracket that does
    not match the innermost open one, or ``None``.

    This deliberately narrows what ``repair`` accepts: json_repair would
    guess a structure for ``[1, 2}``, but a crossed bracket means the
    document's shape is unknown, so it is reported instead of rewritten.

    Quoted strings (either quote style) and comments are skipped. Brackets
    still open at the end are not a mismatch: truncated input is left to the
    repairer.
    """
    stack: list[tuple[str, int]] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in "\"'":
            i += 1
            while i < n and text[i] != ch:
                i += 2 if text[i] == "\\" else 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 1
        elif ch in _OPENERS:
            stack.append((ch, i))
        elif ch in _CLOSERS:
            if not stack:
                return i, f"unexpected {ch!r} with no open bracket"
            opener, opened_at = stack.pop()
            if opener != _CLOSERS[ch]:
                return i, (
                    f"mismatched brackets: {ch!r} closes {opener!r} opened at offset {opened_at}"
                )
        i += 1
    return None


def repair(text: str, *, max_chars: int) -> str:
    """Rewrite malformed text into valid JSON text (best effort).

    Raises StageFailure when the input is over ``max_chars``, when its
    brackets are mismatched, or when json_repair recovers nothing.
    """
    if len(text) > max_chars:
        raise StageFailure(
            StageError(
                Stage.REPAIR,
                f"input is {len(text)} characters; repair is limited to {max_chars}",
            )
        )

    mismatch = find_bracket_mismatch(text)
    if mismatch is not None:
        offset, message = mismatch
        raise StageFailure(StageError(Stage.REPAIR, message, offset))

    try:
        repaired = json_repair.repair_json(text, ensure_ascii=False)
    except Exception as exc:
        raise StageFailure(StageError(Stage.REPAIR, f"repair failed: {exc}")) from exc

    if not isinstance(repaired, str) or repaired.strip() in ("", '""'):
        raise StageFailure(StageError(Stage.REPAIR, "no recoverable JSON content"))
    return repaired


def strict_parse(text: str) -> Any:
    """Parse standard JSON only (no comments, trailing commas or NaN)."""
    try:
        return rapidjson.loads(text, number_mode=rapidjson.NM_NONE)
    except Exception as exc:
        try:
            return _parse_wide_numbers(text, parse_mode=rapidjson.PM_NONE)
        except Exception:
            pass
        raise StageFailure(
            StageError(Stage.POST_REPAIR_PARSE, _message_from(exc), _offset_from(exc))
        ) from exc
