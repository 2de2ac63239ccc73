"""Deterministic JSON rendering for every IndentStyle.

Key order is whatever the value carries; nothing is sorted. Rendering walks
the tree with an explicit stack so nesting depth is bounded by memory, not
by the interpreter's recursion limit.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator

import orjson

from jsonmend.config.settings import IndentStyle

_DONE = object()


@dataclass
class _Frame:
    items: Iterator[Any]
    closer: str
    is_object: bool
    count: int = 0


def _string(text: str) -> str:
    try:
        return orjson.dumps(text).decode("utf-8")
    except orjson.JSONEncodeError:
        # lone surrogates: let the stdlib escape them as \uXXXX
        return json.dumps(text)


def _scalar(node: Any) -> str:
    if node is None:
        return "null"
    if node is True:
        return "true"
    if node is False:
        return "false"
    if isinstance(node, int):
        return int.__repr__(node)
    if isinstance(node, Decimal):
        # numbers too wide for int/float; str keeps every digit
        return str(node) if node.is_finite() else "null"
    if isinstance(node, float):
        # shortest round-trip repr; NaN/Infinity become null
        return orjson.dumps(node).decode("utf-8")
    if isinstance(node, str):
        return _string(node)
    raise TypeError(f"not a JSON value: {type(node).__name__}")


def render(value: Any, indent: IndentStyle) -> str:
    """Render a parsed value tree as JSON text in the given style."""
    pretty = indent is not IndentStyle.COMPACT
    unit = indent.unit
    key_sep = ": " if pretty else ":"

    out: list[str] = []
    stack: list[_Frame] = []

    def newline(depth: int) -> None:
        if pretty:
            out.append("\n" + unit * depth)

    def emit(node: Any) -> None:
        if isinstance(node, dict) and node:
            out.append("{")
            stack.append(_Frame(iter(node.items()), "}", True))
        elif isinstance(node, (list, tuple)) and node:
            out.append("[")
            stack.append(_Frame(iter(node), "]", False))
        elif isinstance(node, dict):
            out.append("{}")
        elif isinstance(node, (list, tuple)):
            out.append("[]")
        else:
            out.append(_scalar(node))

    emit(value)
    while stack:
        frame = stack[-1]
        depth = len(stack)
        entry = next(frame.items, _DONE)
        if entry is _DONE:
            stack.pop()
            newline(depth - 1)
            out.append(frame.closer)
            continue

        if frame.count:
            out.append(",")
        frame.count += 1
        newline(depth)

        if frame.is_object:
            key, node = entry
            out.append(_string(key if isinstance(key, str) else str(key)))
            out.append(key_sep)
        else:
            node = entry
        emit(node)

    return "".join(out)
