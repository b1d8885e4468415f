"""String-aware delimiter scanning for generated component source.

The scanner is a small explicit state machine: plain code, a quoted literal
(``'``, ``"`` or backtick) with a pending-escape flag, a line comment, or a
block comment. Only delimiters seen in plain code are reported.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Tuple

OPENERS = {"{": "}", "[": "]", "(": ")"}
CLOSERS = frozenset(OPENERS.values())
QUOTES = frozenset("'\"`")


class ScanMode(Enum):
    CODE = "code"
    STRING = "string"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


def iter_delimiters(source: str, start: int = 0) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, char)`` for every bracket outside literals and comments."""

    mode = ScanMode.CODE
    quote = ""
    escaped = False
    index = start
    length = len(source)

    while index < length:
        ch = source[index]
        if mode is ScanMode.STRING:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                mode = ScanMode.CODE
        elif mode is ScanMode.LINE_COMMENT:
            if ch == "\n":
                mode = ScanMode.CODE
        elif mode is ScanMode.BLOCK_COMMENT:
            if ch == "*" and source.startswith("/", index + 1):
                mode = ScanMode.CODE
                index += 1
        elif ch in QUOTES:
            mode = ScanMode.STRING
            quote = ch
        elif ch == "/" and source.startswith("/", index + 1):
            mode = ScanMode.LINE_COMMENT
            index += 1
        elif ch == "/" and source.startswith("*", index + 1):
            mode = ScanMode.BLOCK_COMMENT
            index += 1
        elif ch in OPENERS or ch in CLOSERS:
            yield index, ch
        index += 1


def find_matching(source: str, open_index: int) -> Optional[int]:
    """Return the index closing the bracket at ``open_index``, if any."""

    opener = source[open_index]
    closer = OPENERS.get(opener)
    if closer is None:
        return None

    depth = 0
    for index, ch in iter_delimiters(source, open_index):
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return index
    return None


def find_function_body_end(source: str, start: int) -> Optional[int]:
    """Locate the closing brace of the first function declared at ``start``.

    The parameter list is skipped first so destructured parameters such as
    ``({ a, b })`` are not mistaken for the body.
    """

    delimiters = iter_delimiters(source, start)
    first = next(delimiters, None)
    if first is None:
        return None

    index, ch = first
    if ch == "(":
        params_end = find_matching(source, index)
        if params_end is None:
            return None
        index = next((i for i, c in iter_delimiters(source, params_end + 1) if c == "{"), -1)
    elif ch != "{":
        index = next((i for i, c in iter_delimiters(source, index) if c == "{"), -1)

    if index < 0:
        return None
    return find_matching(source, index)


__all__ = [
    "CLOSERS",
    "OPENERS",
    "QUOTES",
    "ScanMode",
    "find_function_body_end",
    "find_matching",
    "iter_delimiters",
]
