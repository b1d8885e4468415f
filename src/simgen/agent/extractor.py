"""Normalize raw model output into a clean candidate artifact.

Both dialects are handled by :func:`extract_artifact`, which is pure, never
raises, and is idempotent on its own output.
"""

from __future__ import annotations

import json
import re
from typing import Optional

from simgen.agent.state import ENTRY_MARKER, ArtifactKind
from simgen.utils.source_scan import find_function_body_end

_FENCED_BLOCK = re.compile(
    r"```(?:jsx|tsx|javascript|typescript|react|js|ts)?[ \t]*\r?\n(.*?)```",
    re.S | re.I,
)
_FENCE_LINE = re.compile(r"^[ \t]*```[\w+-]*[ \t]*$\n?", re.M)
_TRAILING_FENCE = re.compile(r"[ \t]*```[ \t]*$", re.M)
_IMPORT_LINE = re.compile(
    r"^[ \t]*import\s+(?:[\w*{}\s,$]+?\s+from\s+)?['\"][^'\"\n]+['\"][ \t]*;?[ \t]*$\n?",
    re.M,
)

_COMMANDS_KEY = '"commands"'
_TRAILING_COMMA = re.compile(r",\s*([}\]])")

_CODE_TOKENS = ("const ", "let ", "var ", "function ", "class ", "=>", "useState", "return ")
_MIN_PROSE_LENGTH = 50
_MIN_TRAILING_LENGTH = 10


def _parses(text: str) -> bool:
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True


def _commands_span(text: str) -> Optional[str]:
    """First ``{`` through last ``}`` around a ``"commands"`` key, found linearly."""

    end = text.rfind("}")
    if end < 0:
        return None
    key = text.rfind(_COMMANDS_KEY, 0, end)
    if key < 0:
        return None
    start = text.find("{", 0, key)
    if start < 0:
        return None
    return text[start : end + 1]


def _extract_command_list(text: str) -> str:
    candidate = _commands_span(text)
    if candidate is None:
        return text

    if _parses(candidate):
        return candidate

    repaired = _TRAILING_COMMA.sub(r"\1", candidate)
    if _parses(repaired):
        return repaired
    return candidate


def _looks_like_prose(text: str) -> bool:
    return (
        "." in text
        and len(text) > _MIN_PROSE_LENGTH
        and not any(token in text for token in _CODE_TOKENS)
    )


def _extract_component_source(text: str) -> str:
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        text = fenced.group(1).strip()

    marker = text.find(ENTRY_MARKER)
    if marker > 0:
        before = _IMPORT_LINE.sub("", text[:marker]).strip()
        if _looks_like_prose(before):
            text = text[marker:]
            marker = 0

    if marker >= 0:
        body_end = find_function_body_end(text, marker + len(ENTRY_MARKER))
        if body_end is not None:
            trailing = text[body_end + 1 :].strip()
            if len(trailing) > _MIN_TRAILING_LENGTH:
                text = text[: body_end + 1]

    text = _FENCE_LINE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    text = _IMPORT_LINE.sub("", text)
    return text.strip()


def extract_artifact(raw: str, kind: ArtifactKind) -> str:
    """Return the best candidate artifact found in ``raw``."""

    text = (raw or "").strip()
    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        return _extract_command_list(text)
    return _extract_component_source(text)


__all__ = ["extract_artifact"]
