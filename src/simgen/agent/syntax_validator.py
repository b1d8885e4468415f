from __future__ import annotations

"""Deterministic local validation of candidate artifacts.

No model is consulted here. Component source gets a delimiter balance scan
plus a couple of structural checks; command lists get a strict parse into the
command-list schema.
"""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from simgen.agent.state import ArtifactKind, ValidationVerdict
from simgen.utils.source_scan import CLOSERS, OPENERS, iter_delimiters

_IMPORT_DECLARATION = re.compile(r"^\s*import(?:\s+|\s*[{*'\"])")
_COMMENT_PREFIXES = ("//", "/*", "*")
_RETURN_OR_RENDER = re.compile(r"\breturn\b|\brender\s*\(")


class CommandList(BaseModel):
    """Shape of a command-list artifact."""

    commands: List[str]
    settings: Optional[Dict[str, Any]] = None


def check_delimiters(source: str) -> List[str]:
    """Report the first unmatched closer, or any closers still expected."""

    stack: List[str] = []
    for index, ch in iter_delimiters(source):
        if ch in OPENERS:
            stack.append(OPENERS[ch])
        elif ch in CLOSERS:
            if not stack or stack.pop() != ch:
                return [f"Unmatched '{ch}' at position {index}"]

    if stack:
        return [f"Unclosed delimiters: expected {', '.join(reversed(stack))}"]
    return []


def _has_import_declaration(source: str) -> bool:
    for line in source.splitlines():
        stripped = line.strip()
        if stripped.startswith(_COMMENT_PREFIXES):
            continue
        if _IMPORT_DECLARATION.match(line):
            return True
    return False


def _validate_component_source(source: str) -> List[str]:
    defects = check_delimiters(source)
    if _has_import_declaration(source):
        defects.append("Import statements are not allowed; all libraries are provided in scope")
    if not _RETURN_OR_RENDER.search(source):
        defects.append("Component must contain a return statement that renders JSX")
    return defects


def _validate_command_list(source: str) -> List[str]:
    try:
        data = json.loads(source)
    except json.JSONDecodeError as exc:
        return [f"Invalid JSON format: {exc.msg} (line {exc.lineno}, column {exc.colno})"]
    except ValueError as exc:
        # e.g. integer literals past the int conversion digit limit
        return [f"Invalid JSON format: {exc}"]
    except RecursionError:
        return ["Invalid JSON format: nesting is too deep"]

    try:
        CommandList.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'root'}: {error['msg']}"
            for error in exc.errors()
        )
        return [f"Command list does not match the expected shape: {problems}"]
    return []


def validate_local(candidate: Optional[str], kind: ArtifactKind) -> ValidationVerdict:
    """Validate ``candidate`` without any network access.

    Never raises; every problem is reported as a defect string.
    """

    source = candidate or ""
    if not source.strip():
        return ValidationVerdict.from_defects(["Artifact is empty"])

    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        return ValidationVerdict.from_defects(_validate_command_list(source))
    return ValidationVerdict.from_defects(_validate_component_source(source))


__all__ = ["CommandList", "check_delimiters", "validate_local"]
