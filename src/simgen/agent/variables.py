"""Static detection of user-controllable state in component artifacts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Tuple

SCAN_LIMIT = 10_000

_STATE_DECLARATION = re.compile(
    r"const\s+\[\s*(\w+)\s*,\s*set\w+\s*\]\s*=\s*useState\(\s*([^)]*?)\s*\)"
)
_CONTROL_TAG = re.compile(r"<(?:Slider|input)\b(.*?)/>", re.S)
_BOUND = re.compile(r"\b(min|max)=\{?\s*[\"']?(-?\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class ControlVariable:
    name: str
    type: Literal["number", "boolean", "string"]
    default: Any
    min: Optional[float] = None
    max: Optional[float] = None


def _parse_default(literal: str) -> Tuple[str, Any]:
    if literal in ("true", "false"):
        return "boolean", literal == "true"
    try:
        number = float(literal)
    except ValueError:
        if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"`":
            return "string", literal[1:-1]
        return "string", literal
    return "number", int(number) if number.is_integer() and "." not in literal else number


def _find_range(source: str, name: str) -> Tuple[Optional[float], Optional[float]]:
    binding = re.compile(r"value=\{\s*\[?\s*" + re.escape(name) + r"\s*\]?\s*\}")
    for tag in _CONTROL_TAG.finditer(source):
        attributes = tag.group(1)
        if not binding.search(attributes):
            continue
        bounds = {key: float(value) for key, value in _BOUND.findall(attributes)}
        return bounds.get("min"), bounds.get("max")
    return None, None


def detect_variables(source: str) -> List[ControlVariable]:
    """List ``useState`` variables with their defaults and slider ranges."""

    window = (source or "")[:SCAN_LIMIT]
    seen = set()
    variables: List[ControlVariable] = []
    for match in _STATE_DECLARATION.finditer(window):
        name, literal = match.group(1), match.group(2)
        if name in seen:
            continue
        seen.add(name)

        var_type, default = _parse_default(literal)
        minimum, maximum = _find_range(window, name) if var_type == "number" else (None, None)
        variables.append(ControlVariable(name, var_type, default, minimum, maximum))
    return variables


__all__ = ["ControlVariable", "detect_variables"]
