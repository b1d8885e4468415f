"""Extraction and local validation must return for any model output."""

from __future__ import annotations

import pytest

from simgen.agent.extractor import extract_artifact
from simgen.agent.state import ArtifactKind, ValidationVerdict
from simgen.agent.syntax_validator import validate_local

DEEP = 100_000

HOSTILE_OUTPUTS = {
    "huge_integer": '{"commands": ["a"], "settings": {"w": ' + "9" * 5000 + "}}",
    "huge_integer_with_trailing_comma": '{"commands": [' + "7" * 5000 + ",]}",
    "deep_array": "[" * DEEP + "]" * DEEP,
    "deep_array_in_commands": '{"commands": [' + "[" * DEEP + "]" * DEEP + ",]}",
    "deep_unclosed": "{" * DEEP,
    "lone_double_quote": '"',
    "lone_single_quote": "'",
    "lone_backtick": "`",
    "unterminated_block_comment": "export default function A() { return 1; /* never closed",
    "trailing_backslash": "export default function A() { return '\\",
    "lone_backslash": "\\",
    "fence_only": "```",
    "marker_only": "export default function",
    "empty": "",
    "whitespace": " \n\t ",
}


@pytest.mark.parametrize("kind", list(ArtifactKind))
@pytest.mark.parametrize("raw", list(HOSTILE_OUTPUTS.values()), ids=list(HOSTILE_OUTPUTS))
def test_extract_and_validate_always_return(raw, kind):
    extracted = extract_artifact(raw, kind)
    assert isinstance(extracted, str)

    for candidate in (raw, extracted):
        verdict = validate_local(candidate, kind)
        assert isinstance(verdict, ValidationVerdict)
        assert verdict.accepted is (not verdict.defects)


def test_none_is_handled():
    for kind in ArtifactKind:
        assert extract_artifact(None, kind) == ""
        assert validate_local(None, kind).defects == ("Artifact is empty",)
