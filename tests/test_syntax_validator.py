from __future__ import annotations

import pytest

from simgen.agent.state import ArtifactKind
from simgen.agent.syntax_validator import check_delimiters, validate_local

COMPONENT = ArtifactKind.COMPONENT_SOURCE
COMMANDS = ArtifactKind.COMMAND_LIST


def test_clean_component_is_accepted(counter_component):
    verdict = validate_local(counter_component, COMPONENT)
    assert verdict.accepted is True
    assert verdict.defects == ()


@pytest.mark.parametrize(
    "source",
    [
        "export default function A() {\n  return <p title=\"a ) b\">{'}'}</p>;\n}",
        "export default function A() {\n  const s = 'it\\'s (fine';\n  return s;\n}",
        "export default function A() {\n  // unbalanced ( in a comment\n  return [1, 2].map((x) => ({ x }));\n}",
        "export default function A() {\n  const t = `${a}) {`;\n  return t;\n}",
    ],
)
def test_delimiters_inside_literals_and_comments_are_ignored(source):
    assert validate_local(source, COMPONENT).accepted is True


def test_single_unmatched_closer_reports_one_defect_at_its_position():
    source = "export default function A() {\n  return (1));\n}"
    verdict = validate_local(source, COMPONENT)
    assert verdict.accepted is False
    assert verdict.defects == (f"Unmatched ')' at position {source.index('))') + 1}",)


def test_closer_with_empty_stack_is_unmatched():
    assert check_delimiters("a]") == ["Unmatched ']' at position 1"]


def test_mismatched_closer_stops_the_scan():
    source = "f(a}"
    assert check_delimiters(source) == ["Unmatched '}' at position 3"]


def test_unclosed_delimiters_are_listed_innermost_first():
    assert check_delimiters("{ [ (") == ["Unclosed delimiters: expected ), ], }"]


def test_import_declaration_is_a_defect():
    source = "import React from 'react';\nexport default function A() {\n  return null;\n}"
    verdict = validate_local(source, COMPONENT)
    assert verdict.accepted is False
    assert any("Import statements" in defect for defect in verdict.defects)


def test_commented_import_is_allowed():
    source = "// import React from 'react';\nexport default function A() {\n  return null;\n}"
    assert validate_local(source, COMPONENT).accepted is True


def test_identifier_containing_import_is_not_a_declaration():
    source = "export default function A() {\n  const important = 1;\n  return important;\n}"
    assert validate_local(source, COMPONENT).accepted is True


def test_missing_return_is_a_defect():
    verdict = validate_local("export default function A() {\n  const x = 1;\n}", COMPONENT)
    assert verdict.defects == ("Component must contain a return statement that renders JSX",)


def test_render_call_counts_as_render_statement():
    assert validate_local("root.render(<App />);", COMPONENT).accepted is True


def test_structural_and_import_defects_are_reported_together():
    source = "import x from 'y';\nfunction A() { return (1; }"
    verdict = validate_local(source, COMPONENT)
    assert len(verdict.defects) == 2
    assert verdict.defects[0].startswith("Unmatched '}'")


def test_empty_candidate_is_rejected():
    assert validate_local("   ", COMPONENT).defects == ("Artifact is empty",)
    assert validate_local(None, COMMANDS).accepted is False


def test_valid_command_list_is_accepted():
    source = '{"commands": ["a = Slider(0, 5, 0.1)", "f(x) = a*x"], "settings": {"width": 800}}'
    assert validate_local(source, COMMANDS).accepted is True


def test_command_list_skips_component_checks():
    # no return statement, but command lists are only parsed
    assert validate_local('{"commands": []}', COMMANDS).accepted is True


def test_invalid_json_command_list_is_rejected():
    verdict = validate_local('{"commands": ["a = 1",]}', COMMANDS)
    assert verdict.accepted is False
    assert verdict.defects[0].startswith("Invalid JSON format")


def test_command_list_with_wrong_shape_is_rejected():
    verdict = validate_local('{"commands": "a = 1"}', COMMANDS)
    assert verdict.accepted is False
    assert "expected shape" in verdict.defects[0]


def test_oversized_integer_is_a_json_defect():
    source = '{"commands": ["a"], "settings": {"w": ' + "1" * 5000 + "}}"

    verdict = validate_local(source, COMMANDS)

    assert verdict.accepted is False
    assert len(verdict.defects) == 1
    assert verdict.defects[0].startswith("Invalid JSON format")


def test_deeply_nested_command_list_is_rejected_without_raising():
    verdict = validate_local("[" * 100_000 + "]" * 100_000, COMMANDS)

    assert verdict.accepted is False
    assert len(verdict.defects) == 1
