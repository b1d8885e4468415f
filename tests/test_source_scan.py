from __future__ import annotations

from simgen.utils.source_scan import find_function_body_end, find_matching, iter_delimiters


def _chars(source: str) -> str:
    return "".join(ch for _, ch in iter_delimiters(source))


def test_iter_delimiters_skips_quoted_literals():
    source = """const a = "(}"; const b = '[' + `{${x}`; f(a)"""
    assert _chars(source) == "()"


def test_iter_delimiters_honors_escaped_quotes():
    source = r'''const s = "say \"(\" now"; g()'''
    assert _chars(source) == "()"


def test_iter_delimiters_handles_escaped_backslash_before_quote():
    source = r'''const s = "\\"; h(s)'''
    assert _chars(source) == "()"


def test_iter_delimiters_skips_comments():
    source = "// don't (\n/* { */ k()"
    assert _chars(source) == "()"


def test_find_matching_returns_closing_index():
    source = "{ a: { b: '}' } }"
    assert find_matching(source, 0) == len(source) - 1


def test_find_matching_returns_none_when_unclosed():
    assert find_matching("{ { }", 0) is None


def test_find_function_body_end_skips_destructured_parameters():
    source = "export default function Sim({ a, b }) { return a + b; } trailing"
    end = find_function_body_end(source, len("export default function"))
    assert source[: end + 1].endswith("return a + b; }")


def test_find_function_body_end_without_body():
    assert find_function_body_end("export default function Sim()", 23) is None
