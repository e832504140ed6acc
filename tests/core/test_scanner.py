"""
Tests for the Line/Character Scanner.

Verifies that:
1.  String, template and comment state is tracked and carried across lines.
2.  The bracket stack never underflows and pops back to matching openers.
3.  Brackets are tagged with the context they open.
4.  Type skipping respects nesting and arrow tokens.
"""

import pytest

from tsstrip.core.scanner import (
  LineCursor,
  ScanState,
  advance,
  classify_bracket,
  code_spans,
  find_quote_end,
)
from tsstrip.enums import BracketKind


def test_string_contents_do_not_open_brackets():
  state = ScanState()
  advance('const s = "a: ({[";', state)
  assert state.in_code
  assert state.brackets == []


def test_template_literal_spans_lines():
  state = ScanState()
  advance("const t = `first line", state)
  assert state.quote == "`"
  assert not state.in_code

  advance("second: line`;", state)
  assert state.in_code


def test_single_quote_closes_at_end_of_line():
  state = ScanState()
  advance("const s = 'never closed", state)
  assert state.quote is None


def test_block_comment_spans_lines():
  state = ScanState()
  advance("/* a comment (", state)
  assert state.in_block_comment
  advance("still ) here */ x(", state)
  assert not state.in_block_comment
  assert state.paren_depth == 1


def test_unmatched_closers_are_ignored():
  state = ScanState()
  advance("}}}))", state)
  assert state.brackets == []
  assert state.paren_depth == 0


def test_closer_pops_to_matching_opener():
  state = ScanState()
  state.open("(", BracketKind.PAREN)
  state.open("{", BracketKind.OBJECT)
  state.close(")")
  assert state.brackets == []


def test_paren_depth_spans_lines():
  state = ScanState()
  advance("function build(", state)
  assert state.paren_depth == 1
  assert state.innermost == BracketKind.PAREN
  advance(") {", state)
  assert state.paren_depth == 0
  assert state.innermost == BracketKind.BLOCK


def test_escaped_quote_does_not_close():
  line = r'"a\"b"'
  assert find_quote_end(line, 1, '"') == len(line) - 1


@pytest.mark.parametrize(
  "prefix, expected",
  [
    ("const o = ", BracketKind.OBJECT),
    ("return ", BracketKind.OBJECT),
    ("call(a, ", BracketKind.OBJECT),
    ("function f() ", BracketKind.BLOCK),
    ("if (ok) ", BracketKind.BLOCK),
    ("", BracketKind.BLOCK),
    ("class Foo extends Bar ", BracketKind.CLASS),
    ("const K = class ", BracketKind.CLASS),
  ],
)
def test_classify_brace(prefix, expected):
  assert classify_bracket("{", prefix) == expected


def test_classify_other_brackets():
  assert classify_bracket("(", "x") == BracketKind.PAREN
  assert classify_bracket("[", "x") == BracketKind.SQUARE


def test_class_head_carries_to_brace_on_next_line():
  state = ScanState()
  advance("export class Store extends Base", state)
  assert state.class_head_pending
  advance("{", state)
  assert state.innermost == BracketKind.CLASS
  assert not state.class_head_pending


def test_class_word_in_comment_is_not_a_head():
  state = ScanState()
  advance("// a class of problems", state)
  assert not state.class_head_pending
  advance("{", state)
  assert state.innermost == BracketKind.BLOCK


def test_pending_class_head_is_dropped_by_a_statement():
  state = ScanState()
  advance("const Base = mixin(class", state)
  advance(");", state)
  advance("{", state)
  assert state.innermost == BracketKind.BLOCK


def test_code_spans_separate_strings():
  spans = code_spans('x = "a" + y', ScanState())
  assert spans == [(True, "x = "), (False, '"a"'), (True, " + y")]


def test_code_spans_regex_literal_is_not_code():
  spans = code_spans("const r = /a:b/g;", ScanState())
  assert spans == [(True, "const r = "), (False, "/a:b/g"), (True, ";")]


def test_division_is_not_a_regex():
  spans = code_spans("a = b / c / d;", ScanState())
  assert spans == [(True, "a = b / c / d;")]


def test_line_comment_tail_is_literal():
  spans = code_spans("x(); // note: (", ScanState())
  assert spans == [(True, "x(); "), (False, "// note: (")]


def test_skip_until_respects_generic_nesting():
  cursor = LineCursor("Map<K, V>, next", ScanState())
  assert cursor.skip_until(",)=") == "Map<K, V>"
  assert cursor.peek() == ","


def test_skip_until_steps_over_arrow():
  cursor = LineCursor("(a) => void = x", ScanState())
  assert cursor.skip_until("=;,") == "(a) => void "


def test_skip_until_stops_at_arrow_when_requested():
  cursor = LineCursor(" number => x", ScanState())
  assert cursor.skip_until("{;=", arrow_stops=True) == " number "


def test_skip_until_stops_at_enclosing_closer():
  cursor = LineCursor(" string) {", ScanState())
  assert cursor.skip_until(",=") == " string"
