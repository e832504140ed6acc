"""
Integration Tests for the Transform Engine.

Exercises the full pipeline per source kind, the behaviours promised for
malformed input, and the result metadata (warnings, exports, trace).
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

import tsstrip
from tsstrip.config import RuntimeConfig
from tsstrip.core.engine import TransformEngine
from tsstrip.core.tracer import TraceEventType
from tsstrip.enums import SourceKind

TYPED_MODULE = """import type { User } from './types';
import { helper } from './helper';

interface Options {
  verbose: boolean;
}

type Id = string;

export function run(id: Id, opts: Options): boolean {
  return helper(id as string);
}
"""


def test_typed_module_end_to_end(engine):
  result = engine.run(TYPED_MODULE, SourceKind.TYPED)

  assert result.success
  assert result.code == (
    "const { helper } = require('./helper');\n"
    "\n"
    "\n"
    "\n"
    "function run(id, opts) {\n"
    "  return helper(id);\n"
    "}\n"
    "\n"
    "// Module exports\n"
    "module.exports.run = run;\n"
  )
  assert result.exports == ["run"]
  assert not result.has_errors


def test_single_line_interface_is_removed():
  out = tsstrip.transform("interface Foo { a: number; }\nconst b = 1;")
  assert "interface" not in out
  assert out == "const b = 1;"


def test_multi_line_enum_is_removed():
  out = tsstrip.transform("enum Color {\n  Red,\n  Blue\n}\nconst c = 1;\n")
  assert "enum" not in out
  assert "Red" not in out
  assert out == "const c = 1;\n"


def test_function_signature_property():
  out = tsstrip.transform("function f(a: number, b: string): number { return a; }")
  assert out == "function f(a, b) { return a; }"


def test_assertion_property():
  out = tsstrip.transform("const x: Foo<Bar> = y as Foo<Bar>;")
  assert out == "const x = y;"


def test_export_round_trip_for_plain_modules(engine):
  src = "export const A = 1;\nexport function f() {}\nexport default 42;"
  out = engine.transform(src, SourceKind.MODULE)
  assert "A = 1;" in out
  assert "function f() {}" in out
  assert "module.exports = 42;" in out
  assert out.endswith("// Module exports\nmodule.exports.A = A;\nmodule.exports.f = f;")


def test_module_kind_does_not_strip_types(engine):
  out = engine.transform("import x from './x';\nconst o = { a: 1 };\nexport default x;\n", "module")
  assert out == "const x = require('./x');\nconst o = { a: 1 };\nmodule.exports = x;\n"


def test_opaque_kind_is_untouched(engine):
  src = "export const x: number = 1;\n"
  result = engine.run(src, SourceKind.OPAQUE)
  assert result.code == src
  assert result.success


PLAIN = """const a = 1;
function add(x, y) {
  return x + y;
}
const o = { k: a ? 1 : 2, label: "a: b" };
const t = `multi
line: ${a}`;
"""


@pytest.mark.parametrize("kind", [SourceKind.TYPED, SourceKind.MODULE])
def test_plain_code_is_unchanged(engine, kind):
  assert engine.transform(PLAIN, kind) == PLAIN


@pytest.mark.parametrize(
  "src",
  [
    "",
    "\n",
    "interface Broken {\n  a: number;",
    "const s = 'unterminated: x;",
    "function f(a: number {",
    "}}}))]]",
    "`open template: {",
    "/* open comment",
    "import {\n  a,",
    "export",
  ],
)
def test_malformed_input_always_returns_text(src):
  out = tsstrip.transform(src)
  assert isinstance(out, str)


def test_empty_input():
  assert tsstrip.transform("") == ""


def test_trailing_newline_is_preserved(engine):
  assert engine.transform("const a = 1;\n") == "const a = 1;\n"
  assert engine.transform("const a = 1;") == "const a = 1;"


def test_windows_line_endings_are_normalised(engine):
  assert engine.transform("let a: number = 1;\r\nlet b = 2;\r\n") == "let a = 1;\nlet b = 2;\n"


def test_unsupported_statements_become_warnings(engine):
  result = engine.run("const a = 1;\nexport { a };\n", SourceKind.MODULE)
  assert "// export { a };" in result.code
  assert result.errors == ["Commented out unsupported statement: export { a };"]
  assert result.success


def test_unknown_kind_fails_softly(engine):
  result = engine.run("const a = 1;", "bogus")
  assert not result.success
  assert result.code == "const a = 1;"
  assert result.errors[0].startswith("Transform Error")


def test_internal_failure_returns_source(engine):
  with patch("tsstrip.core.passes.TypeStripPass.run", side_effect=RuntimeError("boom")):
    result = engine.run("let a: number = 1;", SourceKind.TYPED)
  assert not result.success
  assert result.code == "let a: number = 1;"
  assert result.errors == ["Transform Error: boom"]


def test_trace_records_phases_and_elisions(engine):
  result = engine.run("interface A {\n  x: number;\n}\nlet b: string;\n", SourceKind.TYPED)
  types = [e["type"] for e in result.trace_events]
  assert TraceEventType.PHASE_START in types
  assert TraceEventType.DECLARATION_ELIDED in types
  assert TraceEventType.LINE_REWRITE in types

  elision = next(e for e in result.trace_events if e["type"] == TraceEventType.DECLARATION_ELIDED)
  assert elision["metadata"] == {"keyword": "interface A", "start": 1, "end": 3}


def test_declarations_and_overloads_are_dropped(engine):
  src = "\n".join(
    [
      "declare const VERSION: string;",
      "declare module 'lib' {",
      "  export function x(): void;",
      "}",
      "function pick(a: string): string;",
      "function pick(a: any): any {",
      "  return a;",
      "}",
      "type Shape =",
      "  | { kind: 'circle' }",
      "  | { kind: 'square' };",
    ]
  )
  assert engine.transform(src) == "function pick(a) {\n  return a;\n}"


def test_runtime_statements_that_look_like_signatures_survive(engine):
  assert engine.transform("function noop() {} noop();") == "function noop() {} noop();"

  src = "let declare = 1;\ndeclare = 5;\nconsole.log(declare);"
  assert engine.transform(src) == src


def test_constructor_parameter_properties(engine):
  src = "class P {\n  constructor(public x: number, private readonly y: string) {}\n}"
  assert engine.transform(src) == "class P {\n  constructor(x, y) {}\n}"


def test_class_body_on_its_own_line(engine):
  src = "class A\n{\n  name: string;\n}"
  assert engine.transform(src) == "class A\n{\n  name;\n}"


def test_export_list_in_typed_source_is_commented_out_verbatim(engine):
  result = engine.run("const a = 1;\nexport { a as b };", SourceKind.TYPED)
  assert result.code == "const a = 1;\n// export { a as b };"
  assert result.errors == ["Commented out unsupported statement: export { a as b };"]
  assert result.success


def test_collapse_setting_is_honoured():
  engine = TransformEngine(RuntimeConfig(collapse_whitespace=False))
  assert engine.transform("let  a = 1;") == "let  a = 1;"


def test_engine_is_safe_to_share_between_threads(engine):
  sources = [f"export const v{i}: number = {i};" for i in range(20)]
  with ThreadPoolExecutor(max_workers=4) as pool:
    outputs = list(pool.map(engine.transform, sources))

  for i, out in enumerate(outputs):
    assert out == f"const v{i} = {i};\n\n// Module exports\nmodule.exports.v{i} = v{i};"


def test_package_classify():
  assert tsstrip.classify("app.ts") == SourceKind.TYPED
  assert tsstrip.classify("app.js") == SourceKind.MODULE
