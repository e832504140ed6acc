"""
Tests for the 'convert' and 'classify' command handlers on real files.
"""

import json

from tsstrip.cli.__main__ import main
from tsstrip.cli.handlers.classify import handle_classify
from tsstrip.cli.handlers.convert import _print_batch_summary, handle_convert
from tsstrip.core.conversion_result import ConversionResult

TYPED_SOURCE = "import { b } from './b';\nexport const a: number = b + 1;\n"
TYPED_OUTPUT = "const { b } = require('./b');\nconst a = b + 1;\n\n// Module exports\nmodule.exports.a = a;\n"


def test_convert_single_file(tmp_path):
  src = tmp_path / "a.ts"
  src.write_text(TYPED_SOURCE, encoding="utf-8")
  out = tmp_path / "build" / "a.js"

  assert main(["convert", str(src), "--out", str(out)]) == 0
  assert out.read_text(encoding="utf-8") == TYPED_OUTPUT


def test_convert_to_stdout(tmp_path, capsys):
  src = tmp_path / "a.ts"
  src.write_text("let x: number = 1;\n", encoding="utf-8")

  assert handle_convert(src, None, None, False, None) == 0
  assert "let x = 1;" in capsys.readouterr().out


def test_convert_with_wrap(tmp_path):
  src = tmp_path / "m.js"
  src.write_text("export default 1;\n", encoding="utf-8")
  out = tmp_path / "m.out.js"

  assert handle_convert(src, out, None, True, None) == 0
  text = out.read_text(encoding="utf-8")
  assert text.startswith("(function() {")
  assert "  module.exports = 1;" in text


def test_forced_kind(tmp_path):
  src = tmp_path / "types.js"
  src.write_text("let x: number = 1;\n", encoding="utf-8")
  out = tmp_path / "out.js"

  assert handle_convert(src, out, "typed", False, None) == 0
  assert out.read_text(encoding="utf-8") == "let x = 1;\n"


def test_convert_directory(tmp_path):
  root = tmp_path / "src"
  (root / "lib").mkdir(parents=True)
  (root / "main.ts").write_text(TYPED_SOURCE, encoding="utf-8")
  (root / "lib" / "b.js").write_text("export const b = 1;\n", encoding="utf-8")
  (root / "notes.txt").write_text("not code", encoding="utf-8")
  out = tmp_path / "build"

  assert handle_convert(root, out, None, False, None) == 0

  assert (out / "main.js").read_text(encoding="utf-8") == TYPED_OUTPUT
  assert (out / "lib" / "b.js").read_text(encoding="utf-8") == (
    "const b = 1;\n\n// Module exports\nmodule.exports.b = b;\n"
  )
  assert not (out / "notes.txt").exists()


def test_directory_requires_out(tmp_path):
  (tmp_path / "a.ts").write_text("let a = 1;\n", encoding="utf-8")
  assert handle_convert(tmp_path, None, None, False, None) == 1


def test_missing_input(tmp_path):
  assert handle_convert(tmp_path / "missing.ts", None, None, False, None) == 1


def test_strict_mode_fails_on_commented_statements(tmp_path):
  src = tmp_path / "a.js"
  src.write_text("const a = 1;\nexport { a };\n", encoding="utf-8")
  out = tmp_path / "out.js"

  assert handle_convert(src, out, None, False, None) == 0
  assert handle_convert(src, out, None, False, True) == 1
  assert "// export { a };" in out.read_text(encoding="utf-8")


def test_strict_mode_from_pyproject(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.tsstrip]\nstrict_mode = true\n", encoding="utf-8")
  src = tmp_path / "a.js"
  src.write_text("export { a };\n", encoding="utf-8")

  assert handle_convert(src, tmp_path / "out.js", None, False, None) == 1


def test_invalid_pyproject_settings(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.tsstrip]\nexport_marker = "exports"\n', encoding="utf-8")
  src = tmp_path / "a.ts"
  src.write_text("let a = 1;\n", encoding="utf-8")

  assert handle_convert(src, None, None, False, None) == 1


def test_json_trace(tmp_path):
  src = tmp_path / "a.ts"
  src.write_text("interface A {}\nlet a: number;\n", encoding="utf-8")
  trace = tmp_path / "trace.json"

  assert handle_convert(src, tmp_path / "a.js", None, False, None, trace) == 0
  events = json.loads(trace.read_text(encoding="utf-8"))
  assert any(e["type"] == "declaration_elided" for e in events)


def test_batch_summary_table(captured_console):
  _print_batch_summary(
    {
      "ok.ts": ConversionResult(code="x"),
      "warn.js": ConversionResult(code="y", errors=["Commented out unsupported statement: export { a };"]),
      "bad.ts": ConversionResult(success=False, errors=["Transform Error: boom"]),
    }
  )
  text = captured_console.export_text()
  assert "Transform Report" in text
  assert "warn.js" in text
  assert "bad.ts" in text
  assert "ok.ts" not in text
  assert "1 Passed, 2 with Issues" in text


def test_batch_summary_all_clean(captured_console):
  _print_batch_summary({"ok.ts": ConversionResult(code="x")})
  assert "1/1 files converted cleanly" in captured_console.export_text()


def test_classify_file(tmp_path, captured_console):
  src = tmp_path / "a.tsx"
  src.write_text("", encoding="utf-8")
  assert handle_classify(src) == 0
  assert "a.tsx: typed" in captured_console.export_text()


def test_classify_directory(tmp_path, captured_console):
  (tmp_path / "a.ts").write_text("", encoding="utf-8")
  (tmp_path / "b.mjs").write_text("", encoding="utf-8")
  assert handle_classify(tmp_path) == 0
  text = captured_console.export_text()
  assert "typed" in text
  assert "module" in text


def test_classify_missing(tmp_path):
  assert handle_classify(tmp_path / "nope") == 1
