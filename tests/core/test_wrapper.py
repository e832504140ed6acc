"""
Tests for the CommonJS module wrapper.
"""

from tsstrip.core.wrapper import wrap_module


def test_wrapper_shape():
  wrapped = wrap_module("const a = 1;\n\nmodule.exports.a = a;")
  assert wrapped == (
    "(function() {\n"
    "  const module = { exports: {} };\n"
    "  const exports = module.exports;\n"
    "  const a = 1;\n"
    "\n"
    "  module.exports.a = a;\n"
    "  return module.exports;\n"
    "})()\n"
  )


def test_empty_body():
  wrapped = wrap_module("")
  assert wrapped.startswith("(function() {\n")
  assert "return module.exports;" in wrapped
