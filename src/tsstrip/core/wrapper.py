"""
CommonJS Module Wrapper.

Produces the text a CommonJS loader evaluates for one transformed module: an
immediately invoked function that declares `module` and `exports`, runs the
body, and yields `module.exports`.
"""

_PROLOGUE = """(function() {
  const module = { exports: {} };
  const exports = module.exports;
"""

_EPILOGUE = """
  return module.exports;
})()
"""


def wrap_module(body: str) -> str:
  """
  Wraps transformed module text in the loader function.

  Args:
      body (str): CommonJS source produced by the transform.

  Returns:
      str: An expression evaluating to the module's exports.
  """
  indented = "\n".join(f"  {line}" if line.strip() else "" for line in body.splitlines())
  return _PROLOGUE + indented + _EPILOGUE
