"""
tsstrip Package.

A lexical transformer turning TypeScript-style sources and ES-module syntax
into plain CommonJS JavaScript, without building a syntax tree.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import tsstrip
    code = "export const x: number = 1;"
    print(tsstrip.transform(code))
    # const x = 1;
    #
    # // Module exports
    # module.exports.x = x;

Advanced Usage (Transform Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from tsstrip import TransformEngine, RuntimeConfig, SourceKind

    engine = TransformEngine(RuntimeConfig(collapse_whitespace=False))
    res = engine.run(source, SourceKind.MODULE)

    if res.has_errors:
        print(f"Commented out: {res.errors}")
"""

from typing import Optional, Union

from tsstrip.config import RuntimeConfig
from tsstrip.core.conversion_result import ConversionResult
from tsstrip.core.engine import TransformEngine
from tsstrip.core.wrapper import wrap_module
from tsstrip.enums import SourceKind

__version__ = "0.1.0"


def transform(code: str, kind: Union[SourceKind, str] = SourceKind.TYPED) -> str:
  """
  Transforms a document into CommonJS JavaScript.

  This is a convenience wrapper around `TransformEngine` with default
  settings. It never raises: on an internal failure the input is returned
  unchanged.

  Args:
      code (str): The source document.
      kind (Union[SourceKind, str]): 'typed', 'module' or 'opaque'.

  Returns:
      str: The transformed document.
  """
  return TransformEngine().transform(code, kind)


def classify(filename: str, config: Optional[RuntimeConfig] = None) -> SourceKind:
  """
  Decides the source kind of a file from its name.

  Args:
      filename (str): File name or path, e.g. 'app.ts'.
      config (RuntimeConfig, optional): Settings providing the extension lists.

  Returns:
      SourceKind: The kind used to select the transform passes.
  """
  return (config or RuntimeConfig()).classify(filename)


__all__ = [
  "ConversionResult",
  "RuntimeConfig",
  "SourceKind",
  "TransformEngine",
  "classify",
  "transform",
  "wrap_module",
  "__version__",
]
