"""
Enumerations for tsstrip.

This module defines the closed variants threaded through the transform
pipeline: the kind of source document being processed and the kind of
bracket currently open at the scan cursor.
"""

from enum import Enum


class SourceKind(str, Enum):
  """
  Classification of a source document, decided once at the boundary.

  The engine selects its passes from this value and never re-inspects
  file names afterwards.
  """

  TYPED = "typed"  # .ts / .tsx: annotations, declarations and module syntax
  MODULE = "module"  # plain JS using import/export
  OPAQUE = "opaque"  # handed through untouched


class BracketKind(str, Enum):
  """
  Context opened by a bracket on the scanner's stack.
  """

  PAREN = "paren"
  SQUARE = "square"
  BLOCK = "block"
  OBJECT = "object"  # object literal or destructuring pattern
  CLASS = "class"  # class body
