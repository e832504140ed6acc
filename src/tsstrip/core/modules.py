"""
ES Module to CommonJS Rewriter.

This module converts `import` and `export` statements line by line into
`require(...)` calls and `module.exports` assignments. Two modes exist:

- **Strip-only** (`ModuleRewriter.strip`): used while stripping typed sources.
  Type-only imports and re-exports are dropped, value imports become
  `require` calls, and `export` lines are left for the full conversion.
- **Full conversion** (`ModuleRewriter.convert`): imports as above, plus
  `export` forms. Exported names are collected in first-seen order and
  published by a trailer appended after the last line:

  .. code-block:: javascript

      // Module exports
      module.exports.answer = answer;

Statements that match no supported shape are commented out through the
`EscapeHatch` rather than dropped.
"""

import logging
import re
from typing import List, Optional, Tuple

from tsstrip.core.escape_hatch import EscapeHatch
from tsstrip.core.scanner import ScanState, advance

logger = logging.getLogger(__name__)

_IDENT = r"[A-Za-z_$][\w$]*"

_IMPORT_STMT = re.compile(r"^import(?:\s+|(?=[{'\"*]))(?!\()")
_TYPE_IMPORT = re.compile(r"^import\s+type\s+(?!from\b)")
_TYPE_REEXPORT = re.compile(r"^export\s+type\s*[{*]")
_SIDE_EFFECT_IMPORT = re.compile(r"^import\s*(['\"])(.*)\1\s*;?$")
_DEFAULT_CLAUSE = re.compile(rf"^{_IDENT}$")
_NAMESPACE_CLAUSE = re.compile(rf"^\*\s*as\s+({_IDENT})$")
_NAMED_SPEC = re.compile(rf"^({_IDENT})(?:\s+as\s+({_IDENT}))?$")
_INLINE_TYPE_SPEC = re.compile(r"^type\s+\S")

_EXPORT_DEFAULT = re.compile(r"^export\s+default\s+")
_EXPORT_BINDING = re.compile(rf"^export\s+(?:const|let|var)\s+({_IDENT})")
_EXPORT_FUNCTION = re.compile(rf"^export\s+(?:async\s+)?function\s*\*?\s*({_IDENT})\s*[(<]")
_EXPORT_CLASS = re.compile(rf"^export\s+class\s+({_IDENT})\b")
_EXPORT_STMT = re.compile(r"^export\b")
_EXPORT_LIST = re.compile(r"^export\s*(?:[{*]|=(?!=))")

DEFAULT_EXPORT_MARKER = "// Module exports"


def is_import(trimmed: str) -> bool:
  """True for static import statements (not `import(...)` or `import.meta`)."""
  return bool(_IMPORT_STMT.match(trimmed))


def is_type_only(trimmed: str) -> bool:
  """True for `import type ...` and `export type { ... }` statements."""
  return bool(_TYPE_IMPORT.match(trimmed) or _TYPE_REEXPORT.match(trimmed))


def module_path(clause: str) -> str:
  """
  Extracts a module specifier from the text after `from`.

  Args:
      clause (str): e.g. `'./m';`

  Returns:
      str: The specifier without quotes or trailing semicolon.
  """
  clause = clause.strip().rstrip(";").strip()
  if len(clause) >= 2 and clause[0] in "'\"`" and clause[-1] == clause[0]:
    return clause[1:-1]
  return clause


def _named_bindings(clause: str) -> Optional[List[str]]:
  """Converts `{ a, b as c, type T }` into destructuring entries, or None if malformed."""
  inner = clause[1:-1]
  bindings = []
  for raw in inner.split(","):
    spec = raw.strip()
    if not spec or _INLINE_TYPE_SPEC.match(spec):
      continue
    match = _NAMED_SPEC.match(spec)
    if not match:
      return None
    name, alias = match.groups()
    bindings.append(f"{name}: {alias}" if alias else name)
  return bindings


def convert_import(statement: str) -> Optional[str]:
  """
  Rewrites one import statement as CommonJS.

  Supported shapes:

  - `import './m';` -> `require('./m');`
  - `import { a, b } from './m';` -> `const { a, b } = require('./m');`
  - `import x from './m';` -> `const x = require('./m');`
  - `import * as ns from './m';` -> `const ns = require('./m');`

  Args:
      statement (str): The import statement, possibly joined from several lines.

  Returns:
      Optional[str]: The CommonJS statement, an empty string if the import
      only brought in types, or None if the shape is not supported.
  """
  stmt = statement.strip()

  side_effect = _SIDE_EFFECT_IMPORT.match(stmt)
  if side_effect and " from " not in stmt:
    return f"require('{side_effect.group(2)}');"

  if " from " not in stmt:
    return None

  head, _, tail = stmt.rpartition(" from ")
  clause = head[len("import") :].strip()
  path = module_path(tail)
  if not path:
    return None

  if clause.startswith("{") and clause.endswith("}"):
    bindings = _named_bindings(clause)
    if bindings is None:
      return None
    if not bindings:
      return ""
    return f"const {{ {', '.join(bindings)} }} = require('{path}');"

  namespace = _NAMESPACE_CLAUSE.match(clause)
  if namespace:
    return f"const {namespace.group(1)} = require('{path}');"

  if _DEFAULT_CLAUSE.match(clause):
    return f"const {clause} = require('{path}');"

  return None


def gather_statement(lines: List[str], start: int) -> Tuple[str, int]:
  """
  Joins an import or export list whose `{ ... }` clause spans several lines.

  Args:
      lines (List[str]): The source document.
      start (int): Index of the line starting the statement.

  Returns:
      Tuple[str, int]: The statement on one line and the index after it. An
      unterminated clause yields just the first line.
  """
  first = lines[start].strip()
  if "{" not in first or "}" in first:
    return first, start + 1

  parts = [first]
  for idx in range(start + 1, len(lines)):
    parts.append(lines[idx].strip())
    if "}" in lines[idx]:
      return " ".join(p for p in parts if p), idx + 1
  return first, start + 1


class ModuleRewriter:
  """
  Rewrites module syntax for one document.

  An instance belongs to a single transform pass: it accumulates the export
  records and the statements it had to comment out.

  Attributes:
      exports (List[str]): Exported names in first-seen order.
      unconverted (List[str]): Statements emitted through the escape hatch.
  """

  def __init__(self, export_marker: str = DEFAULT_EXPORT_MARKER) -> None:
    self.export_marker = export_marker
    self.exports: List[str] = []
    self.unconverted: List[str] = []

  def take_import(self, lines: List[str], start: int) -> Tuple[Optional[str], int]:
    """
    Consumes the import statement starting at `start`.

    Args:
        lines (List[str]): The source document.
        start (int): Index of a line for which `is_import` holds.

    Returns:
        Tuple[Optional[str], int]: The replacement line (None to drop the
        statement) and the index of the next unconsumed line.
    """
    line = lines[start]
    indent = line[: len(line) - len(line.lstrip())]
    statement, next_idx = gather_statement(lines, start)

    if is_type_only(statement):
      return None, next_idx

    converted = convert_import(statement)
    if converted is None:
      self.unconverted.append(statement)
      logger.debug("Unsupported import commented out: %s", statement)
      return EscapeHatch.mark_failure(statement), next_idx
    if not converted:
      return None, next_idx
    return indent + converted, next_idx

  def rewrite_export(self, line: str) -> str:
    """
    Rewrites one `export` line and records the exported name.

    Args:
        line (str): A line whose trimmed text starts with `export`.

    Returns:
        str: The rewritten line, or the commented-out original.
    """
    indent = line[: len(line) - len(line.lstrip())]
    trimmed = line.strip()

    if _EXPORT_DEFAULT.match(trimmed):
      expr = _EXPORT_DEFAULT.sub("", trimmed, count=1).strip()
      if expr.endswith(("{", "(", "[", ",")):
        return f"{indent}module.exports = {expr}"
      return f"{indent}module.exports = {expr.rstrip(';').rstrip()};"

    for pattern in (_EXPORT_BINDING, _EXPORT_FUNCTION, _EXPORT_CLASS):
      match = pattern.match(trimmed)
      if match:
        self.record(match.group(1))
        return indent + trimmed[len("export") :].lstrip()

    self.unconverted.append(trimmed)
    logger.debug("Unsupported export commented out: %s", trimmed)
    return EscapeHatch.mark_failure(line)

  def record(self, name: str) -> None:
    if name not in self.exports:
      self.exports.append(name)

  def trailer(self) -> List[str]:
    """
    Builds the export block appended after the converted document.

    Returns:
        List[str]: Empty when nothing was exported.
    """
    if not self.exports:
      return []
    return ["", self.export_marker] + [f"module.exports.{name} = {name};" for name in self.exports]

  def strip(self, lines: List[str]) -> List[str]:
    """
    Strip-only mode: drops type-only imports and converts value imports.

    Args:
        lines (List[str]): The source document.

    Returns:
        List[str]: The document with `export` declarations left for `convert`.
        Export lists and re-exports are commented out here, before any
        type stripping can touch their text.
    """
    return self._rewrite(lines, convert_exports=False)

  def convert(self, lines: List[str]) -> List[str]:
    """
    Full conversion: imports, exports and the trailing export block.

    Args:
        lines (List[str]): The source document.

    Returns:
        List[str]: The CommonJS document.
    """
    output = self._rewrite(lines, convert_exports=True)
    output.extend(self.trailer())
    return output

  def _rewrite(self, lines: List[str], convert_exports: bool) -> List[str]:
    output: List[str] = []
    state = ScanState()
    idx = 0

    while idx < len(lines):
      line = lines[idx]
      trimmed = line.strip()

      if state.in_code and is_import(trimmed):
        replacement, next_idx = self.take_import(lines, idx)
        if replacement is not None:
          output.append(replacement)
        for consumed in lines[idx:next_idx]:
          advance(consumed, state)
        idx = next_idx
        continue

      if state.in_code and _EXPORT_LIST.match(trimmed):
        statement, next_idx = gather_statement(lines, idx)
        if not is_type_only(statement):
          self.unconverted.append(statement)
          logger.debug("Unsupported export commented out: %s", statement)
          output.append(EscapeHatch.mark_failure(statement))
        for consumed in lines[idx:next_idx]:
          advance(consumed, state)
        idx = next_idx
        continue

      if state.in_code and _EXPORT_STMT.match(trimmed):
        if not convert_exports:
          if not is_type_only(trimmed):
            output.append(line)
        else:
          output.append(self.rewrite_export(line))
      else:
        output.append(line)

      advance(line, state)
      idx += 1

    return output
