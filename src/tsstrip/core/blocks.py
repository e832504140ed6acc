"""
Type-Only Declaration Elision.

Recognises declarations that exist only for the type checker and computes how
many source lines each one spans, so the caller can drop them without output:

- Block declarations: `interface`, `enum`, `const enum`, and ambient
  `declare module|global|namespace|class` blocks (optionally `export`-prefixed).
- Type aliases: `type X = ...`, including multi-line object and union aliases.
- Signature-only statements: `declare const x: T;` and function overloads.

Brace counting here does not consult the scanner, so an unterminated block
consumes the rest of the document.
"""

import re
from typing import List, Optional

_EXPORT_PREFIX = r"(?:export\s+(?:default\s+)?)?"

_BLOCK_DECL = re.compile(
  r"^" + _EXPORT_PREFIX + r"(?:declare\s+)?(?P<keyword>interface|enum|const\s+enum)\s"
  r"|^(?:export\s+)?declare\s+(?P<ambient>module|global|namespace|(?:abstract\s+)?class)\b"
)
_TYPE_ALIAS = re.compile(r"^" + _EXPORT_PREFIX + r"(?:declare\s+)?type\s+[A-Za-z_$][\w$]*.*=")
_DECLARE_STMT = re.compile(
  r"^(?:export\s+)?declare\s+(?=(?:const|let|var|function|async|class|abstract|module|namespace|global|enum|type|interface)\b)"
)
_OVERLOAD = re.compile(
  r"^(?:export\s+)?(?:declare\s+)?(?:async\s+)?function\s*\*?\s*[A-Za-z_$][\w$]*\s*(?:<[^>]*>)?\s*\([^{}]*\)\s*(?::[^{}]*)?;$"
)


def match_declaration(trimmed: str) -> Optional[str]:
  """
  Identifies a block-introducing type-only declaration.

  Args:
      trimmed (str): The line with surrounding whitespace removed.

  Returns:
      Optional[str]: The introducing keyword (e.g. 'interface', 'enum',
      'module'), or None if the line does not open such a block.
  """
  match = _BLOCK_DECL.match(trimmed)
  if not match:
    if _DECLARE_STMT.match(trimmed) and trimmed.count("{") > trimmed.count("}"):
      return "declare"
    return None
  keyword = match.group("keyword") or match.group("ambient")
  return " ".join(keyword.split())


def is_type_alias(trimmed: str) -> bool:
  return bool(_TYPE_ALIAS.match(trimmed))


def is_signature_only(trimmed: str) -> bool:
  """
  True for statements that carry no runtime code at all.

  Covers single-line `declare` statements and function overload signatures
  (a `function` header terminated by `;` instead of a body).
  """
  if _OVERLOAD.match(trimmed):
    return True
  return bool(_DECLARE_STMT.match(trimmed)) and trimmed.count("{") == trimmed.count("}")


def skip_block(lines: List[str], start: int) -> int:
  """
  Finds the end of a brace-delimited declaration.

  Counting starts on the `start` line itself so a declaration opened and
  closed on one line is consumed entirely. Closing braces are ignored until
  an opening brace has been seen.

  Args:
      lines (List[str]): The source document.
      start (int): Index of the line holding the introducing keyword.

  Returns:
      int: Index of the first line after the matching closing brace, or
      `len(lines)` if the block is never closed.
  """
  brace_count = 0
  found_opening = False
  idx = start

  while idx < len(lines):
    for ch in lines[idx]:
      if ch == "{":
        found_opening = True
        brace_count += 1
      elif ch == "}" and found_opening:
        brace_count -= 1
        if brace_count == 0:
          return idx + 1
    idx += 1

  return len(lines)


def skip_type_alias(lines: List[str], start: int) -> int:
  """
  Finds the end of a type alias.

  A single-line alias ends on its own line. An alias leaving a `{` open is
  handed to `skip_block`; one whose line ends in `=`, `|` or `&` also absorbs
  the following `|`/`&` continuation lines.

  Args:
      lines (List[str]): The source document.
      start (int): Index of the `type` line.

  Returns:
      int: Index of the first line after the alias.
  """
  first = lines[start]
  if first.count("{") > first.count("}"):
    return skip_block(lines, start)

  idx = start + 1
  pending = first.rstrip().endswith(("=", "|", "&"))
  while idx < len(lines):
    trimmed = lines[idx].strip()
    if not (pending or trimmed.startswith(("|", "&"))):
      break
    if trimmed.count("{") > trimmed.count("}"):
      return skip_block(lines, idx)
    pending = trimmed.endswith(("=", "|", "&"))
    idx += 1
  return idx
