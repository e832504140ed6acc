"""
Type Annotation Stripper.

This module removes inline type syntax from a single line of the typed dialect
while leaving runtime code, string contents and comments untouched.

A colon in code is treated as the start of an annotation in three contexts:

1.  **Parameters**: inside a parameter list, after a binding name
    (`(a: number, b?: string)`). The type ends at `,`, `)` or a default `=`.
    Parameter property modifiers (`public x: number`) are dropped with it.
2.  **Return Types**: after a closing `)` (`f(): number {`, `(x): T => x`).
    The type ends at `{`, `;` or `=`. This is a heuristic: any `: ` after a
    closing parenthesis is stripped, including the else-branch of a ternary
    whose then-branch is a call.
3.  **Declarations**: after `const|let|var name` or a field name at the start
    of a class body line. The type ends at `=`, `;` or `,`.

Every other colon (object keys, ternaries, labels, `case x:`) is kept.
After the colon pass, the line-level substitutions held by `Patterns` run over
code spans: `as`/`satisfies` assertions, explicit call generics, class-head
generics and `implements` clauses, and whitespace collapsing.
"""

import logging
import re
from typing import List, Optional, Tuple

from tsstrip.core.patterns import Patterns
from tsstrip.core.scanner import LineCursor, ScanState, code_spans
from tsstrip.enums import BracketKind

logger = logging.getLogger(__name__)

_PARAM_TAIL = re.compile(
  r"(?:^|[(,])\s*(?:\.\.\.)?(?:(?:public|private|protected|readonly|override|const|let|var)\s+)*[A-Za-z_$][\w$]*\??$"
  r"|[}\]]\??$"
)
_DECL_TAIL = re.compile(
  r"\b(?:const|let|var)\s+(?:[^;{}\[\]()]*,\s*)?[A-Za-z_$][\w$]*!?$"
  r"|\b(?:const|let|var)\s+[{\[][^;]*[}\]]$"
)
_MEMBER_TAIL = re.compile(
  r"^\s*(?:(?:public|private|protected|readonly|static|declare|abstract|override|accessor)\s+)*#?[A-Za-z_$][\w$]*[?!]?$"
)
_PARAM_MODIFIERS = re.compile(
  r"((?:^|[(,])\s*)(?:(?:public|private|protected|readonly|override)\s+)+(?=[A-Za-z_$][\w$]*$)"
)

# (delimiters, whether the `=` of `=>` counts as a delimiter)
Stops = Tuple[str, bool]

PARAMETER_STOPS: Stops = (",)=", False)
RETURN_STOPS: Stops = ("{;=", True)
DECLARATION_STOPS: Stops = ("=;,", False)


class AnnotationStripper:
  """
  Removes annotations and assertions from lines of typed source.

  The stripper holds no per-document state of its own: the caller owns the
  `ScanState` and passes it to every call, in document order.
  """

  def __init__(self, patterns: Patterns, collapse_whitespace: bool = True) -> None:
    """
    Args:
        patterns (Patterns): Shared compiled substitution patterns.
        collapse_whitespace (bool): Collapse runs of spaces left behind by removals.
    """
    self.patterns = patterns
    self.collapse_whitespace = collapse_whitespace

  def strip_line(self, line: str, state: ScanState) -> str:
    """
    Removes type syntax from one line.

    Args:
        line (str): The source line.
        state (ScanState): Scan state at the start of the line; advanced to its end.

    Returns:
        str: The line with annotations and assertions removed.
    """
    line_start = state.copy()
    body = self._remove_annotations(line, state)
    state.end_line(line)

    rewritten = self._apply_patterns(body, line_start)
    if line_start.in_code and line_start.innermost == BracketKind.CLASS:
      rewritten = self.patterns.strip_member(rewritten)

    if rewritten != line:
      logger.debug("Stripped types: %r -> %r", line, rewritten)
    return rewritten

  def _remove_annotations(self, line: str, state: ScanState) -> str:
    cursor = LineCursor(line, state)
    out: List[str] = []

    while not cursor.done:
      if not state.in_code:
        out.append(cursor.take_literal())
        continue

      if cursor.peek() == ":":
        emitted = "".join(out)
        stops = annotation_stops(emitted, state)
        if stops is not None:
          cursor.pos += 1
          skipped = cursor.skip_until(*stops)
          emitted = emitted.rstrip()
          if emitted.endswith(("?", "!")):
            emitted = emitted[:-1]
          if stops is PARAMETER_STOPS:
            emitted = _PARAM_MODIFIERS.sub(r"\1", emitted)
          trailing = skipped[len(skipped.rstrip()) :]
          out = [emitted, trailing]
          continue

      out.append(cursor.take())

    return "".join(out)

  def _apply_patterns(self, body: str, line_start: ScanState) -> str:
    spans = code_spans(body, line_start.copy())
    pieces = []
    for idx, (is_code, text) in enumerate(spans):
      if is_code:
        text = self.patterns.strip_code(text)
        if self.collapse_whitespace:
          text = self.patterns.collapse_spaces(text, keep_indent=idx == 0)
      pieces.append(text)
    return "".join(pieces)


def annotation_stops(emitted: str, state: ScanState) -> Optional[Stops]:
  """
  Decides whether a colon begins a type annotation.

  Args:
      emitted (str): Output produced so far on the current line.
      state (ScanState): Scan state at the colon.

  Returns:
      Optional[Tuple[str, bool]]: The delimiters ending the annotation, or None
      if the colon belongs to runtime code.
  """
  tail = emitted.rstrip()
  innermost = state.innermost

  if innermost == BracketKind.PAREN and _PARAM_TAIL.search(tail):
    return PARAMETER_STOPS
  if tail.endswith(")"):
    return RETURN_STOPS
  if innermost in (None, BracketKind.BLOCK) and _DECL_TAIL.search(tail):
    return DECLARATION_STOPS
  if innermost == BracketKind.CLASS and _MEMBER_TAIL.match(emitted):
    return DECLARATION_STOPS
  return None
