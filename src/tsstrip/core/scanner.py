"""
Line and Character Scanning Primitives.

This module provides the shared cursor used by every rewriting stage to walk
a line of source text while tracking lexical context:

1.  **String State**: whether the cursor sits inside a `'`, `"` or template
    literal, and which quote opened it. Escaped quotes never close a literal.
2.  **Comment State**: `//` tails and `/* ... */` blocks are consumed whole.
3.  **Bracket State**: a stack of open `(`, `[` and `{` brackets, each tagged
    with the `BracketKind` it opened (call/parameter list, object literal,
    class body, plain block). `paren_depth` is derived from this stack.

A single `ScanState` is carried from line to line for the duration of one
transform pass, so template literals, block comments and parameter lists that
span several lines keep their context. Plain quoted strings cannot span lines
in JavaScript; `ScanState.end_line` closes any left open.
"""

import re
from typing import List, Optional, Tuple

from tsstrip.enums import BracketKind

QUOTES = ("'", '"', "`")

_CLOSER_TO_OPENER = {")": "(", "]": "[", "}": "{"}

# A '/' after one of these (or at line start) opens a regex literal, not a division.
_REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%~^")
_REGEX_KEYWORDS = {
  "return",
  "typeof",
  "case",
  "do",
  "else",
  "in",
  "of",
  "new",
  "delete",
  "void",
  "throw",
  "yield",
  "await",
}
_OBJECT_PRECEDERS = set("=(,:[?|&!")
_OBJECT_KEYWORDS = {"return", "yield", "await", "default", "const", "let", "var"}

_IDENT_TAIL = re.compile(r"[A-Za-z_$][\w$]*$")
_CLASS_HEAD = re.compile(r"(?:^|[\s=(,!&|?:])class\b[^{};='\"`]*$")

Span = Tuple[bool, str]


class ScanState:
  """
  Lexical state carried across the lines of one transform pass.

  Attributes:
      quote (Optional[str]): The quote character of the open literal, or None.
      in_block_comment (bool): True while inside a `/* ... */` comment.
      brackets (List[Tuple[str, BracketKind]]): Stack of open brackets.
      class_head_pending (bool): A class head ended the previous line without its `{`.
  """

  def __init__(self) -> None:
    self.quote: Optional[str] = None
    self.in_block_comment = False
    self.brackets: List[Tuple[str, BracketKind]] = []
    self.class_head_pending = False

  @property
  def in_string(self) -> bool:
    return self.quote is not None

  @property
  def in_code(self) -> bool:
    """True when the cursor is neither inside a literal nor a comment."""
    return self.quote is None and not self.in_block_comment

  @property
  def paren_depth(self) -> int:
    return sum(1 for ch, _ in self.brackets if ch == "(")

  @property
  def innermost(self) -> Optional[BracketKind]:
    """The kind of the most recently opened bracket, or None at top level."""
    return self.brackets[-1][1] if self.brackets else None

  def open(self, ch: str, kind: BracketKind) -> None:
    self.brackets.append((ch, kind))

  def close(self, ch: str) -> None:
    """
    Pops back to the opener matching `ch`.

    An unmatched closer is ignored so the stack never underflows.

    Args:
        ch (str): One of `)`, `]`, `}`.
    """
    opener = _CLOSER_TO_OPENER[ch]
    for idx in range(len(self.brackets) - 1, -1, -1):
      if self.brackets[idx][0] == opener:
        del self.brackets[idx:]
        return

  def end_line(self, line: str = "") -> None:
    """
    Closes quoted strings left open at end of line. Template literals stay open.

    Also remembers a class head whose body brace starts a later line.

    Args:
        line (str): The line just consumed.
    """
    if self.quote in ("'", '"'):
      self.quote = None
    code = line.split("//")[0].rstrip()
    if self.in_code and _CLASS_HEAD.search(code):
      self.class_head_pending = True
    elif "{" in code or ";" in code:
      self.class_head_pending = False

  def copy(self) -> "ScanState":
    clone = ScanState()
    clone.quote = self.quote
    clone.in_block_comment = self.in_block_comment
    clone.brackets = list(self.brackets)
    clone.class_head_pending = self.class_head_pending
    return clone


def classify_bracket(ch: str, prefix: str) -> BracketKind:
  """
  Decides what kind of context an opening bracket starts.

  Args:
      ch (str): The opening bracket character.
      prefix (str): Text of the line preceding the bracket.

  Returns:
      BracketKind: The context kind to push on the stack.
  """
  if ch == "(":
    return BracketKind.PAREN
  if ch == "[":
    return BracketKind.SQUARE

  stripped = prefix.rstrip()
  if _CLASS_HEAD.search(stripped):
    return BracketKind.CLASS
  if not stripped:
    return BracketKind.BLOCK
  if stripped[-1] in _OBJECT_PRECEDERS:
    return BracketKind.OBJECT
  word = _IDENT_TAIL.search(stripped)
  if word and word.group(0) in _OBJECT_KEYWORDS:
    return BracketKind.OBJECT
  return BracketKind.BLOCK


def find_quote_end(line: str, pos: int, quote: str) -> int:
  """
  Locates the closing quote of a literal, honouring backslash escapes.

  Args:
      line (str): The line being scanned.
      pos (int): Index of the first character inside the literal.
      quote (str): The quote character that opened the literal.

  Returns:
      int: Index of the closing quote, or `len(line)` if the literal is unterminated.
  """
  n = len(line)
  while pos < n:
    ch = line[pos]
    if ch == "\\":
      pos += 2
      continue
    if ch == quote:
      return pos
    pos += 1
  return n


def _regex_allowed(prefix: str) -> bool:
  stripped = prefix.rstrip()
  if not stripped:
    return True
  if stripped[-1] in _REGEX_PRECEDERS:
    return True
  word = _IDENT_TAIL.search(stripped)
  return bool(word) and word.group(0) in _REGEX_KEYWORDS


def _find_regex_end(line: str, pos: int) -> Optional[int]:
  """Returns the index after a regex literal's flags, or None if it never closes."""
  n = len(line)
  i = pos + 1
  in_class = False
  while i < n:
    ch = line[i]
    if ch == "\\":
      i += 2
      continue
    if ch == "[":
      in_class = True
    elif ch == "]":
      in_class = False
    elif ch == "/" and not in_class:
      i += 1
      while i < n and (line[i].isalnum() or line[i] == "_"):
        i += 1
      return i
    i += 1
  return None


class LineCursor:
  """
  Character cursor over a single line, bound to a shared `ScanState`.

  Consumers alternate between `take_literal` (while the state is inside a
  string or comment) and `take` (while in code). `skip_until` removes a span
  of type syntax without disturbing the state.
  """

  def __init__(self, line: str, state: ScanState) -> None:
    self.line = line
    self.state = state
    self.pos = 0
    self.last_was_literal = False

  @property
  def done(self) -> bool:
    return self.pos >= len(self.line)

  def peek(self, offset: int = 0) -> str:
    idx = self.pos + offset
    return self.line[idx] if idx < len(self.line) else ""

  def take_literal(self) -> str:
    """
    Consumes the rest of the open string or block comment on this line.

    Returns:
        str: The consumed text, including the terminator when present.
    """
    start = self.pos
    if self.state.in_block_comment:
      end = self.line.find("*/", self.pos)
      if end == -1:
        self.pos = len(self.line)
      else:
        self.pos = end + 2
        self.state.in_block_comment = False
    else:
      end = find_quote_end(self.line, self.pos, self.state.quote)
      if end < len(self.line):
        self.pos = end + 1
        self.state.quote = None
      else:
        self.pos = len(self.line)
    self.last_was_literal = True
    return self.line[start : self.pos]

  def take(self) -> str:
    """
    Consumes one code token and updates the scan state.

    Comment openers, `//` tails and regex literals are returned whole; every
    other token is a single character.

    Returns:
        str: The consumed text.
    """
    line = self.line
    pos = self.pos
    ch = line[pos]
    self.last_was_literal = False

    if ch in QUOTES:
      self.state.quote = ch
      self.pos += 1
      self.last_was_literal = True
      return ch

    if ch == "/":
      nxt = self.peek(1)
      if nxt == "/":
        self.pos = len(line)
        self.last_was_literal = True
        return line[pos:]
      if nxt == "*":
        self.state.in_block_comment = True
        self.pos += 2
        self.last_was_literal = True
        return "/*"
      if _regex_allowed(line[:pos]):
        end = _find_regex_end(line, pos)
        if end is not None:
          self.pos = end
          self.last_was_literal = True
          return line[pos:end]

    if ch in "([{":
      kind = classify_bracket(ch, line[:pos])
      if ch == "{" and self.state.class_head_pending:
        if not line[:pos].strip():
          kind = BracketKind.CLASS
        self.state.class_head_pending = False
      self.state.open(ch, kind)
    elif ch in ")]}":
      self.state.close(ch)

    self.pos += 1
    return ch

  def skip_until(self, stops: str, arrow_stops: bool = False) -> str:
    """
    Skips a type expression up to (not including) a delimiter.

    Nested `<>`, `()`, `[]` and `{}` are skipped whole, quoted literal types are
    skipped without touching the scan state, and `=>` only counts as a `=`
    delimiter when `arrow_stops` is set. A closer belonging to an enclosing
    bracket also ends the skip.

    Args:
        stops (str): Delimiter characters recognised at nesting depth zero.
        arrow_stops (bool): Whether the `=` of `=>` terminates the skip.

    Returns:
        str: The skipped text.
    """
    line = self.line
    n = len(line)
    start = self.pos
    depth = 0

    while self.pos < n:
      ch = line[self.pos]
      if ch in QUOTES:
        self.pos = min(find_quote_end(line, self.pos + 1, ch) + 1, n)
        continue
      if ch == "=" and self.peek(1) == ">":
        if depth == 0 and arrow_stops and "=" in stops:
          break
        self.pos += 2
        continue
      if depth == 0 and ch in stops:
        break
      if ch in "(<[{":
        depth += 1
      elif ch in ")>]}":
        if depth == 0:
          break
        depth -= 1
      self.pos += 1

    return line[start : self.pos]


def code_spans(line: str, state: ScanState) -> List[Span]:
  """
  Splits a line into alternating code and literal spans.

  Literal spans cover strings, template literals, regex literals and comments.

  Args:
      line (str): The line to split.
      state (ScanState): State at the start of the line. Mutated in place.

  Returns:
      List[Tuple[bool, str]]: `(is_code, text)` pairs covering the whole line.
  """
  cursor = LineCursor(line, state)
  spans: List[Span] = []

  while not cursor.done:
    if state.in_code:
      text = cursor.take()
      is_code = not cursor.last_was_literal
    else:
      text = cursor.take_literal()
      is_code = False

    if spans and spans[-1][0] == is_code:
      spans[-1] = (is_code, spans[-1][1] + text)
    else:
      spans.append((is_code, text))

  return spans


def advance(line: str, state: ScanState) -> None:
  """
  Feeds a whole line through the scanner without producing output.

  Args:
      line (str): The line to consume.
      state (ScanState): State to update.
  """
  cursor = LineCursor(line, state)
  while not cursor.done:
    if state.in_code:
      cursor.take()
    else:
      cursor.take_literal()
  state.end_line(line)
