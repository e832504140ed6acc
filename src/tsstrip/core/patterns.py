"""
Compiled Substitution Patterns.

The `Patterns` object owns every regular expression used by the line-level
post-pass of the annotation stripper. It is constructed once by the
`TransformEngine` and handed by reference to the stripper, so a single
compiled set is shared read-only by every transform run of that engine.

Each substitution is guarded by a cheap substring trigger and is only applied
to code spans (never to string, regex or comment content).
"""

import re
from typing import List

_MODIFIER_WORDS = {"public", "private", "protected", "readonly", "declare", "abstract", "override"}
_KEPT_MODIFIERS = {"static", "async", "get", "set"}


class Patterns:
  """
  Holds the compiled expressions for type-syntax removal.
  """

  def __init__(self) -> None:
    # `value as Type`, `value satisfies Type`
    self.as_type = re.compile(r"\s+as\s+[A-Za-z_][A-Za-z0-9_<>|&\s]*")
    self.satisfies_type = re.compile(r"\s+satisfies\s+[A-Za-z_][A-Za-z0-9_<>|&\s]*")

    # `call<T>(` -> `call(`
    self.call_generics = re.compile(r"<[^<>]*>\s*\(")

    # Class heads
    self.class_generics = re.compile(r"(\bclass\s+[A-Za-z_$][\w$]*)\s*<[^{]*?>(?=\s*(?:extends\b|implements\b|\{|$))")
    self.extends_generics = re.compile(r"(\bextends\s+[A-Za-z_$][\w$.]*)\s*<[^{]*?>(?=\s*(?:implements\b|\{|$))")
    self.implements_clause = re.compile(r"\s+implements\s+[^{]*?(?=\s*\{|$)")
    self.abstract_class = re.compile(r"\babstract\s+(?=class\b)")

    # `value!.field`, `value!)`
    self.non_null = re.compile(r"(?<=[\w$)\]])!(?=[.\[),;])")

    # Leading member modifiers inside a class body
    self.member_modifiers = re.compile(
      r"^(\s*)((?:(?:public|private|protected|readonly|declare|abstract|override|static|async|get|set)\s+)+)(?=[#A-Za-z_$\[*])"
    )
    self.member_signature = re.compile(r"^\s*#?[A-Za-z_$][\w$]*\??\s*\([^)]*\)\s*;\s*$")

    self.runs_of_spaces = re.compile(r" {2,}")
    self.indented_body = re.compile(r"^(\s*)(.*)$", re.DOTALL)

  def strip_code(self, text: str) -> str:
    """
    Applies the assertion, generic and class-head substitutions to a code span.

    Args:
        text (str): Code-only text (no string or comment content).

    Returns:
        str: The span with type syntax removed.
    """
    if " as " in text or "\tas " in text:
      text = self.as_type.sub(_drop_assertion, text)
    if "satisfies" in text:
      text = self.satisfies_type.sub(_drop_assertion, text)
    if "<" in text and ">(" in text:
      text = self.call_generics.sub("(", text)
    if "class" in text:
      if "<" in text:
        text = self.class_generics.sub(r"\1", text)
      if "implements" in text:
        text = self.implements_clause.sub("", text)
      if "abstract" in text:
        text = self.abstract_class.sub("", text)
    if "extends" in text and "<" in text:
      text = self.extends_generics.sub(r"\1", text)
    if "!" in text:
      text = self.non_null.sub("", text)
    return text

  def collapse_spaces(self, text: str, keep_indent: bool) -> str:
    """
    Collapses runs of spaces to a single space.

    Args:
        text (str): Code span to normalise.
        keep_indent (bool): Preserve leading whitespace (span starts the line).

    Returns:
        str: The normalised span.
    """
    if "  " not in text:
      return text
    if keep_indent:
      match = self.indented_body.match(text)
      return match.group(1) + self.runs_of_spaces.sub(" ", match.group(2))
    return self.runs_of_spaces.sub(" ", text)

  def strip_member(self, line: str) -> str:
    """
    Removes TypeScript-only modifiers from a class member line.

    Members that are pure declarations (abstract members, method overload
    signatures) have no runtime counterpart and become blank lines.

    Args:
        line (str): A line whose start lies directly inside a class body.

    Returns:
        str: The rewritten member line.
    """
    match = self.member_modifiers.match(line)
    if match:
      words: List[str] = match.group(2).split()
      kept = [w for w in words if w in _KEPT_MODIFIERS]
      rest = line[match.end() :]
      if "abstract" in words and rest.rstrip().endswith(";"):
        return ""
      if any(w in _MODIFIER_WORDS for w in words):
        line = match.group(1) + "".join(f"{w} " for w in kept) + rest

    if self.member_signature.match(line):
      return ""
    return line


def _drop_assertion(match: "re.Match[str]") -> str:
  """Keeps one separating space when the assertion was followed by more code."""
  text = match.group(0)
  remainder = match.string[match.end() :]
  if text[-1].isspace() and remainder and remainder[0] not in ";,)]}":
    return " "
  return ""
