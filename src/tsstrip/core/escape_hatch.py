"""
Escape Hatch Mechanism for Unconvertible Statements.

When a line of module syntax cannot be rewritten deterministically, it is not
dropped: it is emitted as a `//` comment so the output stays runnable while
keeping a visible trace of the original statement.
"""


class EscapeHatch:
  """
  Handles the "Comment-Out" Protocol.
  """

  PREFIX = "// "

  @staticmethod
  def mark_failure(line: str) -> str:
    """
    Comments out a statement verbatim.

    Args:
        line (str): The original source line.

    Returns:
        str: The trimmed line prefixed with `// `.
    """
    return f"{EscapeHatch.PREFIX}{line.strip()}"
