"""
Classify Command Handler.

Reports which source kind (and therefore which passes) each file gets.
"""

from pathlib import Path

from rich.table import Table

from tsstrip.config import RuntimeConfig
from tsstrip.utils.console import get_console, log_error


def handle_classify(input_path: Path) -> int:
  """
  Prints the source kind of a file, or of every file below a directory.

  Args:
      input_path: File or directory to inspect.

  Returns:
      int: Exit code (0 for success, 1 if the path does not exist).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(search_path=input_path if input_path.is_dir() else input_path.parent)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  if input_path.is_file():
    get_console().print(f"{input_path.name}: [code]{config.classify(input_path.name).value}[/code]")
    return 0

  table = Table(title=f"Source kinds in {input_path}")
  table.add_column("File", style="cyan")
  table.add_column("Kind", justify="center")
  for path in sorted(p for p in input_path.rglob("*") if p.is_file()):
    table.add_row(str(path.relative_to(input_path)), config.classify(path.name).value)
  get_console().print(table)
  return 0
