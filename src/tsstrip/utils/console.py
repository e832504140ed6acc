"""
Console and Logging Setup for the Command Line.

Library modules only ever call `logging.getLogger(__name__)`. This module is
where the CLI decides what those records look like: one rich `Console` owns
the terminal, and a single `RichHandler` on the root logger writes to it, so
log lines and the report tables interleave in order.

Message helpers (`log_info`, `log_success`, `log_warning`, `log_error`)
accept rich markup. The theme defines the tags the CLI uses, `[path]` and
`[code]`, plus colouring for the extra `SUCCESS` level (25, between INFO and
WARNING).

Tests swap the console for a recording one with `set_console` and restore the
terminal console with `reset_console`.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

TSSTRIP_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

_active: Optional[Console] = None
_handler: Optional[RichHandler] = None


def _attach(new_console: Console) -> None:
  """Makes `new_console` the output target of the root logger's rich handler."""
  global _active, _handler

  root = logging.getLogger()
  if _handler is not None:
    root.removeHandler(_handler)

  _active = new_console
  _handler = RichHandler(
    console=new_console,
    show_time=False,
    show_path=False,
    markup=True,
    rich_tracebacks=True,
  )
  root.addHandler(_handler)
  # Keep DEBUG if verbose output was already requested
  if root.level == logging.NOTSET or root.level > logging.INFO:
    root.setLevel(logging.INFO)


def get_console() -> Console:
  """Returns the console the CLI currently prints to."""
  return _active


def set_console(new_console: Console) -> None:
  """
  Redirects printing and logging to another console.

  The tsstrip theme is pushed onto it so `[path]` and `[code]` markup render.

  Args:
      new_console (Console): e.g. `Console(record=True)` to capture output.
  """
  new_console.push_theme(TSSTRIP_THEME)
  _attach(new_console)


def reset_console() -> None:
  """Restores a fresh terminal console."""
  _attach(Console(theme=TSSTRIP_THEME))


def set_verbose(verbose: bool) -> None:
  """
  Switches the root logger between INFO and DEBUG.

  Args:
      verbose (bool): If True, library debug records (per-line rewrites) are shown.
  """
  logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  logging.error(f"❌ {msg}", extra={"markup": True})


def report_warnings(source_name: str, warnings: List[str]) -> None:
  """
  Logs the statements a transform had to comment out, one record each.

  Warning text is source code, so it is escaped before it reaches the markup
  renderer (`a[b]` must not be read as a style tag).

  Args:
      source_name (str): File name shown in front of each warning.
      warnings (List[str]): `ConversionResult.errors` of a successful run.
  """
  for warning in warnings:
    log_warning(f"[path]{escape(source_name)}[/path]: {escape(warning)}")


reset_console()
