"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Shared engine and stripper fixtures.
- Console capture for CLI output assertions.
"""

import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'tsstrip' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tsstrip.core.annotations import AnnotationStripper  # noqa: E402
from tsstrip.core.engine import TransformEngine  # noqa: E402
from tsstrip.core.patterns import Patterns  # noqa: E402
from tsstrip.core.scanner import ScanState  # noqa: E402
from tsstrip.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def engine():
  return TransformEngine()


@pytest.fixture
def strip():
  """Strips a list of lines with one shared ScanState, as the type pass does."""
  stripper = AnnotationStripper(Patterns())

  def _strip(*lines):
    state = ScanState()
    return [stripper.strip_line(line, state) for line in lines]

  return _strip


@pytest.fixture
def captured_console():
  """Routes console and logging output to an in-memory recorder."""
  recorder = Console(record=True, width=200, force_terminal=False)
  set_console(recorder)
  yield recorder
  reset_console()
