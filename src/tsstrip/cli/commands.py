"""
CLI Command Handlers Facade.

This module re-exports handlers from `tsstrip.cli.handlers` so the entry
point and tests have one place to dispatch and patch.
"""

from tsstrip.cli.handlers.classify import handle_classify
from tsstrip.cli.handlers.convert import (
  handle_convert,
  _convert_single_file,
  _print_batch_summary,
)

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_classify",
  "handle_convert",
]
