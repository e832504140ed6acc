"""
Main Entry Point for the tsstrip CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `tsstrip.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tsstrip import __version__
from tsstrip.cli import commands
from tsstrip.enums import SourceKind
from tsstrip.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="tsstrip: TypeScript and ES modules to CommonJS")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show per-line debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Transform a source file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument(
    "--kind",
    choices=[k.value for k in SourceKind],
    default=None,
    help="Force the source kind instead of deciding it from the file extension",
  )
  cmd_conv.add_argument(
    "--wrap",
    action="store_true",
    help="Wrap the output in a function exposing module/exports (CommonJS loader form)",
  )
  cmd_conv.add_argument(
    "--strict",
    action="store_true",
    default=None,
    help="Fail if any statement had to be commented out (Overrides config)",
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (phases, rewrites) to a JSON file."
  )

  # --- Command: CLASSIFY ---
  cmd_cls = subparsers.add_parser("classify", help="Show how files would be transformed")
  cmd_cls.add_argument("path", type=Path, help="Input source file or directory")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "convert":
    return commands.handle_convert(args.path, args.out, args.kind, args.wrap, args.strict, args.json_trace)

  elif args.command == "classify":
    return commands.handle_classify(args.path)

  return 0


if __name__ == "__main__":
  sys.exit(main())
