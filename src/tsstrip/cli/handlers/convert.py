"""
Convert Command Handler.

This module implements the logic for the `tsstrip convert` command.
It orchestrates:
1. Configuration loading (`[tool.tsstrip]` plus CLI overrides).
2. Source kind classification per file.
3. Transformation via the Engine, optionally wrapped for a CommonJS loader.
4. Output writing, trace dumps and the batch summary.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from tsstrip.config import RuntimeConfig
from tsstrip.core.conversion_result import ConversionResult
from tsstrip.core.engine import TransformEngine
from tsstrip.core.wrapper import wrap_module
from tsstrip.enums import SourceKind
from tsstrip.utils.console import (
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
  report_warnings,
)


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  kind: Optional[str],
  wrap: bool,
  strict: Optional[bool],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Where generated code is saved. Files print to stdout if omitted.
      kind: Forces a source kind ('typed', 'module', 'opaque') instead of
          deciding it from each file extension.
      wrap: If True, wraps each output in the CommonJS loader function.
      strict: If True, statements that had to be commented out fail the run.
      json_trace_path: Optional path to dump the execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      strict_mode=strict,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  engine = TransformEngine(config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine, kind, wrap, json_trace_path)
    batch_results[input_path.name] = result
    if not result.success:
      return 1

  elif input_path.is_dir():
    if not output_path:
      log_error("Directory conversion requires --out destination directory.")
      return 1

    sources = _collect_sources(input_path, config)
    if not sources:
      log_warning(f"No source files found in {input_path}")
      return 0

    log_info(f"Processing {len(sources)} files from {input_path}...")

    for src_file in sources:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / _output_name(rel_path, config)

      batch_trace = None
      if json_trace_path:
        batch_trace = dest_file.with_suffix(".trace.json")

      result = _convert_single_file(src_file, dest_file, engine, kind, wrap, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)

  if any(not r.success for r in batch_results.values()):
    return 1
  if config.strict_mode and any(r.has_errors for r in batch_results.values()):
    log_error("Strict mode: some statements could not be converted.")
    return 1
  return 0


def _collect_sources(root: Path, config: RuntimeConfig) -> List[Path]:
  """Finds files with a typed or module extension below `root`, sorted."""
  extensions = set(config.typed_extensions) | set(config.module_extensions)
  return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in extensions)


def _output_name(rel_path: Path, config: RuntimeConfig) -> Path:
  """Typed sources become `.js`; other files keep their name."""
  if config.classify(rel_path.name) == SourceKind.TYPED:
    return rel_path.with_suffix(".js")
  return rel_path


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: TransformEngine,
  kind: Optional[str],
  wrap: bool,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the transform on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path (stdout if None).
      engine: Configured transform engine.
      kind: Forced source kind, or None to classify by extension.
      wrap: Whether to wrap the output in the loader function.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()

    source_kind = SourceKind(kind) if kind else engine.config.classify(input_path.name)
    result = engine.run(code, source_kind)

    if json_trace_path and result.trace_events:
      try:
        json_trace_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_trace_path, "wt", encoding="utf-8") as f:
          json.dump(result.trace_events, f, indent=2)
        log_info(f"Trace saved to [path]{json_trace_path}[/path]")
      except OSError as e:
        log_error(f"Failed to write trace: {e}")

    if not result.success:
      return result

    report_warnings(input_path.name, result.errors)

    text = wrap_module(result.code) if wrap else result.code

    if output_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(text)
      log_success(f"Transformed: [path]{input_path}[/path] -> [path]{output_path}[/path]")
    else:
      print(text)

    return result
  except (OSError, UnicodeDecodeError, ValueError) as e:
    log_error(f"Failed to convert {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success and not r.has_errors)
  failures = total - successes

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files converted cleanly.")
    return

  table = Table(title="Transform Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.has_errors:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), status, escape(issues))

  console = get_console()
  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} with Issues.")
