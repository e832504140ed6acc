"""
Transform Passes and Pipeline.

This module defines the pass contract, the shared per-run context, and the
two concrete passes the engine sequences:

- ``TypeStripPass``: elides type-only declarations, drops type-only imports,
  converts value imports (strip-only mode) and strips annotations from every
  other line.
- ``ModuleSyntaxPass``: full ES-module to CommonJS conversion with the
  trailing export block.

A ``TransformContext`` is created for every run and carries everything that
must not outlive it: the export records, the warnings and the tracer.
"""

from abc import ABC, abstractmethod
from typing import List

from tsstrip.config import RuntimeConfig
from tsstrip.core import blocks
from tsstrip.core.annotations import AnnotationStripper
from tsstrip.core.modules import ModuleRewriter
from tsstrip.core.patterns import Patterns
from tsstrip.core.scanner import ScanState
from tsstrip.core.tracer import TraceLogger


class TransformContext:
  """
  Shared state container for one transform run.

  Attributes:
      config (RuntimeConfig): Active configuration.
      patterns (Patterns): Compiled patterns owned by the engine (read-only).
      tracer (TraceLogger): Event log for this run.
      rewriter (ModuleRewriter): Export records and escape-hatch log for this run.
      warnings (List[str]): Human-readable warnings surfaced in the result.
  """

  def __init__(self, config: RuntimeConfig, patterns: Patterns) -> None:
    self.config = config
    self.patterns = patterns
    self.tracer = TraceLogger()
    self.rewriter = ModuleRewriter(export_marker=config.export_marker)
    self.warnings: List[str] = []


class TransformPass(ABC):
  """
  Abstract contract for a pass in the transform pipeline.
  """

  name = "Pass"

  @abstractmethod
  def run(self, lines: List[str], context: TransformContext) -> List[str]:
    """
    Executes the pass over the document.

    Args:
        lines: The input lines.
        context: The shared per-run context.

    Returns:
        The transformed lines.
    """
    pass


class TypeStripPass(TransformPass):
  """
  Removes the typed dialect, leaving JavaScript with ES-module syntax.
  """

  name = "Type Strip"

  def run(self, lines: List[str], context: TransformContext) -> List[str]:
    lines = context.rewriter.strip(lines)
    stripper = AnnotationStripper(context.patterns, collapse_whitespace=context.config.collapse_whitespace)
    tracer = context.tracer
    state = ScanState()
    output: List[str] = []
    idx = 0

    while idx < len(lines):
      line = lines[idx]
      trimmed = line.strip()

      if state.in_code:
        next_idx = self._elide(lines, idx, trimmed)
        if next_idx is not None:
          tracer.log_elision(trimmed.split("{")[0].strip() or trimmed, idx + 1, next_idx)
          idx = next_idx
          continue

      stripped = stripper.strip_line(line, state)
      if stripped != line:
        tracer.log_rewrite(idx + 1, line, stripped)
      output.append(stripped)
      idx += 1

    return output

  @staticmethod
  def _elide(lines: List[str], idx: int, trimmed: str):
    """Returns the index after a type-only statement starting at `idx`, or None."""
    if blocks.match_declaration(trimmed):
      return blocks.skip_block(lines, idx)
    if blocks.is_type_alias(trimmed):
      return blocks.skip_type_alias(lines, idx)
    if blocks.is_signature_only(trimmed):
      return idx + 1
    return None


class ModuleSyntaxPass(TransformPass):
  """
  Converts `import`/`export` to `require`/`module.exports`.
  """

  name = "Module Syntax"

  def run(self, lines: List[str], context: TransformContext) -> List[str]:
    output = context.rewriter.convert(lines)
    for statement in context.rewriter.unconverted:
      message = f"Commented out unsupported statement: {statement}"
      context.warnings.append(message)
      context.tracer.log_warning(message)
    return output


class TransformPipeline:
  """
  Manages a sequence of passes and executes them in order.
  """

  def __init__(self, passes: List[TransformPass]) -> None:
    """
    Initializes the pipeline with a list of passes.

    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  def run(self, lines: List[str], context: TransformContext) -> List[str]:
    """
    Executes all registered passes sequentially on the document.

    Args:
        lines: The source lines.
        context: The shared per-run context.

    Returns:
        The fully transformed lines.
    """
    current = lines
    for pass_instance in self.passes:
      context.tracer.start_phase(pass_instance.name, f"{len(current)} lines")
      current = pass_instance.run(current, context)
      context.tracer.end_phase()
    return current
