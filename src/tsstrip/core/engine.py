"""
Orchestration Engine for Source Transformations.

This module provides the `TransformEngine`, the primary driver of a
transform run. It decides which passes apply to a `SourceKind`:

1.  **TYPED**: `TypeStripPass` (type-only declarations elided, imports
    converted, annotations stripped) followed by `ModuleSyntaxPass`.
2.  **MODULE**: `ModuleSyntaxPass` only.
3.  **OPAQUE**: returned unchanged.

The engine compiles its `Patterns` once and shares them read-only across
runs. Everything mutable lives in a fresh `TransformContext` per run, so one
engine may serve concurrent callers.

A run never raises: an unexpected internal failure is logged and the source
is returned untouched with ``success=False``.
"""

import logging
import traceback
from typing import List, Optional, Union

from tsstrip.config import RuntimeConfig
from tsstrip.core.conversion_result import ConversionResult
from tsstrip.core.passes import (
  ModuleSyntaxPass,
  TransformContext,
  TransformPass,
  TransformPipeline,
  TypeStripPass,
)
from tsstrip.core.patterns import Patterns
from tsstrip.enums import SourceKind

logger = logging.getLogger(__name__)


class TransformEngine:
  """
  Main transform engine.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Initializes the engine.

    Args:
        config (RuntimeConfig, optional): Settings. Defaults are used if omitted.
    """
    self.config = config or RuntimeConfig()
    self.patterns = Patterns()

  def passes_for(self, kind: SourceKind) -> List[TransformPass]:
    """
    Selects the passes for a source kind.

    Args:
        kind (SourceKind): The dialect of the document.

    Returns:
        List[TransformPass]: The passes in execution order (empty for OPAQUE).
    """
    if kind == SourceKind.TYPED:
      return [TypeStripPass(), ModuleSyntaxPass()]
    if kind == SourceKind.MODULE:
      return [ModuleSyntaxPass()]
    return []

  def run(self, source: str, kind: Union[SourceKind, str] = SourceKind.TYPED) -> ConversionResult:
    """
    Executes the transform pipeline.

    Args:
        source (str): The input document.
        kind (Union[SourceKind, str]): Dialect of the input, e.g. 'typed'.

    Returns:
        ConversionResult: The output code, warnings, exports and trace.
    """
    context = TransformContext(self.config, self.patterns)
    tracer = context.tracer

    try:
      kind = SourceKind(kind)
      passes = self.passes_for(kind)
      if not passes:
        return ConversionResult(code=source, trace_events=tracer.export())

      tracer.start_phase("Transform Pipeline", kind.value)
      lines = source.splitlines()
      output = TransformPipeline(passes).run(lines, context)
      tracer.end_phase()

      code = "\n".join(output)
      if source.endswith(("\n", "\r")) and code:
        code += "\n"

      logger.debug("Transformed %d lines into %d (%s)", len(lines), len(output), kind.value)
      return ConversionResult(
        code=code,
        errors=context.warnings,
        exports=context.rewriter.exports,
        trace_events=tracer.export(),
      )
    except Exception as e:
      logger.error("Transform failed: %s", e)
      logger.debug(traceback.format_exc())
      return ConversionResult(
        code=source,
        errors=[f"Transform Error: {e}"],
        success=False,
        trace_events=tracer.export(),
      )

  def transform(self, source: str, kind: Union[SourceKind, str] = SourceKind.TYPED) -> str:
    """
    Convenience wrapper returning only the output text.

    Args:
        source (str): The input document.
        kind (Union[SourceKind, str]): Dialect of the input.

    Returns:
        str: The transformed document (or the source itself on failure).
    """
    return self.run(source, kind).code
