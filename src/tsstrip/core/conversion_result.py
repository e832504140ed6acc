"""
Data structures representing the output of the transform pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code, any warnings encountered, the exported names and the
execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of a transform run.
  """

  code: str = Field(default="", description="The generated CommonJS source code.")
  errors: List[str] = Field(default_factory=list, description="Warnings, e.g. statements that were commented out.")
  success: bool = Field(
    default=True,
    description="False only if the pipeline crashed and the source was returned untouched.",
  )
  exports: List[str] = Field(default_factory=list, description="Names published by the export trailer.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any warning messages.

    Returns:
        True if one or more warnings are present.
    """
    return len(self.errors) > 0
