"""
Transform Trace Logger.

This module records the step-by-step execution of one transform run:
1. Lifecycle Phases (type stripping, module conversion).
2. Elided declarations (interfaces, enums, type aliases).
3. Line rewrites (before / after text).
4. Warnings for statements that had to be commented out.

The output is a structured list of event dictionaries suitable for JSON
serialization. A fresh `TraceLogger` is created for every run, so concurrent
runs never share one.
"""

import time
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  DECLARATION_ELIDED = "declaration_elided"
  LINE_REWRITE = "line_rewrite"
  ANALYSIS_WARNING = "analysis_warning"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records transform events for inspection and `--json-trace` dumps.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g., 'Type Strip'). Returns Phase ID."""
    phase_id = str(uuid.uuid4())

    parent = self._active_phases[-1] if self._active_phases else None

    event = TraceEvent(
      id=phase_id,
      type=TraceEventType.PHASE_START,
      timestamp=time.time(),
      description=name,
      parent_id=parent,
      metadata={"detail": description},
    )
    self._events.append(event)
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    event = TraceEvent(
      id=str(uuid.uuid4()),
      type=TraceEventType.PHASE_END,
      timestamp=time.time(),
      description="End Phase",
      parent_id=phase_id,
    )
    self._events.append(event)

  def log_elision(self, keyword: str, start_line: int, end_line: int):
    """Logs a type-only declaration removed from the output (1-based, inclusive)."""
    self._log_simple(
      TraceEventType.DECLARATION_ELIDED,
      f"Elided {keyword} (lines {start_line}-{end_line})",
      {"keyword": keyword, "start": start_line, "end": end_line},
    )

  def log_rewrite(self, line_no: int, before: str, after: str):
    """Logs a line whose text changed."""
    self._log_simple(TraceEventType.LINE_REWRITE, f"Rewrote line {line_no}", {"before": before, "after": after})

  def log_warning(self, message: str):
    self._log_simple(TraceEventType.ANALYSIS_WARNING, message, {"level": "warning"})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
