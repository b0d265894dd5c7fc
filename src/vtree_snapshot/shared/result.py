"""Diagnostic and metrics types shared by the traversal engine.

Traversals never fail on malformed trees; what went wrong is recorded as
diagnostic entries next to the returned value instead.
"""

import os
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

import psutil


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Trace of traversal steps
    INFO = auto()       # Informational messages
    WARNING = auto()    # Ambiguous or invalid shapes that were degraded
    ERROR = auto()      # Guards that stopped a traversal early
    CRITICAL = auto()   # User code failed, result is partial


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    node_name: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a plain dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "node_name": self.node_name,
            "details": dict(self.details) if self.details else None,
            "correlation_id": self.correlation_id,
        }


@dataclass
class TraversalMetrics:
    """Counters collected while unwrapping or walking a tree."""

    processing_time_ms: float = 0.0
    nodes_visited: int = 0
    unwrap_steps: int = 0
    callbacks_probed: int = 0
    render_props_expanded: int = 0
    placeholders_created: int = 0
    portals_labeled: int = 0
    memory_used_bytes: int = 0

    @property
    def render_prop_rate(self) -> float:
        """Share of probed callbacks that turned out to render elements."""
        if self.callbacks_probed == 0:
            return 0.0
        return self.render_props_expanded / self.callbacks_probed


def filter_by_severity(
    diagnostics: List[DiagnosticEntry],
    severity: DiagnosticSeverity
) -> List[DiagnosticEntry]:
    """Select diagnostics of one severity level."""
    return [diag for diag in diagnostics if diag.severity == severity]


def current_memory_usage() -> int:
    """Get resident memory of the current process in bytes."""
    return psutil.Process(os.getpid()).memory_info().rss
