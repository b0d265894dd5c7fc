"""Shared utilities for virtual tree traversal.

This module provides the configuration objects, diagnostic types and logging
helpers used by both the unwrapper and the tree walker.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ListAttributeMode,
    SnapshotConfig,
    UnwrapConfig,
    WalkerConfig,
)
from .logging import (
    CorrelationLogger,
    describe,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    TraversalMetrics,
    current_memory_usage,
    filter_by_severity,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ListAttributeMode",
    "SnapshotConfig",
    "UnwrapConfig",
    "WalkerConfig",
    "CorrelationLogger",
    "describe",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "TraversalMetrics",
    "current_memory_usage",
    "filter_by_severity",
]
