"""Snapshot API with progressive disclosure for virtual tree traversal.

Level 1 module functions (``unwrap``, ``visit``, ``snapshot``) cover the
common cases; ``SnapshotInspector`` keeps one configuration and returns rich
results with diagnostics for everything else.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from vtree_snapshot.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    SnapshotConfig,
    TraversalMetrics,
    UnwrapConfig,
    WalkerConfig,
    get_logger,
)
from vtree_snapshot.tree import (
    TreeNode,
    TreeWalker,
    Unwrapper,
    UnwrapResult,
    is_element,
    tree_to_dict,
)
from vtree_snapshot.tree.walker import Visitor

ConfigInput = Union[SnapshotConfig, UnwrapConfig, WalkerConfig, Mapping[str, Any], None]

MS_PER_SECOND = 1000

# Logger whose level follows SnapshotConfig.logging_level
_PACKAGE_LOGGER = "vtree_snapshot"


def _coerce_config(config: ConfigInput) -> SnapshotConfig:
    if config is None:
        return SnapshotConfig()
    if isinstance(config, SnapshotConfig):
        return config
    if isinstance(config, UnwrapConfig):
        return SnapshotConfig(unwrap=config)
    if isinstance(config, WalkerConfig):
        return SnapshotConfig(walker=config)
    if isinstance(config, Mapping):
        return SnapshotConfig.from_dict(dict(config))
    raise TypeError(f"Unsupported configuration type: {type(config).__name__}")


def unwrap(node: Any, config: ConfigInput = None) -> Any:
    """Descend through wrapper nodes to the element of interest.

    Args:
        node: Starting node or list of candidate nodes
        config: ``SnapshotConfig``, ``UnwrapConfig`` or a mapping such as
            ``{"elementsToUnwrap": ["Button"]}``

    Returns:
        The node the descent stopped at, or ``None`` if content ran out

    Examples:
        >>> from vtree_snapshot import create_element, decorated
        >>> Button = decorated("button", "Button")
        >>> node = create_element(Button, {"label": "ok"})
        >>> unwrap(node) is node
        True
        >>> unwrap(node, {"elementsToUnwrap": ["Button"]}).type
        'button'
    """
    snapshot_config = _coerce_config(config)
    return Unwrapper(snapshot_config.unwrap, snapshot_config.correlation_id).run(node).element


def visit(tree: Any, visitor: Optional[Visitor] = None, config: ConfigInput = None) -> TreeNode:
    """Walk a serialized tree, normalizing it in place.

    Args:
        tree: ``TreeNode`` (or a ``VirtualNode`` to serialize first)
        visitor: Optional callback invoked once per node, parent first
        config: ``SnapshotConfig``, ``WalkerConfig`` or a mapping

    Returns:
        The walked tree
    """
    snapshot_config = _coerce_config(config)
    return TreeWalker(snapshot_config.walker, snapshot_config.correlation_id).walk(tree, visitor)


@dataclass
class SnapshotResult:
    """Result of unwrapping an element and walking the tree below it."""

    tree: Optional[TreeNode] = None
    element: Any = None
    contexts: Dict[Any, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    unwrap_metrics: TraversalMetrics = field(default_factory=TraversalMetrics)
    walk_metrics: TraversalMetrics = field(default_factory=TraversalMetrics)
    success: bool = True
    correlation_id: Optional[str] = None

    @property
    def processing_time_ms(self) -> float:
        """Total time spent unwrapping and walking."""
        return self.unwrap_metrics.processing_time_ms + self.walk_metrics.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Plain-data form of the walked tree."""
        return tree_to_dict(self.tree) if self.tree is not None else None

    def summary(self) -> Dict[str, Any]:
        """Get summary of the snapshot run."""
        return {
            "success": self.success,
            "correlation_id": self.correlation_id,
            "unwrap_steps": self.unwrap_metrics.unwrap_steps,
            "nodes_visited": self.walk_metrics.nodes_visited,
            "render_props_expanded": self.walk_metrics.render_props_expanded,
            "diagnostic_count": len(self.diagnostics),
            "processing_time_ms": self.processing_time_ms,
            "memory_used_bytes": (
                self.unwrap_metrics.memory_used_bytes + self.walk_metrics.memory_used_bytes
            ),
        }


class SnapshotInspector:
    """Configured entry point for unwrapping and walking virtual trees.

    Follows the never-fail philosophy: exceptions raised by user render
    functions are captured as CRITICAL diagnostics and a partial result is
    returned.
    """

    def __init__(self, config: ConfigInput = None) -> None:
        """Initialize inspector.

        Args:
            config: Configuration; a correlation ID is generated if it has none

        The ``vtree_snapshot`` logger level is set from ``config.logging_level``.
        """
        self.config = _coerce_config(config)
        logging.getLogger(_PACKAGE_LOGGER).setLevel(self.config.logging_level)
        self.correlation_id = self.config.correlation_id or str(uuid.uuid4())[:8]
        self.logger = get_logger(__name__, self.correlation_id, "snapshot_inspector")

    def unwrap(self, node: Any) -> UnwrapResult:
        """Unwrap ``node`` and return the full result."""
        start_time = time.time()
        unwrapper = Unwrapper(self.config.unwrap, self.correlation_id)
        try:
            result = unwrapper.run(node)
        except Exception as e:
            self.logger.exception("Unwrap failed", extra={"error_type": type(e).__name__})
            result = UnwrapResult(success=False, correlation_id=self.correlation_id)
            result.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                f"Unwrap failed: {e}",
                "snapshot_inspector",
                details={"exception_type": type(e).__name__},
            )

        if not self.config.enable_diagnostics:
            result.diagnostics.clear()
        return result

    def visit(self, tree: Any, visitor: Optional[Visitor] = None) -> TreeNode:
        """Walk ``tree`` in place and return it."""
        return TreeWalker(self.config.walker, self.correlation_id).walk(tree, visitor)

    def snapshot(self, node: Any, visitor: Optional[Visitor] = None) -> SnapshotResult:
        """Unwrap ``node``, serialize the reached element and walk it.

        Args:
            node: Starting node or list of candidate nodes
            visitor: Optional callback invoked once per walked node

        Returns:
            SnapshotResult with the normalized tree and diagnostics
        """
        self.logger.info("Starting snapshot", extra={"input_type": type(node).__name__})

        unwrapped = self.unwrap(node)
        result = SnapshotResult(
            element=unwrapped.element,
            contexts=unwrapped.contexts,
            diagnostics=list(unwrapped.diagnostics),
            unwrap_metrics=unwrapped.metrics,
            success=unwrapped.success,
            correlation_id=self.correlation_id,
        )

        if not is_element(unwrapped.element):
            if unwrapped.element is not None and self.config.enable_diagnostics:
                result.add_diagnostic(
                    DiagnosticSeverity.INFO,
                    "Unwrapped content is not an element, nothing to walk",
                    "snapshot_inspector",
                )
            return result

        walker = TreeWalker(self.config.walker, self.correlation_id)
        try:
            result.tree = walker.walk(TreeNode.from_element(unwrapped.element), visitor)
        except Exception as e:
            self.logger.exception("Tree walk failed", extra={"error_type": type(e).__name__})
            result.success = False
            if self.config.enable_diagnostics:
                result.add_diagnostic(
                    DiagnosticSeverity.CRITICAL,
                    f"Tree walk failed: {e}",
                    "snapshot_inspector",
                    details={"exception_type": type(e).__name__},
                )
        result.walk_metrics = walker.metrics

        self.logger.info("Snapshot completed", extra=result.summary())
        return result


def snapshot(node: Any, visitor: Optional[Visitor] = None, config: ConfigInput = None) -> SnapshotResult:
    """Unwrap ``node`` and walk the tree below the reached element.

    Convenience wrapper around ``SnapshotInspector(config).snapshot``.
    """
    return SnapshotInspector(config).snapshot(node, visitor)
