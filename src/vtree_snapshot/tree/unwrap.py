"""Single-path unwrapping of virtual trees.

The unwrapper descends through wrapper nodes (providers, fragments, forward
references, memoized and composite wrappers not asked for) until it reaches
the element a test cares about. Malformed shapes are reported as diagnostics
and the descent settles on a best-effort result: the first of several
candidates, or the invalid node itself.

Termination is not structurally guaranteed: a render function that returns
itself, or a consumer whose content loops back into its provider, keeps
producing content forever. ``UnwrapConfig.max_depth`` bounds that case.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vtree_snapshot.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    TraversalMetrics,
    UnwrapConfig,
    current_memory_usage,
    describe,
    get_logger,
)
from vtree_snapshot.tree.classify import (
    display_name,
    filter_ignored,
    is_component_like,
    is_data_marked,
    is_decorated,
    is_element,
    is_force_unwrap_marked,
)
from vtree_snapshot.tree.resolver import ContextRegistry, resolve_children

_COMPONENT = "unwrapper"


@dataclass
class UnwrapResult:
    """Result of one unwrap invocation.

    ``element`` is the node the descent stopped at (``None`` when the content
    ran out); ``contexts`` holds the context values registered on the way.
    """

    element: Any = None
    contexts: Dict[Any, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    path: List[str] = field(default_factory=list)
    metrics: TraversalMetrics = field(default_factory=TraversalMetrics)
    success: bool = True
    correlation_id: Optional[str] = None

    @property
    def depth(self) -> int:
        """Number of nodes passed through before stopping."""
        return len(self.path)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        node_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                node_name=node_name,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def has_warnings(self) -> bool:
        """Check if the descent hit ambiguous or invalid shapes."""
        return any(d.severity == DiagnosticSeverity.WARNING for d in self.diagnostics)

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for d in self.diagnostics
        )


def _describe_kind(value: Any) -> str:
    if is_element(value):
        return value.kind.name.lower()
    return type(value).__name__


def _name_of(value: Any) -> str:
    return display_name(value) if is_element(value) else describe(value)


def _summarize(value: Any) -> Any:
    if is_element(value):
        return f"<{display_name(value)}>"
    if isinstance(value, (list, tuple)):
        return [_summarize(item) for item in value]
    return value


class Unwrapper:
    """Descends a virtual tree along one path until a stop condition holds.

    Per step: filter a list through ``elements_to_ignore`` (a single node is a
    one-entry list), warn and keep the first entry if more than one remains,
    classify the node, and either return it or resolve its content and go on.
    """

    def __init__(
        self,
        config: Optional[UnwrapConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize unwrapper.

        Args:
            config: Unwrap configuration (defaults to ``UnwrapConfig()``)
            correlation_id: Optional correlation ID for traversal tracking
        """
        self.config = config or UnwrapConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, _COMPONENT)

    def run(self, node: Any) -> UnwrapResult:
        """Unwrap a node or list of nodes.

        Args:
            node: Starting node, or list of candidate nodes

        Returns:
            UnwrapResult with the reached element, contexts and diagnostics
        """
        start_time = time.time()
        start_memory = current_memory_usage()
        result = UnwrapResult(correlation_id=self.correlation_id)
        registry = ContextRegistry()

        result.element = self._descend(node, registry, result)
        result.contexts = registry.as_dict()
        result.metrics.processing_time_ms = (time.time() - start_time) * 1000
        result.metrics.memory_used_bytes = max(0, current_memory_usage() - start_memory)
        return result

    def _descend(self, node: Any, registry: ContextRegistry, result: UnwrapResult) -> Any:
        config = self.config
        resolve = config.customize if config.unwrap_customizer else resolve_children
        current = node

        while True:
            if isinstance(current, (list, tuple)):
                candidates = filter_ignored(current, config.elements_to_ignore)
            else:
                candidates = [current]

            if len(candidates) > 1:
                self._report(
                    result,
                    DiagnosticSeverity.WARNING,
                    "unwrap expected one element after filtering, "
                    f"but received {len(candidates)}",
                    candidates,
                )

            single = candidates[0] if candidates else None
            if single is None:
                return None

            is_component = is_component_like(single)
            is_styled = is_decorated(single)
            forced = is_force_unwrap_marked(single)
            data_marked = is_data_marked(single, config.data_attribute)

            if not (is_component or is_styled or forced or data_marked):
                self._report(
                    result,
                    DiagnosticSeverity.WARNING,
                    "unwrap expected to receive a valid element, "
                    f"but received a {_describe_kind(single)}",
                    single,
                )
                if not config.descend_into_invalid:
                    return single
            elif (is_component or is_styled) and not forced and not data_marked:
                if not config.should_unwrap(display_name(single)):
                    return single

            if config.max_depth is not None and result.metrics.unwrap_steps >= config.max_depth:
                self._report(
                    result,
                    DiagnosticSeverity.ERROR,
                    f"unwrap stopped after {result.metrics.unwrap_steps} steps "
                    "without reaching a terminal element",
                    single,
                )
                return single

            name = _name_of(single)
            self.logger.debug("element to unwrap", extra={"node_name": name})
            result.path.append(name)
            result.metrics.unwrap_steps += 1
            result.metrics.nodes_visited += 1

            current = resolve(single, registry)

    def _report(
        self,
        result: UnwrapResult,
        severity: DiagnosticSeverity,
        message: str,
        context: Any
    ) -> None:
        summary = _summarize(context)
        if severity == DiagnosticSeverity.ERROR:
            self.logger.error(message, extra={"node_context": describe(summary)})
        else:
            self.logger.warn(message, summary)

        node_name = _name_of(context) if not isinstance(context, list) else None
        result.add_diagnostic(
            severity,
            message,
            _COMPONENT,
            node_name=node_name,
            details={"context": describe(summary)},
        )
