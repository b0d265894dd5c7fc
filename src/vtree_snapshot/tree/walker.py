"""Full-tree walking and normalization of serialized virtual trees.

The walker visits every node of a serialized tree, hands each one to an
optional visitor, and rewrites attribute values into snapshot-stable shapes:

- component references become ``Placeholder`` values
- callbacks that render elements become ``RenderProp`` labeled nodes
- nested elements are replaced by their normalized clones
- portals become ``Portal`` labeled nodes around their content
- forward-ref shaped values become ``Placeholder`` values
- decorated node types are rewritten to their underlying display name

Unlike the unwrapper, the walker never resolves context values.
"""

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from vtree_snapshot.shared import (
    ListAttributeMode,
    TraversalMetrics,
    WalkerConfig,
    current_memory_usage,
    get_logger,
)
from vtree_snapshot.tree.classify import (
    display_name,
    is_decorated,
    is_element,
    is_forward_ref_shaped,
    is_function_component,
    is_portal,
    make_labeled_node,
)
from vtree_snapshot.tree.nodes import NodeKind, Placeholder, TreeNode, VirtualNode, as_list

Visitor = Callable[[TreeNode], Any]


class ProbeOutcome(Enum):
    """Outcome of invoking a callback with no arguments."""

    ELEMENT = auto()        # Returned a virtual node
    NOT_ELEMENT = auto()    # Returned something else
    FAILED = auto()         # Raised


@dataclass(frozen=True)
class ProbeResult:
    """Result of probing a callback attribute."""

    outcome: ProbeOutcome
    value: Any = None
    error: Optional[Exception] = None

    @property
    def is_element(self) -> bool:
        return self.outcome is ProbeOutcome.ELEMENT


def probe_callback(fn: Callable[[], Any]) -> ProbeResult:
    """Invoke ``fn`` with no arguments and classify what happened.

    Many callbacks cannot be called without arguments; the failure is
    returned, never raised.
    """
    try:
        output = fn()
    except Exception as e:
        return ProbeResult(ProbeOutcome.FAILED, error=e)
    if is_element(output):
        return ProbeResult(ProbeOutcome.ELEMENT, value=output)
    return ProbeResult(ProbeOutcome.NOT_ELEMENT, value=output)


class TreeWalker:
    """Visits every node of a serialized tree and normalizes its attributes.

    The visitor is called once per node, parent before children, with the
    node's ``TreeNode`` (the root) or a ``TreeNode`` clone-in-progress (every
    nested element). It may rewrite ``props`` before they are processed.
    """

    def __init__(
        self,
        config: Optional[WalkerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree walker.

        Args:
            config: Walker configuration (defaults to ``WalkerConfig()``)
            correlation_id: Optional correlation ID for traversal tracking
        """
        self.config = config or WalkerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_walker")
        self.metrics = TraversalMetrics()

    def walk(self, tree: Any, visitor: Optional[Visitor] = None) -> TreeNode:
        """Walk a serialized tree, mutating and returning it.

        Args:
            tree: Serialized tree; a bare ``VirtualNode`` is first converted
                with ``TreeNode.from_element``
            visitor: Optional callback invoked for every node

        Returns:
            The same ``TreeNode``, normalized in place
        """
        start_time = time.time()
        start_memory = current_memory_usage()
        self.metrics = TraversalMetrics()

        if isinstance(tree, VirtualNode):
            tree = TreeNode.from_element(tree)

        self._visit_tree_node(tree, visitor)

        self.metrics.processing_time_ms = (time.time() - start_time) * 1000
        self.metrics.memory_used_bytes = max(0, current_memory_usage() - start_memory)
        self.logger.debug(
            "Tree walk completed",
            extra={
                "nodes_visited": self.metrics.nodes_visited,
                "render_props_expanded": self.metrics.render_props_expanded,
            }
        )
        return tree

    def _visit_tree_node(self, tree_node: TreeNode, visitor: Optional[Visitor]) -> None:
        if callable(visitor):
            visitor(tree_node)
        self.metrics.nodes_visited += 1

        if tree_node.props:
            self._visit_props(tree_node.props, visitor)

        for index, child in enumerate(tree_node.children):
            if isinstance(child, TreeNode):
                tree_node.children[index] = self._visit_element(child.node, visitor)
            elif is_element(child):
                tree_node.children[index] = self._visit_element(child, visitor)

    def _visit_element(self, element: VirtualNode, visitor: Optional[Visitor]) -> VirtualNode:
        clone = TreeNode(node=element, props=dict(element.attributes))
        if callable(visitor):
            visitor(clone)
        self.metrics.nodes_visited += 1

        base = element
        if is_decorated(element):
            base = element.clone(kind=NodeKind.HOST, type=display_name(element))

        self._visit_props(clone.props, visitor)
        return base.clone(attributes=clone.props)

    def _visit_props(self, props: Dict[str, Any], visitor: Optional[Visitor]) -> None:
        for key in list(props):
            props[key] = self._visit_value(props[key], props, visitor)

    def _visit_value(self, value: Any, props: Dict[str, Any], visitor: Optional[Visitor]) -> Any:
        if callable(value):
            return self._visit_function(value, visitor)
        if is_portal(value):
            return self._label_portal(value)
        if is_element(value):
            return self._visit_element(value, visitor)
        if is_forward_ref_shaped(value):
            self.metrics.placeholders_created += 1
            return Placeholder(display_name(value))
        if isinstance(value, list):
            if self.config.list_attribute_mode is ListAttributeMode.NODE_CHILDREN:
                return self._visit_list(props.get("children"), visitor)
            return self._visit_list(value, visitor)
        return value

    def _visit_list(self, items: Any, visitor: Optional[Visitor]) -> List[Any]:
        return [self._visit_entry(item, visitor) for item in as_list(items)]

    def _visit_entry(self, item: Any, visitor: Optional[Visitor]) -> Any:
        if is_portal(item):
            return self._label_portal(item)
        if is_element(item):
            return self._visit_element(item, visitor)
        if isinstance(item, list):
            return self._visit_list(item, visitor)
        return item

    def _visit_function(self, fn: Callable[..., Any], visitor: Optional[Visitor]) -> Any:
        if is_function_component(fn):
            self.metrics.placeholders_created += 1
            return Placeholder(display_name(fn))
        if not self.config.probe_callbacks:
            return fn

        self.metrics.callbacks_probed += 1
        probe = probe_callback(fn)
        if probe.outcome is ProbeOutcome.ELEMENT:
            self.metrics.render_props_expanded += 1
            return make_labeled_node(
                self.config.render_prop_label,
                self._visit_element(probe.value, visitor)
            )
        if probe.outcome is ProbeOutcome.FAILED:
            self.logger.debug(
                "Callback not invocable without arguments, kept as-is",
                extra={"error_type": type(probe.error).__name__}
            )
        return fn

    def _label_portal(self, portal: VirtualNode) -> VirtualNode:
        self.metrics.portals_labeled += 1
        return make_labeled_node(self.config.portal_label, portal.children)
