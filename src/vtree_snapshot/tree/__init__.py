"""Virtual tree model and traversal engine.

Key Components:
    VirtualNode: Tagged virtual element (see NodeKind for the kinds)
    TreeNode: Serialized tree node consumed by the walker
    resolve_children: Per-kind child resolution
    Unwrapper: Single-path descent to the element of interest
    TreeWalker: Full-tree visit producing a normalized clone
"""

from .classify import (
    display_name,
    filter_ignored,
    is_component_like,
    is_data_marked,
    is_decorated,
    is_element,
    is_force_unwrap_marked,
    is_function_component,
    is_portal,
    make_labeled_node,
)
from .nodes import (
    Component,
    Context,
    Decorated,
    ForwardRef,
    Fragment,
    Memo,
    NodeKind,
    Placeholder,
    TreeNode,
    VirtualNode,
    component,
    create_context,
    create_element,
    create_portal,
    decorated,
    forward_ref,
    memo,
)
from .resolver import ContextRegistry, resolve_children
from .serialize import node_to_dict, to_plain, tree_to_dict
from .unwrap import Unwrapper, UnwrapResult
from .walker import ProbeOutcome, ProbeResult, TreeWalker, probe_callback

__all__ = [
    "display_name",
    "filter_ignored",
    "is_component_like",
    "is_data_marked",
    "is_decorated",
    "is_element",
    "is_force_unwrap_marked",
    "is_function_component",
    "is_portal",
    "make_labeled_node",
    "Component",
    "Context",
    "Decorated",
    "ForwardRef",
    "Fragment",
    "Memo",
    "NodeKind",
    "Placeholder",
    "TreeNode",
    "VirtualNode",
    "component",
    "create_context",
    "create_element",
    "create_portal",
    "decorated",
    "forward_ref",
    "memo",
    "ContextRegistry",
    "resolve_children",
    "node_to_dict",
    "to_plain",
    "tree_to_dict",
    "Unwrapper",
    "UnwrapResult",
    "ProbeOutcome",
    "ProbeResult",
    "TreeWalker",
    "probe_callback",
]
