"""Classification, naming and filtering helpers for virtual nodes.

These answer the questions both traversals ask about a node: is it a
component, a decorated wrapper, a pure wrapper that is always unwrapped, a
host element opted in through a data attribute, and what is it called.
"""

import inspect
from typing import Any, Iterable, List

from vtree_snapshot.shared.config import DEFAULT_DATA_ATTRIBUTE
from vtree_snapshot.tree.nodes import (
    COMPONENT_MARKER,
    Context,
    Decorated,
    ForwardRef,
    Memo,
    NodeKind,
    VirtualNode,
    _FragmentType,
)

COMPONENT_KINDS = frozenset({NodeKind.COMPOSITE_CLASS, NodeKind.COMPOSITE_FUNCTION})

# Kinds that only ever pass content through and are always unwrapped
WRAPPER_KINDS = frozenset({
    NodeKind.MEMO,
    NodeKind.CONTEXT_PROVIDER,
    NodeKind.CONTEXT_CONSUMER,
    NodeKind.FORWARD_REF,
    NodeKind.FRAGMENT,
    NodeKind.PORTAL,
})

UNKNOWN_NAME = "Unknown"


def is_element(value: Any) -> bool:
    """Check if value is a virtual node."""
    return isinstance(value, VirtualNode)


def is_portal(value: Any) -> bool:
    """Check if value is a portal node."""
    return isinstance(value, VirtualNode) and value.kind is NodeKind.PORTAL


def is_component_like(node: Any) -> bool:
    """Check if node is a class or function composite element."""
    return isinstance(node, VirtualNode) and node.kind in COMPONENT_KINDS


def is_decorated(value: Any) -> bool:
    """Check if value is a decorated node or a decorated type."""
    if isinstance(value, Decorated):
        return True
    return isinstance(value, VirtualNode) and value.kind is NodeKind.DECORATED


def is_force_unwrap_marked(node: Any) -> bool:
    """Check if node is a pure wrapper that must always be unwrapped."""
    return isinstance(node, VirtualNode) and node.kind in WRAPPER_KINDS


def is_data_marked(node: Any, attribute: str = DEFAULT_DATA_ATTRIBUTE) -> bool:
    """Check if node is a host element opted into unwrapping."""
    return (
        isinstance(node, VirtualNode)
        and node.kind is NodeKind.HOST
        and bool(node.attributes.get(attribute))
    )


def is_class_component(value: Any) -> bool:
    """Check if value is a class usable as a composite component."""
    return inspect.isclass(value) and callable(getattr(value, "render", None))


def is_function_component(value: Any) -> bool:
    """Check if a callable is identifiable as a composite component.

    Class components count, as do functions marked with ``@component``.
    Plain callbacks do not.
    """
    if is_class_component(value):
        return True
    return callable(value) and bool(getattr(value, COMPONENT_MARKER, False))


def is_forward_ref_shaped(value: Any) -> bool:
    """Check if value is a forward-reference type (decorated types included)."""
    return isinstance(value, (ForwardRef, Decorated))


def _callable_name(value: Any) -> str:
    name = getattr(value, "display_name", None) or getattr(value, "__name__", None)
    return name if isinstance(name, str) and name else UNKNOWN_NAME


def _type_name(element_type: Any) -> str:
    if isinstance(element_type, str):
        return element_type
    if isinstance(element_type, _FragmentType):
        return "Fragment"
    if isinstance(element_type, Decorated):
        return element_type.display_name or _type_name(element_type.target)
    if isinstance(element_type, Memo):
        return element_type.display_name or _type_name(element_type.type)
    if isinstance(element_type, ForwardRef):
        if element_type.display_name:
            return element_type.display_name
        inner = _callable_name(element_type.render)
        return f"ForwardRef({inner})" if inner != UNKNOWN_NAME else "ForwardRef"
    if isinstance(element_type, Context):
        return repr(element_type)
    if callable(element_type):
        return _callable_name(element_type)
    return UNKNOWN_NAME


def display_name(value: Any) -> str:
    """Get the display name of a node or of an element type.

    Host nodes are named by tag, components by ``display_name`` or
    ``__name__``, wrappers by what they wrap unless explicitly named.
    """
    if not isinstance(value, VirtualNode):
        return _type_name(value)

    kind = value.kind
    if kind is NodeKind.FRAGMENT:
        return "Fragment"
    if kind is NodeKind.PORTAL:
        return "Portal"
    if kind is NodeKind.CONTEXT_PROVIDER:
        return f"{_type_name(value.type)}.Provider"
    if kind is NodeKind.CONTEXT_CONSUMER:
        return f"{_type_name(value.type)}.Consumer"
    return _type_name(value.type)


def renders_nothing(value: Any) -> bool:
    """Check if value produces no output (``None`` and booleans)."""
    return value is None or isinstance(value, bool)


def filter_ignored(items: Iterable[Any], names: Iterable[str]) -> List[Any]:
    """Drop render-nothing values and elements whose name is ignored.

    Args:
        items: Candidate content, in order
        names: Display names to drop

    Returns:
        Remaining items in their original order
    """
    ignored = set(names or ())
    return [
        item for item in items
        if not renders_nothing(item)
        and not (isinstance(item, VirtualNode) and display_name(item) in ignored)
    ]


def make_labeled_node(label: str, content: Any) -> VirtualNode:
    """Create a synthetic host node named ``label`` wrapping ``content``."""
    return VirtualNode(kind=NodeKind.HOST, type=label, attributes={"children": content})
