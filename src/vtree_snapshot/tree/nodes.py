"""Virtual element tree model.

A virtual tree is the in-memory description a declarative UI framework builds
before producing real output. Nodes are a tagged variant: ``NodeKind`` names
the kind, and the meaning of ``VirtualNode.type`` depends on it.

    HOST                tag name (str)
    COMPOSITE_CLASS     Component subclass
    COMPOSITE_FUNCTION  function marked with @component (or any callable)
    MEMO                Memo wrapping a function component
    CONTEXT_PROVIDER    Context
    CONTEXT_CONSUMER    Context
    FORWARD_REF         ForwardRef
    FRAGMENT            None
    PORTAL              None (content in attributes["children"], container in target)
    DECORATED           Decorated
"""

import inspect
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

# Attribute set on functions decorated with @component
COMPONENT_MARKER = "__vtree_component__"


class NodeKind(Enum):
    """Kinds of virtual nodes."""

    HOST = auto()
    COMPOSITE_CLASS = auto()
    COMPOSITE_FUNCTION = auto()
    MEMO = auto()
    CONTEXT_PROVIDER = auto()
    CONTEXT_CONSUMER = auto()
    FORWARD_REF = auto()
    FRAGMENT = auto()
    PORTAL = auto()
    DECORATED = auto()


class _FragmentType:
    """Sentinel type for fragments."""

    def __repr__(self) -> str:
        return "Fragment"


Fragment = _FragmentType()


class Component:
    """Base class for class-based composite components.

    Subclasses receive their attributes as ``props`` and return content
    from ``render``.
    """

    display_name: Optional[str] = None

    def __init__(self, props: Optional[Dict[str, Any]] = None) -> None:
        self.props = props or {}

    def render(self) -> Any:
        return None


def component(
    fn: Optional[Callable[..., Any]] = None,
    *,
    display_name: Optional[str] = None
) -> Any:
    """Mark a function as a function-based composite component.

    Usable bare (``@component``) or with a name
    (``@component(display_name="Button")``).
    """
    def mark(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, COMPONENT_MARKER, True)
        if display_name:
            func.display_name = display_name  # type: ignore[attr-defined]
        return func

    if fn is not None:
        return mark(fn)
    return mark


@dataclass(frozen=True)
class Memo:
    """Memoized wrapper around a function component."""

    type: Callable[..., Any]
    display_name: Optional[str] = None


@dataclass(frozen=True)
class ForwardRef:
    """Wrapper delegating content to ``render(props, ref)``."""

    render: Callable[..., Any]
    display_name: Optional[str] = None


@dataclass(frozen=True)
class Decorated:
    """Themed/styled wrapper around a tag or component.

    Resolves like a function component. Without an explicit ``render`` the
    content is an element of ``target`` carrying the same attributes.
    """

    target: Any
    display_name: Optional[str] = None
    render: Optional[Callable[..., Any]] = None

    def resolve(self, props: Dict[str, Any]) -> Any:
        """Produce the content this wrapper renders for ``props``."""
        if self.render is not None:
            return self.render(props)
        return create_element(self.target, props)


class _ContextRole:
    """``Context.Provider`` / ``Context.Consumer`` handle usable as element type."""

    def __init__(self, context: "Context", kind: NodeKind) -> None:
        self.context = context
        self.kind = kind

    def __repr__(self) -> str:
        role = "Provider" if self.kind is NodeKind.CONTEXT_PROVIDER else "Consumer"
        return f"{self.context!r}.{role}"


class Context:
    """Context identity shared by a provider/consumer pair.

    Contexts compare by identity; two contexts with the same name are still
    distinct.
    """

    def __init__(self, default_value: Any = None, display_name: Optional[str] = None) -> None:
        self.default_value = default_value
        self.display_name = display_name
        self.Provider = _ContextRole(self, NodeKind.CONTEXT_PROVIDER)
        self.Consumer = _ContextRole(self, NodeKind.CONTEXT_CONSUMER)

    def __repr__(self) -> str:
        return self.display_name or "Context"

    def provider(self, value: Any, *children: Any) -> "VirtualNode":
        """Create a provider node registering ``value`` for its content."""
        return create_element(self.Provider, {"value": value}, *children)

    def consumer(self, render: Callable[[Any], Any]) -> "VirtualNode":
        """Create a consumer node whose content is ``render(value)``."""
        return create_element(self.Consumer, {"children": render})


class Placeholder:
    """Opaque unique stand-in for a live component reference.

    Every instance is distinct, like a symbol; only the display name is kept
    so snapshots stay stable without embedding the reference itself.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Symbol({self.name})"


@dataclass
class VirtualNode:
    """A node of the virtual element tree."""

    kind: NodeKind
    type: Any = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    key: Optional[str] = None
    target: Any = None

    def __post_init__(self) -> None:
        """Validate node shape for its kind."""
        if not isinstance(self.kind, NodeKind):
            raise TypeError("Node kind must be a NodeKind")
        if self.kind is NodeKind.HOST and not (isinstance(self.type, str) and self.type):
            raise ValueError("Host node type must be a non-empty tag name")
        if self.kind is NodeKind.FRAGMENT and self.type not in (None, Fragment):
            raise ValueError("Fragment node cannot carry a type")

    @property
    def children(self) -> Any:
        """Content stored in the ``children`` attribute."""
        return self.attributes.get("children")

    def clone(self, attributes: Optional[Dict[str, Any]] = None, **changes: Any) -> "VirtualNode":
        """Copy this node with new attributes and/or other field changes."""
        new_attributes = dict(self.attributes if attributes is None else attributes)
        return replace(self, attributes=new_attributes, **changes)


def _infer_kind(element_type: Any) -> NodeKind:
    if isinstance(element_type, str):
        return NodeKind.HOST
    if element_type is Fragment or element_type is None:
        return NodeKind.FRAGMENT
    if isinstance(element_type, _ContextRole):
        return element_type.kind
    if isinstance(element_type, Memo):
        return NodeKind.MEMO
    if isinstance(element_type, ForwardRef):
        return NodeKind.FORWARD_REF
    if isinstance(element_type, Decorated):
        return NodeKind.DECORATED
    if inspect.isclass(element_type):
        return NodeKind.COMPOSITE_CLASS
    if callable(element_type):
        return NodeKind.COMPOSITE_FUNCTION
    raise TypeError(f"Unsupported element type: {element_type!r}")


def create_element(
    element_type: Any,
    attributes: Optional[Dict[str, Any]] = None,
    *children: Any,
    key: Optional[str] = None
) -> VirtualNode:
    """Create a virtual node, inferring its kind from the type.

    Positional children replace any ``children`` attribute; a single child is
    stored as-is, several as a list.

    Examples:
        >>> create_element("span", {"id": "x"}, "hello").children
        'hello'
        >>> create_element(Fragment, None, "a", "b").kind is NodeKind.FRAGMENT
        True
    """
    kind = _infer_kind(element_type)
    props = dict(attributes or {})
    if children:
        props["children"] = children[0] if len(children) == 1 else list(children)

    if isinstance(element_type, _ContextRole):
        element_type = element_type.context
    elif kind is NodeKind.FRAGMENT:
        element_type = None

    return VirtualNode(kind=kind, type=element_type, attributes=props, key=key)


def memo(fn: Callable[..., Any], display_name: Optional[str] = None) -> Memo:
    """Wrap a function component as memoized."""
    return Memo(fn, display_name)


def forward_ref(render: Callable[..., Any], display_name: Optional[str] = None) -> ForwardRef:
    """Wrap a render function as a forward-reference type."""
    return ForwardRef(render, display_name)


def decorated(
    target: Any,
    display_name: Optional[str] = None,
    render: Optional[Callable[..., Any]] = None
) -> Decorated:
    """Create a themed/styled wrapper type around ``target``."""
    return Decorated(target, display_name, render)


def create_context(default_value: Any = None, display_name: Optional[str] = None) -> Context:
    """Create a new context identity."""
    return Context(default_value, display_name)


def create_portal(children: Any, target: Any = None) -> VirtualNode:
    """Create a portal rendering ``children`` into an external ``target``."""
    return VirtualNode(kind=NodeKind.PORTAL, attributes={"children": children}, target=target)


def as_list(content: Any) -> List[Any]:
    """Normalize content to a list; ``None`` becomes an empty list."""
    if content is None:
        return []
    if isinstance(content, (list, tuple)):
        return list(content)
    return [content]


@dataclass
class TreeNode:
    """One node of the serialized tree consumed by the tree walker.

    ``props`` are the node's attributes without ``children``; ``children``
    holds child ``TreeNode`` entries until the walker replaces them with
    normalized ``VirtualNode`` clones. Primitive children are kept as-is.
    """

    node: VirtualNode
    props: Dict[str, Any] = field(default_factory=dict)
    children: List[Any] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: VirtualNode) -> "TreeNode":
        """Build a serialized tree from a virtual node and its descendants."""
        if not isinstance(element, VirtualNode):
            raise TypeError("TreeNode.from_element expects a VirtualNode")

        props = {k: v for k, v in element.attributes.items() if k != "children"}
        children: List[Any] = []
        for child in as_list(element.children):
            if child is None or isinstance(child, bool):
                continue
            children.append(cls.from_element(child) if isinstance(child, VirtualNode) else child)
        return cls(node=element, props=props, children=children)
