"""Child resolution for virtual nodes.

Each node kind encodes "what comes next" differently: invoke a component,
substitute a memoized inner type, register or read a context value, call a
forward-ref render, or just pass ``children`` through. ``resolve_children``
keeps that interpretation in one place.
"""

from typing import Any, Callable, Dict

from vtree_snapshot.tree.nodes import Context, NodeKind, VirtualNode, create_element


class ContextRegistry:
    """Context values registered along one unwrap path.

    Providers register values as they are passed; consumers read the most
    recent one, falling back to the context's default.
    """

    def __init__(self) -> None:
        self._values: Dict[Context, Any] = {}

    def register(self, context: Context, value: Any) -> None:
        """Register ``value`` as the current value of ``context``."""
        self._values[context] = value

    def lookup(self, context: Context) -> Any:
        """Get the current value of ``context``."""
        if context in self._values:
            return self._values[context]
        return getattr(context, "default_value", None)

    def __contains__(self, context: object) -> bool:
        return context in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> Dict[Context, Any]:
        """Copy of the registered values."""
        return dict(self._values)


def _resolve_host(node: VirtualNode, registry: ContextRegistry) -> Any:
    return node.children


def _resolve_class(node: VirtualNode, registry: ContextRegistry) -> Any:
    instance = node.type(dict(node.attributes))
    return instance.render()


def _resolve_function(node: VirtualNode, registry: ContextRegistry) -> Any:
    return node.type(dict(node.attributes))


def _resolve_memo(node: VirtualNode, registry: ContextRegistry) -> Any:
    return create_element(node.type.type, node.attributes, key=node.key)


def _resolve_provider(node: VirtualNode, registry: ContextRegistry) -> Any:
    registry.register(node.type, node.attributes.get("value"))
    return node.children


def _resolve_consumer(node: VirtualNode, registry: ContextRegistry) -> Any:
    render = node.children
    if not callable(render):
        return None
    return render(registry.lookup(node.type))


def _resolve_forward_ref(node: VirtualNode, registry: ContextRegistry) -> Any:
    return node.type.render(dict(node.attributes), None)


def _resolve_passthrough(node: VirtualNode, registry: ContextRegistry) -> Any:
    return node.children


def _resolve_decorated(node: VirtualNode, registry: ContextRegistry) -> Any:
    return node.type.resolve(dict(node.attributes))


_RESOLVERS: Dict[NodeKind, Callable[[VirtualNode, ContextRegistry], Any]] = {
    NodeKind.HOST: _resolve_host,
    NodeKind.COMPOSITE_CLASS: _resolve_class,
    NodeKind.COMPOSITE_FUNCTION: _resolve_function,
    NodeKind.MEMO: _resolve_memo,
    NodeKind.CONTEXT_PROVIDER: _resolve_provider,
    NodeKind.CONTEXT_CONSUMER: _resolve_consumer,
    NodeKind.FORWARD_REF: _resolve_forward_ref,
    NodeKind.FRAGMENT: _resolve_passthrough,
    NodeKind.PORTAL: _resolve_passthrough,
    NodeKind.DECORATED: _resolve_decorated,
}


def resolve_children(node: Any, registry: ContextRegistry) -> Any:
    """Get the content that comes after ``node``.

    Args:
        node: Node to resolve; anything that is not a ``VirtualNode`` has no
            further content
        registry: Context values for the current path; mutated by providers

    Returns:
        Next content (node, list, primitive), or ``None`` when there is none
    """
    if not isinstance(node, VirtualNode):
        return None
    resolver = _RESOLVERS.get(node.kind)
    if resolver is None:
        return None
    return resolver(node, registry)
