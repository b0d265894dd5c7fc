"""Plain-data rendering of normalized virtual trees.

Turns walked trees into dictionaries and lists that compare and print
stably: type identities become names, placeholders become their
``Symbol(...)`` text and live callables become ``[function <name>]``.
"""

from typing import Any, Dict

from vtree_snapshot.tree.classify import display_name, renders_nothing
from vtree_snapshot.tree.nodes import (
    Context,
    Decorated,
    ForwardRef,
    Memo,
    Placeholder,
    TreeNode,
    VirtualNode,
    as_list,
)


def node_to_dict(node: VirtualNode) -> Dict[str, Any]:
    """Convert a virtual node and its descendants to a dictionary."""
    result: Dict[str, Any] = {
        "type": display_name(node),
        "props": {
            key: to_plain(value)
            for key, value in node.attributes.items()
            if key != "children"
        },
        "children": [
            to_plain(child) for child in as_list(node.children)
            if not renders_nothing(child)
        ],
    }
    if node.key is not None:
        result["key"] = node.key
    return result


def tree_to_dict(tree: TreeNode) -> Dict[str, Any]:
    """Convert a serialized tree to a dictionary."""
    result = node_to_dict(tree.node)
    result["props"] = {key: to_plain(value) for key, value in tree.props.items()}
    result["children"] = [to_plain(child) for child in tree.children]
    return result


def to_plain(value: Any) -> Any:
    """Convert any attribute value to plain data."""
    if isinstance(value, TreeNode):
        return tree_to_dict(value)
    if isinstance(value, VirtualNode):
        return node_to_dict(value)
    if isinstance(value, Placeholder):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (Memo, ForwardRef, Decorated, Context)):
        return f"[{type(value).__name__} {display_name(value)}]"
    if callable(value):
        return f"[function {display_name(value)}]"
    return value
