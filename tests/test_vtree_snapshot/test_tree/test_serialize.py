"""Tests for plain-data rendering of walked trees."""

from vtree_snapshot.tree import (
    Component,
    Placeholder,
    TreeNode,
    TreeWalker,
    component,
    create_context,
    create_element,
    decorated,
    forward_ref,
    memo,
    node_to_dict,
    to_plain,
    tree_to_dict,
)


@component
def Chip(props):
    return None


class Grid(Component):
    pass


def on_select(item):
    return item


class TestToPlain:
    """Test attribute value conversion."""

    def test_primitives_unchanged(self) -> None:
        """Test plain values pass through."""
        assert to_plain(1) == 1
        assert to_plain("a") == "a"
        assert to_plain(None) is None

    def test_placeholder(self) -> None:
        """Test placeholders print as symbols."""
        assert to_plain(Placeholder("Chip")) == "Symbol(Chip)"

    def test_callables(self) -> None:
        """Test live callables become named markers."""
        assert to_plain(on_select) == "[function on_select]"
        assert to_plain(Grid) == "[function Grid]"

    def test_wrapper_types(self) -> None:
        """Test wrapper types are named by kind."""
        assert to_plain(memo(Chip)) == "[Memo Chip]"
        assert to_plain(forward_ref(on_select, "Select")) == "[ForwardRef Select]"
        assert to_plain(decorated("a", "Link")) == "[Decorated Link]"
        assert to_plain(create_context(display_name="Theme")) == "[Context Theme]"

    def test_containers(self) -> None:
        """Test lists and dictionaries convert recursively."""
        assert to_plain({"a": [Placeholder("X"), 2]}) == {"a": ["Symbol(X)", 2]}


class TestNodeToDict:
    """Test node conversion."""

    def test_nested_nodes(self) -> None:
        """Test type names, props and children are converted."""
        node = create_element(
            "ul", {"id": "menu"},
            create_element("li", None, "one"),
            None,
            create_element(Chip, {"onClick": on_select}, key="c"),
        )

        assert node_to_dict(node) == {
            "type": "ul",
            "props": {"id": "menu"},
            "children": [
                {"type": "li", "props": {}, "children": ["one"]},
                {
                    "type": "Chip",
                    "props": {"onClick": "[function on_select]"},
                    "children": [],
                    "key": "c",
                },
            ],
        }


class TestTreeToDict:
    """Test serialized tree conversion."""

    def test_walked_tree(self) -> None:
        """Test walked trees render with placeholders and labeled nodes."""
        tree = TreeNode.from_element(
            create_element(
                "page",
                {"icon": Chip, "header": lambda: create_element("h1", None, "Title")},
                create_element(decorated("button", "Button"), {"kind": "primary"}),
            )
        )

        TreeWalker().walk(tree)

        assert tree_to_dict(tree) == {
            "type": "page",
            "props": {
                "icon": "Symbol(Chip)",
                "header": {
                    "type": "RenderProp",
                    "props": {},
                    "children": [{"type": "h1", "props": {}, "children": ["Title"]}],
                },
            },
            "children": [
                {"type": "Button", "props": {"kind": "primary"}, "children": []},
            ],
        }
