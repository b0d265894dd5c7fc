"""Tests for the top-level package interface."""

import vtree_snapshot


class TestPackageInterface:
    """Test progressive API disclosure exports."""

    def test_version(self) -> None:
        """Test package metadata."""
        assert vtree_snapshot.__version__ == "0.1.0"
        assert vtree_snapshot.__author__

    def test_all_exports_resolve(self) -> None:
        """Test every name in __all__ is importable from the package."""
        for name in vtree_snapshot.__all__:
            assert hasattr(vtree_snapshot, name), name

    def test_level_one_functions(self) -> None:
        """Test simple functions work from the package root."""
        node = vtree_snapshot.create_element("div", {"data-unwrap": True}, "text")

        assert vtree_snapshot.unwrap(node) == "text"
        assert vtree_snapshot.snapshot(node).tree is None
