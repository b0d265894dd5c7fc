"""VTree Snapshot.

Traversal engine over virtual element trees for test tooling: unwrap wrapper
nodes down to the element a test cares about, and walk whole trees into
normalized, snapshot-stable clones.

Progressive API Disclosure:
- Level 1: Simple functions - unwrap(), visit(), snapshot()
- Level 2: Configured inspector - SnapshotInspector class
- Level 3: Engine classes - Unwrapper, TreeWalker, resolve_children
"""

__version__ = "0.1.0"
__author__ = "VTree Snapshot Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured inspector
from .api import SnapshotInspector, SnapshotResult, snapshot, unwrap, visit

# Configuration classes for advanced usage
from .shared.config import ListAttributeMode, SnapshotConfig, UnwrapConfig, WalkerConfig

# Virtual tree model
from .tree.nodes import (
    Component,
    Fragment,
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

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "unwrap",
    "visit",
    "snapshot",

    # Level 2: Configured inspector
    "SnapshotInspector",
    "SnapshotResult",

    # Configuration classes
    "SnapshotConfig",
    "UnwrapConfig",
    "WalkerConfig",
    "ListAttributeMode",

    # Virtual tree model
    "Component",
    "Fragment",
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
]
