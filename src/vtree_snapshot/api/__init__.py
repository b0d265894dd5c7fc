"""Public API for virtual tree snapshots."""

from .snapshot import SnapshotInspector, SnapshotResult, snapshot, unwrap, visit

__all__ = [
    "SnapshotInspector",
    "SnapshotResult",
    "snapshot",
    "unwrap",
    "visit",
]
