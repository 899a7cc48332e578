from .snapshot import (
    MarketSnapshot,
    SnapshotBatch,
    SnapshotError,
    SnapshotInput,
    SymbolStatus,
    build_snapshot,
    compute_snapshots,
    parse_snapshot_input,
)

__all__ = [
    "MarketSnapshot",
    "SnapshotBatch",
    "SnapshotError",
    "SnapshotInput",
    "SymbolStatus",
    "build_snapshot",
    "compute_snapshots",
    "parse_snapshot_input",
]
