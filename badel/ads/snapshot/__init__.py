from .cache import SnapshotCache, SnapshotEntry, snapshot_cache
from .durable import DurableSnapshot, DurableSnapshotManager, durable_snapshot
from .tasks import publish_change, publish_change_on_commit, schedule_rebuild

__all__ = [
    "SnapshotCache",
    "SnapshotEntry",
    "snapshot_cache",
    "DurableSnapshot",
    "DurableSnapshotManager",
    "durable_snapshot",
    "publish_change",
    "publish_change_on_commit",
    "schedule_rebuild",
]
