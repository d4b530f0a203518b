import logging
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import close_old_connections, connection, transaction

from .cache import snapshot_cache
from .durable import durable_snapshot

logger = logging.getLogger(__name__)

# One worker: rebuilds run one after another, each one reads the latest store state.
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ads-snapshot")


def _run_rebuild(reason, in_worker):
    if in_worker:
        close_old_connections()
    try:
        durable_snapshot.rebuild()
    except Exception:
        # Never let a background rebuild crash the worker or reach a client.
        logger.exception("Ad snapshot rebuild failed (trigger: %s)", reason)
    finally:
        if in_worker:
            connection.close()


def schedule_rebuild(reason="mutation"):
    """Rebuild the durable snapshot without making the caller wait for it."""
    if not settings.ADS_SNAPSHOT_REBUILD_ASYNC:
        _run_rebuild(reason, in_worker=False)
        return None
    logger.debug("Scheduling ad snapshot rebuild (trigger: %s)", reason)
    return _executor.submit(_run_rebuild, reason, True)


def publish_change(reason):
    """
    Called after any write that may change the public feed: drop the in-memory
    snapshot right away, refresh the durable file in the background.
    """
    snapshot_cache.invalidate()
    logger.info("Ad feed invalidated (trigger: %s)", reason)
    schedule_rebuild(reason)


def publish_change_on_commit(reason):
    """For writes made inside a transaction (signals, admin site): publish once committed."""
    transaction.on_commit(lambda: publish_change(reason))
