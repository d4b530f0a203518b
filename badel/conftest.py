import pytest
from django.core.cache import caches
from django.conf import settings

from badel.ads.snapshot import snapshot_cache, durable_snapshot


@pytest.fixture(autouse=True)
def clear_all_caches():
    """Reset throttle history, the in-memory feed and the snapshot file before every test."""
    for alias in settings.CACHES.keys():
        caches[alias].clear()
    snapshot_cache.reset()
    durable_snapshot.remove()
    yield
    snapshot_cache.reset()
    durable_snapshot.remove()
