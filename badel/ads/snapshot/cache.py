import logging
from datetime import timedelta
from typing import NamedTuple, Optional

from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


class SnapshotEntry(NamedTuple):
    payload: tuple
    captured_at: object  # aware datetime

    def age(self, now):
        return now - self.captured_at


class SnapshotCache:
    """
    Process-local copy of the public ad feed.

    ``put`` and ``invalidate`` replace a single attribute, so readers see either
    the old entry or the new one and never a half-written payload. No lock.
    """

    def __init__(self, ttl=None, clock=timezone.now):
        self._ttl = ttl
        self._clock = clock
        self._entry: Optional[SnapshotEntry] = None
        self._generation = 0
        self._invalidated_at = None

    @property
    def ttl(self) -> timedelta:
        seconds = self._ttl if self._ttl is not None else settings.ADS_SNAPSHOT_TTL
        return timedelta(seconds=seconds)

    @property
    def generation(self) -> int:
        """Token taken before a store read; see ``put``."""
        return self._generation

    @property
    def invalidated_at(self):
        return self._invalidated_at

    def get(self) -> Optional[SnapshotEntry]:
        """Return the entry while it is fresh, otherwise None (a miss)."""
        entry = self._entry
        if entry is None:
            return None
        if entry.age(self._clock()) >= self.ttl:
            return None
        return entry

    def peek(self) -> Optional[SnapshotEntry]:
        """Return the entry regardless of its age."""
        return self._entry

    def is_fresh(self, entry: SnapshotEntry) -> bool:
        return entry.age(self._clock()) < self.ttl

    def put(self, ads, generation=None) -> SnapshotEntry:
        """
        Replace the cached payload. A refill started before the latest
        invalidation (stale ``generation``) is returned but not stored.
        """
        entry = SnapshotEntry(payload=tuple(ads), captured_at=self._clock())
        if generation is not None and generation != self._generation:
            logger.info("Dropping snapshot refill from generation %s (now %s)", generation, self._generation)
            return entry
        self._entry = entry
        return entry

    def invalidate(self):
        self._generation += 1
        self._invalidated_at = self._clock()
        self._entry = None

    def reset(self):
        self._entry = None
        self._generation = 0
        self._invalidated_at = None


snapshot_cache = SnapshotCache()
