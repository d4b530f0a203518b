"""
On-disk projection of the public ad feed.

The file is rewritten wholesale on every rebuild (temp file + rename) and lets a
freshly started process serve the feed without querying the store first.
"""
import json
import logging
import os
import tempfile
from datetime import timedelta, timezone as dt_timezone
from pathlib import Path
from typing import NamedTuple, Optional

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from ..exceptions import CacheRebuildFailure
from .store import fetch_public_ads

logger = logging.getLogger(__name__)


class DurableSnapshot(NamedTuple):
    generated_at: object  # aware datetime
    count: int
    ads: list

    def to_document(self):
        return {
            "generatedAt": self.generated_at.isoformat(),
            "count": self.count,
            "ads": self.ads,
        }


class DurableSnapshotManager:
    def __init__(self, path=None, ttl=None, clock=timezone.now):
        self._path = path
        self._ttl = ttl
        self._clock = clock

    @property
    def path(self) -> Path:
        return Path(self._path or settings.ADS_SNAPSHOT_FILE)

    @property
    def ttl(self) -> timedelta:
        seconds = self._ttl if self._ttl is not None else settings.ADS_SNAPSHOT_FILE_TTL
        return timedelta(seconds=seconds)

    def exists(self) -> bool:
        return self.path.exists()

    # -------------------------
    # Reading
    # -------------------------
    def read(self) -> Optional[DurableSnapshot]:
        """Parse the file; None when it is missing or unreadable."""
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable ad snapshot %s: %s", self.path, exc)
            return None

        generated_at = parse_datetime(str(document.get("generatedAt") or ""))
        ads = document.get("ads")
        if generated_at is None or not isinstance(ads, list):
            logger.warning("Ignoring malformed ad snapshot %s", self.path)
            return None
        if timezone.is_naive(generated_at):
            generated_at = timezone.make_aware(generated_at, dt_timezone.utc)
        return DurableSnapshot(generated_at=generated_at, count=len(ads), ads=ads)

    def is_fresh(self, snapshot: DurableSnapshot, not_before=None) -> bool:
        if self._clock() - snapshot.generated_at >= self.ttl:
            return False
        if not_before is not None and snapshot.generated_at <= not_before:
            return False
        return True

    def read_fresh(self, not_before=None) -> Optional[DurableSnapshot]:
        """
        Return the snapshot only if it is inside the freshness window and was
        generated after ``not_before`` (the last in-memory invalidation).
        """
        snapshot = self.read()
        if snapshot is None or not self.is_fresh(snapshot, not_before):
            return None
        return snapshot

    # -------------------------
    # Writing
    # -------------------------
    def rebuild(self) -> DurableSnapshot:
        """
        Query the approved set and overwrite the file. A failed write is logged
        and the freshly built snapshot is still returned; a failed store read
        raises UpstreamUnavailable.
        """
        generated_at = self._clock()
        ads = fetch_public_ads()
        snapshot = DurableSnapshot(generated_at=generated_at, count=len(ads), ads=ads)
        try:
            self._write(snapshot)
        except CacheRebuildFailure:
            logger.exception("Could not write ad snapshot to %s", self.path)
        else:
            logger.info("Ad snapshot rebuilt: %s ads saved to %s", snapshot.count, self.path)
        return snapshot

    def _write(self, snapshot: DurableSnapshot):
        target = self.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".ads-cache-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(snapshot.to_document(), fh, cls=DjangoJSONEncoder, ensure_ascii=False)
                os.replace(tmp_name, target)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise CacheRebuildFailure(str(exc)) from exc

    def load(self, cache) -> Optional[DurableSnapshot]:
        """
        Prime ``cache`` at process start: from the file when it is fresh,
        otherwise from a synchronous rebuild.
        """
        snapshot = self.read_fresh()
        if snapshot is not None:
            logger.info("Priming ad feed from snapshot file (%s ads, generated %s)",
                        snapshot.count, snapshot.generated_at.isoformat())
        else:
            logger.info("Ad snapshot file missing or stale, rebuilding")
            snapshot = self.rebuild()
        cache.put(snapshot.ads)
        return snapshot

    def remove(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


durable_snapshot = DurableSnapshotManager()
