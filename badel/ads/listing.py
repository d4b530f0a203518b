"""
Public feed reads.

The approved set is resolved from the in-memory snapshot, then the durable
snapshot file, then the store. Filters and pagination are applied to the full
payload on every request; nothing is cached per filter combination.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from .exceptions import UpstreamUnavailable
from .models import Ad
from .snapshot.cache import snapshot_cache
from .snapshot.durable import durable_snapshot
from .snapshot.store import fetch_public_ads

logger = logging.getLogger(__name__)

SOURCE_MEMORY = "memory"
SOURCE_FILE = "file"
SOURCE_STORE = "store"

ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class SnapshotView:
    ads: tuple
    source: str
    stale: bool
    captured_at: object = None


@dataclass(frozen=True)
class ListResult:
    ads: list
    total: int
    page: int
    limit: int
    source: str
    stale: bool
    captured_at: object = None

    @property
    def pages(self):
        return math.ceil(self.total / self.limit) if self.limit else 0


def resolve_snapshot(allow_stale=False) -> SnapshotView:
    """
    Return the approved set in canonical order.

    With ``allow_stale`` an expired in-memory entry or an expired durable file
    is served (flagged stale) before the store is touched, as long as it was
    captured after the last invalidation.
    """
    entry = snapshot_cache.get()
    if entry is not None:
        return SnapshotView(entry.payload, SOURCE_MEMORY, False, entry.captured_at)

    if allow_stale:
        entry = snapshot_cache.peek()
        if entry is not None:
            return SnapshotView(entry.payload, SOURCE_MEMORY, True, entry.captured_at)
        document = durable_snapshot.read()
        if document is not None and not _superseded(document):
            fresh = durable_snapshot.is_fresh(document)
            return SnapshotView(tuple(document.ads), SOURCE_FILE, not fresh, document.generated_at)

    document = durable_snapshot.read_fresh(not_before=snapshot_cache.invalidated_at)
    if document is not None:
        entry = snapshot_cache.put(document.ads)
        logger.info("Ad feed refilled from snapshot file (%s ads)", document.count)
        return SnapshotView(entry.payload, SOURCE_FILE, False, document.generated_at)

    generation = snapshot_cache.generation
    try:
        ads = fetch_public_ads()
    except UpstreamUnavailable:
        return _stale_fallback()

    entry = snapshot_cache.put(ads, generation=generation)
    logger.info("Ad feed refilled from store (%s ads)", len(entry.payload))
    return SnapshotView(entry.payload, SOURCE_STORE, False, entry.captured_at)


def _superseded(document) -> bool:
    invalidated_at = snapshot_cache.invalidated_at
    return invalidated_at is not None and document.generated_at <= invalidated_at


def _stale_fallback() -> SnapshotView:
    entry = snapshot_cache.peek()
    if entry is not None:
        logger.warning("Ad store unavailable, serving stale in-memory feed captured at %s",
                       entry.captured_at.isoformat())
        return SnapshotView(entry.payload, SOURCE_MEMORY, True, entry.captured_at)

    document = durable_snapshot.read()
    if document is not None:
        logger.warning("Ad store unavailable, serving snapshot file generated at %s",
                       document.generated_at.isoformat())
        return SnapshotView(tuple(document.ads), SOURCE_FILE, True, document.generated_at)

    logger.error("Ad store unavailable and no cached feed to fall back on")
    raise UpstreamUnavailable()


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def clamp_pagination(page=None, limit=None):
    """Malformed pagination never fails: fall back to page 1 / the default limit."""
    page = _to_int(page)
    limit = _to_int(limit)
    if page is None or page < 1:
        page = 1
    if limit is None or limit <= 0:
        limit = settings.ADS_PAGE_DEFAULT_LIMIT
    return page, min(limit, settings.ADS_PAGE_MAX_LIMIT)


def filter_ads(ads, category=None, sub_category=None):
    if category and category != ALL_CATEGORIES:
        ads = [ad for ad in ads if ad.get("category") == category]
    if sub_category:
        ads = [ad for ad in ads if ad.get("subCategory") == sub_category]
    return list(ads)


def paginate(ads, page, limit):
    start = (page - 1) * limit
    return ads[start:start + limit]


def list_ads(category=None, sub_category=None, page=1, limit=None, allow_stale=False) -> ListResult:
    view = resolve_snapshot(allow_stale=allow_stale)
    page, limit = clamp_pagination(page, limit)
    matching = filter_ads(view.ads, category, sub_category)
    return ListResult(
        ads=paginate(matching, page, limit),
        total=len(matching),
        page=page,
        limit=limit,
        source=view.source,
        stale=view.stale,
        captured_at=view.captured_at,
    )


def category_counts(ads):
    """Count approved ads per known category; unknown categories are ignored."""
    counts = {value: 0 for value in Ad.Category.values}
    for ad in ads:
        category = ad.get("category")
        if category in counts:
            counts[category] += 1
    return counts
