import logging

from django.conf import settings

from badel.ads.exceptions import UpstreamUnavailable
from badel.ads.snapshot import snapshot_cache, durable_snapshot

logger = logging.getLogger(__name__)


def prime_ad_feed():
    """Fill the in-memory feed before the first request; a cold store only delays it."""
    if not settings.ADS_SNAPSHOT_LOAD_ON_START:
        return None
    try:
        return durable_snapshot.load(snapshot_cache)
    except UpstreamUnavailable:
        logger.warning("Ad store unavailable at startup; the feed will be filled on first request")
        return None
