import logging

from django.db import DatabaseError

from ..exceptions import UpstreamUnavailable
from ..models import Ad
from ..serializers.snapshot import PublicAdSerializer

logger = logging.getLogger(__name__)

# Canonical feed order, shared by memory, file and direct store reads.
FEED_ORDERING = ("-is_featured", "-created_at", "-id")


def approved_ads_queryset():
    return (
        Ad.objects
        .filter(status=Ad.Status.APPROVED)
        .select_related("owner")
        .order_by(*FEED_ORDERING)
    )


def fetch_public_ads():
    """
    Read the approved set from the store and project it to the public shape.
    Raises UpstreamUnavailable when the database errors out or times out.
    """
    try:
        ads = list(approved_ads_queryset())
    except DatabaseError as exc:
        logger.warning("Ad store read failed: %s", exc)
        raise UpstreamUnavailable() from exc
    return [dict(item) for item in PublicAdSerializer(ads, many=True).data]
