from .ad import AdSerializer, AdminAdSerializer
from .common import PublicUserTinySerializer, AdminUserTinySerializer, DetailSerializer
from .market_prices import MarketPricesSerializer
from .moderation import (
    ApproveSerializer, RejectSerializer, ModerationResultSerializer, RebuildResultSerializer,
)
from .snapshot import PublicAdSerializer, SnapshotPageSerializer

__all__ = [
    "AdSerializer",
    "AdminAdSerializer",
    "PublicUserTinySerializer",
    "AdminUserTinySerializer",
    "DetailSerializer",
    "MarketPricesSerializer",
    "ApproveSerializer",
    "RejectSerializer",
    "ModerationResultSerializer",
    "RebuildResultSerializer",
    "PublicAdSerializer",
    "SnapshotPageSerializer",
]
