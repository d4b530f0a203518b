from .ad import AdViewSet
from .filters import AdminAdFilter
from .market_prices import MarketPricesView, AdminMarketPricesView
from .moderation import AdminAdViewSet, AdminCacheRebuildView
from .stats import AdminStatsView

__all__ = [
    "AdViewSet",
    "AdminAdFilter",
    "MarketPricesView",
    "AdminMarketPricesView",
    "AdminAdViewSet",
    "AdminCacheRebuildView",
    "AdminStatsView",
]
