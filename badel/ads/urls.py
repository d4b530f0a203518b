from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views_modules import (
    AdViewSet, AdminAdViewSet, AdminCacheRebuildView, AdminStatsView,
    MarketPricesView, AdminMarketPricesView,
)

app_name = "ads"

router = DefaultRouter()
router.register(r"ads", AdViewSet, basename="ad")
router.register(r"admin/ads", AdminAdViewSet, basename="admin-ad")

urlpatterns = [
    path("", include(router.urls)),
    path("prices/", MarketPricesView.as_view(), name="prices"),
    path("admin/prices/", AdminMarketPricesView.as_view(), name="admin-prices"),
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),
    path("admin/cache/rebuild/", AdminCacheRebuildView.as_view(), name="admin-cache-rebuild"),
]
