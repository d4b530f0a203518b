from decimal import Decimal

from django.db import models


class MarketPrices(models.Model):
    """Reference prices shown next to the feed. A single row is kept."""
    gold_ounce = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("2750"))
    gold_lira = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("580"))
    silver_ounce = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("32"))
    dollar_rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("89500"))
    updated_by = models.CharField(max_length=100, default="admin")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "market prices"

    def __str__(self):
        return f"Market prices ({self.updated_at:%Y-%m-%d %H:%M})" if self.updated_at else "Market prices"

    @classmethod
    def get_prices(cls):
        prices = cls.objects.order_by("pk").first()
        if prices is None:
            prices = cls.objects.create()
        return prices
