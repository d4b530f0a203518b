from .ad import Ad
from .market_prices import MarketPrices

__all__ = [
    "Ad",
    "MarketPrices",
]
