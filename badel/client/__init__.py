from .feed import AdsFeed
from .store import LocalStore

__all__ = ["AdsFeed", "LocalStore"]
