"""
Feed client: render from the local copy first, then reconcile with the server.
"""
import logging
import time
from typing import Callable, Optional

import requests

from .store import LocalStore, ADS_CACHE_KEY, FAVORITES_KEY, USER_PROFILE_KEY

logger = logging.getLogger(__name__)

DEFAULT_TTL = 600  # seconds
DEFAULT_TIMEOUT = 10
DEFAULT_LIMIT = 100


class AdsFeed:
    def __init__(
        self,
        base_url: str,
        store: LocalStore,
        render: Callable[[list], None],
        on_error: Optional[Callable[[Exception], None]] = None,
        *,
        version: Optional[str] = None,
        session: Optional[requests.Session] = None,
        ttl: float = DEFAULT_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        limit: int = DEFAULT_LIMIT,
        clock: Callable[[], float] = time.time,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.render = render
        self.on_error = on_error
        self.session = session or requests.Session()
        self.ttl = ttl
        self.timeout = timeout
        self.limit = limit
        self.clock = clock
        if version is not None:
            store.ensure_version(version)

    # -------------------------
    # Ads list
    # -------------------------
    def cached_ads(self, category="all"):
        """The local copy for ``category`` while inside the freshness window, else None."""
        cached = self.store.get(ADS_CACHE_KEY)
        if not isinstance(cached, dict) or cached.get("category") != category:
            return None
        captured_at = cached.get("capturedAt") or 0
        if self.clock() - captured_at >= self.ttl:
            return None
        return cached.get("ads")

    def fetch(self, category="all") -> list:
        response = self.session.get(
            f"{self.base_url}/api/ads/",
            params={"category": category, "limit": self.limit},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["ads"]

    def load(self, category="all"):
        """
        Render the local copy if it is fresh, then fetch the server list.
        Returns whatever is on screen afterwards (None if nothing could be shown).
        """
        shown = self.cached_ads(category)
        if shown is not None:
            self.render(shown)

        try:
            ads = self.fetch(category)
        except (requests.RequestException, ValueError, KeyError) as exc:
            if shown is not None:
                logger.info("Feed refresh failed, keeping cached ads on screen: %s", exc)
                return shown
            logger.warning("Feed load failed with nothing cached: %s", exc)
            if self.on_error is not None:
                self.on_error(exc)
            return None

        self.store.set(ADS_CACHE_KEY, {"category": category, "ads": ads, "capturedAt": self.clock()})
        if ads != shown:
            self.render(ads)
        return ads

    # -------------------------
    # Favorites and profile
    # -------------------------
    def favorites(self):
        return list(self.store.get(FAVORITES_KEY, []))

    def toggle_favorite(self, ad_id) -> bool:
        """Add or remove ``ad_id``; returns True if it is now a favorite."""
        favorites = self.favorites()
        if ad_id in favorites:
            favorites.remove(ad_id)
            added = False
        else:
            favorites.append(ad_id)
            added = True
        self.store.set(FAVORITES_KEY, favorites)
        return added

    def remember_user(self, profile: dict):
        self.store.set(USER_PROFILE_KEY, profile)

    def cached_user(self):
        return self.store.get(USER_PROFILE_KEY)

    def forget_user(self):
        self.store.remove(USER_PROFILE_KEY)
