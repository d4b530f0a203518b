"""Small persistent key/value store for the feed client."""
import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

VERSION_KEY = "app_version"
ADS_CACHE_KEY = "ads_cache"
FAVORITES_KEY = "favorites"
USER_PROFILE_KEY = "user_profile"

# Keys dropped together whenever the app version changes
VERSIONED_KEYS = (ADS_CACHE_KEY, FAVORITES_KEY, USER_PROFILE_KEY)


class LocalStore:
    """
    JSON file holding a flat dict. Every write rewrites the whole file
    (temp file + rename), so a crash leaves either the old or the new state.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Discarding unreadable client store %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key, default=None):
        return self._load().get(key, default)

    def set(self, key, value):
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, *keys):
        data = self._load()
        if any(key in data for key in keys):
            for key in keys:
                data.pop(key, None)
            self._dump(data)

    def keys(self):
        return list(self._load())

    def ensure_version(self, version) -> bool:
        """
        Purge every versioned key if the stored version differs from ``version``.
        Returns True when a purge happened.
        """
        data = self._load()
        if data.get(VERSION_KEY) == version:
            return False
        for key in VERSIONED_KEYS:
            data.pop(key, None)
        data[VERSION_KEY] = version
        self._dump(data)
        logger.info("Client store purged for version %s", version)
        return True
