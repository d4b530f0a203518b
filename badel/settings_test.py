# Test settings override: isolate caches, run snapshot rebuilds inline.
import tempfile
from pathlib import Path

from .settings import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# In-memory cache to avoid cross-test pollution (throttle history, etc.)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
        "TIMEOUT": 0,
        "KEY_PREFIX": "tests",
    }
}

# Speed up tests
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

LANGUAGE_CODE = "en"

# Durable snapshot goes to a throwaway directory; rebuilds run in the request thread
ADS_SNAPSHOT_FILE = str(Path(tempfile.mkdtemp(prefix="badel-tests-")) / "ads-cache.json")
ADS_SNAPSHOT_REBUILD_ASYNC = False
ADS_SNAPSHOT_LOAD_ON_START = False

ADS_PAGE_DEFAULT_LIMIT = 20
ADS_PAGE_MAX_LIMIT = 100
