import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-change-me")
DEBUG = env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "rest_framework",
    "rest_framework_simplejwt",
    "django_filters",
    "drf_spectacular",

    "badel.users",
    "badel.ads",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "badel.users.middleware.JWTAuthCookieMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "badel.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "badel.wsgi.application"
ASGI_APPLICATION = "badel.asgi.application"

# Store read timeout, ms. On PostgreSQL this is statement_timeout and bounds every
# query. SQLite has no per-query limit: the value only caps how long a read waits
# on a database lock.
ADS_STORE_QUERY_TIMEOUT_MS = int(os.getenv("ADS_STORE_QUERY_TIMEOUT_MS", 5000))

if os.getenv("POSTGRES_DB"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB"),
            "USER": os.getenv("POSTGRES_USER", "postgres"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
            "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", 60)),
            "OPTIONS": {
                "options": f"-c statement_timeout={ADS_STORE_QUERY_TIMEOUT_MS}",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
            "OPTIONS": {"timeout": ADS_STORE_QUERY_TIMEOUT_MS / 1000},
        }
    }

AUTH_USER_MODEL = "users.CustomUser"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 6}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
]

LANGUAGE_CODE = os.getenv("DJANGO_LANGUAGE_CODE", "ar")
LANGUAGES = [
    ("ar", "Arabic"),
    ("en", "English"),
]
TIME_ZONE = "Asia/Beirut"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "badel-default",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticatedOrReadOnly",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "badel.ads.exceptions.api_exception_handler",
    "DEFAULT_THROTTLE_RATES": {
        "ads_list": os.getenv("THROTTLE_ADS_LIST", "300/min"),
        "ads_retrieve": os.getenv("THROTTLE_ADS_RETRIEVE", "300/min"),
        "ads_submit": os.getenv("THROTTLE_ADS_SUBMIT", "20/hour"),
        "ads_contact": os.getenv("THROTTLE_ADS_CONTACT", "60/min"),
        "auth_login": os.getenv("THROTTLE_AUTH_LOGIN", "10/min"),
        "auth_register": os.getenv("THROTTLE_AUTH_REGISTER", "5/hour"),
    },
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", 60))),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=int(os.getenv("JWT_REFRESH_DAYS", 7))),
    "AUTH_HEADER_TYPES": ("Bearer",),
}

AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", not DEBUG)
AUTH_COOKIE_SAMESITE = os.getenv("AUTH_COOKIE_SAMESITE", "Lax")

SPECTACULAR_SETTINGS = {
    "TITLE": "Badel API",
    "DESCRIPTION": "Classified ads: submission, moderation and a cache-first public feed.",
    "VERSION": "0.3.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

# -------------------------
# Ad feed caching
# -------------------------
ADS_SNAPSHOT_TTL = int(os.getenv("ADS_SNAPSHOT_TTL", 120))              # in-memory freshness, seconds
ADS_SNAPSHOT_FILE = os.getenv("ADS_SNAPSHOT_FILE", str(BASE_DIR / "public" / "ads-cache.json"))
ADS_SNAPSHOT_FILE_TTL = int(os.getenv("ADS_SNAPSHOT_FILE_TTL", 300))    # durable file freshness, seconds
ADS_SNAPSHOT_REBUILD_ASYNC = env_bool("ADS_SNAPSHOT_REBUILD_ASYNC", True)
ADS_SNAPSHOT_LOAD_ON_START = env_bool("ADS_SNAPSHOT_LOAD_ON_START", True)

ADS_PAGE_DEFAULT_LIMIT = int(os.getenv("ADS_PAGE_DEFAULT_LIMIT", 20))
ADS_PAGE_MAX_LIMIT = int(os.getenv("ADS_PAGE_MAX_LIMIT", 100))

# -------------------------
# Ad images (base64 payloads, compressed by the client)
# -------------------------
AD_MAX_IMAGES = 4
AD_IMAGE_MAX_MB = int(os.getenv("AD_IMAGE_MAX_MB", 2))
AD_IMAGE_ALLOWED_FORMATS = {"JPEG", "PNG", "WEBP"}
AD_IMAGE_MAX_WIDTH = 4000
AD_IMAGE_MAX_HEIGHT = 4000

ADMIN_CONTACT_PHONE = os.getenv("ADMIN_CONTACT_PHONE", "+961 71 163 211")

DATA_UPLOAD_MAX_MEMORY_SIZE = 12 * 1024 * 1024

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "badel": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
