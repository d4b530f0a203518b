from datetime import datetime, timezone

from django.conf import settings
from rest_framework_simplejwt.tokens import RefreshToken

ACCESS_COOKIE = 'access_token'
REFRESH_COOKIE = 'refresh_token'


def _set_cookie(response, key, token):
    response.set_cookie(
        key=key,
        value=str(token),
        httponly=True,
        secure=getattr(settings, 'AUTH_COOKIE_SECURE', not settings.DEBUG),
        samesite=getattr(settings, 'AUTH_COOKIE_SAMESITE', 'Lax'),
        expires=datetime.fromtimestamp(token['exp'], tz=timezone.utc),
        path='/',
    )


def set_access_cookie(response, access_token):
    _set_cookie(response, ACCESS_COOKIE, access_token)


def set_auth_cookies(response, user):
    """Issue a fresh token pair for ``user`` as httpOnly cookies."""
    refresh = RefreshToken.for_user(user)
    _set_cookie(response, ACCESS_COOKIE, refresh.access_token)
    _set_cookie(response, REFRESH_COOKIE, refresh)
    return refresh


def clear_auth_cookies(response):
    response.delete_cookie(ACCESS_COOKIE, path='/')
    response.delete_cookie(REFRESH_COOKIE, path='/')
