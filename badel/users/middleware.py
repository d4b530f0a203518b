from django.utils.timezone import now
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken, AccessToken

from .cookies import ACCESS_COOKIE, REFRESH_COOKIE, set_access_cookie


class JWTAuthCookieMiddleware:
    """
    Read the JWT from httpOnly cookies and inject it as a Bearer header.
    An expired access token is re-issued from a valid refresh cookie.
    An explicit Authorization header always wins.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.META.get('HTTP_AUTHORIZATION'):
            return self.get_response(request)

        access_token = request.COOKIES.get(ACCESS_COOKIE)
        refresh_token = request.COOKIES.get(REFRESH_COOKIE)

        if access_token:
            try:
                token = AccessToken(access_token)
                if token['exp'] < now().timestamp():
                    raise TokenError("Access token expired")
                request.META['HTTP_AUTHORIZATION'] = f'Bearer {access_token}'
                return self.get_response(request)
            except TokenError:
                pass

        if refresh_token:
            try:
                new_access = RefreshToken(refresh_token).access_token
            except TokenError:
                # Anonymous request; protected views answer 401 on their own.
                return self.get_response(request)
            request.META['HTTP_AUTHORIZATION'] = f'Bearer {new_access}'
            response = self.get_response(request)
            set_access_cookie(response, new_access)
            return response

        return self.get_response(request)
