from unittest import mock

from django.conf import settings
from django.db import OperationalError
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework.exceptions import NotFound
from rest_framework.test import APITestCase

from badel.ads.exceptions import api_exception_handler
from badel.ads.throttling import ScopedRateThrottleIsolated

# Lower only the rates for the scopes we hit, keep the rest.
TEST_RATES = {
    **settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"],
    "ads_list": "2/min",
    "auth_login": "2/min",
}


class ExceptionHandlerTests(SimpleTestCase):
    def test_api_exceptions_keep_drf_behaviour(self):
        res = api_exception_handler(NotFound(), {"view": None})
        self.assertEqual(res.status_code, 404)

    def test_database_error_becomes_retryable_503(self):
        with self.assertLogs("badel.ads.exceptions", level="ERROR"):
            res = api_exception_handler(OperationalError("could not connect to server at 10.0.0.5"), {"view": None})
        self.assertEqual(res.status_code, 503)
        self.assertNotIn("10.0.0.5", str(res.data["detail"]))

    def test_unexpected_error_is_generic_500(self):
        with self.assertLogs("badel.ads.exceptions", level="ERROR"):
            res = api_exception_handler(RuntimeError("secret internals"), {"view": None})
        self.assertEqual(res.status_code, 500)
        self.assertNotIn("secret", str(res.data["detail"]))


@mock.patch.object(ScopedRateThrottleIsolated, "THROTTLE_RATES", TEST_RATES)
class ThrottleTests(APITestCase):
    def test_ads_list_throttling(self):
        """Third anonymous GET to the feed is throttled (429)."""
        url = reverse("ads:ad-list")
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 429)

    def test_login_throttling(self):
        """Third POST with wrong creds is throttled (429) on the auth_login scope."""
        url = reverse("users:login")
        payload = {"email": "nonexistent@example.com", "password": "wrongpassword"}
        self.assertEqual(self.client.post(url, payload).status_code, 401)
        self.assertEqual(self.client.post(url, payload).status_code, 401)
        self.assertEqual(self.client.post(url, payload).status_code, 429)
