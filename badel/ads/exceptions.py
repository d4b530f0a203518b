import logging

from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class UpstreamUnavailable(APIException):
    """The ad store could not be reached (or timed out). Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = _("The service is temporarily unavailable, please try again shortly.")
    default_code = "upstream_unavailable"


class InvalidTransition(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _("This action is not allowed for the ad in its current state.")
    default_code = "invalid_transition"


class CacheRebuildFailure(Exception):
    """Durable snapshot could not be written. Logged, never shown to clients."""


def api_exception_handler(exc, context):
    """
    DRF handler plus two fallbacks: database failures become a retryable 503,
    anything else unhandled becomes a generic 500 without internal detail.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "?"

    if isinstance(exc, DatabaseError):
        logger.error("Store failure in %s: %s", view_name, exc)
        unavailable = UpstreamUnavailable()
        return Response({"detail": unavailable.detail}, status=unavailable.status_code)

    logger.exception("Unhandled error in %s", view_name, exc_info=exc)
    return Response(
        {"detail": _("Something went wrong, please try again later.")},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
