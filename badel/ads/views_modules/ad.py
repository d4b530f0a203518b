import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import F
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)
from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from ..listing import list_ads, resolve_snapshot, category_counts
from ..models import Ad
from ..moderation import submit_ad, edit_ad, delete_ad
from ..pagination import AdPagination
from ..permissions import IsAdOwnerOrAdmin
from ..serializers import AdSerializer, PublicAdSerializer, SnapshotPageSerializer, DetailSerializer
from ..throttling import ScopedRateThrottleIsolated

logger = logging.getLogger(__name__)

FEED_PARAMETERS = [
    OpenApiParameter(
        "category", OpenApiTypes.STR,
        description="Exact category; 'all' or absent means no filter",
        enum=["all"] + list(Ad.Category.values),
    ),
    OpenApiParameter("subCategory", OpenApiTypes.STR, description="Exact sub-category"),
    OpenApiParameter("page", OpenApiTypes.INT, description="Page number (values < 1 fall back to 1)"),
    OpenApiParameter("limit", OpenApiTypes.INT, description="Page size (values <= 0 fall back to the default)"),
]


def feed_payload(result):
    return {
        "ads": result.ads,
        "total": result.total,
        "page": result.page,
        "limit": result.limit,
        "pages": result.pages,
        "source": result.source,
        "stale": result.stale,
        "generatedAt": result.captured_at.isoformat() if result.captured_at else None,
    }


def feed_query(request):
    params = request.query_params
    return {
        "category": params.get("category"),
        "sub_category": params.get("subCategory") or params.get("sub_category"),
        "page": params.get("page"),
        "limit": params.get("limit"),
    }


@extend_schema(tags=["ads"])
@extend_schema_view(
    list=extend_schema(
        summary="List published ads",
        description="Approved ads only, featured first then newest. Served from the feed cache.",
        auth=[],
        parameters=FEED_PARAMETERS,
        responses={200: SnapshotPageSerializer, 503: OpenApiResponse(description="Store down, no cached feed")},
    ),
    create=extend_schema(
        summary="Submit ad",
        description="Create a new ad. It always starts as pending and waits for moderation.",
        responses={
            201: OpenApiResponse(description="Ad submitted"),
            400: OpenApiResponse(description="Validation error"),
            401: OpenApiResponse(description="Authentication required"),
        },
    ),
    retrieve=extend_schema(
        summary="Get published ad",
        auth=[],
        responses={200: PublicAdSerializer, 404: OpenApiResponse(description="Ad not found")},
    ),
    update=extend_schema(
        summary="Edit own ad",
        description="Overwrites the ad and sends it back to moderation (status becomes pending).",
        responses={
            200: OpenApiResponse(description="Ad updated"),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Ad not found"),
        },
    ),
    partial_update=extend_schema(summary="Partially edit own ad"),
    destroy=extend_schema(
        summary="Delete ad",
        description="Owner or admin.",
        responses={
            204: OpenApiResponse(description="Ad deleted"),
            403: OpenApiResponse(description="Permission denied"),
            404: OpenApiResponse(description="Ad not found"),
        },
    ),
)
class AdViewSet(viewsets.GenericViewSet):
    """
    Public feed plus the owner's side of the ad lifecycle.

    Public reads never touch the store while the feed cache is warm;
    every write goes through the moderation module.
    """
    serializer_class = AdSerializer
    queryset = Ad.objects.select_related('owner')
    pagination_class = AdPagination
    throttle_classes = [ScopedRateThrottleIsolated]
    lookup_value_regex = r"\d+"

    PUBLIC_ACTIONS = ("list", "cache", "stats", "retrieve", "contact")
    THROTTLE_SCOPES = {
        "list": "ads_list",
        "cache": "ads_list",
        "stats": "ads_list",
        "retrieve": "ads_retrieve",
        "create": "ads_submit",
        "contact": "ads_contact",
    }

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        if self.action in ("update", "partial_update", "destroy"):
            return [permissions.IsAuthenticated(), IsAdOwnerOrAdmin()]
        return [permissions.IsAuthenticated()]

    def get_throttles(self):
        self.throttle_scope = self.THROTTLE_SCOPES.get(self.action)
        return super().get_throttles()

    # -------------------------
    # Public feed
    # -------------------------
    def list(self, request):
        return Response(feed_payload(list_ads(**feed_query(request))))

    @extend_schema(
        summary="Cached feed snapshot",
        description="Same shape as the list endpoint; answers from the in-memory or on-disk "
                    "snapshot (possibly stale) before falling back to the store.",
        auth=[],
        parameters=FEED_PARAMETERS,
        responses={200: SnapshotPageSerializer},
    )
    @action(detail=False, methods=["get"])
    def cache(self, request):
        return Response(feed_payload(list_ads(allow_stale=True, **feed_query(request))))

    @extend_schema(
        summary="Public feed statistics",
        auth=[],
        responses={
            200: OpenApiResponse(
                description="Counts",
                examples=[
                    OpenApiExample(
                        "Example response",
                        value={
                            "totalAds": 42,
                            "categoryCounts": {"home": 10, "cars": 12, "realestate": 5,
                                               "services": 8, "jobs": 4, "donations": 3},
                            "totalUsers": 130,
                            "stale": False,
                        },
                    )
                ],
            )
        },
    )
    @action(detail=False, methods=["get"])
    def stats(self, request):
        view = resolve_snapshot()
        try:
            total_users = get_user_model().objects.filter(is_active=True).count()
        except DatabaseError as exc:
            logger.warning("User count unavailable for public stats: %s", exc)
            total_users = None
        return Response({
            "totalAds": len(view.ads),
            "categoryCounts": category_counts(view.ads),
            "totalUsers": total_users,
            "stale": view.stale,
        })

    def retrieve(self, request, pk=None):
        ad = Ad.objects.select_related('owner').filter(pk=pk, status=Ad.Status.APPROVED).first()
        if ad is None:
            raise NotFound(_("Ad not found."))
        Ad.objects.filter(pk=ad.pk).update(views=F('views') + 1)
        return Response(PublicAdSerializer(ad).data)

    @extend_schema(
        summary="Record a contact click",
        request=None,
        auth=[],
        responses={202: DetailSerializer, 404: OpenApiResponse(description="Ad not found")},
    )
    @action(detail=True, methods=["post"])
    def contact(self, request, pk=None):
        updated = (Ad.objects
                   .filter(pk=pk, status=Ad.Status.APPROVED)
                   .update(contact_clicks=F('contact_clicks') + 1))
        if not updated:
            raise NotFound(_("Ad not found."))
        return Response({"detail": _("Recorded.")}, status=status.HTTP_202_ACCEPTED)

    # -------------------------
    # Owner side
    # -------------------------
    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ad = submit_ad(request.user, serializer.validated_data)
        return Response(
            {
                "detail": _("Your ad was submitted and will be reviewed by a moderator. "
                            "For faster approval contact the administrator."),
                "ad": self.get_serializer(ad).data,
                "adminContact": settings.ADMIN_CONTACT_PHONE,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None, partial=False):
        ad = self.get_object()
        serializer = self.get_serializer(ad, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        ad = edit_ad(request.user, ad.pk, serializer.validated_data)
        return Response({
            "detail": _("Ad updated. It will be reviewed again before it is published."),
            "ad": self.get_serializer(ad).data,
        })

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        ad = self.get_object()
        delete_ad(request.user, ad.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(summary="My ads", description="Caller's ads in any status, newest first.")
    @action(detail=False, methods=["get"])
    def mine(self, request):
        queryset = self.get_queryset().filter(owner=request.user).order_by('-created_at')
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(self.get_serializer(queryset, many=True).data)
