import logging

from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiResponse
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Ad
from ..moderation import approve_ad, reject_ad, admin_edit_ad, delete_ad
from ..pagination import AdPagination
from ..permissions import IsAdminRole
from ..serializers import (
    AdminAdSerializer, ApproveSerializer, RejectSerializer,
    ModerationResultSerializer, RebuildResultSerializer,
)
from ..snapshot import snapshot_cache, durable_snapshot
from .filters import AdminAdFilter

logger = logging.getLogger(__name__)


@extend_schema(tags=["admin"])
@extend_schema_view(
    list=extend_schema(summary="All ads (any status)", description="Filter with ?status=&category=&q=..."),
    retrieve=extend_schema(summary="Ad details for moderation"),
    update=extend_schema(
        summary="Edit ad as admin",
        description="Content and featured flag. The moderation status is left as it is.",
        responses={200: AdminAdSerializer, 400: OpenApiResponse(description="Validation error")},
    ),
    partial_update=extend_schema(summary="Partially edit ad as admin"),
    destroy=extend_schema(summary="Delete any ad", responses={204: OpenApiResponse(description="Ad deleted")}),
)
class AdminAdViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """Moderation queue and admin-side ad maintenance."""
    serializer_class = AdminAdSerializer
    permission_classes = [IsAdminRole]
    pagination_class = AdPagination
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AdminAdFilter
    ordering_fields = ["created_at", "updated_at", "views", "contact_clicks"]
    ordering = ["-created_at"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return Ad.objects.select_related('owner').order_by('-created_at')

    @extend_schema(summary="Pending ads", description="Oldest first, the order moderators work through them.")
    @action(detail=False, methods=["get"])
    def pending(self, request):
        queryset = self.get_queryset().filter(status=Ad.Status.PENDING).order_by('created_at')
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    @extend_schema(
        summary="Approve ad",
        request=ApproveSerializer,
        responses={
            200: ModerationResultSerializer,
            404: OpenApiResponse(description="Ad not found"),
            409: OpenApiResponse(description="Ad cannot be approved from its current status"),
        },
    )
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        payload = ApproveSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        ad = approve_ad(request.user, pk, featured=payload.validated_data["featured"])
        return Response({"detail": _("Ad approved."), "ad": self.get_serializer(ad).data})

    @extend_schema(
        summary="Reject ad",
        request=RejectSerializer,
        responses={
            200: ModerationResultSerializer,
            404: OpenApiResponse(description="Ad not found"),
            409: OpenApiResponse(description="Ad cannot be rejected from its current status"),
        },
    )
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        payload = RejectSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        ad = reject_ad(request.user, pk, reason=payload.validated_data["reason"])
        return Response({"detail": _("Ad rejected."), "ad": self.get_serializer(ad).data})

    def update(self, request, pk=None, partial=False):
        ad = self.get_object()
        serializer = self.get_serializer(ad, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        ad = admin_edit_ad(request.user, ad.pk, serializer.validated_data)
        return Response(self.get_serializer(ad).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        ad = self.get_object()
        delete_ad(request.user, ad.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminCacheRebuildView(APIView):
    """Drop the in-memory feed and rewrite the snapshot file right away."""
    permission_classes = [IsAdminRole]

    @extend_schema(
        tags=["admin"],
        summary="Rebuild feed snapshot",
        request=None,
        responses={200: RebuildResultSerializer, 503: OpenApiResponse(description="Store unavailable")},
    )
    def post(self, request):
        snapshot_cache.invalidate()
        snapshot = durable_snapshot.rebuild()
        logger.info("Ad snapshot rebuilt on demand by %s", request.user.pk)
        return Response({
            "detail": _("Cache rebuilt."),
            "count": snapshot.count,
            "generatedAt": snapshot.generated_at,
        })
