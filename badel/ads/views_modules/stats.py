from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Count
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Ad
from ..permissions import IsAdminRole

ACTIVE_WINDOW = timedelta(hours=24)


class AdminStatsView(APIView):
    """Dashboard numbers, read straight from the store."""
    permission_classes = [IsAdminRole]

    @extend_schema(
        tags=["admin"],
        summary="Admin dashboard statistics",
        responses={
            200: OpenApiResponse(
                description="Counts",
                examples=[
                    OpenApiExample(
                        "Example response",
                        value={
                            "totalUsers": 130,
                            "activeUsers": 12,
                            "totalAds": 60,
                            "pendingAds": 5,
                            "approvedAds": 50,
                            "rejectedAds": 5,
                            "categoryCounts": {"home": 10, "cars": 12, "realestate": 9,
                                               "services": 8, "jobs": 7, "donations": 4},
                        },
                    )
                ],
            )
        },
    )
    def get(self, request):
        User = get_user_model()
        since = timezone.now() - ACTIVE_WINDOW

        by_status = dict(Ad.objects.values_list('status').annotate(n=Count('id')).order_by())
        category_counts = {value: 0 for value in Ad.Category.values}
        approved = (Ad.objects.filter(status=Ad.Status.APPROVED)
                    .values_list('category').annotate(n=Count('id')).order_by())
        for category, n in approved:
            if category in category_counts:
                category_counts[category] = n

        return Response({
            "totalUsers": User.objects.count(),
            "activeUsers": User.objects.filter(last_active__gte=since).count(),
            "totalAds": sum(by_status.values()),
            "pendingAds": by_status.get(Ad.Status.PENDING, 0),
            "approvedAds": by_status.get(Ad.Status.APPROVED, 0),
            "rejectedAds": by_status.get(Ad.Status.REJECTED, 0),
            "categoryCounts": category_counts,
        })
