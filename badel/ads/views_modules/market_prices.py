import logging

from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import MarketPrices
from ..permissions import IsAdminRole
from ..serializers import MarketPricesSerializer

logger = logging.getLogger(__name__)


class MarketPricesView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(tags=["prices"], summary="Current gold, silver and dollar prices", auth=[],
                   responses={200: MarketPricesSerializer})
    def get(self, request):
        return Response(MarketPricesSerializer(MarketPrices.get_prices()).data)


class AdminMarketPricesView(APIView):
    """Admins overwrite the displayed prices; the editor's email is recorded."""
    permission_classes = [IsAdminRole]

    def _save(self, request, partial):
        prices = MarketPrices.get_prices()
        serializer = MarketPricesSerializer(prices, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save(updated_by=request.user.email)
        logger.info("Market prices updated by %s", request.user.email)
        return Response(serializer.data)

    @extend_schema(tags=["admin"], summary="Replace market prices",
                   request=MarketPricesSerializer, responses={200: MarketPricesSerializer})
    def put(self, request):
        return self._save(request, partial=False)

    @extend_schema(tags=["admin"], summary="Update some market prices",
                   request=MarketPricesSerializer, responses={200: MarketPricesSerializer})
    def patch(self, request):
        return self._save(request, partial=True)
