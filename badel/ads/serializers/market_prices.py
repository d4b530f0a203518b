from rest_framework import serializers

from badel.ads.models import MarketPrices


class MarketPricesSerializer(serializers.ModelSerializer):
    class Meta:
        model = MarketPrices
        fields = ["gold_ounce", "gold_lira", "silver_ounce", "dollar_rate", "updated_by", "updated_at"]
        read_only_fields = ["updated_by", "updated_at"]

    def validate(self, attrs):
        for field, value in attrs.items():
            if value is not None and value < 0:
                raise serializers.ValidationError({field: "Price must be >= 0."})
        return attrs
