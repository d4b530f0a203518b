from rest_framework import serializers

from .ad import AdminAdSerializer


class ApproveSerializer(serializers.Serializer):
    featured = serializers.BooleanField(required=False, default=False)


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)


class ModerationResultSerializer(serializers.Serializer):
    detail = serializers.CharField()
    ad = AdminAdSerializer()


class RebuildResultSerializer(serializers.Serializer):
    detail = serializers.CharField()
    count = serializers.IntegerField()
    generatedAt = serializers.DateTimeField()
