from rest_framework import serializers


class PublicUserTinySerializer(serializers.Serializer):
    """Nested user reference on ad payloads."""
    id = serializers.IntegerField()
    name = serializers.CharField(allow_blank=True, required=False)


class AdminUserTinySerializer(PublicUserTinySerializer):
    """Owner details shown to moderators."""
    email = serializers.EmailField(allow_null=True, required=False)
    phone_number = serializers.CharField(allow_blank=True, allow_null=True, required=False)


class DetailSerializer(serializers.Serializer):
    detail = serializers.CharField()
