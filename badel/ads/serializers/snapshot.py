from rest_framework import serializers

from badel.ads.models import Ad


class PublicAdSerializer(serializers.ModelSerializer):
    """
    Public-safe projection of an approved ad, as stored in the feed caches.
    Moderation fields (status, admin note) and counters are left out.
    """
    subCategory = serializers.CharField(source="sub_category", allow_null=True, read_only=True)
    jobType = serializers.CharField(source="job_type", allow_null=True, read_only=True)
    jobExperience = serializers.CharField(source="job_experience", allow_null=True, read_only=True)
    contactHandle = serializers.CharField(source="whatsapp", read_only=True)
    images = serializers.ListField(child=serializers.CharField(), read_only=True)
    isFeatured = serializers.BooleanField(source="is_featured", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    ownerName = serializers.SerializerMethodField()

    class Meta:
        model = Ad
        fields = [
            "id", "title", "description",
            "category", "subCategory", "jobType", "jobExperience",
            "price", "location", "contactHandle", "images",
            "isFeatured", "createdAt", "ownerName",
        ]
        read_only_fields = fields

    def get_ownerName(self, obj):
        owner = getattr(obj, "owner", None)
        return owner.name if owner is not None else None


class SnapshotPageSerializer(serializers.Serializer):
    """Response shape of the public list and cache endpoints (schema only)."""
    ads = PublicAdSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    pages = serializers.IntegerField()
    source = serializers.CharField()
    stale = serializers.BooleanField()
    generatedAt = serializers.DateTimeField(allow_null=True)
