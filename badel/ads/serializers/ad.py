from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from badel.ads.models import Ad
from badel.ads.validators import validate_image_list
from .common import PublicUserTinySerializer, AdminUserTinySerializer


class AdSerializer(serializers.ModelSerializer):
    """Full ad representation for its owner; also the write payload for submit/edit."""
    owner = serializers.SerializerMethodField(read_only=True)
    owner_id = serializers.IntegerField(read_only=True)
    images = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    class Meta:
        model = Ad
        fields = [
            "id", "title", "description",
            "category", "sub_category", "job_type", "job_experience",
            "price", "location", "whatsapp", "images",
            "status", "admin_note", "is_featured",
            "views", "contact_clicks",
            "owner", "owner_id",
            "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "status", "admin_note", "is_featured",
            "views", "contact_clicks",
            "owner", "owner_id",
            "created_at", "updated_at",
        ]

    @extend_schema_field(PublicUserTinySerializer)
    def get_owner(self, obj):
        owner = obj.owner
        return {"id": owner.pk, "name": owner.name}

    def validate_images(self, value):
        return validate_image_list(value)

    def validate_sub_category(self, value):
        # Free-form per category; blank means "none".
        value = (value or "").strip()
        return value or None

    def validate(self, attrs):
        """
        Job details only make sense for job ads; they are dropped for every
        other category (the content is rebuilt from the category on save).
        """
        category = attrs.get("category", getattr(self.instance, "category", None))
        if category != Ad.Category.JOBS:
            attrs.pop("job_type", None)
            attrs.pop("job_experience", None)
        return attrs


class AdminAdSerializer(AdSerializer):
    """Moderator view: owner contact details, writable featured flag."""
    is_featured = serializers.BooleanField(required=False)

    class Meta(AdSerializer.Meta):
        read_only_fields = [f for f in AdSerializer.Meta.read_only_fields if f != "is_featured"]

    @extend_schema_field(AdminUserTinySerializer)
    def get_owner(self, obj):
        owner = obj.owner
        return {
            "id": owner.pk,
            "name": owner.name,
            "email": owner.email,
            "phone_number": owner.phone_number,
        }
