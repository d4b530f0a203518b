from django.contrib.auth.password_validation import validate_password
from django.core import exceptions as django_exc
from rest_framework import serializers

from .models import CustomUser


class RegistrationSerializer(serializers.ModelSerializer):
    """Registration payload -> creates a user and hashes password."""
    password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})
    phone_number = serializers.CharField(required=False, allow_blank=True, max_length=30)

    class Meta:
        model = CustomUser
        fields = ('email', 'password', 'name', 'phone_number')

    def validate_email(self, value):
        email = CustomUser.objects.normalize_email(value)
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_password(self, value):
        """Run Django's password validators (AUTH_PASSWORD_VALIDATORS)."""
        try:
            validate_password(value)
        except django_exc.ValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        return CustomUser.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
            phone_number=validated_data.get('phone_number', ''),
        )


class CustomUserSerializer(serializers.ModelSerializer):
    """The caller's own profile; only name and phone are editable."""

    class Meta:
        model = CustomUser
        fields = (
            'id', 'email', 'name', 'phone_number', 'role',
            'is_premium', 'premium_plan', 'premium_expiry',
            'last_active', 'date_joined',
        )
        read_only_fields = (
            'id', 'email', 'role',
            'is_premium', 'premium_plan', 'premium_expiry',
            'last_active', 'date_joined',
        )


class AdminUserSerializer(CustomUserSerializer):
    ads_count = serializers.IntegerField(read_only=True)

    class Meta(CustomUserSerializer.Meta):
        fields = CustomUserSerializer.Meta.fields + ('is_active', 'ads_count')
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True, style={'input_type': 'password'})
