import logging

from django.contrib.auth import authenticate
from django.db.models import Count
from drf_spectacular.utils import extend_schema, OpenApiResponse, extend_schema_view
from rest_framework import mixins, viewsets, status
from rest_framework import serializers as rf_serializers
from rest_framework.exceptions import ValidationError
from rest_framework.generics import CreateAPIView, RetrieveUpdateAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.views import (
    TokenObtainPairView as BaseTokenObtainPairView,
    TokenRefreshView as BaseTokenRefreshView,
)

from badel.ads.permissions import IsAdminRole
from badel.ads.throttling import ScopedRateThrottleIsolated
from .cookies import set_auth_cookies, clear_auth_cookies
from .models import CustomUser
from .serializers import (
    CustomUserSerializer, AdminUserSerializer, RegistrationSerializer, LoginSerializer,
)

logger = logging.getLogger(__name__)


class ThrottledTokenObtainPairView(BaseTokenObtainPairView):
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_login'


class ThrottledTokenRefreshView(BaseTokenRefreshView):
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_login'


class AuthResponseSerializer(rf_serializers.Serializer):
    detail = rf_serializers.CharField()
    user = CustomUserSerializer()


class SimpleDetailSerializer(rf_serializers.Serializer):
    detail = rf_serializers.CharField()


@extend_schema(
    summary="Register & set auth cookies",
    request=RegistrationSerializer,
    responses={
        201: OpenApiResponse(
            response=AuthResponseSerializer,
            description="Account created; JWT tokens are set as httpOnly cookies."
        ),
        400: OpenApiResponse(description="Validation error")},
    auth=[],
    tags=["auth"],
)
class RegisterView(CreateAPIView):
    serializer_class = RegistrationSerializer
    permission_classes = [AllowAny]
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = 'auth_register'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("User %s registered", user.pk)

        response = Response(
            {"detail": "Account created successfully.", "user": CustomUserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )
        set_auth_cookies(response, user)
        return response


@extend_schema(tags=["auth"])
class LoginView(APIView):
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer
    throttle_classes = (ScopedRateThrottleIsolated,)
    throttle_scope = 'auth_login'

    @extend_schema(
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(response=AuthResponseSerializer, description="Login successful; cookies set"),
            401: OpenApiResponse(response=SimpleDetailSerializer, description="Invalid credentials"),
        },
        auth=[],
    )
    def post(self, request, *args, **kwargs):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate(
            request,
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
        if user is None:
            return Response({"detail": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        user.touch_last_active()
        response = Response(
            {"detail": "Login successful", "user": CustomUserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
        set_auth_cookies(response, user)
        return response


@extend_schema(
    summary="Logout",
    request=None,
    responses={
        200: OpenApiResponse(response=SimpleDetailSerializer, description="Logged out"),
        401: OpenApiResponse(description="Unauthorized"),
    },
    tags=["auth"],
)
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        response = Response({"detail": "Logout successful"}, status=status.HTTP_200_OK)
        clear_auth_cookies(response)
        return response


@extend_schema(tags=["auth"])
@extend_schema_view(
    get=extend_schema(summary="Current user profile"),
    put=extend_schema(summary="Update name and phone"),
    patch=extend_schema(summary="Partially update name and phone"),
)
class MeView(RetrieveUpdateAPIView):
    serializer_class = CustomUserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


@extend_schema(tags=["admin"])
@extend_schema_view(
    list=extend_schema(summary="List users"),
    destroy=extend_schema(
        summary="Delete user",
        description="Deletes the account and every ad it owns.",
        responses={204: OpenApiResponse(description="User deleted"),
                   400: OpenApiResponse(description="Admins cannot delete themselves")},
    ),
)
class AdminUserViewSet(mixins.ListModelMixin,
                       mixins.DestroyModelMixin,
                       viewsets.GenericViewSet):
    serializer_class = AdminUserSerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        return CustomUser.objects.annotate(ads_count=Count('ads')).order_by('-date_joined')

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise ValidationError({"detail": "You cannot delete your own account."})
        logger.info("User %s deleted by admin %s", instance.pk, self.request.user.pk)
        instance.delete()
