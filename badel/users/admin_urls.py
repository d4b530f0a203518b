from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet

app_name = "users-admin"

router = SimpleRouter()
router.register(r"users", AdminUserViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
