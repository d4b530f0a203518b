from rest_framework import permissions


def is_admin(user):
    return bool(user and user.is_authenticated and getattr(user, "is_admin", False))


class IsAdminRole(permissions.BasePermission):
    """Only users with the admin role."""
    message = "Administrators only."

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsAdOwnerOrAdmin(permissions.BasePermission):
    """
    Read for everyone; edit only for the ad owner; delete for the owner or an admin.
    """
    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        user_id = getattr(request.user, "id", None)
        if request.method == "DELETE":
            return obj.owner_id == user_id or is_admin(request.user)
        return obj.owner_id == user_id
