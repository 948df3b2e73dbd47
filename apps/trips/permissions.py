from rest_framework import permissions


class IsTripAdmin(permissions.BasePermission):
    """
    Permission: User must administer trips (staff or superuser).
    """

    message = 'Only trip administrators can do this.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and (user.is_staff or user.is_superuser))


class IsTripAdminOrReadOnly(IsTripAdmin):
    """
    Permission: Anyone authenticated may read; only trip administrators write.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
