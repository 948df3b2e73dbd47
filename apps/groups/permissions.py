from rest_framework import permissions


class IsGroupLeaderOrTripAdmin(permissions.BasePermission):
    """
    Permission: User must lead the group or administer trips.
    """

    message = 'Only the group leader or a trip administrator can do this.'

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        user = request.user
        return user.is_staff or user.is_superuser or obj.is_led_by(user)
