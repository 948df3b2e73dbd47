"""
Custom permission classes for finance app.

Permission Classes:
    IsGroupLeaderForStatement - Group statement is visible to its leader
        and to trip administrators
"""

from rest_framework.permissions import BasePermission
from apps.groups.models import Group


class IsGroupLeaderForStatement(BasePermission):
    """
    Permission check for a group's financial statement.

    Trip administrators see every statement. Anyone else must be the
    leader account of the group in the URL. A missing group is denied for
    non-administrators so group ids cannot be probed.
    """

    message = 'Only the group leader or a trip administrator can view this statement.'

    def has_permission(self, request, view):
        user = request.user
        if user.is_staff or user.is_superuser:
            return True

        group_id = view.kwargs.get('group_id')
        return Group.objects.filter(id=group_id, leader=user).exists()
