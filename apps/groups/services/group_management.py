"""
Group management service.

Handles group CRUD operations.
"""

import logging
from typing import Optional, Dict, Any, List
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group
from apps.trips.models import Trip

from .exceptions import GroupNotFoundError, TripNotFoundError


logger = logging.getLogger(__name__)


def clean_member_names(names: Optional[List[str]]) -> List[str]:
    """Strip names, drop blanks and duplicates, keep order."""
    cleaned = []
    for name in names or []:
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


@transaction.atomic
def create_group(
    *,
    trip_id: UUID,
    name: str,
    leader_name: str,
    members: Optional[List[str]] = None,
    leader_email: str = '',
    leader_phone: str = '',
    leader: Optional[User] = None
) -> Group:
    """
    Create a group for a trip.

    Args:
        trip_id: UUID of the trip
        name: Group name
        leader_name: Name of the contact person
        members: Member names
        leader_email: Leader contact email
        leader_phone: Leader contact phone
        leader: User account acting for the group

    Returns:
        Created Group instance

    Raises:
        TripNotFoundError: If trip doesn't exist
    """
    try:
        trip = Trip.objects.get(id=trip_id)
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip {trip_id} not found")

    group = Group.objects.create(
        trip=trip,
        name=name,
        members=clean_member_names(members),
        leader_name=leader_name.strip(),
        leader_email=leader_email,
        leader_phone=leader_phone,
        leader=leader,
    )
    logger.info("Group %s created for trip %s", group.id, trip.id)
    return group


def get_group_by_id(group_id: UUID) -> Group:
    """
    Get group by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .select_related('trip', 'leader')
            .prefetch_related('tour_attendance')
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def get_groups_for_user(user: User, *, trip_id: Optional[UUID] = None) -> QuerySet[Group]:
    """Every group for trip administrators; led groups for anyone else."""
    queryset = Group.objects.select_related('trip', 'leader').prefetch_related('tour_attendance')
    if not (user.is_staff or user.is_superuser):
        queryset = queryset.filter(leader=user)
    if trip_id:
        queryset = queryset.filter(trip_id=trip_id)
    return queryset


@transaction.atomic
def update_group(*, group_id: UUID, data: Dict[str, Any]) -> Group:
    """
    Update group details.

    Removing a member does not rewrite stored attendance: names already
    confirmed on a tour stay there until the group confirms that tour again.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    for field in ['name', 'leader_name', 'leader_email', 'leader_phone', 'leader']:
        if field in data:
            setattr(group, field, data[field])

    if 'members' in data:
        group.members = clean_member_names(data['members'])

    group.save()
    return group


@transaction.atomic
def delete_group(*, group_id: UUID) -> None:
    """
    Delete a group and its attendance.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    deleted, _ = Group.objects.filter(id=group_id).delete()
    if not deleted:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
    logger.info("Group %s deleted", group_id)
