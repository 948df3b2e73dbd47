"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from apps.trips.services.exceptions import TripNotFoundError, TourNotFoundError


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError):
    """Raised when a group does not exist or is inaccessible."""
    pass


class InvalidMembersError(GroupsServiceError):
    """Raised when confirmed names are not members of the group."""
    pass


class TourNotInTripError(GroupsServiceError):
    """Raised when a tour belongs to a different trip than the group."""
    pass


class UnknownPriceTierError(GroupsServiceError):
    """Raised when a selected price key matches no usable tier of the tour."""
    pass


class CancellationReasonRequiredError(GroupsServiceError):
    """Raised when cancelling attendance without a reason."""
    pass


class AttendanceNotConfirmedError(GroupsServiceError):
    """Raised when recording payment for a tour the group has not confirmed."""
    pass


__all__ = [
    'GroupsServiceError',
    'GroupNotFoundError',
    'InvalidMembersError',
    'TourNotInTripError',
    'UnknownPriceTierError',
    'CancellationReasonRequiredError',
    'AttendanceNotConfirmedError',
    'TripNotFoundError',
    'TourNotFoundError',
]
