"""
Groups services layer.

All business logic for groups and their tour attendance lives here.
Views should call these functions instead of manipulating models directly.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    TripNotFoundError,
    TourNotFoundError,
    InvalidMembersError,
    TourNotInTripError,
    UnknownPriceTierError,
    CancellationReasonRequiredError,
    AttendanceNotConfirmedError,
)
from .group_management import (
    clean_member_names,
    create_group,
    get_group_by_id,
    get_groups_for_user,
    update_group,
    delete_group,
)
from .attendance_management import (
    AttendanceStatus,
    TourAttendanceEntry,
    GroupAttendanceLine,
    TourAttendanceReport,
    effective_date,
    confirm_attendance,
    cancel_attendance,
    record_payment,
    get_group_attendance,
    get_group_agenda,
    get_tour_attendance,
)

__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'TripNotFoundError',
    'TourNotFoundError',
    'InvalidMembersError',
    'TourNotInTripError',
    'UnknownPriceTierError',
    'CancellationReasonRequiredError',
    'AttendanceNotConfirmedError',
    # Group management
    'clean_member_names',
    'create_group',
    'get_group_by_id',
    'get_groups_for_user',
    'update_group',
    'delete_group',
    # Attendance
    'AttendanceStatus',
    'TourAttendanceEntry',
    'GroupAttendanceLine',
    'TourAttendanceReport',
    'effective_date',
    'confirm_attendance',
    'cancel_attendance',
    'record_payment',
    'get_group_attendance',
    'get_group_agenda',
    'get_tour_attendance',
]
