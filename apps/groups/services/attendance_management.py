"""
Attendance management service.

Confirms, cancels and records payment for a group's attendance on a tour,
and builds the per-group and per-tour attendance views.

Every write locks the group row and replaces the whole stored record for
the (group, tour) pair. Reads go through normalize_attendance() so both
stored shapes (bare name list and structured record) are accepted, and all
money figures come from the pricing valuation functions.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.groups.models import Group, PaymentMethod, TourAttendance
from apps.pricing import (
    AttendanceRecord,
    AttendanceValuation,
    normalize_attendance,
    parse_tiers,
    resolve_tier,
    value_attendance,
)
from apps.trips.models import Tour

from .exceptions import (
    GroupNotFoundError,
    TourNotFoundError,
    InvalidMembersError,
    TourNotInTripError,
    UnknownPriceTierError,
    CancellationReasonRequiredError,
    AttendanceNotConfirmedError,
)
from .group_management import clean_member_names, get_group_by_id


logger = logging.getLogger(__name__)


class AttendanceStatus:
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    PENDING = 'pending'


# =============================================================================
# Result types
# =============================================================================

@dataclass(frozen=True)
class TourAttendanceEntry:
    """One tour of a group's trip with the group's attendance on it."""

    tour: Tour
    attendance: AttendanceRecord
    valuation: AttendanceValuation
    effective_date: date

    @property
    def status(self) -> str:
        if self.attendance.is_confirmed:
            return AttendanceStatus.CONFIRMED
        if self.attendance.is_cancelled:
            return AttendanceStatus.CANCELLED
        return AttendanceStatus.PENDING


@dataclass(frozen=True)
class GroupAttendanceLine:
    """One group's attendance on a given tour."""

    group: Group
    attendance: AttendanceRecord
    valuation: AttendanceValuation
    effective_date: date


@dataclass
class TourAttendanceReport:
    """Groups attending a tour, with totals."""

    tour: Tour
    groups: List[GroupAttendanceLine] = field(default_factory=list)
    cancellations: List[GroupAttendanceLine] = field(default_factory=list)
    total_people: int = 0
    total_revenue: Decimal = Decimal('0')
    paid_revenue: Decimal = Decimal('0')

    @property
    def outstanding_revenue(self) -> Decimal:
        return self.total_revenue - self.paid_revenue


# =============================================================================
# Helpers
# =============================================================================

def effective_date(tour, attendance: AttendanceRecord) -> date:
    """The custom date a group chose, or the tour's own date."""
    if attendance.custom_date:
        try:
            parsed = parse_date(attendance.custom_date[:10])
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    return tour.date


def _lock_group(group_id: UUID) -> Group:
    try:
        return Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def _get_trip_tour(group: Group, tour_id: UUID) -> Tour:
    try:
        tour = Tour.objects.get(id=tour_id)
    except Tour.DoesNotExist:
        raise TourNotFoundError(f"Tour {tour_id} not found")

    if tour.trip_id != group.trip_id:
        raise TourNotInTripError(
            f"Tour '{tour.name}' is not part of the trip of {group.name}"
        )
    return tour


def _stored_attendance(group: Group, tour: Tour) -> AttendanceRecord:
    entry = TourAttendance.objects.filter(group=group, tour=tour).first()
    return normalize_attendance(entry.record if entry else None)


def _save(group: Group, tour: Tour, record: AttendanceRecord) -> TourAttendance:
    entry, _ = TourAttendance.objects.update_or_create(
        group=group,
        tour=tour,
        defaults={'record': record.to_dict()},
    )
    return entry


# =============================================================================
# Writes
# =============================================================================

@transaction.atomic
def confirm_attendance(
    *,
    group_id: UUID,
    tour_id: UUID,
    members: List[str],
    custom_date: Optional[date] = None,
    selected_price_key: Optional[str] = None
) -> TourAttendance:
    """
    Confirm which members of a group go on a tour.

    Replaces the members, custom date and selected tier of any previous
    confirmation. Payment state already recorded for the pair is kept.

    Args:
        group_id: UUID of the group
        tour_id: UUID of the tour
        members: Names going; each must be a member or the leader
        custom_date: Date chosen by the group, None for the tour date
        selected_price_key: Ticket tier; stored as the tour's own tier key

    Returns:
        The upserted TourAttendance row

    Raises:
        GroupNotFoundError: If group doesn't exist
        TourNotFoundError: If tour doesn't exist
        TourNotInTripError: If the tour belongs to another trip
        InvalidMembersError: If no names are given or a name is unknown
        UnknownPriceTierError: If the tour has tiers and the key matches no usable one
    """
    group = _lock_group(group_id)
    tour = _get_trip_tour(group, tour_id)

    names = clean_member_names(members)
    if not names:
        raise InvalidMembersError(
            "Select at least one member. To withdraw from a tour, cancel it instead."
        )

    participants = group.participants
    unknown = [name for name in names if name not in participants]
    if unknown:
        raise InvalidMembersError(
            f"Not members of {group.name}: {', '.join(unknown)}"
        )

    # Tours without tiers are priced flat; a submitted key is ignored
    tier_key = None
    if tour.has_tiers and selected_price_key and selected_price_key.strip():
        tier = resolve_tier(parse_tiers(tour.prices), selected_price_key)
        if tier is None or not tier.is_usable:
            raise UnknownPriceTierError(
                f"'{selected_price_key}' is not a price option of '{tour.name}'"
            )
        tier_key = tier.key

    if custom_date == tour.date:
        custom_date = None

    previous = _stored_attendance(group, tour)
    record = dataclasses.replace(
        previous,
        members=tuple(names),
        custom_date=custom_date.isoformat() if custom_date else None,
        selected_price_key=tier_key,
        cancellation_reason=None,
    )
    entry = _save(group, tour, record)

    logger.info(
        "Group %s confirmed %d member(s) for tour %s (tier=%s, date=%s)",
        group.id, len(names), tour.id, tier_key, record.custom_date or tour.date,
    )
    return entry


@transaction.atomic
def cancel_attendance(*, group_id: UUID, tour_id: UUID, reason: str) -> TourAttendance:
    """
    Cancel a group's attendance on a tour.

    The row is kept with no members and the reason, so the tour shows as
    cancelled rather than never confirmed. Tier and payment fields are
    left as they were.

    Raises:
        CancellationReasonRequiredError: If reason is blank
        GroupNotFoundError: If group doesn't exist
        TourNotFoundError: If tour doesn't exist
        TourNotInTripError: If the tour belongs to another trip
    """
    reason = (reason or '').strip()
    if not reason:
        raise CancellationReasonRequiredError("A reason is required to cancel a tour")

    group = _lock_group(group_id)
    tour = _get_trip_tour(group, tour_id)

    previous = _stored_attendance(group, tour)
    record = dataclasses.replace(previous, members=(), cancellation_reason=reason)
    entry = _save(group, tour, record)

    logger.info("Group %s cancelled tour %s: %s", group.id, tour.id, reason)
    return entry


@transaction.atomic
def record_payment(
    *,
    group_id: UUID,
    tour_id: UUID,
    is_paid: bool,
    payment_date: Optional[date] = None,
    payment_method: Optional[str] = None
) -> TourAttendance:
    """
    Mark a confirmed tour as paid or unpaid.

    Paid defaults to today and Pix when date or method are omitted.
    Marking unpaid clears both.

    Raises:
        GroupNotFoundError: If group doesn't exist
        TourNotFoundError: If tour doesn't exist
        TourNotInTripError: If the tour belongs to another trip
        AttendanceNotConfirmedError: If the group has no members on the tour
    """
    group = _lock_group(group_id)
    tour = _get_trip_tour(group, tour_id)

    previous = _stored_attendance(group, tour)
    if not previous.is_confirmed:
        raise AttendanceNotConfirmedError(
            f"{group.name} has not confirmed '{tour.name}'"
        )

    if is_paid:
        record = dataclasses.replace(
            previous,
            is_paid=True,
            payment_date=(payment_date or timezone.localdate()).isoformat(),
            payment_method=payment_method or PaymentMethod.PIX.value,
        )
    else:
        record = dataclasses.replace(previous, is_paid=False, payment_date=None, payment_method=None)

    entry = _save(group, tour, record)
    logger.info(
        "Group %s marked tour %s as %s",
        group.id, tour.id, 'paid' if is_paid else 'unpaid',
    )
    return entry


# =============================================================================
# Reads
# =============================================================================

def get_group_attendance(*, group_id: UUID) -> List[TourAttendanceEntry]:
    """
    Every tour of the group's trip with the group's attendance on it.

    Tours come in date, time and name order. Tours the group never
    touched have empty attendance and a zero total.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    group = get_group_by_id(group_id)
    stored = {entry.tour_id: entry.record for entry in group.tour_attendance.all()}

    entries = []
    for tour in group.trip.tours.all():
        attendance = normalize_attendance(stored.get(tour.id))
        entries.append(TourAttendanceEntry(
            tour=tour,
            attendance=attendance,
            valuation=value_attendance(tour, attendance),
            effective_date=effective_date(tour, attendance),
        ))
    return entries


def get_group_agenda(*, group_id: UUID) -> List[TourAttendanceEntry]:
    """
    Confirmed tours of a group in the order the group will do them.

    Sorted by effective date (the custom date when the group chose one),
    then tour time, then tour name.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    confirmed = [
        entry for entry in get_group_attendance(group_id=group_id)
        if entry.attendance.is_confirmed
    ]
    return sorted(
        confirmed,
        key=lambda entry: (entry.effective_date, entry.tour.time or time.min, entry.tour.name),
    )


def get_tour_attendance(*, tour_id: UUID) -> TourAttendanceReport:
    """
    Groups attending a tour with members, totals and payment state.

    Raises:
        TourNotFoundError: If tour doesn't exist
    """
    try:
        tour = Tour.objects.get(id=tour_id)
    except Tour.DoesNotExist:
        raise TourNotFoundError(f"Tour {tour_id} not found")

    report = TourAttendanceReport(tour=tour)
    rows = (
        TourAttendance.objects
        .filter(tour=tour)
        .select_related('group')
        .order_by('group__name')
    )
    for row in rows:
        attendance = row.attendance
        line = GroupAttendanceLine(
            group=row.group,
            attendance=attendance,
            valuation=value_attendance(tour, attendance),
            effective_date=effective_date(tour, attendance),
        )
        if attendance.is_confirmed:
            report.groups.append(line)
            report.total_people += line.valuation.member_count
            report.total_revenue += line.valuation.total
            if attendance.is_paid:
                report.paid_revenue += line.valuation.total
        elif attendance.is_cancelled:
            report.cancellations.append(line)

    return report
