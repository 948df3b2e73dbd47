"""
Attendance valuation.

price_per_person() and attendance_total() are the single source of truth for
what a group owes for a tour. Views, group services and financial reports
call them instead of multiplying prices themselves.

Example:
    Group confirmed two people on the half-price tier::

        from apps.pricing import attendance_total, price_per_person

        tour.price = Decimal('120.00')
        tour.prices = {'inteira': {'value': 100}, 'meia': {'value': 50}}
        attendance = {'members': ['Ana', 'Bruno'], 'selectedPriceKey': 'meia'}

        price_per_person(tour, attendance)   # Decimal('50')
        attendance_total(tour, attendance)   # Decimal('100')
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .attendance import normalize_attendance
from .tiers import flat_price, parse_tiers, resolve_tier


logger = logging.getLogger(__name__)

ZERO = Decimal('0')


@dataclass(frozen=True)
class AttendanceValuation:
    """Money figures for one (group, tour) pair."""

    member_count: int
    price_per_person: Decimal
    total: Decimal
    tier_key: Optional[str] = None
    tier_label: Optional[str] = None


def _resolved_tier(tour, attendance: Any):
    prices = getattr(tour, 'prices', None)
    if prices is None:
        return None

    selected_key = normalize_attendance(attendance).selected_price_key
    tier = resolve_tier(parse_tiers(prices), selected_key)

    if tier is None and selected_key and selected_key.strip():
        logger.debug(
            "Price key %r did not match any tier of tour %s; using flat price",
            selected_key, getattr(tour, 'pk', None),
        )
    return tier


def price_per_person(tour, attendance: Any = None) -> Decimal:
    """
    Price one participant pays for a tour.

    Args:
        tour: Object with ``price`` and optional ``prices`` (tier table).
        attendance: Stored attendance in any accepted shape, or None.

    Returns:
        The resolved tier's value, or the tour's flat price when the tour
        has no tiers, no tier was selected, the selection does not match,
        or the matched tier has no usable value.
    """
    tier = _resolved_tier(tour, attendance)
    if tier is not None and tier.is_usable:
        return tier.value

    if tier is not None:
        logger.debug(
            "Tier %r of tour %s has no usable value; using flat price",
            tier.key, getattr(tour, 'pk', None),
        )
    return flat_price(tour)


def attendance_total(tour, attendance: Any = None) -> Decimal:
    """
    Total owed for a group's attendance on a tour.

    Empty attendance (never confirmed, or cancelled) is always zero, and no
    tier lookup happens for it.
    """
    members = normalize_attendance(attendance).members
    if not members:
        return ZERO
    return len(members) * price_per_person(tour, attendance)


def selected_tier_label(tour, attendance: Any = None) -> Optional[str]:
    """Display label of the tier a group selected, if it resolves."""
    tier = _resolved_tier(tour, attendance)
    return tier.label if tier is not None else None


def value_attendance(tour, attendance: Any = None) -> AttendanceValuation:
    """Bundle count, per-person price, total and tier for one pair."""
    record = normalize_attendance(attendance)
    tier = _resolved_tier(tour, record)
    unit_price = price_per_person(tour, record)

    return AttendanceValuation(
        member_count=record.member_count,
        price_per_person=unit_price,
        total=attendance_total(tour, record),
        tier_key=tier.key if tier is not None else None,
        tier_label=tier.label if tier is not None else None,
    )
