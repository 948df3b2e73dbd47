"""
Pricing App - Attendance & Pricing Resolution

This app holds the pure computation that turns a tour's pricing definition
and a group's stored attendance into money figures. It owns no models and
performs no I/O; every view, service and report that shows a price or a
total goes through the functions exported here.

Key Features:
- Attendance normalization (legacy name list or structured record)
- Tolerant price tier resolution (exact, case-insensitive, partial)
- Per-person price and attendance total with flat-price fallback

Architecture:
- attendance.py: AttendanceRecord, normalize_attendance
- tiers.py: TierDefinition, parse_tiers, resolve_tier, price_range
- valuation.py: price_per_person, attendance_total, value_attendance
"""

from .attendance import AttendanceRecord, normalize_attendance
from .tiers import (
    TierDefinition,
    coerce_price,
    format_tier_key,
    parse_tiers,
    price_range,
    resolve_tier,
)
from .valuation import (
    AttendanceValuation,
    attendance_total,
    price_per_person,
    selected_tier_label,
    value_attendance,
)


__all__ = [
    # Attendance
    'AttendanceRecord',
    'normalize_attendance',

    # Tiers
    'TierDefinition',
    'coerce_price',
    'format_tier_key',
    'parse_tiers',
    'price_range',
    'resolve_tier',

    # Valuation
    'AttendanceValuation',
    'attendance_total',
    'price_per_person',
    'selected_tier_label',
    'value_attendance',
]
