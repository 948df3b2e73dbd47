"""
Attendance normalization.

A group's attendance for a tour is persisted in one of two shapes:

    Legacy (bare list of member names)::

        ["Ana", "Bruno"]

    Structured record::

        {
            "members": ["Ana", "Bruno"],
            "customDate": "2025-03-14",
            "selectedPriceKey": "meia",
            "isPaid": true,
            "paymentDate": "2025-03-01",
            "paymentMethod": "pix"
        }

No migration exists between them, so both stay readable forever.
normalize_attendance() is the single place that tells them apart; everything
downstream works with AttendanceRecord only.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


# Stored (camelCase) key -> AttendanceRecord attribute
STORED_FIELDS = {
    'customDate': 'custom_date',
    'selectedPriceKey': 'selected_price_key',
    'isPaid': 'is_paid',
    'paymentDate': 'payment_date',
    'paymentMethod': 'payment_method',
    'cancellationReason': 'cancellation_reason',
}


@dataclass(frozen=True)
class AttendanceRecord:
    """Canonical attendance of one group for one tour."""

    members: tuple = field(default_factory=tuple)
    custom_date: Optional[str] = None
    selected_price_key: Optional[str] = None
    is_paid: bool = False
    payment_date: Optional[str] = None
    payment_method: Optional[str] = None
    cancellation_reason: Optional[str] = None

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def is_confirmed(self) -> bool:
        return len(self.members) > 0

    @property
    def is_cancelled(self) -> bool:
        """Empty members with a recorded reason."""
        return not self.members and bool(self.cancellation_reason)

    def to_dict(self) -> dict:
        """Serialize to the structured shape used for storage."""
        data = {'members': list(self.members)}
        for stored_key, attribute in STORED_FIELDS.items():
            data[stored_key] = getattr(self, attribute)
        return data


EMPTY_ATTENDANCE = AttendanceRecord()


def _clean_members(value: Any) -> tuple:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(member for member in value if isinstance(member, str))


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _from_mapping(raw: Mapping) -> AttendanceRecord:
    values = {}
    for stored_key, attribute in STORED_FIELDS.items():
        # Accept both the stored camelCase key and the attribute name
        value = raw.get(stored_key, raw.get(attribute))
        if attribute == 'is_paid':
            values[attribute] = value is True
        else:
            values[attribute] = _optional_str(value)

    return AttendanceRecord(members=_clean_members(raw.get('members')), **values)


def normalize_attendance(raw: Any = None) -> AttendanceRecord:
    """
    Convert any stored attendance value into an AttendanceRecord.

    Args:
        raw: None, a list of member names (legacy), a mapping with a
            ``members`` key (structured), or an AttendanceRecord.

    Returns:
        AttendanceRecord. Unrecognized shapes yield an empty record; this
        function never raises.
    """
    if raw is None:
        return EMPTY_ATTENDANCE

    if isinstance(raw, AttendanceRecord):
        return raw

    if isinstance(raw, (list, tuple)):
        return AttendanceRecord(members=_clean_members(raw))

    if isinstance(raw, Mapping) and 'members' in raw:
        return _from_mapping(raw)

    return EMPTY_ATTENDANCE
