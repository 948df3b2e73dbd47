"""
Price tier parsing and resolution.

A tour may carry a table of ticket tiers next to its flat legacy price::

    {
        "inteira": {"value": 100, "description": "Full price"},
        "meia": {"value": 50},
        "senior": {"value": 40, "description": "60+"}
    }

Keys are free-form. The key a group selected is stored as free text too and
has drifted over time (casing, partial identifiers), so resolve_tier()
matches tolerantly instead of requiring an exact key.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class TierDefinition:
    """One ticket tier of a tour."""

    key: str
    value: Optional[Decimal] = None
    description: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        return self.value is not None

    @property
    def label(self) -> str:
        return self.description or format_tier_key(self.key)


def format_tier_key(key: str) -> str:
    """'meia_entrada' -> 'Meia entrada'."""
    if not key:
        return ''
    return (key[0].upper() + key[1:]).replace('_', ' ')


def coerce_price(value: Any) -> Optional[Decimal]:
    """
    Return value as a Decimal if it is a well-formed number, else None.

    Accepts int, float and Decimal. Booleans, strings, NaN and infinities
    are rejected.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        try:
            return Decimal(str(value))
        except InvalidOperation:
            return None

    return None


def parse_tiers(raw_prices: Any) -> dict:
    """
    Build TierDefinitions from a stored tier table.

    Entries that are not mappings, or whose value is missing or malformed,
    are kept with ``value=None`` so they still take part in key resolution
    but never price anything.

    Returns:
        dict[str, TierDefinition] in the table's insertion order.
        Anything other than a mapping yields an empty dict.
    """
    if not isinstance(raw_prices, Mapping):
        return {}

    tiers = {}
    for key, definition in raw_prices.items():
        key = str(key)
        if isinstance(definition, TierDefinition):
            tiers[key] = definition
            continue
        if not isinstance(definition, Mapping):
            tiers[key] = TierDefinition(key=key)
            continue

        description = definition.get('description')
        tiers[key] = TierDefinition(
            key=key,
            value=coerce_price(definition.get('value')),
            description=description if isinstance(description, str) and description else None,
        )
    return tiers


def resolve_tier(tiers: Mapping, selected_key: Optional[str] = None):
    """
    Find the tier a selected key refers to.

    Rules, first match wins:
        1. Missing or blank key: no tier.
        2. Exact key.
        3. Case-insensitive key.
        4. Partial: a tier key containing the selected key, or contained
           in it (case-insensitive), in the mapping's iteration order.

    Args:
        tiers: Mapping of tier key to tier definition (any value type).
        selected_key: Key stored with the attendance.

    Returns:
        The matching tier definition, or None.
    """
    if not isinstance(selected_key, str):
        return None

    key = selected_key.strip()
    if not key:
        return None

    if key in tiers:
        return tiers[key]

    lowered = key.lower()
    for tier_key, tier in tiers.items():
        if str(tier_key).lower() == lowered:
            return tier

    # Several keys may match partially; the first one in order wins
    for tier_key, tier in tiers.items():
        tier_lowered = str(tier_key).lower()
        if lowered in tier_lowered or tier_lowered in lowered:
            return tier

    return None


def price_range(tour) -> Tuple[Decimal, Decimal]:
    """
    Cheapest and most expensive usable price of a tour, for display.

    Falls back to the flat price when the tour has no usable tiers.
    """
    values = [
        tier.value
        for tier in parse_tiers(getattr(tour, 'prices', None)).values()
        if tier.is_usable
    ]
    if not values:
        flat = flat_price(tour)
        return flat, flat
    return min(values), max(values)


def flat_price(tour) -> Decimal:
    """The tour's legacy flat price as a Decimal (0 when unusable)."""
    price = getattr(tour, 'price', None)
    if isinstance(price, str):
        try:
            price = Decimal(price)
        except InvalidOperation:
            price = None
    value = coerce_price(price)
    return value if value is not None else Decimal('0')
