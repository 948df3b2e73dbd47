import pytest
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass
class StubTour:
    """Stand-in for a Tour row; the pricing core only reads price and prices."""
    price: Decimal
    prices: Optional[dict] = None
    pk: str = field(default='tour-1')


@pytest.fixture
def tiers():
    """Full/half price tier table."""
    return {
        'inteira': {'value': 100},
        'meia': {'value': 50},
    }


@pytest.fixture
def flat_tour():
    """Tour priced only by its legacy flat price."""
    return StubTour(price=Decimal('80.00'))


@pytest.fixture
def tiered_tour(tiers):
    """Tour with tiers and a different flat price."""
    return StubTour(price=Decimal('120.00'), prices=tiers)


@pytest.fixture
def messy_tour():
    """Tour whose tier table contains unusable entries."""
    return StubTour(
        price=Decimal('90.00'),
        prices={
            'inteira': {'value': 100, 'description': 'Ingresso inteiro'},
            'meia_entrada': {'description': 'Estudantes'},
            'senior': {'value': 'quarenta'},
            'crianca': None,
            'vip': {'value': True},
        },
    )
