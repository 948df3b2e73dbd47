import pytest
from datetime import date, time
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.trips.models import Trip, Tour, TripStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a trip administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Trip Admin',
        is_staff=True,
    )


@pytest.fixture
def leader_user(db):
    """Create and return a regular (group leader) user."""
    return User.objects.create_user(
        email='leader@example.com',
        password='TestPass123!',
        display_name='Leader',
    )


@pytest.fixture
def staff_client(staff_user):
    """Return API client authenticated as trip administrator."""
    return _client_for(staff_user)


@pytest.fixture
def leader_client(leader_user):
    """Return API client authenticated as a regular user."""
    return _client_for(leader_user)


@pytest.fixture
def trip(db):
    """Create and return an upcoming trip."""
    return Trip.objects.create(
        name='Rio 2025',
        destination='Rio de Janeiro',
        start_date=date(2025, 3, 10),
        end_date=date(2025, 3, 17),
        status=TripStatus.UPCOMING,
    )


@pytest.fixture
def other_trip(db):
    """Create and return a completed trip."""
    return Trip.objects.create(
        name='Salvador 2024',
        destination='Salvador',
        start_date=date(2024, 7, 1),
        end_date=date(2024, 7, 5),
        status=TripStatus.COMPLETED,
    )


@pytest.fixture
def tiered_tour(trip):
    """Tour with full/half price tiers."""
    return Tour.objects.create(
        trip=trip,
        name='Cristo Redentor',
        date=date(2025, 3, 11),
        time=time(9, 0),
        price=Decimal('120.00'),
        prices={
            'inteira': {'value': 100, 'description': 'Inteira'},
            'meia': {'value': 50},
        },
        tags=['Passeios', 'Mirantes'],
    )


@pytest.fixture
def flat_tour(trip):
    """Tour priced by its flat price only."""
    return Tour.objects.create(
        trip=trip,
        name='Jantar na Lapa',
        date=date(2025, 3, 12),
        time=time(20, 0),
        price=Decimal('80.00'),
        tags=['Restaurante'],
    )


@pytest.fixture
def other_trip_tour(other_trip):
    """Tour of the other trip."""
    return Tour.objects.create(
        trip=other_trip,
        name='Pelourinho',
        date=date(2024, 7, 2),
        price=Decimal('40.00'),
        tags=['Passeios'],
    )
