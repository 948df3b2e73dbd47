import pytest
from datetime import date, time
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, TourAttendance
from apps.trips.models import Trip, Tour


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def leader_user(db):
    """Create and return the user leading the test group."""
    return User.objects.create_user(
        email='leader@example.com',
        password='TestPass123!',
        display_name='Maria Leader',
    )


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
def group_other_user(db):
    """Create and return a user leading no group."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, leader_user):
    """Return API client authenticated as group leader."""
    refresh = RefreshToken.for_user(leader_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as trip administrator."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(api_client, group_other_user):
    """Return API client authenticated as a user leading no group."""
    refresh = RefreshToken.for_user(group_other_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def trip(db):
    """Create and return a trip."""
    return Trip.objects.create(
        name='Rio 2025',
        destination='Rio de Janeiro',
        start_date=date(2025, 3, 10),
        end_date=date(2025, 3, 17),
    )


@pytest.fixture
def other_trip(db):
    """Create and return a second trip."""
    return Trip.objects.create(
        name='Salvador 2025',
        destination='Salvador',
        start_date=date(2025, 7, 1),
        end_date=date(2025, 7, 5),
    )


@pytest.fixture
def tiered_tour(trip):
    """Tour with full/half price tiers and a different flat price."""
    return Tour.objects.create(
        trip=trip,
        name='Cristo Redentor',
        date=date(2025, 3, 11),
        time=time(9, 0),
        price=Decimal('120.00'),
        prices={
            'inteira': {'value': 100, 'description': 'Inteira'},
            'meia': {'value': 50},
            'guia': {'description': 'Price on request'},
        },
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
    )


@pytest.fixture
def other_trip_tour(other_trip):
    """Tour belonging to another trip."""
    return Tour.objects.create(
        trip=other_trip,
        name='Pelourinho',
        date=date(2025, 7, 2),
        price=Decimal('40.00'),
    )


@pytest.fixture
def group(trip, leader_user):
    """Create and return a group of three led by leader_user."""
    return Group.objects.create(
        trip=trip,
        name='Família Souza',
        members=['Ana', 'Bruno', 'Carla'],
        leader_name='Maria',
        leader_email='maria@example.com',
        leader=leader_user,
    )


@pytest.fixture
def other_group(trip):
    """Group of the same trip without a leader account."""
    return Group.objects.create(
        trip=trip,
        name='Amigos do Porto',
        members=['Davi'],
        leader_name='Eva',
    )


@pytest.fixture
def legacy_attendance(group, flat_tour):
    """Attendance stored as a bare list of names."""
    return TourAttendance.objects.create(group=group, tour=flat_tour, record=['Ana', 'Bruno'])
