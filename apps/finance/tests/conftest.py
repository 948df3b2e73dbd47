import pytest
from datetime import date, time
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, TourAttendance
from apps.trips.models import Trip, Tour, TripStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Trip Admin',
        is_staff=True,
    )


@pytest.fixture
def leader_user(db):
    return User.objects.create_user(
        email='leader@example.com',
        password='TestPass123!',
        display_name='Maria Leader',
    )


@pytest.fixture
def finance_other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as trip administrator."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def leader_client(api_client, leader_user):
    """Return API client authenticated as the leader of ``group``."""
    refresh = RefreshToken.for_user(leader_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(api_client, finance_other_user):
    """Return API client authenticated as a user leading no group."""
    refresh = RefreshToken.for_user(finance_other_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def trip(db):
    return Trip.objects.create(
        name='Rio 2025',
        destination='Rio de Janeiro',
        start_date=date(2025, 3, 10),
        end_date=date(2025, 3, 17),
        status=TripStatus.UPCOMING,
    )


@pytest.fixture
def tiered_tour(trip):
    return Tour.objects.create(
        trip=trip,
        name='Cristo Redentor',
        date=date(2025, 3, 11),
        time=time(9, 0),
        price=Decimal('120.00'),
        prices={'inteira': {'value': 100}, 'meia': {'value': 50}},
    )


@pytest.fixture
def flat_tour(trip):
    return Tour.objects.create(
        trip=trip,
        name='Jantar na Lapa',
        date=date(2025, 3, 12),
        time=time(20, 0),
        price=Decimal('80.00'),
    )


@pytest.fixture
def group(trip, leader_user):
    """Three members plus leader Maria."""
    return Group.objects.create(
        trip=trip,
        name='Família Souza',
        members=['Ana', 'Bruno', 'Carla'],
        leader_name='Maria',
        leader=leader_user,
    )


@pytest.fixture
def other_group(trip):
    """One member plus leader Eva."""
    return Group.objects.create(
        trip=trip,
        name='Amigos do Porto',
        members=['Davi'],
        leader_name='Eva',
    )


@pytest.fixture
def past_trip(db):
    return Trip.objects.create(
        name='Salvador 2024',
        destination='Salvador',
        start_date=date(2024, 7, 1),
        end_date=date(2024, 7, 5),
        status=TripStatus.COMPLETED,
    )


@pytest.fixture
def past_tour(past_trip):
    return Tour.objects.create(
        trip=past_trip,
        name='Pelourinho',
        date=date(2024, 7, 2),
        price=Decimal('40.00'),
    )


@pytest.fixture
def booked(group, other_group, tiered_tour, flat_tour, past_trip, past_tour):
    """
    Attendance across both trips, in both stored shapes.

    Rio 2025:
        Família Souza   Cristo  Ana, Bruno on 'meia' (2 x 50), paid
        Família Souza   Jantar  Ana, Bruno, Carla, legacy list (3 x 80)
        Amigos do Porto Cristo  Davi, Eva, no tier (2 x 120)
        Amigos do Porto Jantar  cancelled
    Salvador 2024:
        Solo            Pelourinho  Zé (1 x 40), paid
    """
    TourAttendance.objects.create(group=group, tour=tiered_tour, record={
        'members': ['Ana', 'Bruno'],
        'selectedPriceKey': 'meia',
        'isPaid': True,
        'paymentDate': '2025-03-01',
        'paymentMethod': 'pix',
    })
    TourAttendance.objects.create(group=group, tour=flat_tour, record=['Ana', 'Bruno', 'Carla'])
    TourAttendance.objects.create(group=other_group, tour=tiered_tour, record={
        'members': ['Davi', 'Eva'],
        'selectedPriceKey': None,
    })
    TourAttendance.objects.create(group=other_group, tour=flat_tour, record={
        'members': [],
        'cancellationReason': 'Rain',
    })

    solo = Group.objects.create(trip=past_trip, name='Solo', members=[], leader_name='Zé')
    TourAttendance.objects.create(group=solo, tour=past_tour, record={
        'members': ['Zé'],
        'isPaid': True,
    })
    return {'group': group, 'other_group': other_group, 'solo': solo}
