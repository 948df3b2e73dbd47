import pytest
from django.urls import reverse
from rest_framework import status
from apps.groups.models import Group, TourAttendance


# =============================================================================
# Group CRUD
# =============================================================================

@pytest.mark.django_db
class TestGroupList:
    """Tests for GET /api/groups/"""

    def test_requires_authentication(self, api_client, group):
        response = api_client.get(reverse('groups:group-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_leader_sees_led_groups(self, authenticated_client, group, other_group):
        response = authenticated_client.get(reverse('groups:group-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [g['name'] for g in response.data['results']] == ['Família Souza']

    def test_staff_sees_all_groups(self, staff_client, group, other_group):
        response = staff_client.get(reverse('groups:group-list'))

        assert response.data['count'] == 2

    def test_other_user_sees_nothing(self, other_client, group):
        response = other_client.get(reverse('groups:group-list'))

        assert response.data['count'] == 0

    def test_filter_by_trip(self, staff_client, group, other_group, trip):
        response = staff_client.get(reverse('groups:group-list'), {'trip': str(trip.id)})

        assert response.data['count'] == 2

    def test_invalid_trip_filter(self, staff_client, group):
        response = staff_client.get(reverse('groups:group-list'), {'trip': 'not-a-uuid'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'trip' in response.data


@pytest.mark.django_db
class TestGroupDetail:
    """Tests for GET /api/groups/{id}/"""

    def test_leader_gets_group(self, authenticated_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['members'] == ['Ana', 'Bruno', 'Carla']
        assert response.data['people_count'] == 4
        assert response.data['leader']['email'] == 'leader@example.com'

    def test_other_user_gets_404(self, other_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestGroupWrite:
    """Tests for group create/update/delete."""

    def test_staff_creates_group(self, staff_client, trip, leader_user):
        data = {
            'trip': str(trip.id),
            'name': 'Turma',
            'members': ['Rui', 'Sara'],
            'leader_name': 'Paula',
            'leader': str(leader_user.id),
        }
        response = staff_client.post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['members_count'] == 2
        assert Group.objects.get(name='Turma').leader == leader_user

    def test_leader_cannot_create_group(self, authenticated_client, trip):
        data = {'trip': str(trip.id), 'name': 'Mine', 'leader_name': 'Me'}
        response = authenticated_client.post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_for_unknown_trip(self, staff_client):
        data = {
            'trip': '00000000-0000-0000-0000-000000000000',
            'name': 'Lost',
            'leader_name': 'Nobody',
        }
        response = staff_client.post(reverse('groups:group-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_staff_renames_group(self, staff_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = staff_client.patch(url, {'name': 'Família Souza Lima'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        group.refresh_from_db()
        assert group.name == 'Família Souza Lima'
        assert group.members == ['Ana', 'Bruno', 'Carla']

    def test_leader_cannot_delete_group(self, authenticated_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Group.objects.filter(id=group.id).exists()

    def test_staff_deletes_group(self, staff_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = staff_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT


# =============================================================================
# Attendance actions
# =============================================================================

@pytest.mark.django_db
class TestConfirmEndpoint:
    """Tests for POST /api/groups/{id}/confirm/"""

    def test_confirm_with_tier(self, authenticated_client, group, tiered_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        data = {'tour': str(tiered_tour.id), 'members': ['Ana', 'Bruno'], 'selected_price_key': 'Meia'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'confirmed'
        assert response.data['attendance']['selected_price_key'] == 'meia'
        assert response.data['valuation']['price_per_person'] == '50.00'
        assert response.data['valuation']['total'] == '100.00'
        assert response.data['valuation']['tier_label'] == 'Meia'

    def test_confirm_custom_date(self, authenticated_client, group, flat_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        data = {'tour': str(flat_tour.id), 'members': ['Carla'], 'custom_date': '2025-03-16'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['effective_date'] == '2025-03-16'

    def test_empty_members(self, authenticated_client, group, flat_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        response = authenticated_client.post(url, {'tour': str(flat_tour.id), 'members': []}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_tier(self, authenticated_client, group, tiered_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        data = {'tour': str(tiered_tour.id), 'members': ['Ana'], 'selected_price_key': 'vip'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'vip' in response.data['error']

    def test_tour_of_another_trip(self, authenticated_client, group, other_trip_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        data = {'tour': str(other_trip_tour.id), 'members': ['Ana']}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_tour(self, authenticated_client, group):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        data = {'tour': '00000000-0000-0000-0000-000000000000', 'members': ['Ana']}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_other_user_cannot_confirm(self, other_client, group, flat_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': group.id})
        response = other_client.post(url, {'tour': str(flat_tour.id), 'members': ['Ana']}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not TourAttendance.objects.exists()

    def test_staff_confirms_for_any_group(self, staff_client, other_group, flat_tour):
        url = reverse('groups:group-confirm', kwargs={'pk': other_group.id})
        response = staff_client.post(url, {'tour': str(flat_tour.id), 'members': ['Eva']}, format='json')

        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestCancelEndpoint:
    """Tests for POST /api/groups/{id}/cancel/"""

    def test_cancel(self, authenticated_client, group, legacy_attendance, flat_tour):
        url = reverse('groups:group-cancel', kwargs={'pk': group.id})
        response = authenticated_client.post(url, {'tour': str(flat_tour.id), 'reason': 'Rain'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        assert response.data['attendance']['cancellation_reason'] == 'Rain'
        assert response.data['valuation']['total'] == '0.00'

    def test_blank_reason(self, authenticated_client, group, flat_tour):
        url = reverse('groups:group-cancel', kwargs={'pk': group.id})
        response = authenticated_client.post(url, {'tour': str(flat_tour.id), 'reason': '  '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data


@pytest.mark.django_db
class TestPaymentEndpoint:
    """Tests for POST /api/groups/{id}/payment/"""

    def test_mark_paid(self, authenticated_client, group, legacy_attendance, flat_tour):
        url = reverse('groups:group-payment', kwargs={'pk': group.id})
        data = {
            'tour': str(flat_tour.id),
            'is_paid': True,
            'payment_date': '2025-03-01',
            'payment_method': 'credit_card',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['attendance']['is_paid'] is True
        assert response.data['attendance']['payment_method'] == 'credit_card'

    def test_invalid_method(self, authenticated_client, group, legacy_attendance, flat_tour):
        url = reverse('groups:group-payment', kwargs={'pk': group.id})
        data = {'tour': str(flat_tour.id), 'is_paid': True, 'payment_method': 'bitcoin'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unconfirmed_tour(self, authenticated_client, group, flat_tour):
        url = reverse('groups:group-payment', kwargs={'pk': group.id})
        response = authenticated_client.post(url, {'tour': str(flat_tour.id), 'is_paid': True}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestAttendanceViews:
    """Tests for attendance, agenda, my groups and the per-tour report."""

    def test_attendance_lists_all_tours(self, authenticated_client, group, tiered_tour, flat_tour, legacy_attendance):
        url = reverse('groups:group-attendance', kwargs={'pk': group.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [e['status'] for e in response.data] == ['pending', 'confirmed']
        assert response.data[1]['attendance']['members'] == ['Ana', 'Bruno']
        assert response.data[1]['valuation']['total'] == '160.00'

    def test_agenda(self, authenticated_client, group, tiered_tour, flat_tour, legacy_attendance):
        url = reverse('groups:group-agenda', kwargs={'pk': group.id})
        response = authenticated_client.get(url)

        assert [e['tour']['name'] for e in response.data] == ['Jantar na Lapa']

    def test_my_groups(self, authenticated_client, group, other_group):
        response = authenticated_client.get(reverse('groups:my-groups'))

        assert response.status_code == status.HTTP_200_OK
        assert [g['name'] for g in response.data] == ['Família Souza']

    def test_tour_attendance_report_for_staff(self, staff_client, group, legacy_attendance, flat_tour):
        url = reverse('trips:tour-attendance', kwargs={'pk': flat_tour.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_people'] == 2
        assert response.data['total_revenue'] == '160.00'
        assert response.data['outstanding_revenue'] == '160.00'
        assert response.data['groups'][0]['group_name'] == 'Família Souza'

    def test_tour_attendance_report_forbidden_for_leader(self, authenticated_client, flat_tour):
        url = reverse('trips:tour-attendance', kwargs={'pk': flat_tour.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
