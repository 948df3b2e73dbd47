import pytest
from datetime import date
from decimal import Decimal
from apps.trips.models import Tour, TourLink
from apps.trips.services import (
    create_trip,
    update_trip,
    delete_trip,
    create_tour,
    update_tour,
    get_tour_by_id,
    search_tours,
    get_all_tags,
    TripNotFoundError,
    TourNotFoundError,
    InvalidTripDatesError,
)


@pytest.mark.django_db
class TestTripManagement:
    """Tests for trip create/update/delete services."""

    def test_create_trip(self):
        trip = create_trip(
            name='Foz 2025',
            destination='Foz do Iguaçu',
            start_date=date(2025, 5, 1),
            end_date=date(2025, 5, 4),
            links=[
                {'title': 'Parque', 'url': 'https://example.com/parque'},
                {'title': 'Hotel', 'url': 'https://example.com/hotel'},
            ],
        )

        assert trip.status == 'upcoming'
        assert [link.title for link in trip.links.all()] == ['Parque', 'Hotel']

    def test_create_trip_rejects_inverted_dates(self):
        with pytest.raises(InvalidTripDatesError):
            create_trip(
                name='Backwards',
                destination='Nowhere',
                start_date=date(2025, 5, 4),
                end_date=date(2025, 5, 1),
            )

    def test_update_replaces_links(self, trip):
        TourLink.objects.create(trip=trip, title='Old', url='https://example.com/old')

        update_trip(trip_id=trip.id, data={'links': [{'title': 'New', 'url': 'https://example.com/new'}]})

        assert [link.title for link in trip.links.all()] == ['New']

    def test_update_without_links_keeps_them(self, trip):
        TourLink.objects.create(trip=trip, title='Keep', url='https://example.com/keep')

        update_trip(trip_id=trip.id, data={'name': 'Rio 2025 (Carnaval)'})

        trip.refresh_from_db()
        assert trip.name == 'Rio 2025 (Carnaval)'
        assert trip.links.count() == 1

    def test_update_missing_trip(self):
        with pytest.raises(TripNotFoundError):
            update_trip(trip_id='00000000-0000-0000-0000-000000000000', data={})

    def test_delete_missing_trip(self):
        with pytest.raises(TripNotFoundError):
            delete_trip(trip_id='00000000-0000-0000-0000-000000000000')


@pytest.mark.django_db
class TestTourManagement:
    """Tests for tour create/update services."""

    def test_empty_tier_table_is_stored_as_none(self, trip):
        tour = create_tour(
            trip_id=trip.id,
            name='Museu do Amanhã',
            date=date(2025, 3, 13),
            price=Decimal('30.00'),
            prices={},
        )

        assert tour.prices is None
        assert tour.has_tiers is False

    def test_free_tour_drops_prices(self, trip):
        tour = create_tour(
            trip_id=trip.id,
            name='Praia',
            date=date(2025, 3, 14),
            price=Decimal('10.00'),
            prices={'inteira': {'value': 10}},
            is_free=True,
        )

        tour.refresh_from_db()
        assert tour.price == Decimal('0.00')
        assert tour.prices is None

    def test_marking_existing_tour_free(self, tiered_tour):
        update_tour(tour_id=tiered_tour.id, data={'is_free': True})

        tiered_tour.refresh_from_db()
        assert tiered_tour.price == Decimal('0.00')
        assert tiered_tour.prices is None

    def test_update_tags_are_cleaned(self, flat_tour):
        update_tour(tour_id=flat_tour.id, data={'tags': [' Noite ', 'Noite', 'Restaurante']})

        flat_tour.refresh_from_db()
        assert flat_tour.tags == ['Noite', 'Restaurante']

    def test_create_for_missing_trip(self):
        with pytest.raises(TripNotFoundError):
            create_tour(
                trip_id='00000000-0000-0000-0000-000000000000',
                name='Orphan',
                date=date(2025, 3, 14),
            )

    def test_get_missing_tour(self):
        with pytest.raises(TourNotFoundError):
            get_tour_by_id('00000000-0000-0000-0000-000000000000')


@pytest.mark.django_db
class TestTourSearch:
    """Tests for search_tours and get_all_tags."""

    def test_results_are_in_date_order(self, flat_tour, tiered_tour):
        assert list(search_tours()) == [tiered_tour, flat_tour]

    def test_tag_filter_ignores_non_string_tags(self, trip):
        Tour.objects.create(trip=trip, name='Odd', date=date(2025, 3, 15), tags=[1, None, 'Praia'])

        assert [t.name for t in search_tours(tag='PRAIA')] == ['Odd']

    def test_tag_combined_with_trip(self, trip, tiered_tour, other_trip_tour):
        results = search_tours(trip_id=trip.id, tag='Passeios')
        assert list(results) == [tiered_tour]

    def test_tags_for_one_trip(self, other_trip, tiered_tour, other_trip_tour):
        assert get_all_tags(trip_id=other_trip.id) == ['Passeios']
