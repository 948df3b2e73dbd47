"""Trip CRUD operations service."""

from django.db import transaction
from uuid import UUID
from typing import Optional, Dict, Any, List

from ..models import Trip, TourLink
from .exceptions import TripNotFoundError, InvalidTripDatesError


def _check_dates(start_date, end_date):
    if start_date and end_date and end_date < start_date:
        raise InvalidTripDatesError("Trip cannot end before it starts")


def replace_links(*, owner, links: Optional[List[Dict[str, str]]]) -> None:
    """
    Replace the useful links of a trip or tour.

    Args:
        owner: Trip or Tour instance
        links: List of {"title", "url"} dicts; None leaves links untouched
    """
    if links is None:
        return

    owner_field = 'trip' if isinstance(owner, Trip) else 'tour'
    owner.links.all().delete()
    TourLink.objects.bulk_create([
        TourLink(title=link['title'], url=link['url'], position=position, **{owner_field: owner})
        for position, link in enumerate(links)
    ])


@transaction.atomic
def create_trip(
    *,
    name: str,
    destination: str,
    start_date,
    end_date,
    description: str = '',
    status: str = 'upcoming',
    image_url: str = '',
    links: Optional[List[Dict[str, str]]] = None
) -> Trip:
    """
    Create a new trip.

    Raises:
        InvalidTripDatesError: If end_date is before start_date
    """
    _check_dates(start_date, end_date)

    trip = Trip.objects.create(
        name=name,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        description=description,
        status=status,
        image_url=image_url,
    )
    replace_links(owner=trip, links=links)
    return trip


@transaction.atomic
def update_trip(*, trip_id: UUID, data: Dict[str, Any]) -> Trip:
    """
    Update an existing trip.

    Raises:
        TripNotFoundError: If trip doesn't exist
        InvalidTripDatesError: If the update leaves end_date before start_date
    """
    try:
        trip = Trip.objects.select_for_update().get(id=trip_id)
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip {trip_id} not found")

    allowed_fields = [
        'name', 'destination', 'start_date', 'end_date',
        'description', 'status', 'image_url',
    ]
    for field in allowed_fields:
        if field in data:
            setattr(trip, field, data[field])

    _check_dates(trip.start_date, trip.end_date)
    trip.save()
    replace_links(owner=trip, links=data.get('links'))
    return trip


def get_trip_by_id(trip_id: UUID) -> Trip:
    try:
        return Trip.objects.prefetch_related('links').get(id=trip_id)
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip {trip_id} not found")


@transaction.atomic
def delete_trip(*, trip_id: UUID) -> None:
    """Delete a trip with its tours, groups and attendance."""
    deleted, _ = Trip.objects.filter(id=trip_id).delete()
    if not deleted:
        raise TripNotFoundError(f"Trip {trip_id} not found")
