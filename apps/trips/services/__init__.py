"""Services for trips and tours business logic."""

from .exceptions import (
    TripsServiceError,
    TripNotFoundError,
    TourNotFoundError,
    InvalidTripDatesError,
)
from .trip_management import (
    create_trip,
    update_trip,
    delete_trip,
    get_trip_by_id,
    replace_links,
)
from .tour_management import (
    create_tour,
    update_tour,
    delete_tour,
    get_tour_by_id,
    search_tours,
    get_all_tags,
)

__all__ = [
    # Exceptions
    'TripsServiceError',
    'TripNotFoundError',
    'TourNotFoundError',
    'InvalidTripDatesError',
    # Trip Management
    'create_trip',
    'update_trip',
    'delete_trip',
    'get_trip_by_id',
    'replace_links',
    # Tour Management
    'create_tour',
    'update_tour',
    'delete_tour',
    'get_tour_by_id',
    'search_tours',
    'get_all_tags',
]
