"""Domain-specific exceptions for trips services."""


class TripsServiceError(Exception):
    """Base exception for trips services."""
    pass


class TripNotFoundError(TripsServiceError):
    """Raised when trip does not exist."""
    pass


class TourNotFoundError(TripsServiceError):
    """Raised when tour does not exist."""
    pass


class InvalidTripDatesError(TripsServiceError):
    """Raised when a trip ends before it starts."""
    pass
