"""
Domain exceptions for finance app.

Raised by FinancialReports when a report target does not exist or a
query is invalid. Views convert them to HTTP responses.

Exception Hierarchy:
    FinanceServiceError (base)
    ├── TripNotFoundError
    ├── TourNotFoundError
    └── GroupNotFoundError
"""


class FinanceServiceError(Exception):
    """
    Base exception for all finance service errors.

    Catch it in views to handle every finance error at once::

        try:
            data = FinancialReports.trip_summary(trip_id)
        except FinanceServiceError as e:
            return Response({'error': str(e)}, status=404)
    """

    pass


class TripNotFoundError(FinanceServiceError):
    """Raised when the reported trip does not exist."""

    pass


class TourNotFoundError(FinanceServiceError):
    """Raised when the reported tour does not exist."""

    pass


class GroupNotFoundError(FinanceServiceError):
    """Raised when the group of a statement does not exist."""

    pass
