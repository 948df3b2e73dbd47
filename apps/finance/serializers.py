"""
Serializers for finance app.

Input serializers validate query parameters; response serializers document
the report dictionaries for the OpenAPI schema.
"""

from rest_framework import serializers
from apps.trips.models import TripStatus


MONEY = {'max_digits': 14, 'decimal_places': 2}


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class TripStatusQuerySerializer(serializers.Serializer):
    """Optional trip status filter."""

    status = serializers.ChoiceField(choices=TripStatus.choices, required=False)


class TopToursQuerySerializer(serializers.Serializer):
    """
    Validate top tours query parameters.

    Query Parameters:
        trip (uuid): Restrict the ranking to one trip
        limit (int): Number of results, 1-100 (default 10)
    """

    trip = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(required=False, default=10, min_value=1, max_value=100)


# =============================================================================
# Response Serializers
# =============================================================================

class OverviewSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(**MONEY)
    paid_revenue = serializers.DecimalField(**MONEY)
    outstanding_revenue = serializers.DecimalField(**MONEY)
    total_trips = serializers.IntegerField()
    total_tours = serializers.IntegerField()
    total_groups = serializers.IntegerField()
    total_people = serializers.IntegerField()
    confirmed_people = serializers.IntegerField()
    average_tour_price = serializers.DecimalField(**MONEY)
    revenue_per_person = serializers.DecimalField(**MONEY)
    currency = serializers.CharField()


class TourLineSerializer(serializers.Serializer):
    tour_id = serializers.UUIDField()
    name = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(allow_null=True)
    price = serializers.DecimalField(**MONEY)
    confirmed_groups = serializers.IntegerField()
    confirmed_people = serializers.IntegerField()
    revenue = serializers.DecimalField(**MONEY)
    paid = serializers.DecimalField(**MONEY)
    outstanding = serializers.DecimalField(**MONEY)


class RankedTourSerializer(TourLineSerializer):
    rank = serializers.IntegerField()


class TripLineSerializer(serializers.Serializer):
    trip_id = serializers.UUIDField()
    name = serializers.CharField()
    destination = serializers.CharField()
    status = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    tours_count = serializers.IntegerField()
    groups_count = serializers.IntegerField()
    people = serializers.IntegerField()
    confirmed_people = serializers.IntegerField()
    revenue = serializers.DecimalField(**MONEY)
    paid = serializers.DecimalField(**MONEY)
    outstanding = serializers.DecimalField(**MONEY)


class TripSummarySerializer(TripLineSerializer):
    tours = TourLineSerializer(many=True)
    currency = serializers.CharField()


class TourGroupLineSerializer(serializers.Serializer):
    group_id = serializers.UUIDField()
    group_name = serializers.CharField()
    members = serializers.ListField(child=serializers.CharField())
    tier_label = serializers.CharField(allow_null=True)
    price_per_person = serializers.DecimalField(**MONEY)
    total = serializers.DecimalField(**MONEY)
    is_paid = serializers.BooleanField()
    payment_date = serializers.CharField(allow_null=True)
    payment_method = serializers.CharField(allow_null=True)
    effective_date = serializers.DateField()


class TierLineSerializer(serializers.Serializer):
    label = serializers.CharField(allow_null=True)
    people = serializers.IntegerField()
    revenue = serializers.DecimalField(**MONEY)


class TourRevenueSerializer(TourLineSerializer):
    groups = TourGroupLineSerializer(many=True)
    by_tier = TierLineSerializer(many=True)
    currency = serializers.CharField()


class StatementLineSerializer(serializers.Serializer):
    tour_id = serializers.UUIDField()
    tour_name = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(allow_null=True)
    members = serializers.ListField(child=serializers.CharField())
    tier_label = serializers.CharField(allow_null=True)
    price_per_person = serializers.DecimalField(**MONEY)
    total = serializers.DecimalField(**MONEY)
    is_paid = serializers.BooleanField()
    payment_date = serializers.CharField(allow_null=True)
    payment_method = serializers.CharField(allow_null=True)


class GroupStatementSerializer(serializers.Serializer):
    group_id = serializers.UUIDField()
    group_name = serializers.CharField()
    trip_id = serializers.UUIDField()
    trip_name = serializers.CharField()
    people = serializers.IntegerField()
    lines = StatementLineSerializer(many=True)
    total_owed = serializers.DecimalField(**MONEY)
    total_paid = serializers.DecimalField(**MONEY)
    outstanding = serializers.DecimalField(**MONEY)
    currency = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    """Error response format."""

    error = serializers.CharField()
