from rest_framework import serializers
from apps.accounts.models import User
from apps.accounts.serializers import UserMinimalSerializer
from apps.trips.serializers import MONEY, TourListSerializer
from .models import Group, PaymentMethod


# =============================================================================
# Groups
# =============================================================================

class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    leader = UserMinimalSerializer(read_only=True)
    trip_name = serializers.CharField(source='trip.name', read_only=True)
    members_count = serializers.IntegerField(read_only=True)
    people_count = serializers.IntegerField(read_only=True)
    confirmed_tours_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'trip',
            'trip_name',
            'name',
            'members',
            'members_count',
            'people_count',
            'leader_name',
            'leader_email',
            'leader_phone',
            'leader',
            'confirmed_tours_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_confirmed_tours_count(self, obj):
        return sum(1 for entry in obj.tour_attendance.all() if entry.attendance.is_confirmed)


class GroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    members_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Group
        fields = ['id', 'trip', 'name', 'leader_name', 'members_count']
        read_only_fields = fields


class GroupWriteSerializer(serializers.Serializer):
    """Input for creating and updating groups."""

    trip = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    members = serializers.ListField(
        child=serializers.CharField(max_length=200),
        required=False,
        default=list,
    )
    leader_name = serializers.CharField(max_length=200)
    leader_email = serializers.EmailField(required=False, allow_blank=True, default='')
    leader_phone = serializers.CharField(required=False, allow_blank=True, default='', max_length=30)
    leader = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True),
        required=False,
        allow_null=True,
    )


# =============================================================================
# Attendance (read)
# =============================================================================

class AttendanceRecordSerializer(serializers.Serializer):
    """Canonical attendance, whichever shape it was stored in."""

    members = serializers.ListField(child=serializers.CharField())
    custom_date = serializers.CharField(allow_null=True)
    selected_price_key = serializers.CharField(allow_null=True)
    is_paid = serializers.BooleanField()
    payment_date = serializers.CharField(allow_null=True)
    payment_method = serializers.CharField(allow_null=True)
    cancellation_reason = serializers.CharField(allow_null=True)


class ValuationSerializer(serializers.Serializer):
    member_count = serializers.IntegerField()
    price_per_person = serializers.DecimalField(**MONEY)
    total = serializers.DecimalField(**MONEY)
    tier_key = serializers.CharField(allow_null=True)
    tier_label = serializers.CharField(allow_null=True)


class TourAttendanceEntrySerializer(serializers.Serializer):
    """A tour of the group's trip with the group's attendance and cost."""

    tour = TourListSerializer()
    attendance = AttendanceRecordSerializer()
    valuation = ValuationSerializer()
    effective_date = serializers.DateField()
    status = serializers.CharField()


class GroupAttendanceLineSerializer(serializers.Serializer):
    group_id = serializers.UUIDField(source='group.id')
    group_name = serializers.CharField(source='group.name')
    leader_name = serializers.CharField(source='group.leader_name')
    attendance = AttendanceRecordSerializer()
    valuation = ValuationSerializer()
    effective_date = serializers.DateField()


class TourAttendanceReportSerializer(serializers.Serializer):
    """Per-tour breakdown for trip administrators."""

    tour = TourListSerializer()
    groups = GroupAttendanceLineSerializer(many=True)
    cancellations = GroupAttendanceLineSerializer(many=True)
    total_people = serializers.IntegerField()
    total_revenue = serializers.DecimalField(**MONEY)
    paid_revenue = serializers.DecimalField(**MONEY)
    outstanding_revenue = serializers.DecimalField(**MONEY)


# =============================================================================
# Attendance (write)
# =============================================================================

class ConfirmAttendanceSerializer(serializers.Serializer):
    tour = serializers.UUIDField()
    members = serializers.ListField(child=serializers.CharField(max_length=200), allow_empty=False)
    custom_date = serializers.DateField(required=False, allow_null=True)
    selected_price_key = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class CancelAttendanceSerializer(serializers.Serializer):
    tour = serializers.UUIDField()
    reason = serializers.CharField(max_length=500, allow_blank=True)


class PaymentSerializer(serializers.Serializer):
    tour = serializers.UUIDField()
    is_paid = serializers.BooleanField()
    payment_date = serializers.DateField(required=False, allow_null=True)
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        allow_null=True,
    )
