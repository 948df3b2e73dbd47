from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Profile of the authenticated user."""

    is_trip_admin = serializers.BooleanField(read_only=True)
    led_group_ids = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'phone',
            'is_trip_admin',
            'led_group_ids',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']

    def get_led_group_ids(self, obj):
        return [str(pk) for pk in obj.led_groups.values_list('id', flat=True)]


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested representations."""

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields
