from rest_framework import serializers
from apps.pricing import coerce_price, parse_tiers, price_range
from .models import Trip, Tour, TourLink, TripStatus


MONEY = {'max_digits': 12, 'decimal_places': 2}


# =============================================================================
# Links
# =============================================================================

class TourLinkSerializer(serializers.ModelSerializer):
    """Title/url pair attached to a trip or tour."""

    class Meta:
        model = TourLink
        fields = ['title', 'url']


# =============================================================================
# Tiers
# =============================================================================

class TierSerializer(serializers.Serializer):
    """Read-only view of one TierDefinition."""

    key = serializers.CharField()
    value = serializers.DecimalField(allow_null=True, **MONEY)
    description = serializers.CharField(allow_null=True)
    label = serializers.CharField()


class PriceRangeSerializer(serializers.Serializer):
    min = serializers.DecimalField(**MONEY)
    max = serializers.DecimalField(**MONEY)


def validate_tier_table(value):
    """
    Check a tier table submitted by an administrator.

    Stored tables are read fail-soft, but new ones must be well formed:
    every entry an object with a non-negative numeric ``value`` and an
    optional string ``description``.
    """
    if value in (None, {}):
        return None
    if not isinstance(value, dict):
        raise serializers.ValidationError('Price tiers must be an object keyed by tier.')

    errors = {}
    for key, definition in value.items():
        if not str(key).strip():
            errors[key] = 'Tier key cannot be blank.'
            continue
        if not isinstance(definition, dict):
            errors[key] = 'Tier must be an object with a value.'
            continue
        amount = coerce_price(definition.get('value'))
        if amount is None:
            errors[key] = 'Tier value must be a number.'
        elif amount < 0:
            errors[key] = 'Tier value cannot be negative.'
        description = definition.get('description')
        if description is not None and not isinstance(description, str):
            errors[key] = 'Tier description must be text.'

    if errors:
        raise serializers.ValidationError(errors)
    return value


# =============================================================================
# Tours
# =============================================================================

class TourSerializer(serializers.ModelSerializer):
    """Full tour representation with parsed tiers and display range."""

    links = TourLinkSerializer(many=True, read_only=True)
    trip_name = serializers.CharField(source='trip.name', read_only=True)
    tiers = serializers.SerializerMethodField()
    price_range = serializers.SerializerMethodField()

    class Meta:
        model = Tour
        fields = [
            'id',
            'trip',
            'trip_name',
            'name',
            'date',
            'time',
            'price',
            'prices',
            'tiers',
            'price_range',
            'is_free',
            'description',
            'image_url',
            'tags',
            'links',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_tiers(self, obj):
        return TierSerializer(parse_tiers(obj.prices).values(), many=True).data

    def get_price_range(self, obj):
        low, high = price_range(obj)
        return PriceRangeSerializer({'min': low, 'max': high}).data


class TourListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    price_range = serializers.SerializerMethodField()

    class Meta:
        model = Tour
        fields = [
            'id',
            'trip',
            'name',
            'date',
            'time',
            'price',
            'price_range',
            'is_free',
            'tags',
        ]
        read_only_fields = fields

    def get_price_range(self, obj):
        low, high = price_range(obj)
        return PriceRangeSerializer({'min': low, 'max': high}).data


class TourWriteSerializer(serializers.Serializer):
    """Input for creating and updating tours."""

    trip = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    date = serializers.DateField()
    time = serializers.TimeField(required=False, allow_null=True)
    price = serializers.DecimalField(required=False, min_value=0, **MONEY)
    prices = serializers.JSONField(required=False, allow_null=True, validators=[validate_tier_table])
    is_free = serializers.BooleanField(required=False, default=False)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    image_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        default=list,
    )
    links = TourLinkSerializer(many=True, required=False)

    def validate(self, attrs):
        # On create a paid tour needs some price: a flat price or tiers
        if not self.partial and not attrs.get('is_free'):
            if attrs.get('price') is None and not attrs.get('prices'):
                raise serializers.ValidationError({
                    'price': 'A paid tour needs a price or price tiers.'
                })
        return attrs


# =============================================================================
# Trips
# =============================================================================

class TripSerializer(serializers.ModelSerializer):
    """Full trip representation."""

    links = TourLinkSerializer(many=True, read_only=True)
    tour_count = serializers.IntegerField(source='tours.count', read_only=True)
    group_count = serializers.IntegerField(source='groups.count', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id',
            'name',
            'destination',
            'start_date',
            'end_date',
            'description',
            'status',
            'image_url',
            'links',
            'tour_count',
            'group_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TripWriteSerializer(serializers.Serializer):
    """Input for creating and updating trips."""

    name = serializers.CharField(max_length=200)
    destination = serializers.CharField(max_length=200)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    description = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(choices=TripStatus.choices, required=False, default=TripStatus.UPCOMING)
    image_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    links = TourLinkSerializer(many=True, required=False)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'Trip cannot end before it starts.'})
        return attrs


class TourQuerySerializer(serializers.Serializer):
    """Query parameters of the tour list."""

    trip = serializers.UUIDField(required=False)
    tag = serializers.CharField(required=False)
    search = serializers.CharField(required=False)
    min_price = serializers.DecimalField(required=False, **MONEY)
    max_price = serializers.DecimalField(required=False, **MONEY)
    date = serializers.DateField(required=False)


class TripFilterSerializer(serializers.Serializer):
    """Optional ``?trip=`` filter shared by list endpoints."""

    trip = serializers.UUIDField(required=False)
