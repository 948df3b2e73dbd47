from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class TripStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    UPCOMING = 'upcoming', 'Upcoming'
    COMPLETED = 'completed', 'Completed'


class Trip(models.Model):
    """Organized trip that groups sign up for."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    destination = models.CharField(max_length=200, db_index=True)
    start_date = models.DateField()
    end_date = models.DateField()
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=TripStatus.choices, default=TripStatus.UPCOMING)
    image_url = models.URLField(blank=True, max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'trips'
        indexes = [
            models.Index(fields=['status', 'start_date'], name='trips_status_start_idx'),
        ]
        ordering = ['start_date', 'name']

    def __str__(self):
        return f"{self.name} ({self.destination})"


class Tour(models.Model):
    """
    Bookable activity within a trip.

    ``price`` is the flat per-person price every tour has. ``prices`` is an
    optional tier table (key -> {"value", "description"}); when present the
    tier a group selected decides what each member pays.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='tours')
    name = models.CharField(max_length=200)
    date = models.DateField()
    time = models.TimeField(null=True, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    prices = models.JSONField(null=True, blank=True)
    is_free = models.BooleanField(default=False)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True, max_length=500)
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tours'
        indexes = [
            models.Index(fields=['trip', 'date'], name='tours_trip_date_idx'),
            models.Index(fields=['price'], name='tours_price_idx'),
        ]
        ordering = ['date', 'time', 'name']

    def __str__(self):
        return f"{self.name} - {self.date}"

    def save(self, *args, **kwargs):
        if self.is_free:
            self.price = Decimal('0.00')
            self.prices = None
        super().save(*args, **kwargs)

    @property
    def has_tiers(self):
        return bool(self.prices)


class TourLink(models.Model):
    """Useful link attached to a trip or to one of its tours."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, null=True, blank=True, related_name='links')
    tour = models.ForeignKey(Tour, on_delete=models.CASCADE, null=True, blank=True, related_name='links')
    title = models.CharField(max_length=200)
    url = models.URLField(max_length=500)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'tour_links'
        ordering = ['position']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(trip__isnull=False, tour__isnull=True)
                    | models.Q(trip__isnull=True, tour__isnull=False)
                ),
                name='tour_links_single_owner',
            ),
        ]

    def __str__(self):
        return self.title
