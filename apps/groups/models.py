from django.db import models
import uuid
from apps.pricing import normalize_attendance


class PaymentMethod(models.TextChoices):
    PIX = 'pix', 'Pix'
    CREDIT_CARD = 'credit_card', 'Cartão de Crédito'
    DEBIT_CARD = 'debit_card', 'Cartão de Débito'
    CASH = 'cash', 'Dinheiro'
    BANK_TRANSFER = 'bank_transfer', 'Transferência Bancária'
    BOLETO = 'boleto', 'Boleto'


class Group(models.Model):
    """
    Travelling party signed up for a trip.

    Members are plain names; the leader is a contact person and, optionally,
    the user account that confirms tours for the group.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey('trips.Trip', on_delete=models.CASCADE, related_name='groups')
    name = models.CharField(max_length=200)
    members = models.JSONField(default=list, blank=True)
    leader_name = models.CharField(max_length=200)
    leader_email = models.EmailField(blank=True)
    leader_phone = models.CharField(max_length=30, blank=True)
    leader = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='led_groups',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        indexes = [
            models.Index(fields=['trip', 'name'], name='groups_trip_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def members_count(self):
        return len(self.members or [])

    @property
    def people_count(self):
        """Members plus the leader."""
        return self.members_count + 1

    @property
    def participants(self):
        """Names that may be confirmed on a tour: members and the leader."""
        names = list(self.members or [])
        if self.leader_name and self.leader_name not in names:
            names.append(self.leader_name)
        return names

    def is_led_by(self, user):
        return bool(user and user.is_authenticated and self.leader_id == user.id)


class TourAttendance(models.Model):
    """
    Attendance of one group on one tour.

    ``record`` holds the stored value as written: either a bare list of
    member names or a structured record. Read it through ``attendance``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='tour_attendance')
    tour = models.ForeignKey('trips.Tour', on_delete=models.CASCADE, related_name='attendance')
    record = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tour_attendance'
        unique_together = [['group', 'tour']]
        indexes = [
            models.Index(fields=['tour'], name='tour_attendance_tour_idx'),
        ]

    def __str__(self):
        return f"{self.group.name} @ {self.tour.name}"

    @property
    def attendance(self):
        return normalize_attendance(self.record)
