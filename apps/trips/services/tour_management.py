"""Tour CRUD and search service."""

from datetime import date
from decimal import Decimal
from django.db import transaction
from django.db.models import Q, QuerySet
from uuid import UUID
from typing import Optional, Dict, Any, List

from ..models import Trip, Tour
from .exceptions import TripNotFoundError, TourNotFoundError
from .trip_management import replace_links


def _clean_tags(tags: Optional[List[str]]) -> List[str]:
    cleaned = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


@transaction.atomic
def create_tour(
    *,
    trip_id: UUID,
    name: str,
    date: date,
    price: Decimal = Decimal('0.00'),
    prices: Optional[Dict[str, Any]] = None,
    is_free: bool = False,
    time=None,
    description: str = '',
    image_url: str = '',
    tags: Optional[List[str]] = None,
    links: Optional[List[Dict[str, str]]] = None
) -> Tour:
    """
    Create a tour inside a trip.

    An empty tier table is stored as None so the tour is priced by its flat
    price only.

    Raises:
        TripNotFoundError: If trip doesn't exist
    """
    try:
        trip = Trip.objects.get(id=trip_id)
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip {trip_id} not found")

    tour = Tour.objects.create(
        trip=trip,
        name=name,
        date=date,
        time=time,
        price=price,
        prices=prices or None,
        is_free=is_free,
        description=description,
        image_url=image_url,
        tags=_clean_tags(tags),
    )
    replace_links(owner=tour, links=links)
    return tour


@transaction.atomic
def update_tour(*, tour_id: UUID, data: Dict[str, Any]) -> Tour:
    """
    Update an existing tour.

    Changing the tier table never rewrites stored attendance; groups whose
    selected key no longer resolves are valued at the flat price.

    Raises:
        TourNotFoundError: If tour doesn't exist
    """
    try:
        tour = Tour.objects.select_for_update().get(id=tour_id)
    except Tour.DoesNotExist:
        raise TourNotFoundError(f"Tour {tour_id} not found")

    allowed_fields = [
        'name', 'date', 'time', 'price', 'is_free',
        'description', 'image_url',
    ]
    for field in allowed_fields:
        if field in data:
            setattr(tour, field, data[field])

    if 'prices' in data:
        tour.prices = data['prices'] or None
    if 'tags' in data:
        tour.tags = _clean_tags(data['tags'])

    tour.save()
    replace_links(owner=tour, links=data.get('links'))
    return tour


def get_tour_by_id(tour_id: UUID) -> Tour:
    try:
        return Tour.objects.select_related('trip').prefetch_related('links').get(id=tour_id)
    except Tour.DoesNotExist:
        raise TourNotFoundError(f"Tour {tour_id} not found")


def search_tours(
    *,
    trip_id: Optional[UUID] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    on_date: Optional[date] = None
) -> QuerySet[Tour]:
    """
    Search and filter tours.

    Args:
        trip_id: Only tours of this trip
        tag: Category tag, matched case-insensitively
        search: Search term for name and description
        min_price: Minimum flat price
        max_price: Maximum flat price
        on_date: Only tours on this date

    Returns:
        Filtered QuerySet of Tour ordered by date, time and name
    """
    queryset = Tour.objects.select_related('trip').prefetch_related('links')

    if trip_id:
        queryset = queryset.filter(trip_id=trip_id)

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(description__icontains=search)
        )

    if min_price is not None:
        queryset = queryset.filter(price__gte=min_price)

    if max_price is not None:
        queryset = queryset.filter(price__lte=max_price)

    if on_date:
        queryset = queryset.filter(date=on_date)

    if tag:
        # Tags are a JSON list; compare in Python so every backend behaves alike
        wanted = tag.strip().lower()
        tagged_ids = [
            tour_id
            for tour_id, tags in queryset.values_list('id', 'tags')
            if any(isinstance(t, str) and t.lower() == wanted for t in tags or [])
        ]
        queryset = queryset.filter(id__in=tagged_ids)

    return queryset


def get_all_tags(*, trip_id: Optional[UUID] = None) -> List[str]:
    """Sorted list of distinct tour tags."""
    queryset = Tour.objects.all()
    if trip_id:
        queryset = queryset.filter(trip_id=trip_id)

    tags = set()
    for tour_tags in queryset.values_list('tags', flat=True):
        tags.update(t for t in tour_tags or [] if isinstance(t, str))
    return sorted(tags, key=str.lower)


@transaction.atomic
def delete_tour(*, tour_id: UUID) -> None:
    """Delete a tour and the attendance recorded for it."""
    deleted, _ = Tour.objects.filter(id=tour_id).delete()
    if not deleted:
        raise TourNotFoundError(f"Tour {tour_id} not found")
