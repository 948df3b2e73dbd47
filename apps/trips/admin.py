from django.contrib import admin
from apps.pricing import price_range
from .models import Trip, Tour, TourLink


class TourLinkInline(admin.TabularInline):
    model = TourLink
    extra = 1
    fields = ['title', 'url', 'position']
    fk_name = 'tour'


class TripLinkInline(TourLinkInline):
    fk_name = 'trip'


class TourInline(admin.TabularInline):
    """Inline admin for the tours of a trip."""
    model = Tour
    extra = 0
    fields = ['name', 'date', 'time', 'price', 'is_free']
    show_change_link = True


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    """Admin interface for Trips."""

    list_display = ['name', 'destination', 'start_date', 'end_date', 'status']
    list_filter = ['status', 'start_date']
    search_fields = ['name', 'destination', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TourInline, TripLinkInline]


@admin.register(Tour)
class TourAdmin(admin.ModelAdmin):
    """Admin interface for Tours and their price tiers."""

    list_display = ['name', 'trip', 'date', 'time', 'price', 'display_price_range', 'is_free']
    list_filter = ['is_free', 'date', 'trip']
    search_fields = ['name', 'description', 'trip__name']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['trip']
    inlines = [TourLinkInline]

    def display_price_range(self, obj):
        low, high = price_range(obj)
        return f'{low:.2f}' if low == high else f'{low:.2f} - {high:.2f}'
    display_price_range.short_description = 'Price range'
