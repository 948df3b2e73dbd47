from django.contrib import admin
from apps.groups.models import Group, TourAttendance
from apps.pricing import attendance_total


class TourAttendanceInline(admin.TabularInline):
    """Inline admin for a group's stored attendance."""
    model = TourAttendance
    extra = 0
    fields = ['tour', 'record', 'amount_owed', 'updated_at']
    readonly_fields = ['amount_owed', 'updated_at']

    def amount_owed(self, obj):
        if obj.pk is None:
            return '-'
        return attendance_total(obj.tour, obj.record)


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = [
        'name',
        'trip',
        'leader_name',
        'members_count',
        'leader',
        'created_at',
    ]
    list_filter = ['trip', 'created_at']
    search_fields = ['name', 'leader_name', 'leader_email', 'leader__email']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['trip', 'leader']
    inlines = [TourAttendanceInline]
    ordering = ['trip', 'name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('trip', 'name', 'members')
        }),
        ('Leader', {
            'fields': ('leader_name', 'leader_email', 'leader_phone', 'leader')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def members_count(self, obj):
        """Show number of members."""
        return obj.members_count
    members_count.short_description = 'Members'
