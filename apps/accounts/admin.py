from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for email-based accounts."""

    list_display = [
        'email',
        'display_name',
        'is_active',
        'is_staff',
        'led_groups_count',
        'created_at',
        'last_login',
    ]
    list_filter = ['is_active', 'is_staff', 'is_superuser', 'created_at']
    search_fields = ['email', 'display_name', 'phone']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'phone', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    actions = ['grant_trip_admin', 'revoke_trip_admin']

    def led_groups_count(self, obj):
        return obj.led_groups.count()
    led_groups_count.short_description = 'Groups led'

    @admin.action(description='Grant trip administration')
    def grant_trip_admin(self, request, queryset):
        count = queryset.update(is_staff=True)
        self.message_user(request, f'{count} user(s) can now administer trips.')

    @admin.action(description='Revoke trip administration')
    def revoke_trip_admin(self, request, queryset):
        """Revoke staff rights; superusers are skipped."""
        count = queryset.filter(is_superuser=False).update(is_staff=False)
        skipped = queryset.count() - count
        msg = f'Revoked trip administration from {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)
