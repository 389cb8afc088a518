"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "unit",
        "user",
        "guest_name",
        "status",
        "check_in",
        "check_out",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out")
    search_fields = ("guest_name", "contact", "unit__name", "user__email")
    readonly_fields = ("id", "status", "approved_at", "created_at", "updated_at")
