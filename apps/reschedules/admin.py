"""Admin registration for reschedule requests."""

from __future__ import annotations

from django.contrib import admin

from .models import RescheduleRequest


@admin.register(RescheduleRequest)
class RescheduleRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "new_check_in", "new_check_out", "status", "responded_by", "created_at")
    list_filter = ("status",)
    search_fields = ("booking__guest_name", "booking__user__email", "reason")
    readonly_fields = ("id", "status", "responded_by", "responded_at", "created_at", "updated_at")
