"""Admin registrations for units."""

from __future__ import annotations

from django.contrib import admin

from .models import Unit


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "unit_type", "capacity", "price_per_night", "status", "created_at")
    list_filter = ("unit_type", "status")
    search_fields = ("name", "description")
    readonly_fields = ("created_at", "updated_at")
