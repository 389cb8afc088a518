"""Admin registration for feedback."""

from __future__ import annotations

from django.contrib import admin

from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ("booking", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("comment", "user__email")
    readonly_fields = ("booking", "user", "rating", "comment", "created_at")
