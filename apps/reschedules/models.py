"""Reschedule request persistence models."""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RescheduleRequest(models.Model):
    """Proposed new dates for a booking, resolved by an administrator."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        DECLINED = "declined", _("Declined")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.CASCADE,
        related_name="reschedule_requests",
    )
    new_check_in = models.DateTimeField()
    new_check_out = models.DateTimeField()
    reason = models.TextField(blank=True, max_length=1000)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="resolved_reschedule_requests",
    )
    responded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Reschedule request")
        verbose_name_plural = _("Reschedule requests")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["booking"],
                condition=models.Q(status="pending"),
                name="unique_pending_reschedule_per_booking",
            ),
            models.CheckConstraint(
                condition=models.Q(new_check_out__gt=models.F("new_check_in")),
                name="reschedule_check_out_after_check_in",
            ),
        ]

    def __str__(self) -> str:
        return f"Reschedule of {self.booking_id} ({self.get_status_display()})"
