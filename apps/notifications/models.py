"""Notification model.

A message shown to a user in the web interface. Rows are created by the
``Notifier`` service and consumed by the recipient, who can mark them as
read or delete them.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Category(models.TextChoices):
        BOOKING = 'booking', _('Booking')
        SYSTEM = 'system', _('System')
        PROMOTION = 'promotion', _('Promotion')

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='notifications'
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.BOOKING)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notification_user_read_idx'),
        ]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"
