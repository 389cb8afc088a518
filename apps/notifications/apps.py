"""App configuration for notifications."""

from __future__ import annotations

from django.apps import AppConfig  # type: ignore


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.notifications"
    verbose_name = "Notifications"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from . import handlers

        handlers.register(message_bus)
