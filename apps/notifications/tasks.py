"""Celery tasks for notification delivery."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .models import Notification
from .services import send_email_notification

logger = logging.getLogger(__name__)


@shared_task(name="notifications.deliver_notification_email")
def deliver_notification_email(notification_id: int) -> bool:
    """Send an email copy of an in-app notification to its recipient."""
    notification = Notification.objects.select_related("user").filter(pk=notification_id).first()
    if notification is None:
        logger.warning(f"Notification {notification_id} no longer exists; email skipped")
        return False

    email = notification.user.email
    if not email:
        logger.info(f"User {notification.user_id} has no email; notification {notification_id} not mailed")
        return False

    return send_email_notification(email, f"VillaStay: {notification.title}", notification.message)
