"""Notification services: in-app rows and their email copies."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore

from .models import Notification

logger = logging.getLogger(__name__)


def send_email_notification(recipient_email: str, subject: str, message: str) -> bool:
    """Send a plain-text email. Returns False instead of raising on failure."""
    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            fail_silently=False,
        )
        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


class Notifier:
    """
    Creates in-app notifications

    ``emit`` is called from event handlers after the state change has
    committed. Storing the row may raise; the message bus logs and drops
    such errors. Queuing the email copy never raises.
    """

    def emit(
        self,
        user_id: int,
        title: str,
        message: str,
        category: str = Notification.Category.BOOKING,
    ) -> Notification:
        if category not in Notification.Category.values:
            raise ValueError(f"Unknown notification category: {category}")

        notification = Notification.objects.create(
            user_id=user_id,
            title=title,
            message=message,
            category=category,
        )
        logger.info(f"Notification {notification.pk} ({category}) created for user {user_id}: {title}")

        if getattr(settings, "NOTIFICATIONS_EMAIL_ENABLED", False):
            self._queue_email(notification)
        return notification

    def _queue_email(self, notification: Notification) -> None:
        try:
            from .tasks import deliver_notification_email

            deliver_notification_email.delay(notification.pk)
        except Exception as e:
            logger.warning(f"Could not queue email for notification {notification.pk}: {e}", exc_info=True)


notifier = Notifier()
