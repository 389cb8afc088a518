"""
Notification event handlers

Subscribed on the message bus when the app is ready. Each handler turns
one domain event into a message for the booking owner. Errors are left
to the bus, which logs them without touching the committed change.
"""

from __future__ import annotations

import logging
from datetime import datetime

from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import booking_reference
from apps.bookings.domain.events import (
    BookingApproved,
    BookingCancelled,
    BookingCompleted,
    BookingDeclined,
    BookingSubmitted,
)
from apps.feedback.domain.entities import rating_tone
from apps.feedback.domain.events import FeedbackReceived
from apps.reschedules.domain.events import RescheduleApproved, RescheduleDeclined, RescheduleRequested
from apps.units.repositories import UnitRepository
from shared.domain.value_objects import DISPLAY_DATE_FORMAT

from .models import Notification
from .services import notifier

logger = logging.getLogger(__name__)

BOOKING = Notification.Category.BOOKING
SYSTEM = Notification.Category.SYSTEM


def _unit_name(unit_id: int) -> str:
    return UnitRepository().name_of(unit_id)


def _date(value: datetime) -> str:
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime(DISPLAY_DATE_FORMAT)


# ===== Booking lifecycle =====

def notify_booking_submitted(event: BookingSubmitted):
    notifier.emit(
        event.user_id,
        "Booking Submitted",
        f"Your booking for {_unit_name(event.unit_id)} has been submitted and is pending approval. "
        f"Booking ID: #{booking_reference(event.booking_id)}",
        BOOKING,
    )


def notify_booking_approved(event: BookingApproved):
    notifier.emit(
        event.user_id,
        "Booking Approved",
        f"Great news! Your booking #{booking_reference(event.booking_id)} for {_unit_name(event.unit_id)} "
        f"has been approved. Check-in: {_date(event.stay.check_in)}, Check-out: {_date(event.stay.check_out)}",
        BOOKING,
    )


def notify_booking_declined(event: BookingDeclined):
    notifier.emit(
        event.user_id,
        "Booking Declined",
        f"Unfortunately, your booking #{booking_reference(event.booking_id)} for {_unit_name(event.unit_id)} "
        f"has been declined. Please contact us for more information or try booking another date.",
        BOOKING,
    )


def notify_booking_cancelled(event: BookingCancelled):
    cancelled_by = "the administrator" if event.cancelled_by_admin else "you"
    notifier.emit(
        event.user_id,
        "Booking Cancelled",
        f"Your booking #{booking_reference(event.booking_id)} for {_unit_name(event.unit_id)} "
        f"has been cancelled by {cancelled_by}.",
        BOOKING,
    )


def notify_booking_completed(event: BookingCompleted):
    notifier.emit(
        event.user_id,
        "Stay Completed",
        f"Your stay at {_unit_name(event.unit_id)} (Booking #{booking_reference(event.booking_id)}) "
        f"has been completed. We hope you enjoyed your stay! Please leave a review if you haven't already.",
        BOOKING,
    )


# ===== Reschedule workflow =====

def notify_reschedule_requested(event: RescheduleRequested):
    notifier.emit(
        event.user_id,
        "Reschedule Request Submitted",
        f"Your reschedule request for booking #{booking_reference(event.booking_id)} has been submitted. "
        f"New dates: {_date(event.stay.check_in)} to {_date(event.stay.check_out)}. "
        f"Waiting for admin approval.",
        BOOKING,
    )


def notify_reschedule_approved(event: RescheduleApproved):
    notifier.emit(
        event.user_id,
        "Reschedule Request Approved",
        f"Great news! Your reschedule request for booking #{booking_reference(event.booking_id)} "
        f"has been approved. New dates: {_date(event.stay.check_in)} to {_date(event.stay.check_out)}.",
        BOOKING,
    )


def notify_reschedule_declined(event: RescheduleDeclined):
    notifier.emit(
        event.user_id,
        "Reschedule Request Declined",
        f"Unfortunately, your reschedule request for booking #{booking_reference(event.booking_id)} "
        f"has been declined. Please contact us for more information or keep your original booking dates.",
        BOOKING,
    )


# ===== Feedback =====

def notify_feedback_received(event: FeedbackReceived):
    notifier.emit(
        event.user_id,
        "Thank You for Your Feedback",
        f"Thank you for your {rating_tone(event.rating)} feedback! Your review for booking "
        f"#{booking_reference(event.booking_id)} has been received. We appreciate your time and input.",
        SYSTEM,
    )


EVENT_HANDLERS = (
    (BookingSubmitted, notify_booking_submitted),
    (BookingApproved, notify_booking_approved),
    (BookingDeclined, notify_booking_declined),
    (BookingCancelled, notify_booking_cancelled),
    (BookingCompleted, notify_booking_completed),
    (RescheduleRequested, notify_reschedule_requested),
    (RescheduleApproved, notify_reschedule_approved),
    (RescheduleDeclined, notify_reschedule_declined),
    (FeedbackReceived, notify_feedback_received),
)


def register(bus) -> None:
    for event_type, handler in EVENT_HANDLERS:
        bus.register_event_handler(event_type, handler)
    logger.debug(f"Registered {len(EVENT_HANDLERS)} notification handlers")
