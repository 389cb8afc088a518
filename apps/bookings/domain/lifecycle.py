"""
Lazy completion

An approved booking whose check-out has passed is completed the first
time something reads it. There is no background job: every read path
calls ``evaluate_completion`` and persists the result itself.
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional, Tuple

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.events import BookingCompleted


def is_due_for_completion(booking: Booking, now: datetime) -> bool:
    return booking.status == BookingStatus.APPROVED and booking.stay.has_ended(now)


def evaluate_completion(booking: Booking, now: datetime) -> Tuple[Booking, Optional[BookingCompleted]]:
    """
    Pure completion rule

    Returns ``(booking, None)`` when nothing changes, otherwise a completed
    copy of the booking and the event to publish once the change is stored.
    The input booking is never mutated.
    """
    if not is_due_for_completion(booking, now):
        return booking, None

    completed = replace(booking, status=BookingStatus.COMPLETED, updated_at=now)
    event = BookingCompleted(
        aggregate_id=booking.id,
        booking_id=booking.id,
        user_id=booking.user_id,
        unit_id=booking.unit_id,
        occurred_at=now,
    )
    return completed, event
