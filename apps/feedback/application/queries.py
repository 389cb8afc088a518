"""Read paths for feedback."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.actors import Actor, require_admin, require_manager
from shared.domain.exceptions import NotFoundError
from apps.bookings.domain.entities import NOT_OWNER_MESSAGE
from apps.feedback.domain.entities import Feedback


@dataclass
class GetBookingFeedbackQuery:
    actor: Actor
    booking_id: UUID


@dataclass
class FeedbackStatisticsQuery:
    actor: Actor
    year: int


class GetBookingFeedbackHandler:
    """Feedback of a booking for its owner or an administrator; None if absent"""

    def __init__(self, feedback_repo, booking_repo):
        self.feedback_repo = feedback_repo
        self.booking_repo = booking_repo

    def handle(self, query: GetBookingFeedbackQuery) -> Optional[Feedback]:
        booking = self.booking_repo.get(query.booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        require_manager(query.actor, booking.user_id, NOT_OWNER_MESSAGE)
        return self.feedback_repo.find_by_booking(booking.id)


class FeedbackStatisticsHandler:

    def __init__(self, feedback_repo):
        self.feedback_repo = feedback_repo

    def handle(self, query: FeedbackStatisticsQuery) -> dict:
        require_admin(query.actor, "Unauthorized. Admin access required.")
        return self.feedback_repo.statistics(query.year)
