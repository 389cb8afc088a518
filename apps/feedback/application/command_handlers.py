"""
Feedback Command Handlers

Commands:
- SubmitFeedbackCommand: the booking owner rates a completed stay

Order of checks: input, booking exists, ownership, lazy completion,
completed status, no earlier feedback. The status and duplicate checks
run under a row lock on the booking.
"""

from dataclasses import dataclass
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor
from shared.domain.exceptions import ConflictError, NotFoundError
from shared.infrastructure.clock import SystemClock
from apps.bookings.application.queries import LazyCompletion
from apps.feedback.domain.entities import (
    ALREADY_SUBMITTED_MESSAGE,
    Feedback,
    ensure_owner,
    validate_feedback_input,
)

logger = logging.getLogger(__name__)


@dataclass
class SubmitFeedbackCommand:
    actor: Actor
    booking_id: UUID
    rating: int
    comment: str = ''


class SubmitFeedbackHandler:

    def __init__(self, feedback_repo, booking_repo, clock=None, bus=None):
        self.feedback_repo = feedback_repo
        self.booking_repo = booking_repo
        self.clock = clock or SystemClock()
        self.bus = bus
        self.completion = LazyCompletion(booking_repo, self.clock, bus)

    def handle(self, command: SubmitFeedbackCommand) -> Feedback:
        logger.info(
            f"Submitting feedback for booking {command.booking_id} by user {command.actor.user_id} "
            f"(rating {command.rating})"
        )
        validate_feedback_input(command.rating, command.comment)

        booking = self.booking_repo.get(command.booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        ensure_owner(booking, command.actor)

        # Completion is committed on its own, whatever happens to the feedback.
        self.completion.apply(booking)

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self.booking_repo.lock(command.booking_id)
            if booking is None:
                raise NotFoundError("Booking not found")

            feedback = Feedback.submit(
                booking=booking,
                actor=command.actor,
                rating=command.rating,
                comment=command.comment,
                now=self.clock.now(),
            )

            if self.feedback_repo.find_by_booking(booking.id) is not None:
                raise ConflictError(ALREADY_SUBMITTED_MESSAGE)

            self.feedback_repo.create(feedback)
            uow.collect_events(feedback)

        logger.info(f"Feedback {feedback.id} stored for booking {booking.reference}")
        return feedback
