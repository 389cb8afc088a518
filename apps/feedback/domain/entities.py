"""
Feedback Domain Entities

Feedback may only be attached to a completed booking by the booking's
owner, once. Lazy completion runs before the eligibility check, so an
approved stay whose check-out has passed is eligible.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from shared.domain.actors import Actor
from shared.domain.base import Aggregate
from shared.domain.exceptions import ConflictError, PermissionDeniedError, ValidationError
from apps.bookings.domain.entities import Booking, BookingStatus, NOT_OWNER_MESSAGE

MIN_RATING = 1
MAX_RATING = 5
COMMENT_MAX_LENGTH = 1000

NOT_COMPLETED_MESSAGE = "Feedback can only be submitted for completed bookings."
ALREADY_SUBMITTED_MESSAGE = "Feedback has already been submitted for this booking."


def validate_feedback_input(rating, comment: str | None) -> None:
    """Raise ValidationError unless rating is an int in [1, 5] and the comment fits"""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("The rating must be an integer.")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"The rating must be between {MIN_RATING} and {MAX_RATING}.")
    if comment and len(comment) > COMMENT_MAX_LENGTH:
        raise ValidationError(f"The comment may not be greater than {COMMENT_MAX_LENGTH} characters.")


def ensure_owner(booking: Booking, actor: Actor) -> None:
    """Only the owner may leave feedback; administrators are no exception"""
    if not actor.owns(booking.user_id):
        raise PermissionDeniedError(NOT_OWNER_MESSAGE)


def rating_tone(rating: int) -> str:
    if rating >= 4:
        return 'excellent'
    if rating >= 3:
        return 'good'
    return 'valuable'


@dataclass(kw_only=True)
class Feedback(Aggregate):

    booking_id: UUID
    user_id: int
    rating: int
    comment: str = ''

    @classmethod
    def submit(cls, *, booking: Booking, actor: Actor, rating: int, comment: str = '', now: datetime) -> 'Feedback':
        """
        Create feedback for a completed booking

        The caller checks for existing feedback; this method checks input,
        ownership and the booking's status.
        Events: FeedbackReceived
        """
        validate_feedback_input(rating, comment)
        ensure_owner(booking, actor)
        if booking.status != BookingStatus.COMPLETED:
            raise ConflictError(NOT_COMPLETED_MESSAGE)

        feedback = cls(
            booking_id=booking.id,
            user_id=booking.user_id,
            rating=rating,
            comment=comment or '',
            created_at=now,
            updated_at=now,
        )

        from apps.feedback.domain.events import FeedbackReceived

        feedback.add_event(FeedbackReceived(
            aggregate_id=feedback.id,
            feedback_id=feedback.id,
            booking_id=booking.id,
            user_id=booking.user_id,
            rating=rating,
        ))
        return feedback
