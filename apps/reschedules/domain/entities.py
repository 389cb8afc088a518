"""
Reschedule Domain Entities

- RescheduleStatus: pending -> approved | declined
- RescheduleRequest: aggregate for a proposed change of a booking's dates
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from shared.domain.actors import Actor, require_admin, require_manager
from shared.domain.base import Aggregate
from shared.domain.exceptions import ConflictError, ValidationError
from shared.domain.value_objects import StayPeriod
from apps.bookings.domain.entities import Booking, BookingStatus, NOT_OWNER_MESSAGE

REASON_MAX_LENGTH = 1000

CANCELLED_BOOKING_MESSAGE = "Cannot reschedule a cancelled booking"
PENDING_EXISTS_MESSAGE = "You already have a pending reschedule request for this booking"
ALREADY_PROCESSED_MESSAGE = "This reschedule request has already been processed"


class RescheduleStatus(str, Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    DECLINED = 'declined'


@dataclass(kw_only=True)
class RescheduleRequest(Aggregate):
    """
    Reschedule Request Aggregate

    ``user_id`` is the owner of the booking. A request is resolved exactly
    once; resolving it records the responding administrator and time.
    """

    booking_id: UUID
    user_id: int
    stay: StayPeriod
    reason: str = ''
    status: RescheduleStatus = RescheduleStatus.PENDING
    responded_by: int | None = None
    responded_at: datetime | None = None

    @classmethod
    def submit(
        cls,
        *,
        booking: Booking,
        actor: Actor,
        check_in: datetime,
        check_out: datetime,
        reason: str = '',
        now: datetime,
    ) -> 'RescheduleRequest':
        """
        Propose new dates for ``booking``

        Events: RescheduleRequested
        """
        require_manager(actor, booking.user_id, NOT_OWNER_MESSAGE)
        if booking.status == BookingStatus.CANCELLED:
            raise ConflictError(CANCELLED_BOOKING_MESSAGE)

        reason = reason or ''
        if len(reason) > REASON_MAX_LENGTH:
            raise ValidationError(f"The reason may not be greater than {REASON_MAX_LENGTH} characters.")

        stay = StayPeriod(check_in, check_out)
        if not stay.starts_after(now):
            raise ValidationError("The new check-in date must be a date after now.")

        request = cls(
            booking_id=booking.id,
            user_id=booking.user_id,
            stay=stay,
            reason=reason,
            created_at=now,
            updated_at=now,
        )

        from apps.reschedules.domain.events import RescheduleRequested

        request.add_event(RescheduleRequested(
            aggregate_id=request.id,
            request_id=request.id,
            booking_id=booking.id,
            user_id=booking.user_id,
            stay=stay,
        ))
        return request

    def approve(self, actor: Actor, booking: Booking, now: datetime):
        """
        Approve and move ``booking`` to the proposed dates

        Only the booking's dates change; its status is left as it is.
        Events: RescheduleApproved
        """
        require_admin(actor)
        self._require_pending()
        if booking.id != self.booking_id:
            raise ValueError(f"Booking {booking.id} is not the subject of request {self.id}")

        from apps.reschedules.domain.events import RescheduleApproved

        booking.reschedule(self.stay, now)
        self._resolve(RescheduleStatus.APPROVED, actor, now)

        self.add_event(RescheduleApproved(
            aggregate_id=self.id,
            request_id=self.id,
            booking_id=self.booking_id,
            user_id=self.user_id,
            stay=self.stay,
        ))

    def decline(self, actor: Actor, now: datetime):
        """
        Decline; the booking is not touched

        Events: RescheduleDeclined
        """
        require_admin(actor)
        self._require_pending()

        from apps.reschedules.domain.events import RescheduleDeclined

        self._resolve(RescheduleStatus.DECLINED, actor, now)

        self.add_event(RescheduleDeclined(
            aggregate_id=self.id,
            request_id=self.id,
            booking_id=self.booking_id,
            user_id=self.user_id,
        ))

    @property
    def is_pending(self) -> bool:
        return self.status == RescheduleStatus.PENDING

    def _require_pending(self):
        if not self.is_pending:
            raise ConflictError(ALREADY_PROCESSED_MESSAGE)

    def _resolve(self, status: RescheduleStatus, actor: Actor, now: datetime):
        self.status = status
        self.responded_by = actor.user_id
        self.responded_at = now
        self.updated_at = now

    def __repr__(self):
        return (
            f"RescheduleRequest(id={self.id}, booking_id={self.booking_id}, "
            f"status={self.status.value}, stay={self.stay!r})"
        )
