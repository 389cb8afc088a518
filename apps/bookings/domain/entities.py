"""
Booking Domain Entities

- BookingStatus: states of the booking lifecycle
- Booking: aggregate root for a reservation of a unit
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from shared.domain.actors import Actor, require_admin, require_manager
from shared.domain.base import Aggregate
from shared.domain.exceptions import ConflictError, ValidationError
from shared.domain.value_objects import StayPeriod

NAME_MAX_LENGTH = 255
CONTACT_MAX_LENGTH = 255
SPECIAL_REQUESTS_MAX_LENGTH = 1000

NOT_OWNER_MESSAGE = "Unauthorized. This booking does not belong to you."


def booking_reference(booking_id) -> str:
    """Short human-readable booking number used in messages"""
    return str(booking_id).split('-')[0].upper()


class BookingStatus(str, Enum):
    """
    Booking lifecycle

    - PENDING -> APPROVED (admin approves)
    - PENDING -> DECLINED (admin declines)
    - PENDING / APPROVED -> CANCELLED (owner or admin)
    - APPROVED -> COMPLETED (lazy completion once check-out has passed)

    DECLINED, CANCELLED and COMPLETED are terminal.
    """
    PENDING = 'pending'
    APPROVED = 'approved'
    DECLINED = 'declined'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.DECLINED, BookingStatus.CANCELLED, BookingStatus.COMPLETED)


@dataclass(kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - stay.check_out > stay.check_in (enforced by StayPeriod)
    - guests_count >= 1
    - approved_at is set only by approval
    """

    user_id: int
    unit_id: int
    guest_name: str
    contact: str
    stay: StayPeriod
    guests_count: int
    special_requests: str = ''
    status: BookingStatus = BookingStatus.PENDING
    approved_at: datetime | None = None

    @classmethod
    def submit(
        cls,
        *,
        user_id: int,
        unit_id: int,
        guest_name: str,
        contact: str,
        check_in: datetime,
        check_out: datetime,
        guests_count: int,
        special_requests: str = '',
        now: datetime,
    ) -> 'Booking':
        """
        Create a new pending booking

        Raises ValidationError when any input constraint is violated.
        Events: BookingSubmitted
        """
        guest_name = (guest_name or '').strip()
        contact = (contact or '').strip()
        special_requests = special_requests or ''

        if not guest_name:
            raise ValidationError("The name field is required.")
        if len(guest_name) > NAME_MAX_LENGTH:
            raise ValidationError(f"The name may not be greater than {NAME_MAX_LENGTH} characters.")
        if not contact:
            raise ValidationError("The contact field is required.")
        if len(contact) > CONTACT_MAX_LENGTH:
            raise ValidationError(f"The contact may not be greater than {CONTACT_MAX_LENGTH} characters.")
        if isinstance(guests_count, bool) or not isinstance(guests_count, int) or guests_count < 1:
            raise ValidationError("The number of guests must be at least 1.")
        if len(special_requests) > SPECIAL_REQUESTS_MAX_LENGTH:
            raise ValidationError(
                f"The special requests may not be greater than {SPECIAL_REQUESTS_MAX_LENGTH} characters."
            )

        stay = StayPeriod(check_in, check_out)
        if not stay.starts_after(now):
            raise ValidationError("The check-in date must be a date after now.")

        booking = cls(
            user_id=user_id,
            unit_id=unit_id,
            guest_name=guest_name,
            contact=contact,
            stay=stay,
            guests_count=guests_count,
            special_requests=special_requests,
            status=BookingStatus.PENDING,
            approved_at=None,
            created_at=now,
            updated_at=now,
        )

        from apps.bookings.domain.events import BookingSubmitted

        booking.add_event(BookingSubmitted(
            aggregate_id=booking.id,
            booking_id=booking.id,
            user_id=user_id,
            unit_id=unit_id,
        ))
        return booking

    def approve(self, actor: Actor, now: datetime):
        """
        Approve booking (PENDING -> APPROVED)

        Events: BookingApproved
        """
        require_admin(actor)
        self._require_status(BookingStatus.PENDING, "approve")

        from apps.bookings.domain.events import BookingApproved

        self.status = BookingStatus.APPROVED
        self.approved_at = now
        self.updated_at = now

        self.add_event(BookingApproved(
            aggregate_id=self.id,
            booking_id=self.id,
            user_id=self.user_id,
            unit_id=self.unit_id,
            stay=self.stay,
        ))

    def decline(self, actor: Actor, now: datetime):
        """
        Decline booking (PENDING -> DECLINED)

        Events: BookingDeclined
        """
        require_admin(actor)
        self._require_status(BookingStatus.PENDING, "decline")

        from apps.bookings.domain.events import BookingDeclined

        self.status = BookingStatus.DECLINED
        self.approved_at = None
        self.updated_at = now

        self.add_event(BookingDeclined(
            aggregate_id=self.id,
            booking_id=self.id,
            user_id=self.user_id,
            unit_id=self.unit_id,
        ))

    def cancel(self, actor: Actor, now: datetime):
        """
        Cancel booking (PENDING / APPROVED -> CANCELLED)

        Allowed for the owner and for administrators.
        Events: BookingCancelled
        """
        require_manager(actor, self.user_id, NOT_OWNER_MESSAGE)
        if self.status.is_terminal:
            raise ConflictError(f"Cannot cancel a {self.status.value} booking")

        from apps.bookings.domain.events import BookingCancelled

        self.status = BookingStatus.CANCELLED
        self.updated_at = now

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            user_id=self.user_id,
            unit_id=self.unit_id,
            cancelled_by_admin=actor.is_admin,
        ))

    def reschedule(self, stay: StayPeriod, now: datetime):
        """Move the stay to new dates. The status is left as it is."""
        self.stay = stay
        self.updated_at = now

    def _require_status(self, expected: BookingStatus, action: str):
        if self.status != expected:
            raise ConflictError(
                f"Cannot {action} a {self.status.value} booking. "
                f"Only {expected.value} bookings can be {action}d."
            )

    @property
    def check_in(self) -> datetime:
        return self.stay.check_in

    @property
    def check_out(self) -> datetime:
        return self.stay.check_out

    @property
    def reference(self) -> str:
        return booking_reference(self.id)

    def __str__(self):
        return f"Booking #{self.reference} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, user_id={self.user_id}, unit_id={self.unit_id}, "
            f"status={self.status.value}, stay={self.stay!r})"
        )
