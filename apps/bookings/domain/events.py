"""
Booking Domain Events

Events recorded by the Booking aggregate. They are published on the
message bus after the transaction that produced them commits; the
notifications app turns them into messages for the booking owner.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import StayPeriod


@dataclass(kw_only=True)
class BookingSubmitted(DomainEvent):
    """A customer created a booking (status pending)"""
    booking_id: UUID
    user_id: int
    unit_id: int


@dataclass(kw_only=True)
class BookingApproved(DomainEvent):
    """
    Event: pending -> approved

    Carries the stay so the owner can be told the dates.
    """
    booking_id: UUID
    user_id: int
    unit_id: int
    stay: StayPeriod


@dataclass(kw_only=True)
class BookingDeclined(DomainEvent):
    booking_id: UUID
    user_id: int
    unit_id: int


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Event: pending/approved -> cancelled

    ``cancelled_by_admin`` tells the owner who cancelled.
    """
    booking_id: UUID
    user_id: int
    unit_id: int
    cancelled_by_admin: bool = False


@dataclass(kw_only=True)
class BookingCompleted(DomainEvent):
    """
    Event: approved -> completed

    Recorded by lazy completion the first time the booking is read after
    its check-out has passed.
    """
    booking_id: UUID
    user_id: int
    unit_id: int
