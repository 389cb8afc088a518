"""
Reschedule Domain Events

``user_id`` is always the owner of the booking, who receives the
notification, even when an administrator acted.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import StayPeriod


@dataclass(kw_only=True)
class RescheduleRequested(DomainEvent):
    request_id: UUID
    booking_id: UUID
    user_id: int
    stay: StayPeriod


@dataclass(kw_only=True)
class RescheduleApproved(DomainEvent):
    """The booking now runs over ``stay``"""
    request_id: UUID
    booking_id: UUID
    user_id: int
    stay: StayPeriod


@dataclass(kw_only=True)
class RescheduleDeclined(DomainEvent):
    request_id: UUID
    booking_id: UUID
    user_id: int
