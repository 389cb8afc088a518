"""Read paths for reschedule requests (newest first)."""

from dataclasses import dataclass
from typing import List
from uuid import UUID

from shared.domain.actors import Actor, require_admin, require_manager
from shared.domain.exceptions import NotFoundError
from apps.bookings.domain.entities import NOT_OWNER_MESSAGE
from apps.reschedules.domain.entities import RescheduleRequest


@dataclass
class ListBookingReschedulesQuery:
    actor: Actor
    booking_id: UUID


@dataclass
class ListRescheduleRequestsQuery:
    actor: Actor


class ListBookingReschedulesHandler:
    """Requests of one booking, for its owner or an administrator"""

    def __init__(self, reschedule_repo, booking_repo):
        self.reschedule_repo = reschedule_repo
        self.booking_repo = booking_repo

    def handle(self, query: ListBookingReschedulesQuery) -> List[RescheduleRequest]:
        booking = self.booking_repo.get(query.booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        require_manager(query.actor, booking.user_id, NOT_OWNER_MESSAGE)
        return self.reschedule_repo.list_by_booking(booking.id)


class ListRescheduleRequestsHandler:

    def __init__(self, reschedule_repo):
        self.reschedule_repo = reschedule_repo

    def handle(self, query: ListRescheduleRequestsQuery) -> List[RescheduleRequest]:
        require_admin(query.actor, "Unauthorized. Admin access required.")
        return self.reschedule_repo.list_all()
