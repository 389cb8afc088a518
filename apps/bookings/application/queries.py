"""
Booking read paths

Every read of a booking goes through ``LazyCompletion`` so an approved
stay whose check-out has passed is reported (and stored) as completed.
"""

from dataclasses import dataclass
from typing import List
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor, require_manager
from shared.domain.exceptions import NotFoundError
from shared.infrastructure.clock import SystemClock
from apps.bookings.domain.entities import Booking, NOT_OWNER_MESSAGE
from apps.bookings.domain.lifecycle import evaluate_completion

logger = logging.getLogger(__name__)


class LazyCompletion:
    """Applies the completion rule to a loaded booking and persists it"""

    def __init__(self, booking_repo, clock=None, bus=None):
        self.booking_repo = booking_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def apply(self, booking: Booking) -> Booking:
        now = self.clock.now()
        completed, event = evaluate_completion(booking, now)
        if event is None:
            return booking

        with DjangoUnitOfWork(self.bus) as uow:
            if self.booking_repo.complete_if_due(booking.id, now):
                completed.add_event(event)
                uow.collect_events(completed)
                logger.info(f"Booking {booking.reference} completed (check-out {booking.check_out})")
                return completed

        # Someone else completed it first; report what is stored.
        logger.debug(f"Booking {booking.reference} was already completed by another reader")
        return self.booking_repo.get(booking.id) or completed

    def apply_all(self, bookings: List[Booking]) -> List[Booking]:
        return [self.apply(booking) for booking in bookings]


@dataclass
class GetBookingQuery:
    actor: Actor
    booking_id: UUID


@dataclass
class ListBookingsQuery:
    actor: Actor


class GetBookingHandler:

    def __init__(self, booking_repo, clock=None, bus=None):
        self.booking_repo = booking_repo
        self.completion = LazyCompletion(booking_repo, clock, bus)

    def handle(self, query: GetBookingQuery) -> Booking:
        booking = self.booking_repo.get(query.booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        require_manager(query.actor, booking.user_id, NOT_OWNER_MESSAGE)
        return self.completion.apply(booking)


class ListBookingsHandler:
    """Administrators see every booking, everyone else their own"""

    def __init__(self, booking_repo, clock=None, bus=None):
        self.booking_repo = booking_repo
        self.completion = LazyCompletion(booking_repo, clock, bus)

    def handle(self, query: ListBookingsQuery) -> List[Booking]:
        if query.actor.is_admin:
            bookings = self.booking_repo.list_all()
        else:
            bookings = self.booking_repo.list_by_user(query.actor.user_id)
        return self.completion.apply_all(bookings)
