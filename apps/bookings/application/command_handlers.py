"""
Booking Command Handlers

Use cases of the booking lifecycle. Each handler runs one state
transition inside a DjangoUnitOfWork; the recorded events are published
after commit and turned into notifications.

Commands:
- CreateBookingCommand: a customer books a unit
- ApproveBookingCommand: an administrator approves a pending booking
- DeclineBookingCommand: an administrator declines a pending booking
- CancelBookingCommand: the owner or an administrator cancels
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor, require_admin, require_manager
from shared.domain.exceptions import NotFoundError, ValidationError
from shared.infrastructure.clock import SystemClock
from apps.bookings.application.queries import LazyCompletion
from apps.bookings.domain.entities import Booking, NOT_OWNER_MESSAGE

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND = "Booking not found"


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    actor: Actor
    unit_id: int
    guest_name: str
    contact: str
    check_in: datetime
    check_out: datetime
    guests_count: int
    special_requests: str = ''


@dataclass
class ApproveBookingCommand:
    actor: Actor
    booking_id: UUID


@dataclass
class DeclineBookingCommand:
    actor: Actor
    booking_id: UUID


@dataclass
class CancelBookingCommand:
    actor: Actor
    booking_id: UUID


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    The booking always belongs to the acting user and starts as pending.
    No availability check is made against other bookings of the unit.
    """

    def __init__(self, booking_repo, unit_repo, clock=None, bus=None):
        self.booking_repo = booking_repo
        self.unit_repo = unit_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def handle(self, command: CreateBookingCommand) -> Booking:
        logger.info(
            f"Creating booking for unit {command.unit_id}, user {command.actor.user_id}, "
            f"dates {command.check_in} - {command.check_out}"
        )

        if not self.unit_repo.exists(command.unit_id):
            raise ValidationError("The selected unit is invalid.")

        booking = Booking.submit(
            user_id=command.actor.user_id,
            unit_id=command.unit_id,
            guest_name=command.guest_name,
            contact=command.contact,
            check_in=command.check_in,
            check_out=command.check_out,
            guests_count=command.guests_count,
            special_requests=command.special_requests,
            now=self.clock.now(),
        )

        with DjangoUnitOfWork(self.bus) as uow:
            self.booking_repo.create(booking)
            uow.collect_events(booking)

        logger.info(f"Booking created: {booking.reference} (ID: {booking.id})")
        return booking


class _TransitionHandler:
    """Loads the booking under lock, applies one transition, stores it"""

    def __init__(self, booking_repo, clock=None, bus=None):
        self.booking_repo = booking_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def _load_locked(self, booking_id: UUID) -> Booking:
        booking = self.booking_repo.lock(booking_id)
        if booking is None:
            raise NotFoundError(BOOKING_NOT_FOUND)
        return booking


class ApproveBookingHandler(_TransitionHandler):

    def handle(self, command: ApproveBookingCommand) -> Booking:
        logger.info(f"Approving booking {command.booking_id} by user {command.actor.user_id}")
        require_admin(command.actor)

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load_locked(command.booking_id)
            booking.approve(command.actor, self.clock.now())
            self.booking_repo.update(booking, fields=("status", "approved_at"))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.reference} approved")
        return booking


class DeclineBookingHandler(_TransitionHandler):

    def handle(self, command: DeclineBookingCommand) -> Booking:
        logger.info(f"Declining booking {command.booking_id} by user {command.actor.user_id}")
        require_admin(command.actor)

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load_locked(command.booking_id)
            booking.decline(command.actor, self.clock.now())
            self.booking_repo.update(booking, fields=("status", "approved_at"))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.reference} declined")
        return booking


class CancelBookingHandler(_TransitionHandler):

    def handle(self, command: CancelBookingCommand) -> Booking:
        logger.info(f"Cancelling booking {command.booking_id} by user {command.actor.user_id}")

        booking = self.booking_repo.get(command.booking_id)
        if booking is None:
            raise NotFoundError(BOOKING_NOT_FOUND)
        require_manager(command.actor, booking.user_id, NOT_OWNER_MESSAGE)

        # Completion is committed on its own, before the status guard runs.
        LazyCompletion(self.booking_repo, self.clock, self.bus).apply(booking)

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self._load_locked(command.booking_id)
            booking.cancel(command.actor, self.clock.now())
            self.booking_repo.update(booking, fields=("status",))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.reference} cancelled")
        return booking
