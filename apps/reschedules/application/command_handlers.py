"""
Reschedule Command Handlers

Commands:
- SubmitRescheduleCommand: owner (or admin) proposes new dates
- ApproveRescheduleCommand: admin accepts; the booking's dates change
- DeclineRescheduleCommand: admin rejects; the booking is untouched

Submission holds a row lock on the booking while it checks for an
existing pending request and inserts the new one; the partial unique
index on pending requests backs the check.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.domain.actors import Actor, require_admin
from shared.domain.exceptions import ConflictError, NotFoundError
from shared.infrastructure.clock import SystemClock
from apps.reschedules.domain.entities import PENDING_EXISTS_MESSAGE, RescheduleRequest

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND = "Booking not found"
REQUEST_NOT_FOUND = "Reschedule request not found"


# ===== Commands =====

@dataclass
class SubmitRescheduleCommand:
    actor: Actor
    booking_id: UUID
    new_check_in: datetime
    new_check_out: datetime
    reason: str = ''


@dataclass
class ApproveRescheduleCommand:
    actor: Actor
    request_id: UUID


@dataclass
class DeclineRescheduleCommand:
    actor: Actor
    request_id: UUID


# ===== Command Handlers =====

class SubmitRescheduleHandler:

    def __init__(self, reschedule_repo, booking_repo, clock=None, bus=None):
        self.reschedule_repo = reschedule_repo
        self.booking_repo = booking_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def handle(self, command: SubmitRescheduleCommand) -> RescheduleRequest:
        logger.info(
            f"Submitting reschedule for booking {command.booking_id} by user {command.actor.user_id}: "
            f"{command.new_check_in} - {command.new_check_out}"
        )

        with DjangoUnitOfWork(self.bus) as uow:
            booking = self.booking_repo.lock(command.booking_id)
            if booking is None:
                raise NotFoundError(BOOKING_NOT_FOUND)

            request = RescheduleRequest.submit(
                booking=booking,
                actor=command.actor,
                check_in=command.new_check_in,
                check_out=command.new_check_out,
                reason=command.reason,
                now=self.clock.now(),
            )

            if self.reschedule_repo.find_pending_by_booking(booking.id) is not None:
                raise ConflictError(PENDING_EXISTS_MESSAGE)

            self.reschedule_repo.create(request)
            uow.collect_events(request)

        logger.info(f"Reschedule request {request.id} submitted for booking {booking.reference}")
        return request


class ApproveRescheduleHandler:

    def __init__(self, reschedule_repo, booking_repo, clock=None, bus=None):
        self.reschedule_repo = reschedule_repo
        self.booking_repo = booking_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def handle(self, command: ApproveRescheduleCommand) -> RescheduleRequest:
        logger.info(f"Approving reschedule request {command.request_id} by user {command.actor.user_id}")
        require_admin(command.actor)

        with DjangoUnitOfWork(self.bus) as uow:
            request = self.reschedule_repo.lock(command.request_id)
            if request is None:
                raise NotFoundError(REQUEST_NOT_FOUND)

            booking = self.booking_repo.lock(request.booking_id)
            if booking is None:
                raise NotFoundError(BOOKING_NOT_FOUND)

            request.approve(command.actor, booking, self.clock.now())

            self.booking_repo.update(booking, fields=("check_in", "check_out"))
            self.reschedule_repo.update(request)
            uow.collect_events(request)

        logger.info(
            f"Reschedule request {request.id} approved; booking {booking.reference} "
            f"now runs {booking.stay!r} (status {booking.status.value})"
        )
        return request


class DeclineRescheduleHandler:

    def __init__(self, reschedule_repo, clock=None, bus=None):
        self.reschedule_repo = reschedule_repo
        self.clock = clock or SystemClock()
        self.bus = bus

    def handle(self, command: DeclineRescheduleCommand) -> RescheduleRequest:
        logger.info(f"Declining reschedule request {command.request_id} by user {command.actor.user_id}")
        require_admin(command.actor)

        with DjangoUnitOfWork(self.bus) as uow:
            request = self.reschedule_repo.lock(command.request_id)
            if request is None:
                raise NotFoundError(REQUEST_NOT_FOUND)

            request.decline(command.actor, self.clock.now())
            self.reschedule_repo.update(request)
            uow.collect_events(request)

        logger.info(f"Reschedule request {request.id} declined")
        return request
