"""Service-level tests for booking command handlers and read paths."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from django.utils import timezone

from apps.bookings.application.command_handlers import (
    ApproveBookingCommand,
    ApproveBookingHandler,
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    DeclineBookingCommand,
    DeclineBookingHandler,
)
from apps.bookings.application.queries import (
    GetBookingHandler,
    GetBookingQuery,
    ListBookingsHandler,
    ListBookingsQuery,
)
from apps.bookings.domain.entities import BookingStatus
from apps.bookings.models import Booking as BookingModel
from apps.bookings.repositories import BookingRepository
from apps.notifications.models import Notification
from apps.notifications.services import Notifier
from apps.units.models import Unit
from apps.units.repositories import UnitRepository
from apps.users.models import User
from shared.domain.actors import Actor
from shared.domain.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from shared.infrastructure.clock import FixedClock


class BookingHandlerTestCase(TestCase):

    def setUp(self) -> None:
        self.customer = User.objects.create_user(
            email="guest@example.com",
            password="GuestPass123",
            role=User.RoleChoices.CUSTOMER,
        )
        self.other = User.objects.create_user(
            email="other@example.com",
            password="OtherPass123",
            role=User.RoleChoices.CUSTOMER,
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.unit = Unit.objects.create(
            unit_type=Unit.UnitType.VILLA,
            name="Villa Azul",
            capacity=6,
            price_per_night=Decimal("250.00"),
        )
        self.now = timezone.now().replace(microsecond=0)
        self.clock = FixedClock(self.now)
        self.repo = BookingRepository()

    def actor(self, user) -> Actor:
        return Actor.from_user(user)

    def create_booking(self, **overrides):
        params = dict(
            actor=self.actor(self.customer),
            unit_id=self.unit.id,
            guest_name="Ana Cruz",
            contact="+639171234567",
            check_in=self.now + timedelta(days=2),
            check_out=self.now + timedelta(days=5),
            guests_count=2,
        )
        params.update(overrides)
        handler = CreateBookingHandler(self.repo, UnitRepository(), clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            return handler.handle(CreateBookingCommand(**params))

    def approve(self, booking_id, user=None):
        handler = ApproveBookingHandler(self.repo, clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            return handler.handle(ApproveBookingCommand(actor=self.actor(user or self.admin), booking_id=booking_id))

    def notifications(self, title: str):
        return Notification.objects.filter(user=self.customer, title=title)


class CreateBookingTests(BookingHandlerTestCase):

    def test_created_booking_is_pending_and_owner_is_notified(self) -> None:
        booking = self.create_booking()

        stored = BookingModel.objects.get(pk=booking.id)
        self.assertEqual(stored.status, BookingModel.Status.PENDING)
        self.assertIsNone(stored.approved_at)
        self.assertEqual(stored.user_id, self.customer.id)
        self.assertEqual(stored.check_out, self.now + timedelta(days=5))

        notification = self.notifications("Booking Submitted").get()
        self.assertIn("Villa Azul", notification.message)
        self.assertIn(f"#{booking.reference}", notification.message)
        self.assertEqual(notification.category, Notification.Category.BOOKING)

    def test_unknown_unit_is_a_validation_error(self) -> None:
        with self.assertRaises(ValidationError):
            self.create_booking(unit_id=self.unit.id + 100)
        self.assertFalse(BookingModel.objects.exists())

    def test_check_in_in_the_past_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.create_booking(check_in=self.now - timedelta(minutes=5))
        self.assertFalse(BookingModel.objects.exists())

    def test_notifier_failure_does_not_fail_creation(self) -> None:
        with mock.patch.object(Notifier, "emit", side_effect=RuntimeError("smtp down")):
            booking = self.create_booking()

        self.assertTrue(BookingModel.objects.filter(pk=booking.id).exists())
        self.assertFalse(Notification.objects.exists())

    def test_overlapping_bookings_are_not_rejected(self) -> None:
        self.create_booking()
        self.create_booking(actor=self.actor(self.other))

        self.assertEqual(BookingModel.objects.filter(unit=self.unit).count(), 2)


class TransitionTests(BookingHandlerTestCase):

    def test_admin_approves_pending_booking(self) -> None:
        booking = self.create_booking()

        approved = self.approve(booking.id)

        self.assertEqual(approved.status, BookingStatus.APPROVED)
        stored = BookingModel.objects.get(pk=booking.id)
        self.assertEqual(stored.status, BookingModel.Status.APPROVED)
        self.assertEqual(stored.approved_at, self.now)
        message = self.notifications("Booking Approved").get().message
        self.assertIn("Check-in:", message)
        self.assertIn((self.now + timedelta(days=2)).strftime("%b %d, %Y"), message)

    def test_customer_cannot_approve(self) -> None:
        booking = self.create_booking()

        with self.assertRaises(PermissionDeniedError):
            self.approve(booking.id, user=self.customer)
        self.assertEqual(BookingModel.objects.get(pk=booking.id).status, BookingModel.Status.PENDING)

    def test_approving_unknown_booking_is_not_found(self) -> None:
        booking = self.create_booking()
        BookingModel.objects.filter(pk=booking.id).delete()

        with self.assertRaises(NotFoundError):
            self.approve(booking.id)

    def test_decline_then_approve_is_a_conflict(self) -> None:
        booking = self.create_booking()
        handler = DeclineBookingHandler(self.repo, clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            handler.handle(DeclineBookingCommand(actor=self.actor(self.admin), booking_id=booking.id))

        self.assertEqual(BookingModel.objects.get(pk=booking.id).status, BookingModel.Status.DECLINED)
        self.assertEqual(self.notifications("Booking Declined").count(), 1)
        with self.assertRaises(ConflictError):
            self.approve(booking.id)

    def test_cancel_by_owner_and_by_admin_wording(self) -> None:
        mine = self.create_booking()
        theirs = self.create_booking()
        handler = CancelBookingHandler(self.repo, clock=self.clock)

        with self.captureOnCommitCallbacks(execute=True):
            handler.handle(CancelBookingCommand(actor=self.actor(self.customer), booking_id=mine.id))
            handler.handle(CancelBookingCommand(actor=self.actor(self.admin), booking_id=theirs.id))

        messages = sorted(self.notifications("Booking Cancelled").values_list("message", flat=True))
        self.assertEqual(len(messages), 2)
        self.assertTrue(any(m.endswith("cancelled by you.") for m in messages))
        self.assertTrue(any(m.endswith("cancelled by the administrator.") for m in messages))

    def test_other_customer_cannot_cancel(self) -> None:
        booking = self.create_booking()
        handler = CancelBookingHandler(self.repo, clock=self.clock)

        with self.assertRaises(PermissionDeniedError):
            handler.handle(CancelBookingCommand(actor=self.actor(self.other), booking_id=booking.id))
        self.assertEqual(BookingModel.objects.get(pk=booking.id).status, BookingModel.Status.PENDING)

    def test_cancelling_twice_is_a_conflict_without_second_notification(self) -> None:
        booking = self.create_booking()
        handler = CancelBookingHandler(self.repo, clock=self.clock)
        command = CancelBookingCommand(actor=self.actor(self.customer), booking_id=booking.id)
        with self.captureOnCommitCallbacks(execute=True):
            handler.handle(command)

        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(ConflictError):
                handler.handle(command)
        self.assertEqual(self.notifications("Booking Cancelled").count(), 1)


class LazyCompletionTests(BookingHandlerTestCase):

    def finished_booking(self):
        booking = self.create_booking()
        self.approve(booking.id)
        # The stay ended an hour ago.
        BookingModel.objects.filter(pk=booking.id).update(
            check_in=self.now - timedelta(days=3),
            check_out=self.now - timedelta(hours=1),
        )
        return booking

    def get(self, booking_id, user=None):
        handler = GetBookingHandler(self.repo, clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            return handler.handle(GetBookingQuery(actor=self.actor(user or self.customer), booking_id=booking_id))

    def test_first_read_after_check_out_completes_once(self) -> None:
        booking = self.finished_booking()

        first = self.get(booking.id)
        second = self.get(booking.id)

        self.assertEqual(first.status, BookingStatus.COMPLETED)
        self.assertEqual(second.status, BookingStatus.COMPLETED)
        self.assertEqual(BookingModel.objects.get(pk=booking.id).status, BookingModel.Status.COMPLETED)
        self.assertEqual(self.notifications("Stay Completed").count(), 1)

    def test_list_reflects_completion_in_same_response(self) -> None:
        finished = self.finished_booking()
        upcoming = self.create_booking()

        handler = ListBookingsHandler(self.repo, clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            bookings = handler.handle(ListBookingsQuery(actor=self.actor(self.customer)))

        statuses = {booking.id: booking.status for booking in bookings}
        self.assertEqual(statuses[finished.id], BookingStatus.COMPLETED)
        self.assertEqual(statuses[upcoming.id], BookingStatus.PENDING)

    def test_list_scope_depends_on_actor(self) -> None:
        self.create_booking()
        self.create_booking(actor=self.actor(self.other))

        handler = ListBookingsHandler(self.repo, clock=self.clock)
        self.assertEqual(len(handler.handle(ListBookingsQuery(actor=self.actor(self.customer)))), 1)
        self.assertEqual(len(handler.handle(ListBookingsQuery(actor=self.actor(self.admin)))), 2)

    def test_concurrent_reader_does_not_notify_twice(self) -> None:
        booking = self.finished_booking()
        stale = self.repo.get(booking.id)

        # Another reader wins the conditional update first.
        self.assertTrue(self.repo.complete_if_due(booking.id, self.now))

        handler = GetBookingHandler(self.repo, clock=self.clock)
        with mock.patch.object(handler.booking_repo, "get", side_effect=[stale, self.repo.get(booking.id)]):
            with self.captureOnCommitCallbacks(execute=True):
                result = handler.handle(GetBookingQuery(actor=self.actor(self.customer), booking_id=booking.id))

        self.assertEqual(result.status, BookingStatus.COMPLETED)
        self.assertFalse(self.notifications("Stay Completed").exists())

    def test_completion_happens_once_the_clock_passes_check_out(self) -> None:
        booking = self.create_booking()
        self.approve(booking.id)

        self.assertEqual(self.get(booking.id).status, BookingStatus.APPROVED)
        self.clock.advance(timedelta(days=5))

        self.assertEqual(self.get(booking.id).status, BookingStatus.COMPLETED)
        self.assertEqual(self.notifications("Stay Completed").count(), 1)

    def test_cancelling_a_finished_stay_completes_it_instead(self) -> None:
        booking = self.finished_booking()
        handler = CancelBookingHandler(self.repo, clock=self.clock)

        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(ConflictError):
                handler.handle(CancelBookingCommand(actor=self.actor(self.customer), booking_id=booking.id))

        self.assertEqual(BookingModel.objects.get(pk=booking.id).status, BookingModel.Status.COMPLETED)
        self.assertEqual(self.notifications("Stay Completed").count(), 1)
        self.assertFalse(self.notifications("Booking Cancelled").exists())

    def test_pending_booking_past_check_out_stays_pending(self) -> None:
        booking = self.create_booking()
        BookingModel.objects.filter(pk=booking.id).update(
            check_in=self.now - timedelta(days=3),
            check_out=self.now - timedelta(hours=1),
        )

        self.assertEqual(self.get(booking.id).status, BookingStatus.PENDING)

    def test_stranger_cannot_read_booking(self) -> None:
        booking = self.create_booking()

        with self.assertRaises(PermissionDeniedError):
            self.get(booking.id, user=self.other)
        self.assertEqual(self.get(booking.id, user=self.admin).id, booking.id)
