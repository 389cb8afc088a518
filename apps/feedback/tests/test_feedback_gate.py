"""Service-level tests for the feedback eligibility gate and statistics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from apps.bookings.domain.entities import booking_reference
from apps.bookings.models import Booking as BookingModel
from apps.bookings.repositories import BookingRepository
from apps.feedback.application.command_handlers import SubmitFeedbackCommand, SubmitFeedbackHandler
from apps.feedback.application.queries import (
    FeedbackStatisticsHandler,
    FeedbackStatisticsQuery,
    GetBookingFeedbackHandler,
    GetBookingFeedbackQuery,
)
from apps.feedback.models import Feedback as FeedbackModel
from apps.feedback.repositories import FeedbackRepository
from apps.notifications.models import Notification
from apps.units.models import Unit
from apps.users.models import User
from shared.domain.actors import Actor
from shared.domain.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from shared.infrastructure.clock import FixedClock


class FeedbackGateTests(TestCase):

    def setUp(self) -> None:
        self.owner = User.objects.create_user(email="owner@example.com", password="OwnerPass123")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.unit = Unit.objects.create(name="Casa Mar", capacity=4, price_per_night=Decimal("180.00"))
        self.now = timezone.now().replace(microsecond=0)
        self.clock = FixedClock(self.now)
        self.bookings = BookingRepository()
        self.feedback = FeedbackRepository()

    def make_booking(self, status: str, check_out_offset: timedelta = timedelta(days=5)) -> BookingModel:
        return BookingModel.objects.create(
            user=self.owner,
            unit=self.unit,
            guest_name="Dina Santos",
            contact="dina@example.com",
            check_in=self.now + check_out_offset - timedelta(days=3),
            check_out=self.now + check_out_offset,
            guests_count=2,
            status=status,
        )

    def submit(self, booking_id, rating: int = 5, user=None, comment: str = "Lovely stay"):
        handler = SubmitFeedbackHandler(self.feedback, self.bookings, clock=self.clock)
        command = SubmitFeedbackCommand(
            actor=Actor.from_user(user or self.owner),
            booking_id=booking_id,
            rating=rating,
            comment=comment,
        )
        with self.captureOnCommitCallbacks(execute=True):
            return handler.handle(command)

    def test_feedback_requires_completed_booking_and_is_accepted_once(self) -> None:
        booking = self.make_booking(BookingModel.Status.PENDING)

        with self.assertRaises(ConflictError) as ctx:
            self.submit(booking.id)
        self.assertEqual(str(ctx.exception), "Feedback can only be submitted for completed bookings.")
        self.assertFalse(FeedbackModel.objects.exists())

        BookingModel.objects.filter(pk=booking.pk).update(status=BookingModel.Status.COMPLETED)
        feedback = self.submit(booking.id)
        self.assertEqual(FeedbackModel.objects.get(booking=booking).id, feedback.id)

        with self.assertRaises(ConflictError) as ctx:
            self.submit(booking.id)
        self.assertEqual(str(ctx.exception), "Feedback has already been submitted for this booking.")
        self.assertEqual(FeedbackModel.objects.filter(booking=booking).count(), 1)

    def test_lazy_completion_runs_before_the_gate(self) -> None:
        booking = self.make_booking(BookingModel.Status.APPROVED, check_out_offset=-timedelta(hours=2))

        feedback = self.submit(booking.id, rating=4)

        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingModel.Status.COMPLETED)
        self.assertEqual(feedback.rating, 4)
        self.assertEqual(Notification.objects.filter(user=self.owner, title="Stay Completed").count(), 1)

    def test_completion_is_kept_when_feedback_is_rejected(self) -> None:
        booking = self.make_booking(BookingModel.Status.APPROVED, check_out_offset=-timedelta(hours=2))
        FeedbackModel.objects.create(booking=booking, user=self.owner, rating=3)

        with self.assertRaises(ConflictError):
            self.submit(booking.id)

        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingModel.Status.COMPLETED)

    def test_approved_future_stay_is_not_eligible(self) -> None:
        booking = self.make_booking(BookingModel.Status.APPROVED)

        with self.assertRaises(ConflictError):
            self.submit(booking.id)

    def test_only_the_owner_may_leave_feedback(self) -> None:
        booking = self.make_booking(BookingModel.Status.COMPLETED)

        with self.assertRaises(PermissionDeniedError):
            self.submit(booking.id, user=self.other)
        with self.assertRaises(PermissionDeniedError):
            self.submit(booking.id, user=self.admin)
        self.assertFalse(FeedbackModel.objects.exists())

    def test_unknown_booking_is_not_found(self) -> None:
        booking = self.make_booking(BookingModel.Status.COMPLETED)
        booking_id = booking.id
        booking.delete()

        with self.assertRaises(NotFoundError):
            self.submit(booking_id)

    def test_rating_and_comment_are_validated(self) -> None:
        booking = self.make_booking(BookingModel.Status.COMPLETED)

        for rating in (0, 6, -1):
            with self.assertRaises(ValidationError):
                self.submit(booking.id, rating=rating)
        with self.assertRaises(ValidationError):
            self.submit(booking.id, comment="x" * 1001)
        self.assertFalse(FeedbackModel.objects.exists())

    def test_thank_you_wording_follows_rating(self) -> None:
        expectations = {5: "excellent", 3: "good", 2: "valuable"}
        for rating, tone in expectations.items():
            booking = self.make_booking(BookingModel.Status.COMPLETED)
            self.submit(booking.id, rating=rating)
            notification = Notification.objects.get(
                user=self.owner,
                title="Thank You for Your Feedback",
                message__contains=f"#{booking_reference(booking.id)}",
            )
            self.assertIn(f"your {tone} feedback", notification.message)
            self.assertEqual(notification.category, Notification.Category.SYSTEM)

    def test_feedback_of_booking_visible_to_owner_and_admin(self) -> None:
        booking = self.make_booking(BookingModel.Status.COMPLETED)
        handler = GetBookingFeedbackHandler(self.feedback, self.bookings)
        query = GetBookingFeedbackQuery(actor=Actor.from_user(self.owner), booking_id=booking.id)

        self.assertIsNone(handler.handle(query))
        self.submit(booking.id, rating=5)
        self.assertEqual(handler.handle(query).rating, 5)
        self.assertEqual(
            handler.handle(GetBookingFeedbackQuery(actor=Actor.from_user(self.admin), booking_id=booking.id)).rating,
            5,
        )
        with self.assertRaises(PermissionDeniedError):
            handler.handle(GetBookingFeedbackQuery(actor=Actor.from_user(self.other), booking_id=booking.id))


class FeedbackStatisticsTests(TestCase):

    def setUp(self) -> None:
        self.owner = User.objects.create_user(email="owner@example.com", password="OwnerPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.unit = Unit.objects.create(name="Casa Mar", capacity=4)

    def add_feedback(self, rating: int, created_at: datetime) -> None:
        booking = BookingModel.objects.create(
            user=self.owner,
            unit=self.unit,
            guest_name="Dina Santos",
            contact="dina@example.com",
            check_in=created_at - timedelta(days=3),
            check_out=created_at - timedelta(days=1),
            guests_count=2,
            status=BookingModel.Status.COMPLETED,
        )
        feedback = FeedbackModel.objects.create(booking=booking, user=self.owner, rating=rating)
        FeedbackModel.objects.filter(pk=feedback.pk).update(created_at=created_at)

    def test_statistics_for_year(self) -> None:
        self.add_feedback(5, datetime(2024, 1, 10, 12, tzinfo=dt_timezone.utc))
        self.add_feedback(4, datetime(2024, 1, 20, 12, tzinfo=dt_timezone.utc))
        self.add_feedback(2, datetime(2024, 3, 5, 12, tzinfo=dt_timezone.utc))
        self.add_feedback(1, datetime(2023, 12, 31, 12, tzinfo=dt_timezone.utc))

        stats = FeedbackStatisticsHandler(FeedbackRepository()).handle(
            FeedbackStatisticsQuery(actor=Actor.from_user(self.admin), year=2024)
        )

        self.assertEqual(stats["year"], 2024)
        self.assertEqual(stats["total_feedback"], 3)
        self.assertEqual(stats["average_rating"], 3.67)
        self.assertEqual(
            stats["rating_distribution"],
            {"five_star": 1, "four_star": 1, "three_star": 0, "two_star": 1, "one_star": 0},
        )
        self.assertEqual(
            stats["monthly_breakdown"],
            [
                {"month": 1, "average_rating": 4.5, "count": 2},
                {"month": 3, "average_rating": 2.0, "count": 1},
            ],
        )

    def test_empty_year(self) -> None:
        stats = FeedbackStatisticsHandler(FeedbackRepository()).handle(
            FeedbackStatisticsQuery(actor=Actor.from_user(self.admin), year=2030)
        )

        self.assertEqual(stats["average_rating"], 0)
        self.assertEqual(stats["total_feedback"], 0)
        self.assertEqual(stats["monthly_breakdown"], [])

    def test_statistics_are_admin_only(self) -> None:
        with self.assertRaises(PermissionDeniedError):
            FeedbackStatisticsHandler(FeedbackRepository()).handle(
                FeedbackStatisticsQuery(actor=Actor.from_user(self.owner), year=2024)
            )
