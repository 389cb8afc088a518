"""Integration tests for feedback endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.feedback.models import Feedback
from apps.units.models import Unit
from apps.users.models import User


class FeedbackAPITests(APITestCase):

    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        unit = Unit.objects.create(name="Hill Cottage", unit_type=Unit.UnitType.COTTAGE, capacity=3)
        now = timezone.now()
        self.booking = Booking.objects.create(
            user=self.guest,
            unit=unit,
            guest_name="Eli Park",
            contact="eli@example.com",
            check_in=now - timedelta(days=4),
            check_out=now - timedelta(days=1),
            guests_count=2,
            status=Booking.Status.APPROVED,
        )
        self.list_url = reverse("feedback-list")
        self.by_booking_url = reverse("feedback-by-booking", kwargs={"booking_id": self.booking.id})
        self.client.force_authenticate(self.guest)

    def test_submit_feedback_after_stay(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.list_url,
                {"booking": str(self.booking.id), "rating": 5, "comment": "Quiet and clean"},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"], "Feedback submitted successfully")
        self.assertEqual(response.data["data"]["rating"], 5)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.COMPLETED)

    def test_duplicate_feedback_returns_conflict(self) -> None:
        payload = {"booking": str(self.booking.id), "rating": 4}
        self.client.post(self.list_url, payload, format="json")

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertFalse(response.data["success"])
        self.assertEqual(Feedback.objects.count(), 1)

    def test_out_of_range_rating_is_rejected(self) -> None:
        response = self.client.post(
            self.list_url,
            {"booking": str(self.booking.id), "rating": 7},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(Feedback.objects.exists())

    def test_admin_cannot_leave_feedback_for_guest(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"booking": str(self.booking.id), "rating": 5},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_feedback_of_booking_is_null_until_submitted(self) -> None:
        empty = self.client.get(self.by_booking_url)
        self.client.post(self.list_url, {"booking": str(self.booking.id), "rating": 3}, format="json")
        filled = self.client.get(self.by_booking_url)

        self.assertEqual(empty.status_code, status.HTTP_200_OK)
        self.assertIsNone(empty.data["data"]["feedback"])
        self.assertEqual(filled.data["data"]["feedback"]["rating"], 3)

    def test_statistics_require_admin(self) -> None:
        url = reverse("feedback-statistics")

        forbidden = self.client.get(url)
        self.client.force_authenticate(self.admin)
        allowed = self.client.get(url, {"year": timezone.now().year})
        invalid = self.client.get(url, {"year": "last"})

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(allowed.status_code, status.HTTP_200_OK)
        self.assertEqual(allowed.data["data"]["total_feedback"], 0)
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)
