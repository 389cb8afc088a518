"""API views for feedback."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.domain.actors import Actor
from shared.domain.exceptions import ValidationError
from shared.infrastructure.responses import success_response

from .application.command_handlers import SubmitFeedbackCommand, SubmitFeedbackHandler
from .application.queries import (
    FeedbackStatisticsHandler,
    FeedbackStatisticsQuery,
    GetBookingFeedbackHandler,
    GetBookingFeedbackQuery,
)
from .repositories import FeedbackRepository
from .serializers import FeedbackSerializer, FeedbackSubmitSerializer
from apps.bookings.repositories import BookingRepository
from apps.bookings.views import UUID_LOOKUP


class FeedbackViewSet(viewsets.ViewSet):
    """Leave feedback on a completed stay and read it back."""

    permission_classes = [permissions.IsAuthenticated]

    def get_actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def create(self, request):  # type: ignore
        serializer = FeedbackSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        feedback = SubmitFeedbackHandler(FeedbackRepository(), BookingRepository()).handle(
            SubmitFeedbackCommand(
                actor=self.get_actor(),
                booking_id=data["booking"],
                rating=data["rating"],
                comment=data.get("comment", ""),
            )
        )
        return success_response(
            FeedbackSerializer(feedback).data,
            message="Feedback submitted successfully",
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path=rf"booking/(?P<booking_id>{UUID_LOOKUP})")
    def by_booking(self, request, booking_id=None):  # type: ignore
        feedback = GetBookingFeedbackHandler(FeedbackRepository(), BookingRepository()).handle(
            GetBookingFeedbackQuery(actor=self.get_actor(), booking_id=booking_id)
        )
        data = FeedbackSerializer(feedback).data if feedback is not None else None
        return success_response({"feedback": data})

    @action(detail=False, methods=["get"])
    def statistics(self, request):  # type: ignore
        raw_year = request.query_params.get("year")
        if raw_year in (None, ""):
            year = timezone.localdate().year
        else:
            try:
                year = int(raw_year)
            except (TypeError, ValueError):
                raise ValidationError("The year must be an integer.")
        stats = FeedbackStatisticsHandler(FeedbackRepository()).handle(
            FeedbackStatisticsQuery(actor=self.get_actor(), year=year)
        )
        return success_response(stats)
