"""API views for reschedule requests."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.domain.actors import Actor
from shared.infrastructure.responses import success_response

from .application.command_handlers import (
    ApproveRescheduleCommand,
    ApproveRescheduleHandler,
    DeclineRescheduleCommand,
    DeclineRescheduleHandler,
    SubmitRescheduleCommand,
    SubmitRescheduleHandler,
)
from .application.queries import (
    ListBookingReschedulesHandler,
    ListBookingReschedulesQuery,
    ListRescheduleRequestsHandler,
    ListRescheduleRequestsQuery,
)
from .repositories import RescheduleRequestRepository
from .serializers import RescheduleRequestSerializer, RescheduleSubmitSerializer
from apps.bookings.repositories import BookingRepository
from apps.bookings.views import UUID_LOOKUP


class RescheduleRequestViewSet(viewsets.ViewSet):
    """Submit, list and resolve reschedule requests."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP

    def get_actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def list(self, request):  # type: ignore
        requests = ListRescheduleRequestsHandler(RescheduleRequestRepository()).handle(
            ListRescheduleRequestsQuery(actor=self.get_actor())
        )
        return success_response(RescheduleRequestSerializer(requests, many=True).data)

    def create(self, request):  # type: ignore
        serializer = RescheduleSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        reschedule = SubmitRescheduleHandler(RescheduleRequestRepository(), BookingRepository()).handle(
            SubmitRescheduleCommand(
                actor=self.get_actor(),
                booking_id=data["booking"],
                new_check_in=data["new_check_in"],
                new_check_out=data["new_check_out"],
                reason=data.get("reason", ""),
            )
        )
        return success_response(
            RescheduleRequestSerializer(reschedule).data,
            message="Reschedule request submitted successfully",
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path=rf"booking/(?P<booking_id>{UUID_LOOKUP})")
    def by_booking(self, request, booking_id=None):  # type: ignore
        requests = ListBookingReschedulesHandler(RescheduleRequestRepository(), BookingRepository()).handle(
            ListBookingReschedulesQuery(actor=self.get_actor(), booking_id=booking_id)
        )
        return success_response(RescheduleRequestSerializer(requests, many=True).data)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        reschedule = ApproveRescheduleHandler(RescheduleRequestRepository(), BookingRepository()).handle(
            ApproveRescheduleCommand(actor=self.get_actor(), request_id=pk)
        )
        return success_response(RescheduleRequestSerializer(reschedule).data, message="Reschedule request approved")

    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):  # type: ignore
        reschedule = DeclineRescheduleHandler(RescheduleRequestRepository()).handle(
            DeclineRescheduleCommand(actor=self.get_actor(), request_id=pk)
        )
        return success_response(RescheduleRequestSerializer(reschedule).data, message="Reschedule request declined")
