"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.domain.actors import Actor
from shared.infrastructure.responses import success_response

from .application.command_handlers import (
    ApproveBookingCommand,
    ApproveBookingHandler,
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    DeclineBookingCommand,
    DeclineBookingHandler,
)
from .application.queries import GetBookingHandler, GetBookingQuery, ListBookingsHandler, ListBookingsQuery
from .repositories import BookingRepository
from .serializers import BookingCreateSerializer, BookingSerializer
from apps.units.repositories import UnitRepository

UUID_LOOKUP = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"


class BookingViewSet(viewsets.ViewSet):
    """Create, read and move bookings through their lifecycle."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP

    def get_actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def list(self, request):  # type: ignore
        bookings = ListBookingsHandler(BookingRepository()).handle(ListBookingsQuery(actor=self.get_actor()))
        return success_response(BookingSerializer(bookings, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = GetBookingHandler(BookingRepository()).handle(
            GetBookingQuery(actor=self.get_actor(), booking_id=pk)
        )
        return success_response(BookingSerializer(booking).data)

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = CreateBookingHandler(BookingRepository(), UnitRepository()).handle(
            CreateBookingCommand(
                actor=self.get_actor(),
                unit_id=data["unit"],
                guest_name=data["guest_name"],
                contact=data["contact"],
                check_in=data["check_in"],
                check_out=data["check_out"],
                guests_count=data["guests_count"],
                special_requests=data.get("special_requests", ""),
            )
        )
        return success_response(
            BookingSerializer(booking).data,
            message="Booking created successfully",
            status_code=status.HTTP_201_CREATED,
        )

    def destroy(self, request, pk=None):  # type: ignore
        return self._cancel(pk)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        return self._cancel(pk)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        booking = ApproveBookingHandler(BookingRepository()).handle(
            ApproveBookingCommand(actor=self.get_actor(), booking_id=pk)
        )
        return success_response(BookingSerializer(booking).data, message="Booking approved successfully")

    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):  # type: ignore
        booking = DeclineBookingHandler(BookingRepository()).handle(
            DeclineBookingCommand(actor=self.get_actor(), booking_id=pk)
        )
        return success_response(BookingSerializer(booking).data, message="Booking declined successfully")

    def _cancel(self, pk):  # type: ignore
        booking = CancelBookingHandler(BookingRepository()).handle(
            CancelBookingCommand(actor=self.get_actor(), booking_id=pk)
        )
        return success_response(BookingSerializer(booking).data, message="Booking cancelled successfully")
