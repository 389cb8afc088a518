"""
Booking Store

Maps the ``Booking`` aggregate to the ``bookings.Booking`` table. The
only writes are a full insert, a partial column update and the
conditional completion update used by lazy completion.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.models import Booking as BookingModel
from shared.domain.value_objects import StayPeriod


class BookingRepository:

    def get(self, booking_id: UUID) -> Optional[Booking]:
        model = BookingModel.objects.filter(pk=booking_id).first()
        return self._to_domain(model) if model else None

    def lock(self, booking_id: UUID) -> Optional[Booking]:
        """Load the booking holding a row lock until the transaction ends"""
        model = BookingModel.objects.select_for_update().filter(pk=booking_id).first()
        return self._to_domain(model) if model else None

    def list_by_user(self, user_id: int) -> List[Booking]:
        qs = BookingModel.objects.filter(user_id=user_id).order_by("-created_at")
        return [self._to_domain(model) for model in qs]

    def list_all(self) -> List[Booking]:
        return [self._to_domain(model) for model in BookingModel.objects.order_by("-created_at")]

    def create(self, booking: Booking) -> Booking:
        model = BookingModel.objects.create(id=booking.id, **self._columns(booking))
        booking.created_at = model.created_at
        booking.updated_at = model.updated_at
        return booking

    def update(self, booking: Booking, fields: Optional[Iterable[str]] = None) -> Booking:
        """
        Write the booking's columns back

        ``fields`` limits the update to the named columns, e.g.
        ``("check_in", "check_out")`` for a reschedule.
        """
        values = self._columns(booking)
        if fields is not None:
            wanted = set(fields)
            unknown = wanted - set(values)
            if unknown:
                raise ValueError(f"Unknown booking fields: {sorted(unknown)}")
            values = {name: value for name, value in values.items() if name in wanted}

        updated_at = timezone.now()
        BookingModel.objects.filter(pk=booking.id).update(updated_at=updated_at, **values)
        booking.updated_at = updated_at
        return booking

    def complete_if_due(self, booking_id: UUID, now: datetime) -> bool:
        """
        Flip approved -> completed if check-out is at or before ``now``

        Returns True only for the caller whose UPDATE matched the row, so
        concurrent readers cannot both announce the completion.
        """
        rows = BookingModel.objects.filter(
            pk=booking_id,
            status=BookingModel.Status.APPROVED,
            check_out__lte=now,
        ).update(status=BookingModel.Status.COMPLETED, updated_at=now)
        return rows == 1

    @staticmethod
    def _columns(booking: Booking) -> dict:
        return {
            "user_id": booking.user_id,
            "unit_id": booking.unit_id,
            "guest_name": booking.guest_name,
            "contact": booking.contact,
            "check_in": booking.stay.check_in,
            "check_out": booking.stay.check_out,
            "guests_count": booking.guests_count,
            "special_requests": booking.special_requests,
            "status": booking.status.value,
            "approved_at": booking.approved_at,
        }

    @staticmethod
    def _to_domain(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            user_id=model.user_id,
            unit_id=model.unit_id,
            guest_name=model.guest_name,
            contact=model.contact,
            stay=StayPeriod(model.check_in, model.check_out),
            guests_count=model.guests_count,
            special_requests=model.special_requests,
            status=BookingStatus(model.status),
            approved_at=model.approved_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
