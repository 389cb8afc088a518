"""
Reschedule Store

Maps ``RescheduleRequest`` aggregates to their table. The owner of the
booking is read through the booking row.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.reschedules.domain.entities import (
    PENDING_EXISTS_MESSAGE,
    RescheduleRequest,
    RescheduleStatus,
)
from apps.reschedules.models import RescheduleRequest as RescheduleRequestModel
from shared.domain.exceptions import ConflictError
from shared.domain.value_objects import StayPeriod


class RescheduleRequestRepository:

    def _queryset(self):  # type: ignore
        return RescheduleRequestModel.objects.select_related("booking")

    def get(self, request_id: UUID) -> Optional[RescheduleRequest]:
        model = self._queryset().filter(pk=request_id).first()
        return self._to_domain(model) if model else None

    def lock(self, request_id: UUID) -> Optional[RescheduleRequest]:
        model = (
            RescheduleRequestModel.objects.select_for_update()
            .filter(pk=request_id)
            .first()
        )
        return self._to_domain(model) if model else None

    def find_pending_by_booking(self, booking_id: UUID) -> Optional[RescheduleRequest]:
        model = self._queryset().filter(
            booking_id=booking_id,
            status=RescheduleRequestModel.Status.PENDING,
        ).first()
        return self._to_domain(model) if model else None

    def list_by_booking(self, booking_id: UUID) -> List[RescheduleRequest]:
        qs = self._queryset().filter(booking_id=booking_id).order_by("-created_at")
        return [self._to_domain(model) for model in qs]

    def list_all(self) -> List[RescheduleRequest]:
        return [self._to_domain(model) for model in self._queryset().order_by("-created_at")]

    def create(self, request: RescheduleRequest) -> RescheduleRequest:
        """
        Insert a pending request

        Raises ConflictError when the partial unique index rejects a
        second pending request for the same booking.
        """
        try:
            with transaction.atomic():
                model = RescheduleRequestModel.objects.create(
                    id=request.id,
                    booking_id=request.booking_id,
                    new_check_in=request.stay.check_in,
                    new_check_out=request.stay.check_out,
                    reason=request.reason,
                    status=request.status.value,
                )
        except IntegrityError as exc:
            raise ConflictError(PENDING_EXISTS_MESSAGE) from exc
        request.created_at = model.created_at
        request.updated_at = model.updated_at
        return request

    def update(self, request: RescheduleRequest) -> RescheduleRequest:
        updated_at = timezone.now()
        RescheduleRequestModel.objects.filter(pk=request.id).update(
            status=request.status.value,
            responded_by_id=request.responded_by,
            responded_at=request.responded_at,
            updated_at=updated_at,
        )
        request.updated_at = updated_at
        return request

    @staticmethod
    def _to_domain(model: RescheduleRequestModel) -> RescheduleRequest:
        return RescheduleRequest(
            id=model.id,
            booking_id=model.booking_id,
            user_id=model.booking.user_id,
            stay=StayPeriod(model.new_check_in, model.new_check_out),
            reason=model.reason,
            status=RescheduleStatus(model.status),
            responded_by=model.responded_by_id,
            responded_at=model.responded_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
