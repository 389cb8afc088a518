"""Serializers for the booking domain.

Input serializers only shape and type-check request data; the lifecycle
rules are enforced by ``Booking.submit``. Output serializers read the
domain aggregate, not the ORM row.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain.entities import CONTACT_MAX_LENGTH, NAME_MAX_LENGTH, SPECIAL_REQUESTS_MAX_LENGTH


class BookingCreateSerializer(serializers.Serializer):
    """Request body for creating a booking."""

    unit = serializers.IntegerField(min_value=1)
    guest_name = serializers.CharField(max_length=NAME_MAX_LENGTH)
    contact = serializers.CharField(max_length=CONTACT_MAX_LENGTH)
    check_in = serializers.DateTimeField()
    check_out = serializers.DateTimeField()
    guests_count = serializers.IntegerField(min_value=1)
    special_requests = serializers.CharField(
        max_length=SPECIAL_REQUESTS_MAX_LENGTH,
        allow_blank=True,
        default="",
    )


class BookingSerializer(serializers.Serializer):
    """Representation of a ``Booking`` aggregate."""

    id = serializers.UUIDField(read_only=True)
    reference = serializers.CharField(read_only=True)
    user = serializers.IntegerField(source="user_id", read_only=True)
    unit = serializers.IntegerField(source="unit_id", read_only=True)
    guest_name = serializers.CharField(read_only=True)
    contact = serializers.CharField(read_only=True)
    check_in = serializers.DateTimeField(source="stay.check_in", read_only=True)
    check_out = serializers.DateTimeField(source="stay.check_out", read_only=True)
    nights = serializers.IntegerField(source="stay.nights", read_only=True)
    guests_count = serializers.IntegerField(read_only=True)
    special_requests = serializers.CharField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    approved_at = serializers.DateTimeField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
