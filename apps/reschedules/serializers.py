"""Serializers for reschedule requests."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain.entities import REASON_MAX_LENGTH


class RescheduleSubmitSerializer(serializers.Serializer):

    booking = serializers.UUIDField()
    new_check_in = serializers.DateTimeField()
    new_check_out = serializers.DateTimeField()
    reason = serializers.CharField(max_length=REASON_MAX_LENGTH, allow_blank=True, default="")


class RescheduleRequestSerializer(serializers.Serializer):
    """Representation of a ``RescheduleRequest`` aggregate."""

    id = serializers.UUIDField(read_only=True)
    booking = serializers.UUIDField(source="booking_id", read_only=True)
    new_check_in = serializers.DateTimeField(source="stay.check_in", read_only=True)
    new_check_out = serializers.DateTimeField(source="stay.check_out", read_only=True)
    reason = serializers.CharField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    responded_by = serializers.IntegerField(read_only=True, allow_null=True)
    responded_at = serializers.DateTimeField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
