"""Serializers for feedback."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class FeedbackSubmitSerializer(serializers.Serializer):
    """Shape of the request; range and length rules live in the domain."""

    booking = serializers.UUIDField()
    rating = serializers.IntegerField()
    comment = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)


class FeedbackSerializer(serializers.Serializer):

    id = serializers.UUIDField(read_only=True)
    booking = serializers.UUIDField(source="booking_id", read_only=True)
    user = serializers.IntegerField(source="user_id", read_only=True)
    rating = serializers.IntegerField(read_only=True)
    comment = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
