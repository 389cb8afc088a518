"""Serializers for notifications."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notifications."""

    class Meta:
        model = Notification
        fields = ['id', 'user', 'title', 'message', 'category', 'is_read', 'created_at']
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    """Administrator broadcast: one user, or every customer when ``user`` is empty."""

    user = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    category = serializers.ChoiceField(choices=Notification.Category.choices)
