"""Serializers for the units domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Unit


class UnitSerializer(serializers.ModelSerializer):

    class Meta:
        model = Unit
        fields = [
            "id",
            "unit_type",
            "name",
            "description",
            "amenities",
            "capacity",
            "price_per_night",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_amenities(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Amenities must be a list of strings.")
        return value
