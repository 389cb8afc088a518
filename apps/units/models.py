"""Rentable unit models for VillaStay."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Unit(models.Model):
    """A villa, cottage or room that can be booked."""

    class UnitType(models.TextChoices):
        VILLA = "villa", _("Villa")
        COTTAGE = "cottage", _("Cottage")
        ROOM = "room", _("Room")

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        BOOKED = "booked", _("Booked")

    unit_type = models.CharField(max_length=20, choices=UnitType.choices, default=UnitType.VILLA)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    amenities = models.JSONField(default=list, blank=True)
    capacity = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Unit")
        verbose_name_plural = _("Units")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["unit_type", "status"], name="units_type_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_unit_type_display()})"
