"""Read-only unit lookups used by the booking engine."""

from __future__ import annotations

from .models import Unit


class UnitRepository:

    def exists(self, unit_id: int) -> bool:
        return Unit.objects.filter(pk=unit_id).exists()

    def name_of(self, unit_id: int) -> str:
        name = Unit.objects.filter(pk=unit_id).values_list("name", flat=True).first()
        return name or f"unit #{unit_id}"
