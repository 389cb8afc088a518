"""FilterSet definitions for unit listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Unit


class UnitFilterSet(django_filters.FilterSet):

    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    guests = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    price_min = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="lte")

    class Meta:
        model = Unit
        fields = ["unit_type", "status"]
