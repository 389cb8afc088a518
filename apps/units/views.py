"""Unit API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore

from .filters import UnitFilterSet
from .models import Unit
from .permissions import IsAdminOrReadOnly
from .serializers import UnitSerializer


class UnitViewSet(viewsets.ModelViewSet):
    """Public catalogue of units; administrators manage it."""

    queryset = Unit.objects.all()
    serializer_class = UnitSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = UnitFilterSet
    ordering_fields = ["name", "price_per_night", "capacity", "created_at"]
