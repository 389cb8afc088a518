"""URL routing for reschedule requests."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import RescheduleRequestViewSet

router = DefaultRouter()
router.register(r"", RescheduleRequestViewSet, basename="reschedule-request")

urlpatterns = [
    path("", include(router.urls)),
]
