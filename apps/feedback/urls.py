"""URL routing for feedback."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import FeedbackViewSet

router = DefaultRouter()
router.register(r"", FeedbackViewSet, basename="feedback")

urlpatterns = [
    path("", include(router.urls)),
]
