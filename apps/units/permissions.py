"""Permission classes shared by unit endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone may read; only administrators may write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_admin") and user.is_admin()
