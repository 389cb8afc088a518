"""API views for notifications."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.domain.actors import Actor, require_admin
from shared.domain.exceptions import ValidationError
from shared.infrastructure.responses import success_response

from .models import Notification
from .serializers import NotificationCreateSerializer, NotificationSerializer
from .services import notifier


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Inbox of the authenticated user."""

    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return Notification.objects.filter(user=self.request.user)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        self.get_object().delete()
        return success_response(message="Notification deleted successfully")

    def create(self, request):  # type: ignore
        require_admin(Actor.from_user(request.user), "Unauthorized. Only admins can create notifications.")
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        User = get_user_model()
        if data.get("user"):
            if not User.objects.filter(pk=data["user"]).exists():
                raise ValidationError("The selected user is invalid.")
            recipients = [data["user"]]
            message = "Notification created successfully"
        else:
            recipients = list(
                User.objects.filter(role=User.RoleChoices.CUSTOMER, is_superuser=False).values_list("pk", flat=True)
            )
            message = f"Notification sent to {len(recipients)} customers"

        for user_id in recipients:
            notifier.emit(user_id, data["title"], data["message"], data["category"])
        return success_response({"count": len(recipients)}, message=message, status_code=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):  # type: ignore
        notification = self.get_object()
        notification.is_read = True
        notification.save(update_fields=['is_read'])
        return success_response(NotificationSerializer(notification).data, message="Notification marked as read")

    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):  # type: ignore
        updated = self.get_queryset().filter(is_read=False).update(is_read=True)
        return success_response({"updated": updated}, message="All notifications marked as read")

    @action(detail=False, methods=['get'])
    def unread_count(self, request):  # type: ignore
        return success_response({"unread_count": self.get_queryset().filter(is_read=False).count()})
