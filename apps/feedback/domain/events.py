"""Feedback Domain Events"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class FeedbackReceived(DomainEvent):
    feedback_id: UUID
    booking_id: UUID
    user_id: int
    rating: int
