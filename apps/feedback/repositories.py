"""
Feedback Store

Besides single-record access it computes the yearly statistics shown to
administrators.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg, Count, Q  # type: ignore
from django.db.models.functions import ExtractMonth  # type: ignore

from apps.feedback.domain.entities import ALREADY_SUBMITTED_MESSAGE, Feedback
from apps.feedback.models import Feedback as FeedbackModel
from shared.domain.exceptions import ConflictError

STAR_BUCKETS = (
    ("five_star", 5),
    ("four_star", 4),
    ("three_star", 3),
    ("two_star", 2),
    ("one_star", 1),
)


def _rounded(value) -> float:
    return round(float(value), 2) if value is not None else 0


class FeedbackRepository:

    def find_by_booking(self, booking_id: UUID) -> Optional[Feedback]:
        model = FeedbackModel.objects.filter(booking_id=booking_id).first()
        return self._to_domain(model) if model else None

    def create(self, feedback: Feedback) -> Feedback:
        """Insert; the one-to-one on booking turns a lost race into ConflictError"""
        try:
            with transaction.atomic():
                model = FeedbackModel.objects.create(
                    id=feedback.id,
                    booking_id=feedback.booking_id,
                    user_id=feedback.user_id,
                    rating=feedback.rating,
                    comment=feedback.comment,
                )
        except IntegrityError as exc:
            raise ConflictError(ALREADY_SUBMITTED_MESSAGE) from exc
        feedback.created_at = model.created_at
        feedback.updated_at = model.created_at
        return feedback

    def statistics(self, year: int) -> dict:
        qs = FeedbackModel.objects.filter(created_at__year=year)

        buckets = {name: Count("id", filter=Q(rating=stars)) for name, stars in STAR_BUCKETS}
        totals = qs.aggregate(average_rating=Avg("rating"), total_feedback=Count("id"), **buckets)

        monthly = (
            qs.annotate(month=ExtractMonth("created_at"))
            .values("month")
            .annotate(average_rating=Avg("rating"), count=Count("id"))
            .order_by("month")
        )

        return {
            "year": year,
            "average_rating": _rounded(totals["average_rating"]),
            "total_feedback": totals["total_feedback"],
            "rating_distribution": {name: totals[name] for name, _stars in STAR_BUCKETS},
            "monthly_breakdown": [
                {
                    "month": row["month"],
                    "average_rating": _rounded(row["average_rating"]),
                    "count": row["count"],
                }
                for row in monthly
            ],
        }

    @staticmethod
    def _to_domain(model: FeedbackModel) -> Feedback:
        return Feedback(
            id=model.id,
            booking_id=model.booking_id,
            user_id=model.user_id,
            rating=model.rating,
            comment=model.comment,
            created_at=model.created_at,
            updated_at=model.created_at,
        )
