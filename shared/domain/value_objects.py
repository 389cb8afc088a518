"""
Common Value Objects

- StayPeriod: check-in / check-out instants of a booking or of a
  reschedule proposal
"""

from dataclasses import dataclass
from datetime import datetime

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError

DISPLAY_DATE_FORMAT = '%b %d, %Y'


@dataclass(frozen=True)
class StayPeriod(ValueObject):
    """
    Stay period value object

    Check-out must be strictly after check-in.
    Dates are timezone-aware datetimes.
    """
    check_in: datetime
    check_out: datetime

    def __post_init__(self):
        if self.check_out <= self.check_in:
            raise ValidationError("The check-out date must be after the check-in date.")

    def starts_after(self, moment: datetime) -> bool:
        return self.check_in > moment

    def has_ended(self, moment: datetime) -> bool:
        """True once check-out is at or before ``moment``"""
        return self.check_out <= moment

    @property
    def nights(self) -> int:
        return (self.check_out.date() - self.check_in.date()).days

    def __str__(self):
        return (
            f"{self.check_in.strftime(DISPLAY_DATE_FORMAT)} - "
            f"{self.check_out.strftime(DISPLAY_DATE_FORMAT)}"
        )

    def __repr__(self):
        return f"StayPeriod({self.check_in.isoformat()}, {self.check_out.isoformat()})"
