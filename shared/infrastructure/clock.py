"""Time sources used by command handlers for past/future comparisons."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from django.utils import timezone  # type: ignore


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Current time in the configured timezone (aware datetimes)."""

    def now(self) -> datetime:
        return timezone.now()


class FixedClock:
    """Clock pinned to a given instant; moved forward explicitly."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta
