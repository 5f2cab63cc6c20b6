"""
Clocks.

SystemClock reads the real time in UTC; FixedClock returns a pinned
instant and can be advanced by tests.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional


class SystemClock:
    """Current UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, instant: Optional[datetime] = None) -> None:
        """
        Initialize fixed clock.

        Args:
            instant: Pinned time; naive values are taken as UTC
        """
        instant = instant or datetime.now(timezone.utc)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def today(self) -> date:
        return self._instant.date()

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by timedelta keyword arguments (days=1, hours=2...)."""
        self._instant += timedelta(**kwargs)
        return self._instant

    def set(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant
