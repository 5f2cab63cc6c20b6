"""
Clock Protocol.

Timestamps and overdue checks read "now" through a clock so tests can
pin the date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time (timezone-aware, UTC)."""

    def now(self) -> datetime:
        ...

    def today(self) -> date:
        ...
