"""
Clock port for paws-core.

Systems never read the wall clock themselves. Pure functions take an explicit
``now``; the orchestrator and CLI get it from a Clock.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time (timezone-aware)."""
        ...


class SystemClock:
    """Wall-clock time in UTC (production)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class FixedClock:
    """
    Settable clock for tests and replays.

    Usage:
        clock = FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
        clock.advance(hours=25)
    """
    current: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.current = ensure_utc(self.current)

    def now(self) -> datetime:
        return self.current

    def set(self, when: datetime) -> None:
        self.current = ensure_utc(when)

    def advance(self, *, days: float = 0, hours: float = 0, minutes: float = 0) -> datetime:
        self.current = self.current + timedelta(days=days, hours=hours, minutes=minutes)
        return self.current


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so snapshot timestamps always compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours from start to end (negative if end is earlier)."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600
