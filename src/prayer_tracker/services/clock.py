"""Clock abstractions supplying the current time and date key."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Interface for reading the local wall clock."""

    def current(self) -> datetime:
        """Return the current local date and time."""

    def now(self) -> time:
        """Return the current local time of day."""

    def today_key(self) -> str:
        """Return today's local date as YYYY-MM-DD."""


def format_date_key(day: date) -> str:
    """Format a date as a YYYY-MM-DD key."""
    return day.isoformat()


@dataclass
class SystemClock(Clock):
    """Clock backed by the system time, optionally in a fixed timezone."""

    timezone_name: str | None = None

    def current(self) -> datetime:
        """Return the current date and time."""
        if self.timezone_name:
            return datetime.now(tz=ZoneInfo(self.timezone_name))
        return datetime.now()  # noqa: DTZ005

    def now(self) -> time:
        """Return the current time of day."""
        return self.current().time()

    def today_key(self) -> str:
        """Return the current date key."""
        return format_date_key(self.current().date())


@dataclass
class FixedClock(Clock):
    """Clock pinned to a given moment."""

    moment: datetime

    @classmethod
    def at(cls, date_key: str, hhmm: str = "12:00") -> "FixedClock":
        """Create a clock for a date key and an HH:MM time of day."""
        return cls(moment=datetime.fromisoformat(f"{date_key}T{hhmm}"))

    def current(self) -> datetime:
        """Return the pinned moment."""
        return self.moment

    def now(self) -> time:
        """Return the pinned time of day."""
        return self.moment.time()

    def today_key(self) -> str:
        """Return the pinned date key."""
        return format_date_key(self.moment.date())


def freeze(clock: Clock) -> FixedClock:
    """Read the clock once so that time of day and date key agree."""
    return FixedClock(moment=clock.current())
