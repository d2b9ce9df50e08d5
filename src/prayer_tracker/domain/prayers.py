"""Domain models for prayers, windows and daily records."""

from dataclasses import dataclass, field
from enum import StrEnum

MINUTES_PER_DAY = 24 * 60


class PrayerType(StrEnum):
    """The five daily prayers, declared in canonical order."""

    FAJR = "fajr"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"


class PrayerStatus(StrEnum):
    """Status recorded for a single prayer instance."""

    ON_TIME = "on_time"
    LATE = "late"
    MISSED = "missed"
    UNSET = "unset"


class WindowState(StrEnum):
    """Position of a prayer window relative to the current moment."""

    ELAPSED = "elapsed"
    OPEN = "open"
    FUTURE = "future"


PRAYER_ORDER: tuple[PrayerType, ...] = tuple(PrayerType)


@dataclass(frozen=True)
class PrayerWindow:
    """Daily time-of-day interval in minutes since midnight."""

    start_minute: int
    end_minute: int
    crosses_midnight: bool = False

    def __post_init__(self) -> None:
        for value in (self.start_minute, self.end_minute):
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValueError(f"Window minute out of range: {value}")
        if not self.crosses_midnight and self.start_minute >= self.end_minute:
            raise ValueError("Window must start before it ends")


def empty_prayers() -> dict[PrayerType, PrayerStatus]:
    """Return a mapping with every prayer set to UNSET."""
    return {prayer: PrayerStatus.UNSET for prayer in PRAYER_ORDER}


@dataclass(frozen=True)
class DailyRecord:
    """Stored statuses for one individual on one calendar date."""

    date_key: str
    prayers: dict[PrayerType, PrayerStatus] = field(default_factory=empty_prayers)


@dataclass(frozen=True)
class StudentRecords:
    """All daily records of one individual keyed by YYYY-MM-DD."""

    student_id: str
    records: dict[str, DailyRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class PrayerSlot:
    """Display view of one prayer instance on a given date."""

    prayer: PrayerType
    window: PrayerWindow
    stored_status: PrayerStatus
    effective_status: PrayerStatus
    window_state: WindowState
