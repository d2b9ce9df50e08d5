"""Prayer window table and window resolution."""

import re
from datetime import date, time, timedelta

from prayer_tracker.domain.prayers import PrayerType, PrayerWindow, WindowState

_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PRAYER_WINDOWS: dict[PrayerType, PrayerWindow] = {
    PrayerType.FAJR: PrayerWindow(start_minute=5 * 60, end_minute=7 * 60 + 30),
    PrayerType.DHUHR: PrayerWindow(start_minute=12 * 60 + 30, end_minute=18 * 60 + 25),
    PrayerType.ASR: PrayerWindow(start_minute=16 * 60, end_minute=18 * 60 + 25),
    PrayerType.MAGHRIB: PrayerWindow(
        start_minute=18 * 60 + 15, end_minute=19 * 60 + 30
    ),
    PrayerType.ISHA: PrayerWindow(
        start_minute=19 * 60 + 30, end_minute=5 * 60, crosses_midnight=True
    ),
}


class InvalidDateKeyError(ValueError):
    """Raised when a date key is not a valid YYYY-MM-DD calendar date."""


class UnknownPrayerError(ValueError):
    """Raised when a prayer name is not one of the five prayers."""


def parse_date_key(date_key: str) -> date:
    """Parse a YYYY-MM-DD key into a date, failing on malformed input."""
    if not isinstance(date_key, str) or not _DATE_KEY_PATTERN.match(date_key):
        raise InvalidDateKeyError(f"Invalid date key: {date_key!r}")
    try:
        return date.fromisoformat(date_key)
    except ValueError as exc:
        raise InvalidDateKeyError(f"Invalid date key: {date_key!r}") from exc


def parse_prayer(value: str) -> PrayerType:
    """Return the prayer type for a persisted or user supplied name."""
    try:
        return PrayerType(value)
    except ValueError as exc:
        raise UnknownPrayerError(f"Unknown prayer: {value!r}") from exc


def window_for(prayer: PrayerType) -> PrayerWindow:
    """Return the configured window for a prayer."""
    return PRAYER_WINDOWS[parse_prayer(prayer)]


def format_window(window: PrayerWindow) -> str:
    """Render a window as HH:MM-HH:MM."""
    start = f"{window.start_minute // 60:02d}:{window.start_minute % 60:02d}"
    end = f"{window.end_minute // 60:02d}:{window.end_minute % 60:02d}"
    suffix = " (next day)" if window.crosses_midnight else ""
    return f"{start}-{end}{suffix}"


def _minutes(moment: time) -> int:
    return moment.hour * 60 + moment.minute


def has_window_elapsed(
    date_key: str, prayer: PrayerType, now: time, today_key: str
) -> bool:
    """Return True once the prayer window for the given date has fully closed.

    A window that crosses midnight ends on the following calendar day, so
    for today it is never elapsed, and for yesterday it stays open until
    its end time this morning.
    """
    day = parse_date_key(date_key)
    today = parse_date_key(today_key)
    window = window_for(prayer)
    now_minutes = _minutes(now)

    if day > today:
        return False
    if day == today:
        if window.crosses_midnight:
            return False
        return now_minutes > window.end_minute
    if window.crosses_midnight and day == today - timedelta(days=1):
        return now_minutes > window.end_minute
    return True


def window_state(
    date_key: str, prayer: PrayerType, now: time, today_key: str
) -> WindowState:
    """Classify a prayer window as elapsed, open or in the future."""
    day = parse_date_key(date_key)
    today = parse_date_key(today_key)
    if day > today:
        return WindowState.FUTURE
    if day == today and _minutes(now) < window_for(prayer).start_minute:
        return WindowState.FUTURE
    if has_window_elapsed(date_key, prayer, now, today_key):
        return WindowState.ELAPSED
    return WindowState.OPEN
