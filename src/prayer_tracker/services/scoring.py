"""Scoring engine for prayer compliance."""

import calendar
from collections.abc import Iterator
from datetime import timedelta

from prayer_tracker.domain.prayers import (
    PRAYER_ORDER,
    DailyRecord,
    PrayerStatus,
    PrayerType,
    StudentRecords,
)
from prayer_tracker.domain.stats import Score, ScoreEntry
from prayer_tracker.services.clock import Clock, format_date_key
from prayer_tracker.services.windows import has_window_elapsed, parse_date_key

DEFAULT_POINTS: dict[PrayerStatus, int] = {
    PrayerStatus.ON_TIME: 10,
    PrayerStatus.LATE: 5,
    PrayerStatus.MISSED: -10,
    PrayerStatus.UNSET: 0,
}

# Per-prayer overrides; every prayer currently uses the default rule.
SCORING: dict[PrayerType, dict[PrayerStatus, int]] = {
    prayer: dict(DEFAULT_POINTS) for prayer in PRAYER_ORDER
}


def points_for(prayer: PrayerType, status: PrayerStatus) -> int:
    """Return the points awarded for a prayer in a given status."""
    return SCORING.get(prayer, DEFAULT_POINTS)[status]


def max_points_for(prayer: PrayerType) -> int:
    """Return the best achievable points for a prayer."""
    return points_for(prayer, PrayerStatus.ON_TIME)


def stored_status(record: DailyRecord | None, prayer: PrayerType) -> PrayerStatus:
    """Return the stored status, treating absent entries as UNSET."""
    if record is None:
        return PrayerStatus.UNSET
    return record.prayers.get(prayer, PrayerStatus.UNSET)


def effective_status(
    stored: PrayerStatus, date_key: str, prayer: PrayerType, clock: Clock
) -> PrayerStatus:
    """Return the status used for scoring, inferring MISSED for elapsed windows."""
    if stored == PrayerStatus.UNSET and has_window_elapsed(
        date_key, prayer, clock.now(), clock.today_key()
    ):
        return PrayerStatus.MISSED
    return stored


def empty_score() -> Score:
    """Score for a period with nothing to evaluate yet."""
    return Score(total_points=0, max_points=0, percentage=100, normalized_score=10.0)


def _build_score(
    total_points: int, max_points: int, breakdown: list[ScoreEntry] | None = None
) -> Score:
    if max_points == 0:
        return empty_score()
    # Half-up rounding of total / max * 100, floored at zero.
    percentage = max(0, (200 * total_points + max_points) // (2 * max_points))
    return Score(
        total_points=total_points,
        max_points=max_points,
        percentage=percentage,
        normalized_score=percentage / 10,
        breakdown=breakdown or [],
    )


def day_score(date_key: str, record: DailyRecord | None, clock: Clock) -> Score:
    """Score a single day, counting only elapsed or explicitly logged prayers."""
    today_key = clock.today_key()
    now = clock.now()
    total_points = 0
    max_points = 0
    breakdown: list[ScoreEntry] = []
    for prayer in PRAYER_ORDER:
        stored = stored_status(record, prayer)
        elapsed = has_window_elapsed(date_key, prayer, now, today_key)
        if not elapsed and stored == PrayerStatus.UNSET:
            continue
        status = effective_status(stored, date_key, prayer, clock)
        points = points_for(prayer, status)
        total_points += points
        max_points += max_points_for(prayer)
        breakdown.append(ScoreEntry(prayer=prayer, status=status, points=points))
    return _build_score(total_points, max_points, breakdown)


def iter_date_keys(start_key: str, end_key: str, today_key: str) -> Iterator[str]:
    """Yield date keys from start to end inclusive, stopping after today."""
    current = parse_date_key(start_key)
    end = min(parse_date_key(end_key), parse_date_key(today_key))
    while current <= end:
        yield format_date_key(current)
        current += timedelta(days=1)


def range_score(
    records: StudentRecords, start_key: str, end_key: str, clock: Clock
) -> Score:
    """Aggregate day scores over an inclusive range, excluding future days."""
    total_points = 0
    max_points = 0
    for date_key in iter_date_keys(start_key, end_key, clock.today_key()):
        score = day_score(date_key, records.records.get(date_key), clock)
        total_points += score.total_points
        max_points += score.max_points
    return _build_score(total_points, max_points)


def month_score(records: StudentRecords, year: int, month: int, clock: Clock) -> Score:
    """Aggregate score for a calendar month (1-based) up to today."""
    if not 1 <= month <= 12:  # noqa: PLR2004
        raise ValueError(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    start_key = f"{year:04d}-{month:02d}-01"
    end_key = f"{year:04d}-{month:02d}-{last_day:02d}"
    return range_score(records, start_key, end_key, clock)
