"""Range aggregation of prayer outcomes."""

from prayer_tracker.domain.prayers import PRAYER_ORDER, PrayerStatus, StudentRecords
from prayer_tracker.domain.stats import PrayerCounts, RangeStats
from prayer_tracker.services.clock import Clock
from prayer_tracker.services.scoring import (
    effective_status,
    iter_date_keys,
    stored_status,
)

_COUNTER_FIELDS: dict[PrayerStatus, str] = {
    PrayerStatus.ON_TIME: "on_time",
    PrayerStatus.LATE: "late",
    PrayerStatus.MISSED: "missed",
}


def range_stats(
    records: StudentRecords, start_key: str, end_key: str, clock: Clock
) -> RangeStats:
    """Count on-time, late and missed prayers over an inclusive date range.

    Days after today are not visited. Prayers that are still pending
    (UNSET and not yet elapsed) are not counted.
    """
    stats = RangeStats(
        total=PrayerCounts(),
        by_prayer={prayer: PrayerCounts() for prayer in PRAYER_ORDER},
    )
    for date_key in iter_date_keys(start_key, end_key, clock.today_key()):
        record = records.records.get(date_key)
        for prayer in PRAYER_ORDER:
            status = effective_status(
                stored_status(record, prayer), date_key, prayer, clock
            )
            counter = _COUNTER_FIELDS.get(status)
            if counter is None:
                continue
            _increment(stats.total, counter)
            _increment(stats.by_prayer[prayer], counter)
    return stats


def _increment(counts: PrayerCounts, counter: str) -> None:
    setattr(counts, counter, getattr(counts, counter) + 1)
