"""Consecutive-inactivity risk detection."""

from datetime import timedelta

from prayer_tracker.domain.prayers import PrayerStatus, StudentRecords
from prayer_tracker.domain.stats import RiskStatus
from prayer_tracker.services.clock import format_date_key
from prayer_tracker.services.windows import parse_date_key

RISK_THRESHOLD_DAYS = 3
RISK_LOOKBACK_DAYS = 14

_PERFORMED = frozenset({PrayerStatus.ON_TIME, PrayerStatus.LATE})


def has_performance(records: StudentRecords, date_key: str) -> bool:
    """Return True when any prayer on the date is stored as on time or late.

    Uses stored statuses only; auto-missed inference does not apply here.
    """
    record = records.records.get(date_key)
    if record is None:
        return False
    return any(status in _PERFORMED for status in record.prayers.values())


def check_risk(
    records: StudentRecords,
    today_key: str,
    *,
    threshold_days: int = RISK_THRESHOLD_DAYS,
    lookback_days: int = RISK_LOOKBACK_DAYS,
) -> RiskStatus:
    """Count inactive days walking back from yesterday and flag long streaks."""
    today = parse_date_key(today_key)
    inactive_days = 0
    for offset in range(1, lookback_days + 1):
        date_key = format_date_key(today - timedelta(days=offset))
        if has_performance(records, date_key):
            break
        inactive_days += 1
    return RiskStatus(
        is_at_risk=inactive_days >= threshold_days,
        consecutive_inactive_days=inactive_days,
    )
