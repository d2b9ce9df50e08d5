"""Compliance service combining records with scoring and statistics."""

from dataclasses import dataclass

from prayer_tracker.domain.prayers import PRAYER_ORDER, DailyRecord, PrayerSlot
from prayer_tracker.domain.stats import RangeStats, RiskStatus, Score
from prayer_tracker.services.clock import Clock, freeze
from prayer_tracker.services.records import RecordService
from prayer_tracker.services.risk import check_risk
from prayer_tracker.services.scoring import (
    day_score,
    effective_status,
    month_score,
    range_score,
)
from prayer_tracker.services.stats import range_stats
from prayer_tracker.services.windows import window_for, window_state


@dataclass
class ComplianceService:
    """Service for computing scores, statistics and risk per student."""

    record_service: RecordService
    clock: Clock

    def prayer_board(self, student_id: str, date_key: str) -> list[PrayerSlot]:
        """Return the five prayer slots for a date in canonical order."""
        day = self.record_service.get_day(student_id, date_key)
        return _board(date_key, day, freeze(self.clock))

    def day_score(self, student_id: str, date_key: str) -> Score:
        """Return the score for one day."""
        day = self.record_service.get_day(student_id, date_key)
        return day_score(date_key, day, freeze(self.clock))

    def day_summary(
        self, student_id: str, date_key: str
    ) -> tuple[list[PrayerSlot], Score]:
        """Return the board and the score of a day from one clock reading."""
        day = self.record_service.get_day(student_id, date_key)
        clock = freeze(self.clock)
        return _board(date_key, day, clock), day_score(date_key, day, clock)

    def month_score(self, student_id: str, year: int, month: int) -> Score:
        """Return the aggregate score for a calendar month."""
        records = self.record_service.get_records(student_id)
        return month_score(records, year, month, freeze(self.clock))

    def range_score(self, student_id: str, start_key: str, end_key: str) -> Score:
        """Return the aggregate score over a date range."""
        records = self.record_service.get_records(student_id)
        return range_score(records, start_key, end_key, freeze(self.clock))

    def range_stats(self, student_id: str, start_key: str, end_key: str) -> RangeStats:
        """Return outcome counts over a date range."""
        records = self.record_service.get_records(student_id)
        return range_stats(records, start_key, end_key, freeze(self.clock))

    def check_risk(self, student_id: str) -> RiskStatus:
        """Return the inactivity risk for a student."""
        records = self.record_service.get_records(student_id)
        return check_risk(records, self.clock.today_key())


def _board(date_key: str, day: DailyRecord, clock: Clock) -> list[PrayerSlot]:
    now = clock.now()
    today_key = clock.today_key()
    slots = []
    for prayer in PRAYER_ORDER:
        stored = day.prayers[prayer]
        slots.append(
            PrayerSlot(
                prayer=prayer,
                window=window_for(prayer),
                stored_status=stored,
                effective_status=effective_status(stored, date_key, prayer, clock),
                window_state=window_state(date_key, prayer, now, today_key),
            )
        )
    return slots
