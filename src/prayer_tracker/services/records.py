"""Status store operations for student prayer records."""

import logging
from dataclasses import dataclass
from typing import Protocol

from prayer_tracker.domain.prayers import (
    DailyRecord,
    PrayerStatus,
    PrayerType,
    StudentRecords,
    WindowState,
    empty_prayers,
)
from prayer_tracker.services.clock import Clock, freeze
from prayer_tracker.services.windows import parse_date_key, parse_prayer, window_state

logger = logging.getLogger(__name__)


class RecordStorageError(RuntimeError):
    """Raised when the record store fails to persist a change."""


class PrayerWindowLockedError(ValueError):
    """Raised when a prayer is written outside its open window."""


class RecordRepository(Protocol):
    """Persistence interface for per-student record sets."""

    def get(self, student_id: str) -> StudentRecords | None:
        """Return the stored record set, if any."""

    def put(self, records: StudentRecords) -> None:
        """Replace the stored record set for the student."""

    def reset(self, student_id: str) -> None:
        """Replace the student's record set with an empty one."""


@dataclass
class RecordService:
    """Service for reading and writing prayer statuses."""

    repository: RecordRepository
    clock: Clock

    def get_records(self, student_id: str) -> StudentRecords:
        """Return the student's records, empty if nothing is stored."""
        stored = self.repository.get(student_id)
        if stored is None:
            return StudentRecords(student_id=student_id)
        return stored

    def get_day(self, student_id: str, date_key: str) -> DailyRecord:
        """Return the stored day with every prayer present."""
        parse_date_key(date_key)
        record = self.get_records(student_id).records.get(date_key)
        return _complete_day(date_key, record)

    def update_status(
        self,
        student_id: str,
        date_key: str,
        prayer: PrayerType | str,
        status: PrayerStatus | str,
        *,
        allow_locked: bool = False,
    ) -> StudentRecords:
        """Record a status for one prayer and persist the whole record set."""
        parse_date_key(date_key)
        prayer_type = parse_prayer(prayer)
        new_status = PrayerStatus(status)
        if not allow_locked:
            clock = freeze(self.clock)
            state = window_state(
                date_key, prayer_type, clock.now(), clock.today_key()
            )
            if state is not WindowState.OPEN:
                raise PrayerWindowLockedError(
                    f"{prayer_type.value} on {date_key} is {state.value}"
                )

        current = self.get_records(student_id)
        day = _complete_day(date_key, current.records.get(date_key))
        prayers = dict(day.prayers)
        prayers[prayer_type] = new_status
        records = dict(current.records)
        records[date_key] = DailyRecord(date_key=date_key, prayers=prayers)
        updated = StudentRecords(student_id=student_id, records=records)
        self.repository.put(updated)
        logger.info(
            "Recorded %s=%s for student %s on %s",
            prayer_type.value,
            new_status.value,
            student_id,
            date_key,
        )
        return updated

    def reset(self, student_id: str) -> None:
        """Delete every record for the student."""
        self.repository.reset(student_id)
        logger.info("Reset records for student %s", student_id)


def _complete_day(date_key: str, record: DailyRecord | None) -> DailyRecord:
    prayers = empty_prayers()
    if record is not None:
        prayers.update(record.prayers)
    return DailyRecord(date_key=date_key, prayers=prayers)
