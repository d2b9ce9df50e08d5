"""Supabase repository for student prayer records."""

import logging
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from prayer_tracker.domain.prayers import (
    DailyRecord,
    PrayerStatus,
    PrayerType,
    StudentRecords,
    empty_prayers,
)
from prayer_tracker.services.records import RecordRepository, RecordStorageError

logger = logging.getLogger(__name__)

_TABLE = "student_records"


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation storing one JSON document per student."""

    client: Client

    def get(self, student_id: str) -> StudentRecords | None:
        """Return the record set for a student, if present."""
        try:
            response = (
                self.client.table(_TABLE)
                .select("student_id, records")
                .eq("student_id", student_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise RecordStorageError(
                f"Failed to load records for {student_id}: {exc}"
            ) from exc
        if not response.data:
            return None
        return parse_records(student_id, response.data[0].get("records") or {})

    def put(self, records: StudentRecords) -> None:
        """Upsert the whole record set for a student."""
        self._write(records.student_id, serialize_records(records))

    def reset(self, student_id: str) -> None:
        """Replace the student's records with an empty document."""
        self._write(student_id, {})

    def _write(self, student_id: str, payload: dict[str, object]) -> None:
        try:
            response = (
                self.client.table(_TABLE)
                .upsert(
                    {"student_id": student_id, "records": payload},
                    on_conflict="student_id",
                )
                .execute()
            )
        except APIError as exc:
            raise RecordStorageError(
                f"Failed to save records for {student_id}: {exc}"
            ) from exc
        if not response.data:
            raise RecordStorageError(f"Failed to save records for {student_id}")


def serialize_records(records: StudentRecords) -> dict[str, object]:
    """Convert a record set to its persisted JSON shape."""
    return {
        date_key: {prayer.value: status.value for prayer, status in day.prayers.items()}
        for date_key, day in records.records.items()
    }


def parse_records(student_id: str, raw: dict[str, object]) -> StudentRecords:
    """Build a record set from stored JSON, back-filling missing prayers."""
    records: dict[str, DailyRecord] = {}
    for date_key, raw_day in raw.items():
        prayers = empty_prayers()
        if isinstance(raw_day, dict):
            for name, value in raw_day.items():
                try:
                    prayer = PrayerType(name)
                except ValueError:
                    logger.warning(
                        "Ignoring unknown prayer %r for %s", name, student_id
                    )
                    continue
                try:
                    prayers[prayer] = PrayerStatus(value)
                except ValueError as exc:
                    raise RecordStorageError(
                        f"Corrupt status {value!r} for {student_id} on {date_key}"
                    ) from exc
        records[date_key] = DailyRecord(date_key=date_key, prayers=prayers)
    return StudentRecords(student_id=student_id, records=records)
