"""Tests for student-facing HTTP endpoints."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from prayer_tracker.api.app import create_app, status_for
from prayer_tracker.containers import AppContainer
from prayer_tracker.domain.prayers import PrayerStatus, PrayerType
from prayer_tracker.services.clock import FixedClock
from prayer_tracker.services.records import PrayerWindowLockedError, RecordStorageError
from prayer_tracker.services.students import StudentNotFoundError
from tests.conftest import (
    TODAY,
    FakeReportClient,
    InMemoryRecordRepository,
    make_day,
    make_records,
)


def _client_with_student(container: AppContainer) -> tuple[TestClient, str]:
    student = container.student_service.add_student("amina", "Amina")
    return TestClient(create_app(container)), student.id


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_day_board(container: AppContainer) -> None:
    client, student_id = _client_with_student(container)

    response = client.get(f"/students/{student_id}/days/{TODAY}")

    assert response.status_code == 200
    data = response.json()
    assert [slot["prayer"] for slot in data["prayers"]] == [
        "fajr",
        "dhuhr",
        "asr",
        "maghrib",
        "isha",
    ]
    assert data["prayers"][0]["effective_status"] == "missed"
    assert data["prayers"][0]["window"] == "05:00-07:30"
    assert data["score"]["total_points"] == -10
    assert data["score"]["percentage"] == 0


def test_update_prayer_in_open_window(
    container: AppContainer, clock: FixedClock
) -> None:
    clock.moment = datetime(2024, 3, 15, 13, 0)
    client, student_id = _client_with_student(container)

    response = client.put(
        f"/students/{student_id}/days/{TODAY}/prayers/dhuhr",
        json={"status": "on_time"},
    )

    assert response.status_code == 200
    dhuhr = response.json()["prayers"][1]
    assert dhuhr["stored_status"] == "on_time"
    assert dhuhr["window_state"] == "open"


def test_update_prayer_locked_window(container: AppContainer) -> None:
    client, student_id = _client_with_student(container)

    response = client.put(
        f"/students/{student_id}/days/{TODAY}/prayers/fajr",
        json={"status": "on_time"},
    )

    assert response.status_code == 409


def test_update_prayer_rejects_unknown_prayer_and_status(
    container: AppContainer,
) -> None:
    client, student_id = _client_with_student(container)

    unknown_prayer = client.put(
        f"/students/{student_id}/days/{TODAY}/prayers/witr",
        json={"status": "on_time"},
    )
    unknown_status = client.put(
        f"/students/{student_id}/days/{TODAY}/prayers/isha",
        json={"status": "sometimes"},
    )

    assert unknown_prayer.status_code == 422
    assert unknown_status.status_code == 422


def test_invalid_date_key(container: AppContainer) -> None:
    client, student_id = _client_with_student(container)

    response = client.get(f"/students/{student_id}/days/2024-02-30")

    assert response.status_code == 422
    assert "2024-02-30" in response.json()["detail"]


def test_unknown_student(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/students/missing/risk")

    assert response.status_code == 404


def test_month_score(
    container: AppContainer, record_repository: InMemoryRecordRepository
) -> None:
    client, student_id = _client_with_student(container)
    record_repository.stored[student_id] = make_records(
        student_id, make_day(TODAY, fajr=PrayerStatus.ON_TIME)
    )

    future = client.get(f"/students/{student_id}/months/2024/4")
    current = client.get(f"/students/{student_id}/months/2024/3")
    invalid = client.get(f"/students/{student_id}/months/2024/13")

    assert future.json()["percentage"] == 100
    assert future.json()["max_points"] == 0
    assert current.json()["max_points"] == 710
    assert current.json()["breakdown"] == []
    assert invalid.status_code == 422


def test_stats_and_risk(
    container: AppContainer, record_repository: InMemoryRecordRepository
) -> None:
    client, student_id = _client_with_student(container)
    record_repository.stored[student_id] = make_records(
        student_id, make_day("2024-03-11", fajr=PrayerStatus.LATE)
    )

    stats = client.get(
        f"/students/{student_id}/stats",
        params={"start": "2024-03-11", "end": "2024-03-11"},
    )
    risk = client.get(f"/students/{student_id}/risk")

    assert stats.status_code == 200
    assert stats.json()["by_prayer"][PrayerType.FAJR.value] == {
        "on_time": 0,
        "late": 1,
        "missed": 0,
    }
    assert stats.json()["total"]["missed"] == 4
    assert risk.json() == {"is_at_risk": True, "consecutive_inactive_days": 3}


def test_report(container: AppContainer, report_client: FakeReportClient) -> None:
    client, student_id = _client_with_student(container)

    response = client.post(
        f"/students/{student_id}/report",
        json={"start_date": "2024-03-01", "end_date": "2024-03-15"},
    )

    assert response.status_code == 200
    assert response.json() == {"report": report_client.text}
    assert "Student name: Amina" in report_client.prompts[0]


def test_report_failure_is_surfaced(
    container: AppContainer, report_client: FakeReportClient
) -> None:
    report_client.fail = True
    client, student_id = _client_with_student(container)

    response = client.post(
        f"/students/{student_id}/report",
        json={"start_date": "2024-03-01", "end_date": "2024-03-15"},
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Report service unavailable"


def test_storage_failure_is_unavailable(
    container: AppContainer,
    clock: FixedClock,
    record_repository: InMemoryRecordRepository,
) -> None:
    clock.moment = datetime(2024, 3, 15, 13, 0)
    record_repository.fail_writes = True
    client, student_id = _client_with_student(container)

    response = client.put(
        f"/students/{student_id}/days/{TODAY}/prayers/dhuhr",
        json={"status": "on_time"},
    )

    assert response.status_code == 503
    assert response.json()["detail"] == "Record store unavailable"


def test_status_for_uses_nearest_mapped_base_class() -> None:
    class StaleRecordError(RecordStorageError):
        pass

    class LockedAfterDeadlineError(PrayerWindowLockedError):
        pass

    assert status_for(StaleRecordError("stale")) == 503
    assert status_for(LockedAfterDeadlineError("late")) == 409
    assert status_for(KeyError("other")) == 500


def test_subclassed_domain_error_is_mapped(
    container: AppContainer, monkeypatch: pytest.MonkeyPatch
) -> None:
    class ArchivedStudentError(StudentNotFoundError):
        pass

    def raise_archived(student_id: str) -> None:
        raise ArchivedStudentError(f"Student archived: {student_id}")

    monkeypatch.setattr(container.student_service, "get_student", raise_archived)
    client = TestClient(create_app(container))

    response = client.get("/students/old/risk")

    assert response.status_code == 404
    assert response.json()["detail"] == "Student archived: old"
