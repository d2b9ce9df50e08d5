"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime, time
from uuid import uuid4

import pytest

from prayer_tracker.config import Settings
from prayer_tracker.containers import AppContainer
from prayer_tracker.domain.models import StudentRecord
from prayer_tracker.domain.prayers import (
    DailyRecord,
    PrayerStatus,
    PrayerType,
    StudentRecords,
    empty_prayers,
)
from prayer_tracker.services.admin import AdminService
from prayer_tracker.services.clock import Clock, FixedClock, format_date_key
from prayer_tracker.services.compliance import ComplianceService
from prayer_tracker.services.records import (
    RecordRepository,
    RecordService,
    RecordStorageError,
)
from prayer_tracker.services.reports import (
    ReportClient,
    ReportGenerationError,
    ReportService,
)
from prayer_tracker.services.students import StudentRepository, StudentService

TODAY = "2024-03-15"


def make_day(date_key: str, **statuses: PrayerStatus) -> DailyRecord:
    """Build a daily record, e.g. make_day("2024-03-01", fajr=PrayerStatus.LATE)."""
    prayers = empty_prayers()
    for name, status in statuses.items():
        prayers[PrayerType(name)] = status
    return DailyRecord(date_key=date_key, prayers=prayers)


def make_records(student_id: str, *days: DailyRecord) -> StudentRecords:
    return StudentRecords(
        student_id=student_id, records={day.date_key: day for day in days}
    )


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository for tests."""

    stored: dict[str, StudentRecords] = field(default_factory=dict)
    puts: int = 0
    fail_writes: bool = False

    def get(self, student_id: str) -> StudentRecords | None:
        return self.stored.get(student_id)

    def put(self, records: StudentRecords) -> None:
        if self.fail_writes:
            raise RecordStorageError("Record store unavailable")
        self.puts += 1
        self.stored[records.student_id] = records

    def reset(self, student_id: str) -> None:
        self.stored[student_id] = StudentRecords(student_id=student_id)


@dataclass
class InMemoryStudentRepository(StudentRepository):
    """In-memory student repository for tests."""

    students: dict[str, StudentRecord] = field(default_factory=dict)

    def list_students(self) -> list[StudentRecord]:
        return list(self.students.values())

    def get_student(self, student_id: str) -> StudentRecord | None:
        return self.students.get(student_id)

    def get_by_username(self, username: str) -> StudentRecord | None:
        for student in self.students.values():
            if student.username == username:
                return student
        return None

    def create_student(self, username: str, name: str) -> StudentRecord:
        student = StudentRecord(id=str(uuid4()), username=username, name=name)
        self.students[student.id] = student
        return student


@dataclass
class SteppingClock(Clock):
    """Clock that advances to the next moment on every read."""

    moments: list[datetime]
    reads: int = 0

    def current(self) -> datetime:
        moment = self.moments[min(self.reads, len(self.moments) - 1)]
        self.reads += 1
        return moment

    def now(self) -> time:
        return self.current().time()

    def today_key(self) -> str:
        return format_date_key(self.current().date())


@dataclass
class FakeReportClient(ReportClient):
    """Fake report client that records prompts."""

    text: str = "Keep going, Fajr is improving."
    fail: bool = False
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str, store: bool) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise ReportGenerationError("Report service unavailable")
        return self.text


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock.at(TODAY, "12:00")


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def student_repository() -> InMemoryStudentRepository:
    return InMemoryStudentRepository()


@pytest.fixture
def report_client() -> FakeReportClient:
    return FakeReportClient()


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    record_repository: InMemoryRecordRepository,
    student_repository: InMemoryStudentRepository,
    report_client: FakeReportClient,
) -> AppContainer:
    student_service = StudentService(student_repository)
    record_service = RecordService(repository=record_repository, clock=clock)
    compliance_service = ComplianceService(record_service=record_service, clock=clock)
    report_service = ReportService(
        client=report_client,
        model=settings.openai_model,
        store=settings.openai_store,
    )
    admin_service = AdminService(
        student_service=student_service,
        compliance_service=compliance_service,
        record_service=record_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        student_service=student_service,
        record_service=record_service,
        compliance_service=compliance_service,
        report_service=report_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
