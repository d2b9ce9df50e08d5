"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from prayer_tracker.adapters.openai_report_client import OpenAIReportClient
from prayer_tracker.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from prayer_tracker.adapters.supabase_student_repository import (
    SupabaseStudentRepository,
)
from prayer_tracker.config import Settings
from prayer_tracker.services.admin import AdminService
from prayer_tracker.services.clock import Clock, SystemClock
from prayer_tracker.services.compliance import ComplianceService
from prayer_tracker.services.records import RecordService
from prayer_tracker.services.reports import ReportService
from prayer_tracker.services.students import StudentService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    student_service: StudentService
    record_service: RecordService
    compliance_service: ComplianceService
    report_service: ReportService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock(timezone_name=resolved_settings.timezone)
    student_service = StudentService(SupabaseStudentRepository(supabase_client))
    record_service = RecordService(
        repository=SupabaseRecordRepository(supabase_client),
        clock=clock,
    )
    compliance_service = ComplianceService(record_service=record_service, clock=clock)
    report_client = OpenAIReportClient.create(resolved_settings.openai_api_key)
    report_service = ReportService(
        client=report_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    admin_service = AdminService(
        student_service=student_service,
        compliance_service=compliance_service,
        record_service=record_service,
    )

    async def close_resources() -> None:
        await report_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        student_service=student_service,
        record_service=record_service,
        compliance_service=compliance_service,
        report_service=report_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
