"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Path, Request, status
from fastapi.responses import JSONResponse

from prayer_tracker.api.admin import router as admin_router
from prayer_tracker.api.models import ReportRequest, StatusUpdate
from prayer_tracker.api.serializers import (
    serialize_risk,
    serialize_score,
    serialize_slot,
    serialize_stats,
)
from prayer_tracker.app_logging import configure_logging
from prayer_tracker.containers import AppContainer
from prayer_tracker.domain.prayers import PrayerType
from prayer_tracker.services.records import PrayerWindowLockedError, RecordStorageError
from prayer_tracker.services.reports import ReportGenerationError
from prayer_tracker.services.students import (
    DuplicateUsernameError,
    StudentNotFoundError,
    StudentStorageError,
    StudentValidationError,
)
from prayer_tracker.services.windows import InvalidDateKeyError, UnknownPrayerError

_ERROR_STATUS: dict[type[Exception], int] = {
    InvalidDateKeyError: 422,
    UnknownPrayerError: 422,
    StudentValidationError: 422,
    PrayerWindowLockedError: status.HTTP_409_CONFLICT,
    DuplicateUsernameError: status.HTTP_409_CONFLICT,
    StudentNotFoundError: status.HTTP_404_NOT_FOUND,
    RecordStorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StudentStorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ReportGenerationError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: Exception) -> int:
    """Return the HTTP status of the nearest mapped exception class."""
    for klass in type(exc).__mro__:
        if klass in _ERROR_STATUS:
            return _ERROR_STATUS[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    async def handle_domain_error(_request: Request, exc: Exception) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Collaborator failure: %s", exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for error_type in _ERROR_STATUS:
        app.add_exception_handler(error_type, handle_domain_error)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/students/{student_id}/days/{date_key}")
    async def day_board(
        student_id: str, date_key: str, request: Request
    ) -> dict[str, object]:
        """Return the prayer board and score for a day."""
        state_container: AppContainer = request.app.state.container
        state_container.student_service.get_student(student_id)
        return _day_payload(state_container, student_id, date_key)

    @app.put("/students/{student_id}/days/{date_key}/prayers/{prayer}")
    async def update_prayer(
        student_id: str,
        date_key: str,
        prayer: PrayerType,
        update: StatusUpdate,
        request: Request,
    ) -> dict[str, object]:
        """Record a prayer status within its open window."""
        state_container: AppContainer = request.app.state.container
        state_container.student_service.get_student(student_id)
        state_container.record_service.update_status(
            student_id, date_key, prayer, update.status
        )
        return _day_payload(state_container, student_id, date_key)

    @app.get("/students/{student_id}/months/{year}/{month}")
    async def month_score(
        request: Request, student_id: str, year: int, month: int = Path(ge=1, le=12)
    ) -> dict[str, object]:
        """Return the monthly score."""
        state_container: AppContainer = request.app.state.container
        state_container.student_service.get_student(student_id)
        score = state_container.compliance_service.month_score(student_id, year, month)
        return serialize_score(score)

    @app.get("/students/{student_id}/stats")
    async def stats(
        student_id: str, start: str, end: str, request: Request
    ) -> dict[str, object]:
        """Return prayer outcome counts for a date range."""
        state_container: AppContainer = request.app.state.container
        state_container.student_service.get_student(student_id)
        range_stats = state_container.compliance_service.range_stats(
            student_id, start, end
        )
        return serialize_stats(range_stats)

    @app.get("/students/{student_id}/risk")
    async def risk(student_id: str, request: Request) -> dict[str, object]:
        """Return the inactivity risk for a student."""
        state_container: AppContainer = request.app.state.container
        state_container.student_service.get_student(student_id)
        return serialize_risk(state_container.compliance_service.check_risk(student_id))

    @app.post("/students/{student_id}/report")
    async def report(
        student_id: str, body: ReportRequest, request: Request
    ) -> dict[str, str]:
        """Generate a narrative progress report."""
        state_container: AppContainer = request.app.state.container
        student = state_container.student_service.get_student(student_id)
        records = state_container.record_service.get_records(student_id)
        text = await state_container.report_service.generate(
            student.name,
            records,
            body.start_date,
            body.end_date,
            state_container.clock,
            for_admin=body.for_admin,
        )
        return {"report": text}

    return app


def _day_payload(
    container: AppContainer, student_id: str, date_key: str
) -> dict[str, object]:
    slots, score = container.compliance_service.day_summary(student_id, date_key)
    return {
        "date": date_key,
        "prayers": [serialize_slot(slot) for slot in slots],
        "score": serialize_score(score),
    }
