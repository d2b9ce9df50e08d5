"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from prayer_tracker.api.models import StatusUpdate, StudentCreate
from prayer_tracker.domain.prayers import PrayerType  # noqa: TC001

if TYPE_CHECKING:
    from prayer_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/students", dependencies=[Depends(require_admin)])
async def list_students(
    request: Request,
    q: str = "",
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
) -> dict[str, object]:
    """Return students with monthly scores, defaulting to the current month."""
    container: AppContainer = request.app.state.container
    today_year, today_month, _ = container.clock.today_key().split("-")
    return {
        "students": container.admin_service.list_students(
            year=year or int(today_year),
            month=month or int(today_month),
            query=q,
        )
    }


@router.post(
    "/students",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_student(body: StudentCreate, request: Request) -> dict[str, object]:
    """Add a student to the roster."""
    container: AppContainer = request.app.state.container
    student = container.student_service.add_student(body.username, body.name)
    return {"id": student.id, "username": student.username, "name": student.name}


@router.get("/at-risk", dependencies=[Depends(require_admin)])
async def at_risk(request: Request) -> dict[str, object]:
    """Return students flagged for consecutive inactivity."""
    container: AppContainer = request.app.state.container
    return {"students": container.admin_service.at_risk_students()}


@router.put(
    "/students/{student_id}/days/{date_key}/prayers/{prayer}",
    dependencies=[Depends(require_admin)],
)
async def override_prayer(
    student_id: str,
    date_key: str,
    prayer: PrayerType,
    update: StatusUpdate,
    request: Request,
) -> dict[str, object]:
    """Record a prayer status regardless of its window."""
    container: AppContainer = request.app.state.container
    container.student_service.get_student(student_id)
    container.record_service.update_status(
        student_id, date_key, prayer, update.status, allow_locked=True
    )
    day = container.record_service.get_day(student_id, date_key)
    return {
        "date": date_key,
        "prayers": {name.value: value.value for name, value in day.prayers.items()},
    }


@router.delete(
    "/students/{student_id}/records",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def reset_records(student_id: str, request: Request) -> None:
    """Delete every prayer record of a student."""
    container: AppContainer = request.app.state.container
    container.admin_service.reset_student(student_id)
