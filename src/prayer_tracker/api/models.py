"""Request models for the HTTP API."""

from pydantic import BaseModel, Field

from prayer_tracker.domain.prayers import PrayerStatus


class StatusUpdate(BaseModel):
    """Body for recording a prayer status."""

    status: PrayerStatus


class StudentCreate(BaseModel):
    """Body for adding a student to the roster."""

    username: str = Field(min_length=1)
    name: str = Field(min_length=1)


class ReportRequest(BaseModel):
    """Body for requesting a narrative report."""

    start_date: str
    end_date: str
    for_admin: bool = False
