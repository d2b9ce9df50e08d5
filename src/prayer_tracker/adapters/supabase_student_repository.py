"""Supabase-backed student repository."""

from dataclasses import dataclass
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from prayer_tracker.domain.models import StudentRecord
from prayer_tracker.services.students import StudentRepository, StudentStorageError

_TABLE = "students"


@dataclass
class SupabaseStudentRepository(StudentRepository):
    """Supabase implementation for student persistence."""

    client: Client

    def list_students(self) -> list[StudentRecord]:
        """Return all students."""
        query = self.client.table(_TABLE).select("id, username, name")
        response = _execute(query.order("name", desc=False), "list students")
        return [_parse_row(row) for row in response.data or []]

    def get_student(self, student_id: str) -> StudentRecord | None:
        """Return the student with the given id, if present."""
        query = self.client.table(_TABLE).select("id, username, name")
        response = _execute(
            query.eq("id", student_id).limit(1), f"load student {student_id}"
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def get_by_username(self, username: str) -> StudentRecord | None:
        """Return the student with the given username, if present."""
        query = self.client.table(_TABLE).select("id, username, name")
        response = _execute(
            query.eq("username", username).limit(1), f"look up {username}"
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def create_student(self, username: str, name: str) -> StudentRecord:
        """Create a new student row and return it."""
        response = _execute(
            self.client.table(_TABLE).insert({"username": username, "name": name}),
            f"create student {username}",
        )
        if not response.data:
            raise StudentStorageError("Failed to create student in Supabase")
        return _parse_row(response.data[0])


def _execute(query: Any, action: str) -> Any:
    try:
        return query.execute()
    except APIError as exc:
        raise StudentStorageError(f"Failed to {action}: {exc}") from exc


def _parse_row(row: dict[str, object]) -> StudentRecord:
    return StudentRecord(
        id=str(row["id"]),
        username=str(row.get("username", "")),
        name=str(row.get("name", "")),
    )
