"""Student roster business logic."""

from dataclasses import dataclass
from typing import Protocol

from prayer_tracker.domain.models import StudentRecord


class StudentNotFoundError(LookupError):
    """Raised when a student id is unknown."""


class DuplicateUsernameError(ValueError):
    """Raised when a username is already taken."""


class StudentValidationError(ValueError):
    """Raised when student details are blank after trimming."""


class StudentStorageError(RuntimeError):
    """Raised when the student store fails to persist a change."""


class StudentRepository(Protocol):
    """Persistence interface for students."""

    def list_students(self) -> list[StudentRecord]:
        """Return all students."""

    def get_student(self, student_id: str) -> StudentRecord | None:
        """Return a student by id, if present."""

    def get_by_username(self, username: str) -> StudentRecord | None:
        """Return a student by username, if present."""

    def create_student(self, username: str, name: str) -> StudentRecord:
        """Create and return a new student."""


@dataclass
class StudentService:
    """Application service for the student roster."""

    repository: StudentRepository

    def list_students(self) -> list[StudentRecord]:
        """Return all students sorted by name."""
        return sorted(self.repository.list_students(), key=lambda s: s.name.lower())

    def search(self, query: str) -> list[StudentRecord]:
        """Return students whose name or username contains the query."""
        needle = query.strip().lower()
        students = self.list_students()
        if not needle:
            return students
        return [
            student
            for student in students
            if needle in student.name.lower() or needle in student.username.lower()
        ]

    def get_student(self, student_id: str) -> StudentRecord:
        """Return a student or raise if it does not exist."""
        student = self.repository.get_student(student_id)
        if student is None:
            raise StudentNotFoundError(f"Student not found: {student_id}")
        return student

    def add_student(self, username: str, name: str) -> StudentRecord:
        """Create a student with a unique username."""
        cleaned_username = username.strip().lower()
        cleaned_name = name.strip()
        if not cleaned_username or not cleaned_name:
            raise StudentValidationError("Username and name are required")
        if self.repository.get_by_username(cleaned_username) is not None:
            raise DuplicateUsernameError(f"Username already taken: {cleaned_username}")
        return self.repository.create_student(cleaned_username, cleaned_name)
