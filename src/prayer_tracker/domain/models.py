"""Domain models for the prayer tracker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StudentRecord:
    """Represents a student stored in the database."""

    id: str
    username: str
    name: str
