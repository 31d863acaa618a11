from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for authorization."""

    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"


class ApprovalStatus(str, Enum):
    """Faculty account approval workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EntityType(str, Enum):
    """What an uploaded file contains; picks fields, natural key and rules."""

    STUDENTS = "students"
    FACULTY = "faculty"
    SUBJECTS = "subjects"
    TIMETABLE = "timetable"
    FACULTY_TIMETABLE = "faculty-timetable"

    @property
    def is_timetable(self) -> bool:
        return self in (EntityType.TIMETABLE, EntityType.FACULTY_TIMETABLE)


class DuplicatePolicy(str, Enum):
    """What to do when a row's natural key already exists in the store."""

    UPDATE = "update"
    SKIP = "skip"


class UpsertOutcome(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"
