from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from campus_attendance.audit.model import AuditEntry
from campus_attendance.core.enums import ApprovalStatus, Role
from campus_attendance.faculty.model import Faculty
from campus_attendance.imports.service import ImportService
from campus_attendance.imports.upsert import UpsertEngine
from campus_attendance.students.model import Student
from campus_attendance.subjects.model import Subject
from campus_attendance.timetable.model import TimetableAssignment


class InMemoryStudents:
    def __init__(self):
        self._next_id = 1
        self.rows: Dict[int, Student] = {}

    def find_by_key(self, roll_no):
        return next((s for s in self.rows.values() if s.roll_no == roll_no), None)

    def insert(self, student):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = replace(student, student_id=sid)
        return sid

    def update(self, student_id, changes):
        current = self.rows.get(int(student_id))
        if not current:
            return False
        self.rows[int(student_id)] = replace(current, **changes)
        return True


class InMemoryFaculty:
    def __init__(self):
        self._next_id = 1
        self.rows: Dict[int, Faculty] = {}

    def add(self, *, name, email, role=Role.FACULTY, department="Computer Science"):
        return self.insert(
            Faculty(
                user_id=None,
                name=name,
                email=email,
                password_hash="x",
                department=department,
                phone_number="",
                created_at="2026-01-01T09:00:00",
                role=role,
                status=ApprovalStatus.APPROVED,
            )
        )

    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def find_by_key(self, email):
        return next((f for f in self.rows.values() if f.email.lower() == email.lower()), None)

    def insert(self, faculty):
        uid = self._next_id
        self._next_id += 1
        self.rows[uid] = replace(faculty, user_id=uid)
        return uid

    def update(self, user_id, changes):
        current = self.rows.get(int(user_id))
        if not current:
            return False
        self.rows[int(user_id)] = replace(current, **changes)
        return True


class InMemorySubjects:
    def __init__(self):
        self._next_id = 1
        self.rows: Dict[int, Subject] = {}

    def find_by_key(self, code):
        return next((s for s in self.rows.values() if s.code == code), None)

    def find_by_name_department_year(self, *, name, department, year):
        for s in self.rows.values():
            if s.name.lower() == name.lower() and s.department == department and s.year == year:
                return s
        return None

    def insert(self, subject):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = replace(subject, subject_id=sid)
        return sid

    def update(self, subject_id, changes):
        current = self.rows.get(int(subject_id))
        if not current:
            return False
        self.rows[int(subject_id)] = replace(current, **changes)
        return True


class InMemoryTimetable:
    def __init__(self):
        self._next_id = 1
        self.rows: List[TimetableAssignment] = []
        self.delete_calls = 0

    def insert(self, assignment):
        aid = self._next_id
        self._next_id += 1
        self.rows.append(replace(assignment, assignment_id=aid))
        return aid

    def list_where(self, *, faculty_id: Optional[int] = None):
        return [a for a in self.rows if faculty_id is None or a.faculty_id == faculty_id]

    def delete_where(self, *, faculty_id: Optional[int] = None):
        self.delete_calls += 1
        keep = [a for a in self.rows if faculty_id is not None and a.faculty_id != faculty_id]
        deleted = len(self.rows) - len(keep)
        self.rows = keep
        return deleted


class InMemoryAudit:
    def __init__(self):
        self.entries: List[AuditEntry] = []

    def record(self, entry):
        self.entries.append(entry)
        return len(self.entries)


@pytest.fixture
def students_repo():
    return InMemoryStudents()


@pytest.fixture
def faculty_repo():
    return InMemoryFaculty()


@pytest.fixture
def subjects_repo():
    return InMemorySubjects()


@pytest.fixture
def timetable_repo():
    return InMemoryTimetable()


@pytest.fixture
def audit_repo():
    return InMemoryAudit()


@pytest.fixture
def engine(students_repo, faculty_repo, subjects_repo, timetable_repo):
    return UpsertEngine(
        students_repo,
        faculty_repo,
        subjects_repo,
        timetable_repo,
        default_faculty_password="faculty123",
    )


@pytest.fixture
def service(engine, faculty_repo, audit_repo):
    return ImportService(engine, faculty=faculty_repo, audit=audit_repo)
