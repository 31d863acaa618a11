"""Apply validated rows to the store, one row at a time.

Students, faculty and subjects are looked up by natural key (roll number, email,
subject code) and either updated in place, skipped with a warning, or inserted,
depending on the duplicate policy of the run. Timetable rows replace the schedule
of their scope and must link to a subject that already exists.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import add_minutes, canonical_year, capitalize_day, normalize_time, timestamp
from ..core.constants import DEFAULT_CLASS_MINUTES
from ..core.enums import ApprovalStatus, DuplicatePolicy, EntityType, Role, UpsertOutcome
from ..core.exceptions import DomainError, StoreUnavailableError, UnresolvedReferenceError, ValidationError
from ..faculty.model import Faculty
from ..faculty.repository import FacultyRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from ..timetable.model import TimetableAssignment
from ..timetable.repository import TimetableRepository
from .model import MappedRow, UpsertReport

logger = logging.getLogger(__name__)

_STUDENT_FIELDS = ("name", "roll_no", "email", "department", "year", "phone_number", "parent_mobile")
_FACULTY_FIELDS = ("name", "email", "department", "phone_number")
_SUBJECT_FIELDS = ("name", "code", "department", "year", "classroom")


def _present(row: MappedRow, names) -> Dict[str, str]:
    """Mapped, non-empty values only: blank cells never erase stored data."""
    out = {}
    for name in names:
        value = row.values.get(name)
        if value:
            out[name] = canonical_year(value) if name == "year" else value
    return out


class UpsertEngine:
    def __init__(
        self,
        students: StudentRepository,
        faculty: FacultyRepository,
        subjects: SubjectRepository,
        timetable: TimetableRepository,
        *,
        default_faculty_password: str,
    ):
        self._students = students
        self._faculty = faculty
        self._subjects = subjects
        self._timetable = timetable
        self._default_faculty_password = default_faculty_password
        self._handlers: Dict[EntityType, Callable[[MappedRow, DuplicatePolicy], UpsertReport]] = {
            EntityType.STUDENTS: self._upsert_student,
            EntityType.FACULTY: self._upsert_faculty,
            EntityType.SUBJECTS: self._upsert_subject,
        }

    def upsert(self, entity_type: EntityType, row: MappedRow, *, policy: DuplicatePolicy) -> UpsertReport:
        handler = self._handlers.get(EntityType(entity_type))
        if handler is None:
            raise ValueError(f"{entity_type} rows are not upserted by natural key")
        return self._guarded(row, lambda: handler(row, policy))

    def begin_replace(self, faculty_id: Optional[int]) -> FrozenSet[tuple]:
        """Clear the timetable scope before re-import.

        One faculty's rows when `faculty_id` is given, otherwise the whole table.
        Returns the slot keys that were removed.
        """
        previous = self._timetable.list_where(faculty_id=faculty_id)
        deleted = self._timetable.delete_where(faculty_id=faculty_id)
        scope = f"faculty {faculty_id}" if faculty_id is not None else "all faculty"
        logger.info("Cleared %d timetable rows for %s", deleted, scope)
        return frozenset(a.slot_key for a in previous)

    def insert_assignment(
        self,
        row: MappedRow,
        *,
        faculty_id: Optional[int],
        replaced: FrozenSet[tuple] = frozenset(),
    ) -> UpsertReport:
        return self._guarded(row, lambda: self._insert_assignment(row, faculty_id, replaced))

    def _guarded(self, row: MappedRow, apply: Callable[[], UpsertReport]) -> UpsertReport:
        try:
            return apply()
        except StoreUnavailableError:
            raise
        except DomainError as e:
            return UpsertReport(UpsertOutcome.FAILED, f"Row {row.row_number}: {e}")
        except Exception as e:
            logger.exception("Error processing row %d", row.row_number)
            return UpsertReport(UpsertOutcome.FAILED, f"Row {row.row_number}: Failed to process - {e}")

    def _upsert_student(self, row: MappedRow, policy: DuplicatePolicy) -> UpsertReport:
        values = _present(row, _STUDENT_FIELDS)
        roll_no = values["roll_no"]

        existing = self._students.find_by_key(roll_no)
        if existing:
            if policy == DuplicatePolicy.SKIP:
                return UpsertReport(
                    UpsertOutcome.SKIPPED,
                    f"Row {row.row_number}: Student with roll number '{roll_no}' already exists - skipped",
                )
            self._students.update(existing.student_id, {**values, "updated_at": timestamp()})
            return UpsertReport(UpsertOutcome.UPDATED)

        self._students.insert(
            Student(
                student_id=None,
                name=values["name"],
                roll_no=roll_no,
                email=values.get("email", ""),
                department=values["department"],
                year=values["year"],
                phone_number=values.get("phone_number", ""),
                parent_mobile=values.get("parent_mobile", ""),
                created_at=timestamp(),
            )
        )
        return UpsertReport(UpsertOutcome.INSERTED)

    def _upsert_faculty(self, row: MappedRow, policy: DuplicatePolicy) -> UpsertReport:
        values = _present(row, _FACULTY_FIELDS)
        email = values["email"] = values["email"].lower()
        password = row.get("password")

        existing = self._faculty.find_by_key(email)
        if existing:
            if existing.role != Role.FACULTY:
                raise ValidationError(f"Email '{email}' belongs to an existing {existing.role.value} account")
            if policy == DuplicatePolicy.SKIP:
                return UpsertReport(
                    UpsertOutcome.SKIPPED,
                    f"Row {row.row_number}: Faculty with email '{email}' already exists - skipped",
                )
            changes = {**values, "updated_at": timestamp()}
            if password:
                changes["password_hash"] = generate_password_hash(password)
            self._faculty.update(existing.user_id, changes)
            return UpsertReport(UpsertOutcome.UPDATED)

        self._faculty.insert(
            Faculty(
                user_id=None,
                name=values["name"],
                email=email,
                password_hash=generate_password_hash(password or self._default_faculty_password),
                department=values["department"],
                phone_number=values.get("phone_number", ""),
                created_at=timestamp(),
                role=Role.FACULTY,
                status=ApprovalStatus.APPROVED,
            )
        )
        return UpsertReport(UpsertOutcome.INSERTED)

    def _upsert_subject(self, row: MappedRow, policy: DuplicatePolicy) -> UpsertReport:
        values = _present(row, _SUBJECT_FIELDS)
        code = values["code"]

        existing = self._subjects.find_by_key(code)
        if existing:
            if policy == DuplicatePolicy.SKIP:
                return UpsertReport(
                    UpsertOutcome.SKIPPED,
                    f"Row {row.row_number}: Subject with code '{code}' already exists - skipped",
                )
            self._subjects.update(existing.subject_id, {**values, "updated_at": timestamp()})
            return UpsertReport(UpsertOutcome.UPDATED)

        self._subjects.insert(
            Subject(
                subject_id=None,
                name=values["name"],
                code=code,
                department=values["department"],
                year=values["year"],
                created_at=timestamp(),
                classroom=values.get("classroom"),
            )
        )
        return UpsertReport(UpsertOutcome.INSERTED)

    def _find_subject(self, name: str, department: str, year: str) -> Optional[Subject]:
        subject = self._subjects.find_by_name_department_year(name=name, department=department, year=canonical_year(year))
        if subject is None and canonical_year(year) != year:
            subject = self._subjects.find_by_name_department_year(name=name, department=department, year=year)
        return subject

    def _insert_assignment(self, row: MappedRow, faculty_id: Optional[int], replaced: FrozenSet[tuple]) -> UpsertReport:
        name, department, year = row.get("subject"), row.get("department"), row.get("year")
        subject = self._find_subject(name, department, year)
        if subject is None:
            raise UnresolvedReferenceError(
                f"Subject '{name}' not found for Department '{department}' and Year '{year}'. "
                "Please ensure the subject exists in the system."
            )

        start = normalize_time(row.get("time"))
        end = normalize_time(row.get("end_time")) if row.get("end_time") else add_minutes(start, DEFAULT_CLASS_MINUTES)
        assignment = TimetableAssignment(
            assignment_id=None,
            faculty_id=faculty_id,
            subject_id=int(subject.subject_id),
            day=capitalize_day(row.get("day")),
            start_time=start,
            end_time=end,
            classroom=row.get("classroom"),
            department=department,
            year=subject.year,
            created_at=timestamp(),
        )
        self._timetable.insert(assignment)

        outcome = UpsertOutcome.UPDATED if assignment.slot_key in replaced else UpsertOutcome.INSERTED
        return UpsertReport(outcome)
