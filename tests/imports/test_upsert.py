from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from campus_attendance.core.enums import ApprovalStatus, DuplicatePolicy, EntityType, Role, UpsertOutcome
from campus_attendance.core.exceptions import StoreUnavailableError
from campus_attendance.imports.model import MappedRow
from campus_attendance.subjects.model import Subject


def _row(n, **values):
    return MappedRow(row_number=n, values=values)


def _add_subject(subjects_repo, *, name="Mathematics", code="MATH101", department="AIML", year="1st Year"):
    return subjects_repo.insert(
        Subject(subject_id=None, name=name, code=code, department=department, year=year, created_at="2026-01-01T09:00:00")
    )


def test_new_student_is_inserted_with_canonical_year(engine, students_repo):
    report = engine.upsert(
        EntityType.STUDENTS,
        _row(1, name="Ada", roll_no="2023001", department="AIML", year="2"),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.INSERTED
    student = students_repo.find_by_key("2023001")
    assert student.year == "2nd Year"
    assert student.created_at
    assert student.updated_at is None


def test_existing_student_is_merged_without_erasing_blank_cells(engine, students_repo):
    engine.upsert(
        EntityType.STUDENTS,
        _row(1, name="Ada", roll_no="7", department="AIML", year="1st Year", email="ada@x.edu"),
        policy=DuplicatePolicy.UPDATE,
    )

    report = engine.upsert(
        EntityType.STUDENTS,
        _row(1, name="Ada Lovelace", roll_no="7", department="AIML", year="1st Year", email=""),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.UPDATED
    student = students_repo.find_by_key("7")
    assert student.name == "Ada Lovelace"
    assert student.email == "ada@x.edu"
    assert student.updated_at is not None
    assert len(students_repo.rows) == 1


def test_skip_policy_leaves_existing_record_and_warns(engine, students_repo):
    engine.upsert(EntityType.STUDENTS, _row(1, name="Ada", roll_no="7", department="AIML", year="1"), policy=DuplicatePolicy.SKIP)

    report = engine.upsert(
        EntityType.STUDENTS,
        _row(5, name="Someone Else", roll_no="7", department="CS", year="1"),
        policy=DuplicatePolicy.SKIP,
    )

    assert report.outcome == UpsertOutcome.SKIPPED
    assert report.message == "Row 5: Student with roll number '7' already exists - skipped"
    assert students_repo.find_by_key("7").name == "Ada"


def test_new_faculty_gets_hashed_default_password_and_is_approved(engine, faculty_repo):
    report = engine.upsert(
        EntityType.FACULTY,
        _row(1, name="Dr. Smith", email="J.Smith@College.edu", department="CS"),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.INSERTED
    faculty = faculty_repo.find_by_key("j.smith@college.edu")
    assert faculty.email == "j.smith@college.edu"
    assert faculty.role == Role.FACULTY
    assert faculty.status == ApprovalStatus.APPROVED
    assert faculty.password_hash != "faculty123"
    assert check_password_hash(faculty.password_hash, "faculty123")


def test_faculty_password_column_is_hashed_on_update(engine, faculty_repo):
    uid = faculty_repo.add(name="Dr. Smith", email="smith@college.edu")

    report = engine.upsert(
        EntityType.FACULTY,
        _row(1, name="Dr. J. Smith", email="SMITH@college.edu", department="AIML", password="s3cret!"),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.UPDATED
    faculty = faculty_repo.get_by_id(uid)
    assert faculty.name == "Dr. J. Smith"
    assert faculty.department == "AIML"
    assert check_password_hash(faculty.password_hash, "s3cret!")


def test_email_of_admin_account_is_a_row_error(engine, faculty_repo):
    faculty_repo.add(name="Admin", email="admin@college.edu", role=Role.ADMIN)

    report = engine.upsert(
        EntityType.FACULTY,
        _row(3, name="Admin", email="admin@college.edu", department="CS"),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.FAILED
    assert report.message == "Row 3: Email 'admin@college.edu' belongs to an existing admin account"


def test_subject_update_keeps_classroom_when_blank(engine, subjects_repo):
    engine.upsert(
        EntityType.SUBJECTS,
        _row(1, name="Maths", code="M1", department="AIML", year="1", classroom="Room 101"),
        policy=DuplicatePolicy.UPDATE,
    )

    report = engine.upsert(
        EntityType.SUBJECTS,
        _row(1, name="Mathematics", code="M1", department="AIML", year="1st Year", classroom=""),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.UPDATED
    subject = subjects_repo.find_by_key("M1")
    assert subject.name == "Mathematics"
    assert subject.year == "1st Year"
    assert subject.classroom == "Room 101"


def test_assignment_links_subject_and_normalises_times(engine, subjects_repo, timetable_repo):
    sid = _add_subject(subjects_repo)

    report = engine.insert_assignment(
        _row(1, subject="mathematics", department="AIML", year="1", day="monday", time="2:30 PM", classroom="Room 101"),
        faculty_id=4,
    )

    assert report.outcome == UpsertOutcome.INSERTED
    (assignment,) = timetable_repo.rows
    assert assignment.subject_id == sid
    assert assignment.faculty_id == 4
    assert assignment.day == "Monday"
    assert assignment.start_time == "14:30"
    assert assignment.end_time == "15:30"
    assert assignment.year == "1st Year"


def test_assignment_uses_given_end_time_and_wraps_midnight(engine, subjects_repo, timetable_repo):
    _add_subject(subjects_repo)
    base = dict(subject="Mathematics", department="AIML", year="1st Year", day="Friday", classroom="")

    engine.insert_assignment(_row(1, time="09:00", end_time="10:30 AM", **base), faculty_id=None)
    engine.insert_assignment(_row(2, time="23:30", **base), faculty_id=None)

    assert [(a.start_time, a.end_time) for a in timetable_repo.rows] == [("09:00", "10:30"), ("23:30", "00:30")]


def test_unknown_subject_is_not_created(engine, subjects_repo, timetable_repo):
    report = engine.insert_assignment(
        _row(2, subject="Biology", department="AIML", year="1st Year", day="Monday", time="09:00", classroom=""),
        faculty_id=None,
    )

    assert report.outcome == UpsertOutcome.FAILED
    assert report.message == (
        "Row 2: Subject 'Biology' not found for Department 'AIML' and Year '1st Year'. "
        "Please ensure the subject exists in the system."
    )
    assert subjects_repo.rows == {}
    assert timetable_repo.rows == []


def test_begin_replace_clears_one_faculty_only(engine, subjects_repo, timetable_repo):
    _add_subject(subjects_repo)
    base = dict(subject="Mathematics", department="AIML", year="1st Year", day="Monday", time="09:00", classroom="")
    engine.insert_assignment(_row(1, **base), faculty_id=1)
    engine.insert_assignment(_row(1, **base), faculty_id=2)

    replaced = engine.begin_replace(1)

    assert replaced == frozenset({(1, 1, "Monday", "09:00")})
    assert [a.faculty_id for a in timetable_repo.rows] == [2]

    report = engine.insert_assignment(_row(1, **base), faculty_id=1, replaced=replaced)
    assert report.outcome == UpsertOutcome.UPDATED


def test_unexpected_error_becomes_failed_row(engine, students_repo, monkeypatch):
    def boom(student):
        raise RuntimeError("disk full")

    monkeypatch.setattr(students_repo, "insert", boom)

    report = engine.upsert(
        EntityType.STUDENTS,
        _row(9, name="Ada", roll_no="1", department="AIML", year="1"),
        policy=DuplicatePolicy.UPDATE,
    )

    assert report.outcome == UpsertOutcome.FAILED
    assert report.message == "Row 9: Failed to process - disk full"


def test_store_unavailable_propagates(engine, students_repo, monkeypatch):
    def down(roll_no):
        raise StoreUnavailableError("connection refused")

    monkeypatch.setattr(students_repo, "find_by_key", down)

    with pytest.raises(StoreUnavailableError):
        engine.upsert(
            EntityType.STUDENTS,
            _row(1, name="Ada", roll_no="1", department="AIML", year="1"),
            policy=DuplicatePolicy.UPDATE,
        )


def test_timetable_rows_are_not_upserted_by_key(engine):
    row = _row(1, subject="Mathematics", department="AIML", year="1st Year", day="Monday", time="09:00", classroom="")

    with pytest.raises(ValueError):
        engine.upsert(EntityType.TIMETABLE, row, policy=DuplicatePolicy.UPDATE)


def test_same_engine_handles_every_record_type_in_turn(engine, students_repo, faculty_repo, subjects_repo):
    engine.upsert(EntityType.SUBJECTS, _row(1, name="Maths", code="M1", department="AIML", year="1"), policy=DuplicatePolicy.UPDATE)
    engine.upsert(EntityType.STUDENTS, _row(1, name="Ada", roll_no="1", department="AIML", year="1"), policy=DuplicatePolicy.UPDATE)
    engine.upsert(EntityType.FACULTY, _row(1, name="Dr. X", email="x@college.edu", department="AIML"), policy=DuplicatePolicy.UPDATE)

    assert (len(subjects_repo.rows), len(students_repo.rows), len(faculty_repo.rows)) == (1, 1, 1)
