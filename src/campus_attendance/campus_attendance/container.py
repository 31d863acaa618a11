from __future__ import annotations

from dataclasses import dataclass

from .audit.mysql_audit_repository import MySQLAuditRepository
from .database.connection import DBConfig, DatabaseConnection
from .faculty.mysql_faculty_repository import MySQLFacultyRepository
from .imports.service import ImportService
from .imports.upsert import UpsertEngine
from .students.mysql_student_repository import MySQLStudentRepository
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .timetable.mysql_timetable_repository import MySQLTimetableRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    students_repo: MySQLStudentRepository
    faculty_repo: MySQLFacultyRepository
    subjects_repo: MySQLSubjectRepository
    timetable_repo: MySQLTimetableRepository
    audit_repo: MySQLAuditRepository

    upsert_engine: UpsertEngine
    import_service: ImportService


def build_container(*, db_config: dict, default_faculty_password: str) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    students_repo = MySQLStudentRepository(conn)
    faculty_repo = MySQLFacultyRepository(conn)
    subjects_repo = MySQLSubjectRepository(conn)
    timetable_repo = MySQLTimetableRepository(conn)
    audit_repo = MySQLAuditRepository(conn)

    upsert_engine = UpsertEngine(
        students_repo,
        faculty_repo,
        subjects_repo,
        timetable_repo,
        default_faculty_password=default_faculty_password,
    )
    import_service = ImportService(upsert_engine, faculty=faculty_repo, audit=audit_repo)

    return Container(
        conn=conn,
        students_repo=students_repo,
        faculty_repo=faculty_repo,
        subjects_repo=subjects_repo,
        timetable_repo=timetable_repo,
        audit_repo=audit_repo,
        upsert_engine=upsert_engine,
        import_service=import_service,
    )
