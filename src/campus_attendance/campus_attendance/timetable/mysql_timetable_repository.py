from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, format_hhmm
from .model import TimetableAssignment
from .repository import TimetableRepository


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, assignment: TimetableAssignment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable_assignments
                    (faculty_id, subject_id, day, start_time, end_time, classroom, department, year, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    assignment.faculty_id,
                    int(assignment.subject_id),
                    assignment.day,
                    assignment.start_time,
                    assignment.end_time,
                    assignment.classroom,
                    assignment.department,
                    assignment.year,
                    assignment.created_at,
                ),
            )
            return int(cur.lastrowid)

    def list_where(self, *, faculty_id: Optional[int] = None) -> Sequence[TimetableAssignment]:
        where = ""
        params: tuple = ()
        if faculty_id is not None:
            where = "WHERE faculty_id=%s"
            params = (int(faculty_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT assignment_id, faculty_id, subject_id, day, start_time, end_time,
                       classroom, department, year, created_at
                FROM timetable_assignments
                {where}
                ORDER BY assignment_id
                """,
                params,
            )
            return [
                TimetableAssignment(
                    assignment_id=int(r["assignment_id"]),
                    faculty_id=int(r["faculty_id"]) if r.get("faculty_id") is not None else None,
                    subject_id=int(r["subject_id"]),
                    day=r["day"],
                    start_time=format_hhmm(r["start_time"]),
                    end_time=format_hhmm(r["end_time"]),
                    classroom=r.get("classroom") or "",
                    department=r["department"],
                    year=r["year"],
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def delete_where(self, *, faculty_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if faculty_id is None:
                cur.execute("DELETE FROM timetable_assignments")
            else:
                cur.execute("DELETE FROM timetable_assignments WHERE faculty_id=%s", (int(faculty_id),))
            return int(cur.rowcount)
