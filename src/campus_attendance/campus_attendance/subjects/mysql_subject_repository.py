from __future__ import annotations

from typing import Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchone
from .model import Subject
from .repository import SubjectRepository

_COLUMNS = {
    "name": "name",
    "code": "code",
    "department": "department",
    "year": "year",
    "classroom": "classroom",
    "updated_at": "updated_at",
}

_SELECT = """
    SELECT subject_id, name, code, department, year, classroom, created_at, updated_at
    FROM subjects
"""


def _to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=int(r["subject_id"]),
        name=r["name"],
        code=r["code"],
        department=r["department"],
        year=r["year"],
        created_at=r["created_at"],
        classroom=r.get("classroom"),
        updated_at=r.get("updated_at"),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_key(self, code: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def find_by_name_department_year(self, *, name: str, department: str, year: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE LOWER(name)=LOWER(%s) AND department=%s AND year=%s ORDER BY subject_id LIMIT 1",
                (name, department, year),
            )
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def insert(self, subject: Subject) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO subjects(name, code, department, year, classroom, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (subject.name, subject.code, subject.department, subject.year, subject.classroom, subject.created_at),
            )
            return int(cur.lastrowid)

    def update(self, subject_id: int, changes: Mapping[str, str]) -> bool:
        if not changes:
            return False
        set_clause, params = build_set_clause(dict(changes), _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE subjects SET {set_clause} WHERE subject_id=%s", (*params, int(subject_id)))
            return cur.rowcount > 0
