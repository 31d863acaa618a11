from __future__ import annotations

from typing import Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = {
    "name": "name",
    "roll_no": "roll_no",
    "email": "email",
    "department": "department",
    "year": "year",
    "phone_number": "phone_number",
    "parent_mobile": "parent_mobile",
    "updated_at": "updated_at",
}


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_key(self, roll_no: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, roll_no, email, department, year,
                       phone_number, parent_mobile, created_at, updated_at
                FROM students
                WHERE roll_no=%s
                """,
                (roll_no,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Student(
                student_id=int(r["student_id"]),
                name=r["name"],
                roll_no=r["roll_no"],
                email=r.get("email") or "",
                department=r["department"],
                year=r["year"],
                phone_number=r.get("phone_number") or "",
                parent_mobile=r.get("parent_mobile") or "",
                created_at=r["created_at"],
                updated_at=r.get("updated_at"),
            )

    def insert(self, student: Student) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, roll_no, email, department, year, phone_number, parent_mobile, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student.name,
                    student.roll_no,
                    student.email,
                    student.department,
                    student.year,
                    student.phone_number,
                    student.parent_mobile,
                    student.created_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, changes: Mapping[str, str]) -> bool:
        if not changes:
            return False
        set_clause, params = build_set_clause(dict(changes), _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {set_clause} WHERE student_id=%s", (*params, int(student_id)))
            return cur.rowcount > 0
