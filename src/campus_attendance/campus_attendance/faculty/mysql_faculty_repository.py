from __future__ import annotations

from typing import Mapping, Optional

from ..core.enums import ApprovalStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchone
from .model import Faculty
from .repository import FacultyRepository

_COLUMNS = {
    "name": "name",
    "email": "email",
    "password_hash": "password_hash",
    "department": "department",
    "phone_number": "phone_number",
    "updated_at": "updated_at",
}

_SELECT = """
    SELECT user_id, name, email, password_hash, role, department, phone_number, status, created_at, updated_at
    FROM users
"""


def _to_faculty(r: dict) -> Faculty:
    return Faculty(
        user_id=int(r["user_id"]),
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        department=r.get("department") or "",
        phone_number=r.get("phone_number") or "",
        created_at=r["created_at"],
        role=Role(r["role"]),
        status=ApprovalStatus(r["status"]),
        updated_at=r.get("updated_at"),
    )


class MySQLFacultyRepository(FacultyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def find_by_key(self, email: str) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def insert(self, faculty: Faculty) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, department, phone_number, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    faculty.name,
                    faculty.email,
                    faculty.password_hash,
                    faculty.role.value,
                    faculty.department,
                    faculty.phone_number,
                    faculty.status.value,
                    faculty.created_at,
                ),
            )
            return int(cur.lastrowid)

    def update(self, user_id: int, changes: Mapping[str, str]) -> bool:
        if not changes:
            return False
        set_clause, params = build_set_clause(dict(changes), _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {set_clause} WHERE user_id=%s", (*params, int(user_id)))
            return cur.rowcount > 0
