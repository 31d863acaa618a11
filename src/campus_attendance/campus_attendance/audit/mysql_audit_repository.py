from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import AuditEntry
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, entry: AuditEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO audit_log(user_id, role, action, details, created_at) VALUES(%s,%s,%s,%s,%s)",
                (entry.user_id, entry.role, entry.action, entry.details, entry.created_at),
            )
            return int(cur.lastrowid)
