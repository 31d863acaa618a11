from __future__ import annotations

from campus_attendance.database.bootstrap import (
    SCHEMA_PATH,
    _strip_comments,
    _strip_create_db_and_use,
    iter_sql_statements,
)


def test_statements_split_on_semicolons_outside_quotes():
    sql = "INSERT INTO settings VALUES ('a;b');\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO settings VALUES ('a;b')", "CREATE TABLE t (id INT)"]


def test_database_and_use_lines_are_removed():
    sql = "CREATE DATABASE x;\nUSE x;\nCREATE TABLE t (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_bundled_schema_creates_import_tables():
    sql = _strip_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = " ".join(iter_sql_statements(sql))

    for table in ("users", "students", "subjects", "timetable_assignments", "audit_log"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in statements
