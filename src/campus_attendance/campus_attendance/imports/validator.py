"""Per-row validation for each import entity type.

Validation only reports problems; it never changes or drops rows. The import
service decides to skip a row when any error carries that row's number.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, List, Sequence

from ..common.validators import is_blank, is_valid_day, is_valid_email, is_valid_mobile, is_valid_time, is_valid_year
from ..core.enums import EntityType
from .fields import EntityFields, fields_for
from .model import MappedRow, RowError

REQUIRED_EMPTY = "Required field is empty"
INVALID_MOBILE = "Mobile number must be 10 digits"
INVALID_EMAIL = "Invalid email format"
INVALID_YEAR = "Year must be between 1 and 4"

_DUPLICATE_MESSAGES = {
    "roll_no": "Duplicate roll number in CSV",
    "email": "Duplicate email in CSV",
    "code": "Duplicate subject code in CSV",
}


def invalid_time(value: str) -> str:
    return f"Invalid time format '{value}'. Please use HH:MM format (e.g., 09:30, 14:00)"


def invalid_day(value: str) -> str:
    return f"Invalid day '{value}'. Please use full day names (Monday, Tuesday, etc.)"


def _check_required(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    for f in spec.required:
        if is_blank(row.values.get(f.name)):
            errors.append(RowError(row.row_number, f.label, REQUIRED_EMPTY))


def _check_mobile(row: MappedRow, spec: EntityFields, errors: List[RowError], *names: str) -> None:
    for name in names:
        value = row.get(name)
        if value and not is_valid_mobile(value):
            errors.append(RowError(row.row_number, spec.label_for(name), INVALID_MOBILE))


def _check_email(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    value = row.get("email")
    if value and not is_valid_email(value):
        errors.append(RowError(row.row_number, spec.label_for("email"), INVALID_EMAIL))


def _validate_student(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    _check_email(row, spec, errors)
    _check_mobile(row, spec, errors, "phone_number", "parent_mobile")


def _validate_faculty(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    _check_email(row, spec, errors)
    _check_mobile(row, spec, errors, "phone_number")


def _validate_subject(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    year = row.get("year")
    if year and not is_valid_year(year):
        errors.append(RowError(row.row_number, spec.label_for("year"), INVALID_YEAR))


def _validate_timetable_entry(row: MappedRow, spec: EntityFields, errors: List[RowError]) -> None:
    for name in ("time", "end_time"):
        value = row.get(name)
        if value and not is_valid_time(value):
            errors.append(RowError(row.row_number, spec.label_for(name), invalid_time(value)))

    day = row.get("day")
    if day and not is_valid_day(day):
        errors.append(RowError(row.row_number, spec.label_for("day"), invalid_day(day)))


_RULES: Dict[EntityType, Callable[[MappedRow, EntityFields, List[RowError]], None]] = {
    EntityType.STUDENTS: _validate_student,
    EntityType.FACULTY: _validate_faculty,
    EntityType.SUBJECTS: _validate_subject,
    EntityType.TIMETABLE: _validate_timetable_entry,
    EntityType.FACULTY_TIMETABLE: _validate_timetable_entry,
}


def _duplicate_keys(rows: Sequence[MappedRow], key: str) -> set[str]:
    counts = Counter(_key_value(r, key) for r in rows)
    return {k for k, n in counts.items() if k and n > 1}


def _key_value(row: MappedRow, key: str) -> str:
    value = row.get(key)
    return value.lower() if key == "email" else value


def validate_row(entity_type: EntityType, row: MappedRow) -> List[RowError]:
    """Checks that need only the row itself (no intra-file duplicates)."""
    spec = fields_for(entity_type)
    errors: List[RowError] = []
    _check_required(row, spec, errors)
    _RULES[spec.entity_type](row, spec, errors)
    return errors


def validate_rows(entity_type: EntityType, rows: Sequence[MappedRow]) -> List[RowError]:
    spec = fields_for(entity_type)
    key = spec.natural_key
    duplicates = _duplicate_keys(rows, key) if key in _DUPLICATE_MESSAGES else set()

    errors: List[RowError] = []
    for row in rows:
        errors.extend(validate_row(entity_type, row))
        if duplicates and _key_value(row, key) in duplicates:
            errors.append(RowError(row.row_number, spec.label_for(key), _DUPLICATE_MESSAGES[key]))
    return errors


def errors_by_row(errors: Sequence[RowError]) -> Dict[int, List[RowError]]:
    grouped: Dict[int, List[RowError]] = {}
    for e in errors:
        grouped.setdefault(e.row, []).append(e)
    return grouped
