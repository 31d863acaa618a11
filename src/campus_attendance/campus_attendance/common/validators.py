from __future__ import annotations

import re
from typing import Optional

from ..core.constants import MAX_YEAR, MIN_YEAR, MOBILE_NUMBER_DIGITS, WEEKDAYS
from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9](\s?(AM|PM))?$", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_NON_DIGIT_RE = re.compile(r"\D")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def digits_only(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value or "")


def is_valid_mobile(value: str) -> bool:
    return len(digits_only(value)) == MOBILE_NUMBER_DIGITS


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


def is_valid_time(value: str) -> bool:
    """Accept "09:00", "9:00 AM", "14:30", "02:30pm"."""
    return bool(TIME_RE.match(value or ""))


def is_valid_day(value: str) -> bool:
    return (value or "").strip().lower() in {d.lower() for d in WEEKDAYS}


def parse_year(value: str) -> Optional[int]:
    """Leading integer of a year value ("2", "2nd Year" -> 2), or None."""
    m = _LEADING_INT_RE.match(value or "")
    return int(m.group(1)) if m else None


def is_valid_year(value: str) -> bool:
    year = parse_year(value)
    return year is not None and MIN_YEAR <= year <= MAX_YEAR
