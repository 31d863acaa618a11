from __future__ import annotations

import re
from datetime import datetime, timedelta

from ..core.constants import MAX_YEAR, MIN_YEAR
from .validators import parse_year

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(\s?(AM|PM))?$", re.IGNORECASE)
_ORDINAL_SUFFIX = {1: "st", 2: "nd", 3: "rd"}


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def timestamp() -> str:
    return now_local().isoformat(timespec="seconds")


def normalize_time(value: str) -> str:
    """Convert a clock value to 24-hour HH:MM ("2:30 PM" -> "14:30").

    Values that do not look like a clock time are returned unchanged.
    """
    m = _CLOCK_RE.match((value or "").strip())
    if not m:
        return value

    hour = int(m.group(1))
    minutes = m.group(2)
    meridiem = (m.group(4) or "").upper()
    if meridiem == "PM" and hour < 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0

    return f"{hour:02d}:{minutes}"


def add_minutes(hhmm: str, minutes: int) -> str:
    """Shift an HH:MM value, wrapping past midnight."""
    start = datetime.strptime(hhmm, "%H:%M")
    return (start + timedelta(minutes=minutes)).strftime("%H:%M")


def capitalize_day(day: str) -> str:
    day = day.strip()
    return day[:1].upper() + day[1:].lower()


def canonical_year(value: str) -> str:
    """Ordinal year label ("2" / "2nd year" -> "2nd Year").

    Values without a leading year number in range are kept as given.
    """
    year = parse_year(value)
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        return value.strip()
    return f"{year}{_ORDINAL_SUFFIX.get(year, 'th')} Year"
