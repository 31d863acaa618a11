from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimetableAssignment:
    """One weekly class slot. Times are 24-hour "HH:MM" strings."""

    assignment_id: Optional[int]
    faculty_id: Optional[int]
    subject_id: int
    day: str
    start_time: str
    end_time: str
    classroom: str
    department: str
    year: str
    created_at: str

    @property
    def slot_key(self) -> tuple:
        return (self.faculty_id, self.subject_id, self.day, self.start_time)
