from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roll. `roll_no` is unique."""

    student_id: Optional[int]
    name: str
    roll_no: str
    email: str
    department: str
    year: str
    phone_number: str
    parent_mobile: str
    created_at: str
    updated_at: Optional[str] = None
