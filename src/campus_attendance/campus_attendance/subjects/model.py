from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subject:
    subject_id: Optional[int]
    name: str
    code: str
    department: str
    year: str
    created_at: str
    classroom: Optional[str] = None
    updated_at: Optional[str] = None
