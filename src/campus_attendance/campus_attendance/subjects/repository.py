from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import Subject


class SubjectRepository(Protocol):
    def find_by_key(self, code: str) -> Optional[Subject]:
        raise NotImplementedError

    def find_by_name_department_year(self, *, name: str, department: str, year: str) -> Optional[Subject]:
        """Secondary lookup used to link timetable rows.

        `name` matches case-insensitively; department and year match exactly.
        """

        raise NotImplementedError

    def insert(self, subject: Subject) -> int:
        raise NotImplementedError

    def update(self, subject_id: int, changes: Mapping[str, str]) -> bool:
        raise NotImplementedError
