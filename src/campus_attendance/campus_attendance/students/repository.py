from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    The import pipeline depends on this interface, never on a concrete store.
    """

    def find_by_key(self, roll_no: str) -> Optional[Student]:
        raise NotImplementedError

    def insert(self, student: Student) -> int:
        raise NotImplementedError

    def update(self, student_id: int, changes: Mapping[str, str]) -> bool:
        """Merge `changes` (model field -> value) into an existing student."""

        raise NotImplementedError
