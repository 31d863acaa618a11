from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimetableAssignment


class TimetableRepository(Protocol):
    def insert(self, assignment: TimetableAssignment) -> int:
        raise NotImplementedError

    def list_where(self, *, faculty_id: Optional[int] = None) -> Sequence[TimetableAssignment]:
        """Rows of one faculty, or every row when `faculty_id` is None."""

        raise NotImplementedError

    def delete_where(self, *, faculty_id: Optional[int] = None) -> int:
        """Delete one faculty's rows, or clear the table when `faculty_id` is None.

        Returns the number of deleted rows.
        """

        raise NotImplementedError
