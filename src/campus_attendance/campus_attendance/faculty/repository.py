from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import Faculty


class FacultyRepository(Protocol):
    """Repository interface for faculty accounts (users keyed by email)."""

    def get_by_id(self, user_id: int) -> Optional[Faculty]:
        raise NotImplementedError

    def find_by_key(self, email: str) -> Optional[Faculty]:
        """Any account with this email, whatever its role."""

        raise NotImplementedError

    def insert(self, faculty: Faculty) -> int:
        raise NotImplementedError

    def update(self, user_id: int, changes: Mapping[str, str]) -> bool:
        raise NotImplementedError
