from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ApprovalStatus, Role


@dataclass(frozen=True)
class Faculty:
    """Domain entity: a staff account from the `users` table.

    Note: plain data object, only ever holds a password hash.
    """

    user_id: Optional[int]
    name: str
    email: str
    password_hash: str
    department: str
    phone_number: str
    created_at: str
    role: Role = Role.FACULTY
    status: ApprovalStatus = ApprovalStatus.PENDING
    updated_at: Optional[str] = None
