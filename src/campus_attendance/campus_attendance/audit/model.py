from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuditEntry:
    audit_id: Optional[int]
    user_id: str
    role: str
    action: str
    details: str
    created_at: str
