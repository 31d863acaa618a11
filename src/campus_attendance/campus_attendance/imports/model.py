from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.enums import EntityType, UpsertOutcome


@dataclass(frozen=True)
class MappedRow:
    """A data row keyed by logical field name. `row_number` is 1-based."""

    row_number: int
    values: Dict[str, str]

    def get(self, name: str) -> str:
        return self.values.get(name, "")


@dataclass(frozen=True)
class RowError:
    row: int
    field: str
    message: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.field} - {self.message}"


@dataclass(frozen=True)
class UpsertReport:
    outcome: UpsertOutcome
    message: Optional[str] = None


@dataclass
class ImportResult:
    """Summary handed back to the caller after one import run."""

    entity_type: EntityType
    total_rows: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    row_errors: List[RowError] = field(default_factory=list)
    cancelled: bool = False
    aborted: bool = False

    @property
    def processed_rows(self) -> int:
        return self.inserted + self.updated + self.skipped + self.failed

    @property
    def skipped_rows(self) -> int:
        return self.skipped + self.failed

    @property
    def successful_assignments(self) -> int:
        return self.inserted + self.updated

    @property
    def success(self) -> bool:
        return not self.errors and not self.cancelled and not self.aborted

    def to_dict(self) -> dict:
        return {
            "entity_type": self.entity_type.value,
            "success": self.success,
            "total_rows": self.total_rows,
            "inserted": self.inserted,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "skipped_rows": self.skipped_rows,
            "successful_assignments": self.successful_assignments,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "cancelled": self.cancelled,
            "aborted": self.aborted,
        }
