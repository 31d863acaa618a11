from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Union

from ..audit.model import AuditEntry
from ..audit.repository import AuditRepository
from ..common.datetime_utils import timestamp
from ..core.enums import DuplicatePolicy, EntityType, Role, UpsertOutcome
from ..core.exceptions import StoreUnavailableError, ValidationError
from ..faculty.repository import FacultyRepository
from .column_mapper import ColumnMapping, map_rows, require_columns
from .csv_parser import ParsedTable, parse_table
from .fields import fields_for
from .model import ImportResult, RowError
from .upsert import UpsertEngine
from .validator import errors_by_row, validate_rows

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]
CancelCheck = Callable[[], bool]

_RECORD_TYPES = (EntityType.STUDENTS, EntityType.FACULTY, EntityType.SUBJECTS)


@dataclass(frozen=True)
class Actor:
    """Who started the import (for the audit log)."""

    user_id: str
    role: Role


class _Progress:
    def __init__(self, total: int, callback: Optional[ProgressCallback]):
        self._total = total
        self._done = 0
        self._callback = callback

    def advance(self) -> None:
        self._done += 1
        if self._callback and self._total:
            self._callback(self._done / self._total)


class ImportService:
    """Use case: import one CSV file into the store.

    parse -> map columns -> validate every row -> apply rows without errors.
    Per-row problems end up in the ImportResult; only preconditions (empty file,
    unmapped required columns, unknown faculty) raise.
    """

    def __init__(
        self,
        engine: UpsertEngine,
        *,
        faculty: FacultyRepository,
        audit: Optional[AuditRepository] = None,
    ):
        self._engine = engine
        self._faculty = faculty
        self._audit = audit

    def import_file(
        self,
        entity_type: Union[EntityType, str],
        content: str,
        *,
        mapping: Optional[Union[ColumnMapping, Mapping[str, str]]] = None,
        faculty_id: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        actor: Optional[Actor] = None,
    ) -> ImportResult:
        entity_type = EntityType(entity_type)
        hooks = dict(on_progress=on_progress, should_cancel=should_cancel, actor=actor)

        if entity_type == EntityType.FACULTY_TIMETABLE:
            if faculty_id is None:
                raise ValidationError("Please select a faculty member for this timetable")
            return self.import_timetable(content, faculty_id=faculty_id, **hooks)
        if entity_type == EntityType.TIMETABLE:
            return self.import_timetable(content, **hooks)
        if mapping is not None:
            return self.import_mapped(entity_type, content, mapping, **hooks)
        return self.import_bulk(entity_type, content, **hooks)

    def import_mapped(
        self,
        entity_type: Union[EntityType, str],
        content: str,
        mapping: Union[ColumnMapping, Mapping[str, str]],
        *,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        actor: Optional[Actor] = None,
    ) -> ImportResult:
        """Wizard import: explicit column mapping, existing records are updated in place."""
        entity_type = self._record_type(entity_type)
        if not isinstance(mapping, ColumnMapping):
            mapping = ColumnMapping(mapping)
        mapping.check_fields(fields_for(entity_type))

        table = parse_table(content)
        return self._run(
            entity_type,
            table,
            mapping.indices(table.headers),
            policy=DuplicatePolicy.UPDATE,
            on_progress=on_progress,
            should_cancel=should_cancel,
            actor=actor,
        )

    def import_bulk(
        self,
        entity_type: Union[EntityType, str],
        content: str,
        *,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        actor: Optional[Actor] = None,
    ) -> ImportResult:
        """Quick import: headers matched by name, existing records are left alone."""
        entity_type = self._record_type(entity_type)
        table = parse_table(content)
        return self._run(
            entity_type,
            table,
            require_columns(table.headers, fields_for(entity_type)),
            policy=DuplicatePolicy.SKIP,
            on_progress=on_progress,
            should_cancel=should_cancel,
            actor=actor,
        )

    def import_timetable(
        self,
        content: str,
        *,
        faculty_id: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        actor: Optional[Actor] = None,
    ) -> ImportResult:
        """Replace the timetable of one faculty, or the whole timetable when `faculty_id` is None."""
        entity_type = EntityType.TIMETABLE
        if faculty_id is not None:
            entity_type = EntityType.FACULTY_TIMETABLE
            member = self._faculty.get_by_id(int(faculty_id))
            if not member or member.role != Role.FACULTY:
                raise ValidationError("Faculty member not found")
            faculty_id = int(faculty_id)

        table = parse_table(content)
        return self._run(
            entity_type,
            table,
            require_columns(table.headers, fields_for(entity_type)),
            faculty_id=faculty_id,
            on_progress=on_progress,
            should_cancel=should_cancel,
            actor=actor,
        )

    def _record_type(self, entity_type: Union[EntityType, str]) -> EntityType:
        entity_type = EntityType(entity_type)
        if entity_type not in _RECORD_TYPES:
            raise ValidationError(f"Use the timetable import for {entity_type.value} files")
        return entity_type

    def _run(
        self,
        entity_type: EntityType,
        table: ParsedTable,
        indices: Dict[str, int],
        *,
        policy: DuplicatePolicy = DuplicatePolicy.UPDATE,
        faculty_id: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
        actor: Optional[Actor] = None,
    ) -> ImportResult:
        rows = map_rows(table.rows, indices)
        row_errors = validate_rows(entity_type, rows)
        grouped = errors_by_row(row_errors)

        result = ImportResult(entity_type=entity_type, total_rows=len(rows), row_errors=row_errors)
        progress = _Progress(len(rows), on_progress)
        replaced: Optional[FrozenSet[tuple]] = None

        try:
            for row in rows:
                if should_cancel and should_cancel():
                    result.cancelled = True
                    logger.warning("%s import cancelled after %d of %d rows", entity_type.value, result.processed_rows, len(rows))
                    break

                errors = grouped.get(row.row_number)
                if errors:
                    self._reject(result, errors)
                elif entity_type.is_timetable:
                    # The schedule is only cleared once there is something to put back.
                    if replaced is None:
                        replaced = self._engine.begin_replace(faculty_id)
                    self._tally(result, self._engine.insert_assignment(row, faculty_id=faculty_id, replaced=replaced))
                else:
                    self._tally(result, self._engine.upsert(entity_type, row, policy=policy))
                progress.advance()
        except StoreUnavailableError as e:
            result.aborted = True
            result.errors.append(f"Import aborted: {e}")
            logger.error("%s import aborted after %d rows: %s", entity_type.value, result.processed_rows, e)

        logger.info(
            "%s import: total=%d inserted=%d updated=%d skipped=%d failed=%d",
            entity_type.value,
            result.total_rows,
            result.inserted,
            result.updated,
            result.skipped,
            result.failed,
        )
        self._record_audit(result, actor)
        return result

    @staticmethod
    def _reject(result: ImportResult, errors: List[RowError]) -> None:
        result.failed += 1
        result.errors.extend(str(e) for e in errors)

    @staticmethod
    def _tally(result: ImportResult, report) -> None:
        if report.outcome == UpsertOutcome.INSERTED:
            result.inserted += 1
        elif report.outcome == UpsertOutcome.UPDATED:
            result.updated += 1
        elif report.outcome == UpsertOutcome.SKIPPED:
            result.skipped += 1
            result.warnings.append(report.message or "")
        else:
            result.failed += 1
            result.errors.append(report.message or "")

    def _record_audit(self, result: ImportResult, actor: Optional[Actor]) -> None:
        if self._audit is None or actor is None:
            return

        entity = result.entity_type.value
        details = (
            f"Processed {entity} CSV: {result.inserted} records imported, {result.updated} updated, "
            f"{result.skipped_rows} records skipped"
        )
        try:
            self._audit.record(
                AuditEntry(
                    audit_id=None,
                    user_id=str(actor.user_id),
                    role=actor.role.value,
                    action=f"Bulk {entity} Import",
                    details=details,
                    created_at=timestamp(),
                )
            )
        except Exception as exc:
            logger.warning("Unable to record audit entry for %s import: %s", entity, exc)
