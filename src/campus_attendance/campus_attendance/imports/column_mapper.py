"""Map source columns of an uploaded file onto logical fields.

Two strategies:

* ColumnMapping: an explicit ``{source column: logical field}`` map built by a
  mapping UI. A field is mapped to at most one source column at a time.
* resolve_columns: fuzzy matching of header text against the synonym table of
  each field (lowercase, letters only, substring match, synonym priority order).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from ..core.enums import EntityType
from ..core.exceptions import MissingColumnsError, ValidationError
from .fields import EntityFields, fields_for
from .model import MappedRow

_NON_LETTER_RE = re.compile(r"[^a-z]")
_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_header(header: str) -> str:
    return _NON_LETTER_RE.sub("", str(header).lower())


def to_field_name(name: str) -> str:
    """`rollNo` -> `roll_no`; snake_case names pass through."""
    return _CAMEL_RE.sub("_", name.strip()).lower()


@dataclass(frozen=True)
class ColumnResolution:
    indices: Dict[str, int] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)


def resolve_columns(headers: Sequence[str], entity_fields: EntityFields) -> ColumnResolution:
    normalized = [normalize_header(h) for h in headers]
    claimed: set[int] = set()
    indices: Dict[str, int] = {}
    missing: List[str] = []

    for spec in entity_fields.fields:
        index = _find_column(normalized, spec.synonyms, claimed)
        if index is None:
            if spec.must_be_mapped:
                missing.append(spec.name)
            continue
        claimed.add(index)
        indices[spec.name] = index

    return ColumnResolution(indices=indices, missing=missing)


def _find_column(normalized: Sequence[str], synonyms: Sequence[str], claimed: set[int]) -> Optional[int]:
    for synonym in synonyms:
        for i, header in enumerate(normalized):
            if i not in claimed and synonym in header:
                return i
    return None


def require_columns(headers: Sequence[str], entity_fields: EntityFields) -> Dict[str, int]:
    """Fuzzy-resolve every column or fail the whole batch."""
    resolution = resolve_columns(headers, entity_fields)
    if resolution.missing:
        raise MissingColumnsError(resolution.missing)
    return resolution.indices


class ColumnMapping:
    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._by_source: Dict[str, str] = {}
        for source, logical in (mapping or {}).items():
            if logical:
                self.assign(source, logical)

    @classmethod
    def suggest(cls, headers: Sequence[str], entity_type: EntityType) -> "ColumnMapping":
        """Pre-filled mapping from fuzzy header matching."""
        resolution = resolve_columns(headers, fields_for(entity_type))
        return cls({headers[i]: name for name, i in resolution.indices.items()})

    def assign(self, source: str, logical: str) -> None:
        logical = to_field_name(logical)
        for existing in [s for s, f in self._by_source.items() if f == logical]:
            del self._by_source[existing]
        self._by_source[source] = logical

    def unassign(self, source: str) -> None:
        self._by_source.pop(source, None)

    def source_for(self, logical: str) -> Optional[str]:
        logical = to_field_name(logical)
        for source, f in self._by_source.items():
            if f == logical:
                return source
        return None

    def value(self, headers: Sequence[str], row: Sequence[str], logical: str) -> str:
        source = self.source_for(logical)
        if source is None or source not in headers:
            return ""
        i = list(headers).index(source)
        return row[i].strip() if i < len(row) else ""

    def check_fields(self, entity_fields: EntityFields) -> None:
        unknown = sorted(set(self._by_source.values()) - set(entity_fields.names))
        if unknown:
            raise ValidationError(f"Unknown {entity_fields.label.lower()} fields in column mapping: {', '.join(unknown)}")

    def indices(self, headers: Sequence[str]) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for source, logical in self._by_source.items():
            if source in headers:
                out[logical] = list(headers).index(source)
        return out

    def as_dict(self) -> Dict[str, str]:
        return dict(self._by_source)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_source)

    def __len__(self) -> int:
        return len(self._by_source)


def map_rows(rows: Sequence[Sequence[str]], indices: Mapping[str, int]) -> List[MappedRow]:
    """Pick mapped cells out of raw rows, trimmed; short rows read as empty."""
    mapped: List[MappedRow] = []
    for n, row in enumerate(rows, start=1):
        values = {name: (row[i].strip() if i < len(row) else "") for name, i in indices.items()}
        mapped.append(MappedRow(row_number=n, values=values))
    return mapped
