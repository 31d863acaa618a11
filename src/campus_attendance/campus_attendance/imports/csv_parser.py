"""Lexical CSV parsing for uploaded files.

Turns the raw text of a comma separated file into a header row plus data rows.
Each non-blank line is one record: quoted fields may contain commas and doubled
quotes (``""`` -> ``"``) but never a line break. Values are not trimmed or
converted; that is the column mapper's job.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
from typing import List

from ..core.exceptions import EmptyInputError

_BOM = "\ufeff"


@dataclass(frozen=True)
class ParsedTable:
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def non_blank_lines(content: str) -> List[str]:
    if content.startswith(_BOM):
        content = content[len(_BOM):]
    return [line for line in content.splitlines() if line.strip()]


def parse_table(content: str) -> ParsedTable:
    """Parse a whole file.

    Raises EmptyInputError unless there is a header and at least one data row.
    """
    lines = non_blank_lines(content or "")
    if len(lines) < 2:
        raise EmptyInputError("CSV file must have at least a header and one data row.")

    records = [next(csv.reader([line])) for line in lines]
    return ParsedTable(headers=records[0], rows=records[1:])
