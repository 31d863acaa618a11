"""Import a CSV file from the command line through the same pipeline as the web app.

    python scripts/import_csv.py students students.csv
    python scripts/import_csv.py faculty-timetable schedule.csv --faculty-id 7
    python scripts/import_csv.py students export.csv --mapping '{"Student":"name","Roll":"roll_no"}'
"""
from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from campus_attendance.container import build_container
from campus_attendance.core.enums import EntityType
from campus_attendance.core.exceptions import DomainError
from campus_attendance.core.logging_config import configure_logging
from campus_attendance.settings import get_settings_module


def _print_progress(fraction: float) -> None:
    sys.stderr.write(f"\rprogress: {fraction * 100:3.0f}%")
    if fraction >= 1.0:
        sys.stderr.write("\n")


def main() -> int:
    parser = argparse.ArgumentParser(description="Import students, faculty, subjects or timetable rows from a CSV file.")
    parser.add_argument("entity_type", choices=[e.value for e in EntityType])
    parser.add_argument("path", type=Path)
    parser.add_argument("--mapping", help="JSON object {source column: field}; enables update-in-place import")
    parser.add_argument("--faculty-id", type=int)
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        default_faculty_password=settings.DEFAULT_FACULTY_PASSWORD,
    )

    try:
        mapping = json.loads(args.mapping) if args.mapping else None
        result = container.import_service.import_file(
            args.entity_type,
            args.path.read_text(encoding="utf-8"),
            mapping=mapping,
            faculty_id=args.faculty_id,
            on_progress=_print_progress,
        )
    except (DomainError, ValueError, OSError) as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
