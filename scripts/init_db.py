from __future__ import annotations

import argparse
import importlib
import logging
import os

from dotenv import load_dotenv

from campus_attendance.core.logging_config import configure_logging
from campus_attendance.database.bootstrap import apply_schema, ensure_admin_user, list_tables
from campus_attendance.settings import get_settings_module

logger = logging.getLogger("campus_attendance.scripts.init_db")


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply schema.sql and optionally create the first admin account.")
    parser.add_argument("--admin-email", default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--admin-password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    if args.admin_email and args.admin_password:
        ensure_admin_user(db_config, email=args.admin_email, password=args.admin_password)
        logger.info("Admin account ready: %s", args.admin_email)

    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
