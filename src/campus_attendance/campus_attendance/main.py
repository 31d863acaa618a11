from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from .container import build_container
from .core.constants import MAX_UPLOAD_BYTES
from .core.logging_config import configure_logging
from .database.bootstrap import apply_schema, list_tables
from .imports.controller import register as register_imports
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        default_faculty_password=getattr(settings, "DEFAULT_FACULTY_PASSWORD"),
    )
    app.extensions["campus_attendance"] = container

    register_imports(app, container)

    return app
