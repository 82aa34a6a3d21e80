from __future__ import annotations

import importlib
import logging
from functools import partial
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_local
from .common.log import configure_logging
from .container import Container, build_container, build_memory_container
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["EXPOSE_ERROR_DETAILS"] = bool(getattr(settings, "EXPOSE_ERROR_DETAILS", False))
    app.config["MATCH_THRESHOLD"] = float(getattr(settings, "MATCH_THRESHOLD"))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        container = _container_from_settings(settings, settings_module)

    app.extensions["face_attendance"] = container
    register_attendance(app, container)
    return app


def _container_from_settings(settings, settings_module: str) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    threshold = float(getattr(settings, "MATCH_THRESHOLD"))
    clock = partial(now_local, getattr(settings, "ATTENDANCE_TIMEZONE", None) or None)

    logger.info(
        "settings=%s storage=%s threshold=%s db=%s@%s:%s/%s",
        settings_module, backend, threshold,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if backend == "memory":
        return build_memory_container(match_threshold=threshold, clock=clock)

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        count = apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (%d statements)", count)
    return build_container(db_config=db_config, match_threshold=threshold, clock=clock)
