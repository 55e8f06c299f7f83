from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .chat.controller import register as register_chat
from .common.web import register_error_handlers
from .container import Container, build_container, build_store
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .events.controller import register as register_events
from .photos.controller import register as register_photos
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if container is None:
        backend = getattr(settings, "STORE_BACKEND", "memory")
        db_config = getattr(settings, "DB_CONFIG", {})
        logger.info("[volunteer-hub] settings=%s store=%s", settings_module, backend)

        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection(DBConfig.from_mapping(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("[volunteer-hub] schema ready (tables=%d)", len(list_tables(conn)))

        store = build_store(backend=backend, db_config=db_config)
        container = build_container(
            store=store,
            admin_password=getattr(settings, "ADMIN_DEFAULT_PASSWORD", "admin"),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_chat(app, container)
    register_photos(app, container)

    return app
