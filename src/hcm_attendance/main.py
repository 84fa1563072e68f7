from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .common.logging_config import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.settings import Settings
from .corrections.controller import register as register_corrections
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .remote_work.controller import register as register_remote_work

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = Settings.from_module(module)
    app.secret_key = getattr(module, "SECRET_KEY")
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = bool(getattr(module, "TESTING", False))

    configure_logging(settings.log_level)
    db = settings.db_config
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db.get("user"),
        db.get("host"),
        db.get("port", 3306),
        db.get("database"),
    )

    if container is None:
        if settings.auto_init_db:
            apply_schema(settings.db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(settings.db_config)))
        container = build_container(settings)

    register_error_handlers(app)
    register_attendance(app, container)
    register_corrections(app, container)
    register_remote_work(app, container)
    register_leaves(app, container)
    register_payroll(app, container)

    return app
