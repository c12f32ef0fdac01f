from __future__ import annotations

import importlib

import structlog
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .container import Container, build_container_for
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables

logger = structlog.get_logger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    storage = getattr(settings, "STORAGE", "mysql")

    if container is None:
        if storage == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema_ready", tables=len(list_tables(db_config)))
        container = build_container_for(
            storage,
            db_config=db_config,
            hourly_rate=getattr(settings, "DEFAULT_HOURLY_RATE", None),
            workers=getattr(settings, "WORKERS", None),
        )

    logger.info(
        "app_created",
        settings=settings_module,
        storage=storage,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
    )

    app.extensions["crew_timekeeping"] = container
    register_api(app, container)
    return app
