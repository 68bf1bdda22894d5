from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .biometric.controller import register as register_biometric
from .companies.controller import register as register_companies
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .errors import register_error_handlers
from .events.controller import register as register_events
from .ledger.controller import register as register_ledger
from .leave.controller import register as register_leave
from .logging_setup import setup_logging
from .public_holidays.controller import register as register_holidays
from .users.controller import register as register_users
from .worktime.controller import register as register_worktime

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            rp_id=getattr(settings, "RP_ID", "localhost"),
            rp_name=getattr(settings, "RP_NAME", "그룹웨어"),
            webauthn_timeout_ms=int(getattr(settings, "WEBAUTHN_TIMEOUT_MS", 60000)),
            holiday_country=getattr(settings, "HOLIDAY_COUNTRY", "KR"),
        )

    app.extensions["groupware"] = container
    register_error_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"success": True, "status": "ok"})

    register_users(app, container)
    register_companies(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_worktime(app, container)
    register_leave(app, container)
    register_ledger(app, container)
    register_biometric(app, container)
    register_holidays(app, container)

    return app
