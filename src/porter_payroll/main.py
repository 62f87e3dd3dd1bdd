from __future__ import annotations

import importlib
import logging
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request

from .activity.controller import register as register_activity
from .attendance.controller import register as register_attendance
from .carriers.controller import register as register_carriers
from .common.http import ok, register_error_handlers
from .commute_costs.controller import register as register_commute_costs
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .documents.controller import register as register_documents
from .locations.controller import register as register_locations
from .payroll.controller import register as register_payroll
from .porters.controller import register as register_porters
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _bootstrap_database(settings) -> None:
    db_config = settings.DB_CONFIG
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config)
        ensure_admin_user(
            db_config,
            name=settings.SEED_ADMIN_NAME,
            email=settings.SEED_ADMIN_EMAIL,
            password=settings.SEED_ADMIN_PASSWORD,
        )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Tests pass a container wired on in-memory repositories; otherwise the
    MySQL-backed one is built from the active settings module.
    """
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = settings.DB_CONFIG
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings)
        container = build_container(settings)

    app.extensions["container"] = container

    @app.before_request
    def _log_request():
        logger.info("%s %s", request.method, request.path)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"status": "ok"}, message="Server is running")

    register_error_handlers(app)
    register_users(app, container)
    register_porters(app, container)
    register_locations(app, container)
    register_carriers(app, container)
    register_commute_costs(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_reports(app, container)
    register_documents(app, container)
    register_activity(app, container)

    return app


def run() -> None:
    """Console entry point: start the dev server, exit 1 if startup fails."""
    try:
        app = create_app()
    except Exception:
        logger.exception("Startup failed")
        sys.exit(1)

    container: Container = app.extensions["container"]
    settings = importlib.import_module(get_settings_module())
    try:
        app.run(host="0.0.0.0", port=int(getattr(settings, "PORT", 5000)), debug=app.config["DEBUG"])
    finally:
        container.close()


if __name__ == "__main__":
    run()
