import logging
import os
from typing import Any

from flask import Flask, jsonify
from sqlalchemy.pool import StaticPool

from .blueprints_registry import register_blueprints
from .config import ENV_DIAGNOSTICS
from .extensions import db
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    os.makedirs(app.instance_path, exist_ok=True)

    _load_base_config(app, config)
    _configure_sqlite_engine_options(app)

    db.init_app(app)

    register_blueprints(app)
    from . import models  # noqa: F401  # ensure models registered with the metadata

    _add_core_routes(app)
    configure_logging(app)
    _install_global_resilience_handlers(app)

    from .management import register_commands

    register_commands(app)
    _run_optional_create_all(app)

    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    app.config.from_object("catalog.config.Config")
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    if config and "DATABASE_URL" in config:
        app.config["SQLALCHEMY_DATABASE_URI"] = config["DATABASE_URL"]

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL must be set for staging and production environments.")


def _configure_sqlite_engine_options(app: Flask) -> None:
    """Drop pool arguments SQLite does not accept; share one connection for :memory:."""
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if app.config.get("TESTING") or uri.startswith("sqlite"):
        opts = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {}))
        for key in ("pool_size", "max_overflow", "pool_timeout"):
            opts.pop(key, None)
        if uri.startswith("sqlite"):
            # Async views run on asgiref's loop thread.
            opts["connect_args"] = {"check_same_thread": False}
        if uri == "sqlite:///:memory:":
            opts["poolclass"] = StaticPool
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = opts


def _run_optional_create_all(app: Flask) -> None:
    value = os.environ.get("SQLALCHEMY_CREATE_ALL")
    if value is None or value.strip().lower() not in {"1", "true", "yes", "on"}:
        logger.debug("db.create_all() not enabled (set SQLALCHEMY_CREATE_ALL=1 to enable)")
        return
    logger.info("Creating tables via db.create_all() (SQLALCHEMY_CREATE_ALL)")
    with app.app_context():
        db.create_all()


def _install_global_resilience_handlers(app: Flask) -> None:
    """Roll back the session on failed requests and answer DB outages with 503."""
    from sqlalchemy.exc import DBAPIError, OperationalError

    @app.teardown_request
    def _rollback_on_error(exc):
        if exc is not None:
            db.session.rollback()

    @app.errorhandler(OperationalError)
    @app.errorhandler(DBAPIError)
    def _db_error_handler(e):
        logger.error("Database error while handling request: %s", e)
        db.session.rollback()
        return jsonify({
            'success': False,
            'message': 'Service temporarily unavailable. Please try again shortly.',
            'errors': {},
        }), 503


def _add_core_routes(app: Flask) -> None:
    @app.route("/health")
    def health():
        return jsonify({'status': 'ok', 'environment': app.config.get("ENV_DIAGNOSTICS", {}).get("active")})
