"""Mood Memories application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask

from moodmemories.config import config_by_name
from moodmemories.extensions import db, init_extensions


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Mood Memories Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI")
    if db_uri and db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    from moodmemories.core.storage import models as storage_models  # noqa: F401
    from moodmemories.domains.journal.state import STATE_KEY, JournalState

    with app.app_context():
        db.create_all()
        app.extensions[STATE_KEY] = JournalState.load()

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from moodmemories.scripts.journal_commands import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from moodmemories.core.preferences.controllers import settings_api_bp
    from moodmemories.domains.journal.controllers.assistant_api import assistant_api_bp
    from moodmemories.domains.journal.controllers.journal_api import journal_api_bp

    app.register_blueprint(journal_api_bp, url_prefix="/api/journal")
    app.register_blueprint(assistant_api_bp, url_prefix="/api/assistant")
    app.register_blueprint(settings_api_bp, url_prefix="/api/settings")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
