"""Vent Diary application factory and bootstrap."""

from __future__ import annotations

import logging
import os
import traceback
from pathlib import Path
from typing import Optional

from flask import Flask
from pydantic import ValidationError as SchemaValidationError

from ventdiary.config import config_by_name
from ventdiary.core.errors import AppError, from_schema_error
from ventdiary.core.integrations.mailer import Mailer
from ventdiary.core.integrations.storage import ObjectStorage
from ventdiary.extensions import db, init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Vent Diary Flask application."""
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
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = db_uri.replace("sqlite:///", "", 1)
        abs_path = project_root / db_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    # Outbound integrations; tests swap these for recording fakes.
    app.extensions["mailer"] = Mailer.from_config(app.config)
    app.extensions["storage"] = ObjectStorage.from_config(app.config)

    @app.get("/health")
    def health():
        return {"status": "success", "data": {"ok": True}}, 200

    from ventdiary.scripts import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers under the API prefix."""
    from ventdiary.core.auth.controllers import auth_bp  # local import to avoid circulars
    from ventdiary.core.users.controllers import user_api_bp
    from ventdiary.domains.export.controllers.export_api import export_api_bp
    from ventdiary.domains.journal.controllers.journal_api import journal_api_bp
    from ventdiary.domains.moods.controllers.mood_api import mood_api_bp
    from ventdiary.domains.search.controllers.search_api import search_api_bp

    prefix = app.config.get("API_PREFIX", "/api/v1").rstrip("/")
    app.register_blueprint(auth_bp, url_prefix=f"{prefix}/auth")
    app.register_blueprint(user_api_bp, url_prefix=f"{prefix}/users")
    app.register_blueprint(journal_api_bp, url_prefix=f"{prefix}/entries")
    app.register_blueprint(mood_api_bp, url_prefix=f"{prefix}/moods")
    app.register_blueprint(search_api_bp, url_prefix=f"{prefix}/search")
    app.register_blueprint(export_api_bp, url_prefix=f"{prefix}/export")


def _register_error_handlers(app: Flask) -> None:
    """JSON error envelopes for operational and unexpected failures."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        if exc.status_code >= 500:
            app.logger.error("%s: %s", exc.code, exc.message)
        return exc.to_dict(), exc.status_code

    @app.errorhandler(SchemaValidationError)
    def _schema_error(exc: SchemaValidationError):
        err = from_schema_error(exc)
        return err.to_dict(), err.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        status = "fail" if exc.code and exc.code < 500 else "error"
        code = (exc.name or "error").lower().replace(" ", "_")
        return {"status": status, "message": exc.description, "error": code}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception to speed up diagnosis
        if app.debug or app.testing:
            return {
                "status": "error",
                "message": str(exc),
                "error": "internal_error",
                "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
            }, 500
        return {"status": "error", "message": "Something went very wrong!"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Resolve the bearer identity to a live user on every request."""

    @jwt.user_identity_loader
    def _identity(user):
        from ventdiary.core.users.models import User

        return str(user.id) if isinstance(user, User) else str(user)

    @jwt.user_lookup_loader
    def _load_user(_jwt_header, jwt_data):
        from ventdiary.core.users.models import User

        identity = jwt_data.get("sub")
        if not identity or not str(identity).isdigit():
            return None
        return db.session.get(User, int(identity))


logging.getLogger(__name__).addHandler(logging.NullHandler())
