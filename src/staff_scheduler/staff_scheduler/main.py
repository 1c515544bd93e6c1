from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .activities.controller import register as register_activities
from .container import Container, build_container
from .core.exceptions import AuthenticationError, AuthorizationError, InvalidTransitionError, ValidationError
from .database.bootstrap import seed_demo_data
from .departments.controller import register as register_departments
from .messages.controller import register as register_messages
from .shifts.controller import register as register_shifts
from .time_off.controller import register as register_time_off
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(InvalidTransitionError)
    def handle_transition(e: InvalidTransitionError):
        return jsonify({"message": str(e)}), 409

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def handle_authentication(e: AuthenticationError):
        return jsonify({"message": str(e)}), 401

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e: AuthorizationError):
        payload = {"message": "Permission denied", "detail": str(e)}
        if e.reason is not None:
            payload["reason"] = e.reason.value
        return jsonify(payload), 403

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        return jsonify({"message": "Internal server error"}), 500


def create_app(settings: Optional[Any] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ACTIVITY_FEED_LIMIT"] = getattr(settings, "ACTIVITY_FEED_LIMIT", None)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        container = build_container()
        if bool(getattr(settings, "SEED_DEMO_DATA", False)):
            seed_demo_data(container)
    app.extensions["staff_scheduler"] = container

    register_users(app, container)
    register_departments(app, container)
    register_shifts(app, container)
    register_time_off(app, container)
    register_activities(app, container)
    register_messages(app, container)
    register_error_handlers(app)

    logger.info("staff scheduler ready (settings=%s)", getattr(settings, "__name__", type(settings).__name__))
    return app
