"""Pupil Dashboard package.

This package is organized by feature modules (periods, attendance, behaviour,
announcements, ...) with a thin Flask controller layer over plain service and
aggregation functions.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module, load_settings

from .common.datetime_utils import now_local
from .common.envelope import fail
from .container import build_container
from .dashboard.controller import register as register_dashboard
from .records.client import ClientFactory
from .records.controller import register as register_records
from .session.controller import register as register_session

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def unhandled_error(e: Exception):
        logger.exception("Unhandled server error on %s %s", request.method, request.path)
        return fail("Server error occurred", 500)


def create_app(
    *,
    client_factory: Optional[ClientFactory] = None,
    clock: Callable[[], datetime] = now_local,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = load_settings()
    app.secret_key = getattr(settings, "SECRET_KEY")
    records_config = getattr(settings, "RECORDS_CONFIG", {})
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["REMEMBER_ME_DAYS"] = int(getattr(settings, "REMEMBER_ME_DAYS", 30))
    app.config["SESSION_PING_SECONDS"] = int(getattr(settings, "SESSION_PING_SECONDS", 240))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.debug("settings=%s records=%s", settings_module, records_config.get("base_url"))

    container = build_container(records_config=records_config, client_factory=client_factory, clock=clock)

    register_session(app, container)
    register_records(app, container)
    register_dashboard(app, container)
    register_error_handlers(app)

    return app
