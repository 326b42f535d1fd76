"""Pass-through routes: one upstream call each, re-wrapped in the JSON envelope."""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, g, request

from ..common.envelope import fail, ok
from ..common.validators import optional_iso_date
from ..container import Container
from ..core.exceptions import RecordsError, ValidationError
from ..session.gate import make_client_required

logger = logging.getLogger(__name__)


def _relay(body: Any, failure_message: str):
    if not body:
        return fail(failure_message, 500)
    payload = {k: v for k, v in body.items() if k != "success"}
    return ok(**payload)


def register(app: Flask, container: Container) -> None:
    client_required = make_client_required(container)
    dashboard = container.dashboard_service

    @app.route("/api/getAttendance", endpoint="api_get_attendance")
    @client_required
    def api_get_attendance():
        window = dashboard.school_year_window()
        try:
            body = g.client.get_attendance(from_date=window.start_iso, to_date=window.end_iso)
        except RecordsError:
            logger.exception("Error fetching attendance")
            return fail("Failed to fetch attendance data", 500)
        return _relay(body, "Failed to fetch attendance data")

    @app.route("/api/getBehaviour", endpoint="api_get_behaviour")
    @client_required
    def api_get_behaviour():
        try:
            start = optional_iso_date(request.args.get("from"), "from")
            end = optional_iso_date(request.args.get("to"), "to")
        except ValidationError as e:
            return fail(str(e), 400)

        from_date = start.isoformat() if start else dashboard.school_year_window().start_iso
        to_date = end.isoformat() if end else dashboard.today_iso()
        try:
            body = g.client.get_behaviour(from_date=from_date, to_date=to_date)
        except RecordsError:
            logger.exception("Error fetching behaviour")
            return fail("Failed to fetch behaviour data", 500)
        return _relay(body, "Failed to fetch behaviour data")

    @app.route("/api/getAnnouncements", endpoint="api_get_announcements")
    @client_required
    def api_get_announcements():
        try:
            body = g.client.get_announcements()
        except RecordsError:
            logger.exception("Error fetching announcements")
            return fail("Failed to fetch announcements data", 500)
        return _relay(body, "Failed to fetch announcements data")
