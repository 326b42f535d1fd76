from __future__ import annotations

import logging

from flask import Flask, current_app, g, render_template, request

from ..common.envelope import fail, ok
from ..common.validators import optional_iso_date
from ..container import Container
from ..core.constants import DEFAULT_PERIOD, DEFAULT_SESSION_PING_SECONDS, PUPIL_CODE_COOKIE
from ..core.enums import ChartView, Theme
from ..core.exceptions import RecordsError, ValidationError
from ..presentation.binder import chart_palette
from ..session.gate import make_client_required
from .service import ANNOUNCEMENTS_ERROR, SummaryRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    client_required = make_client_required(container)
    service = container.dashboard_service

    def _store():
        return service.store_for(request.cookies.get(PUPIL_CODE_COOKIE, ""))

    def _page(template: str, default_period: str, view: ChartView):
        return render_template(
            template,
            default_period=default_period,
            view=view.value,
            ping_seconds=int(current_app.config.get("SESSION_PING_SECONDS", DEFAULT_SESSION_PING_SECONDS)),
        )

    @app.route("/dashboard", endpoint="dashboard")
    @client_required
    def dashboard():
        return _page("dashboard.html", DEFAULT_PERIOD, ChartView.COMPACT)

    @app.route("/dashboard/attendance", endpoint="dashboard_attendance")
    @client_required
    def dashboard_attendance():
        return _page("attendance.html", "since-august", ChartView.FULL)

    @app.route("/api/summary", endpoint="api_summary")
    @client_required
    def api_summary():
        try:
            view_s = request.args.get("view", ChartView.COMPACT.value)
            try:
                view = ChartView(view_s)
            except ValueError:
                raise ValidationError("view must be 'compact' or 'full'")
            req = SummaryRequest(
                period=request.args.get("range") or DEFAULT_PERIOD,
                custom_start=optional_iso_date(request.args.get("start"), "start"),
                custom_end=optional_iso_date(request.args.get("end"), "end"),
                view=view,
                theme=Theme.parse(request.args.get("theme")),
            )
            body = service.summary(g.client, req, store=_store())
        except ValidationError as e:
            return fail(str(e), 400)

        # echoed back so the page can drop responses to superseded requests
        token = request.args.get("token")
        if body["attendance"] is None and body["behaviour"] is None:
            return fail("Failed to load dashboard data", 500, errors=body["errors"], token=token)
        return ok(token=token, **body)

    @app.route("/api/announcements/view", endpoint="api_announcements_view")
    @client_required
    def api_announcements_view():
        try:
            index = int(request.args.get("index", 0))
        except ValueError:
            return fail("index must be an integer", 400)
        try:
            view = service.announcements(g.client, index, store=_store())
        except RecordsError:
            logger.exception("Error fetching announcements")
            return fail(ANNOUNCEMENTS_ERROR, 500)
        return ok(**view)

    @app.route("/api/chart-theme", endpoint="api_chart_theme")
    def api_chart_theme():
        theme = Theme.parse(request.args.get("theme"))
        return ok(theme=theme.value, palette=chart_palette(theme).to_dict())
