from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, current_app, g, redirect, render_template, request, url_for

from ..common.envelope import fail, ok
from ..container import Container
from ..core.constants import DATE_OF_BIRTH_COOKIE, DEFAULT_REMEMBER_ME_DAYS, PUPIL_CODE_COOKIE
from ..core.exceptions import AuthenticationError, RecordsError, ValidationError
from .gate import clear_credentials, make_client_required

logger = logging.getLogger(__name__)

LOGIN_ERRORS = {
    "invalid_credentials": "Your saved login is no longer valid. Please sign in again.",
    "server_error": "Something went wrong while signing you in. Please try again.",
}


def register(app: Flask, container: Container) -> None:
    client_required = make_client_required(container)

    def _set_credentials(response, pupil_code: str, date_of_birth: str, remember: bool):
        max_age = None
        if remember:
            days = int(current_app.config.get("REMEMBER_ME_DAYS", DEFAULT_REMEMBER_ME_DAYS))
            max_age = int(timedelta(days=days).total_seconds())
        for name, value in ((PUPIL_CODE_COOKIE, pupil_code), (DATE_OF_BIRTH_COOKIE, date_of_birth)):
            response.set_cookie(name, value, max_age=max_age, path="/", samesite="Strict")
        return response

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("home"))

    @app.route("/home", endpoint="home")
    def home():
        return render_template("home.html")

    @app.route("/login", endpoint="login")
    def login():
        if request.cookies.get(PUPIL_CODE_COOKIE) and request.cookies.get(DATE_OF_BIRTH_COOKIE):
            return redirect(url_for("dashboard"))
        error = LOGIN_ERRORS.get(request.args.get("error", ""))
        return render_template("login.html", error=error)

    @app.route("/api/verify-credentials", methods=["POST"], endpoint="verify_credentials")
    def verify_credentials():
        body = request.get_json(silent=True) or {}
        pupil_code = str(body.get("pupilCode") or "").strip()
        date_of_birth = str(body.get("dateOfBirth") or "").strip()

        try:
            container.session_service.verify(pupil_code, date_of_birth)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except RecordsError:
            logger.exception("Credential verification failed upstream")
            return fail("An error occurred. Please try again later.", 500)

        response = ok("Credentials verified successfully")
        return _set_credentials(response, pupil_code, date_of_birth, bool(body.get("rememberMe")))

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        return clear_credentials(ok("Logged out successfully"))

    @app.route("/api/auth-status", endpoint="auth_status")
    def auth_status():
        try:
            container.session_service.open_client(
                request.cookies.get(PUPIL_CODE_COOKIE),
                request.cookies.get(DATE_OF_BIRTH_COOKIE),
            )
        except AuthenticationError:
            return ok(authenticated=False)
        except RecordsError:
            logger.warning("Auth status check could not reach the records service")
            return fail("Unable to check session", 500, authenticated=False)
        return ok(authenticated=True)

    @app.route("/api/user", endpoint="api_user")
    @client_required
    def api_user():
        try:
            profile = container.session_service.profile(g.client)
        except RecordsError:
            logger.exception("Error fetching user data")
            return fail("Failed to fetch user data", 500)
        return ok(user=profile.to_dict())
