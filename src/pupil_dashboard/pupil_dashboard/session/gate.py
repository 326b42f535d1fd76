from __future__ import annotations

import logging
from functools import wraps

from flask import g, redirect, request, url_for

from ..container import Container
from ..core.constants import DATE_OF_BIRTH_COOKIE, PUPIL_CODE_COOKIE
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def clear_credentials(response):
    response.delete_cookie(PUPIL_CODE_COOKIE, path="/", samesite="Strict")
    response.delete_cookie(DATE_OF_BIRTH_COOKIE, path="/", samesite="Strict")
    return response


def make_client_required(container: Container):
    """Build the decorator that logs in from cookies before a protected view.

    The logged-in client is exposed to the view as `flask.g.client`.
    """

    def client_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            pupil_code = request.cookies.get(PUPIL_CODE_COOKIE)
            date_of_birth = request.cookies.get(DATE_OF_BIRTH_COOKIE)
            if not pupil_code or not date_of_birth:
                return redirect(url_for("login"))

            try:
                g.client = container.session_service.open_client(pupil_code, date_of_birth)
            except AuthenticationError:
                return clear_credentials(redirect(url_for("login", error="invalid_credentials")))
            except Exception:
                logger.exception("Client gate error on %s", request.path)
                return redirect(url_for("login", error="server_error"))

            return view(*args, **kwargs)

        return wrapper

    return client_required
