"""ClassCharts student API client."""
from __future__ import annotations

import logging
import re
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import RecordsAPIError, RecordsAuthError, RecordsConnectionError, RecordsDataError
from .client import RecordsClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.classcharts.com/apiv2student"

_ISO_DOB = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def to_classcharts_dob(value: str) -> str:
    """ClassCharts expects DD/MM/YYYY; the login form posts YYYY-MM-DD."""
    match = _ISO_DOB.match(value.strip())
    if not match:
        return value.strip()
    year, month, day = match.groups()
    return f"{day}/{month}/{year}"


class ClassChartsClient(RecordsClient):
    """Client for a single pupil's ClassCharts account.

    Args:
        pupil_code: Pupil access code as printed on the school letter.
        date_of_birth: YYYY-MM-DD or DD/MM/YYYY.
        base_url: API root, overridable for testing.
        timeout: Per-request timeout in seconds.
        session: Optional requests session. If None, a new one is created.
    """

    def __init__(
        self,
        pupil_code: str,
        date_of_birth: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._pupil_code = pupil_code
        self._date_of_birth = date_of_birth
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self.session_id: Optional[str] = None
        self.student_id: Optional[int] = None

    def _request(self, method: str, path: str, *, params=None, data=None, auth: bool = True) -> dict[str, Any]:
        headers = {}
        if auth:
            if not self.session_id:
                raise RecordsAuthError("Not logged in")
            headers["Authorization"] = f"Basic {self.session_id}"

        url = f"{self._base_url}{path}"
        try:
            resp = self._session.request(method, url, params=params, data=data, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise RecordsConnectionError(f"Request to {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise RecordsDataError(f"Non-JSON response from {path} (HTTP {resp.status_code})") from e

        if not isinstance(body, dict):
            raise RecordsDataError(f"Unexpected response shape from {path}")
        if not body.get("success"):
            raise RecordsAPIError(body.get("error") or f"Request to {path} was unsuccessful (HTTP {resp.status_code})")
        return body

    def _student_path(self, resource: str) -> str:
        if self.student_id is None:
            raise RecordsAuthError("Not logged in")
        return f"/{resource}/{self.student_id}"

    @staticmethod
    def _range_params(from_date: Optional[str], to_date: Optional[str]) -> dict[str, str]:
        params = {}
        if from_date:
            params["from"] = from_date
        if to_date:
            params["to"] = to_date
        return params

    def login(self) -> None:
        form = {
            "_method": "POST",
            "code": self._pupil_code.upper(),
            "dob": to_classcharts_dob(self._date_of_birth),
            "remember_me": "1",
            "recaptcha-token": "no-token-available",
        }
        try:
            body = self._request("POST", "/login", data=form, auth=False)
        except RecordsAPIError as e:
            raise RecordsAuthError(str(e)) from e

        session_id = (body.get("meta") or {}).get("session_id")
        student = body.get("data") or {}
        if not session_id or student.get("id") is None:
            raise RecordsAuthError("Login response did not include a session")

        self.session_id = session_id
        self.student_id = student["id"]
        logger.debug("Logged in to ClassCharts as student %s", self.student_id)

    def get_student_info(self) -> dict[str, Any]:
        body = self._request("POST", "/ping", data={"include_data": "true"})
        # ping rotates the session id
        session_id = (body.get("meta") or {}).get("session_id")
        if session_id:
            self.session_id = session_id
        return body

    def get_attendance(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> dict[str, Any]:
        return self._request("GET", self._student_path("attendance"), params=self._range_params(from_date, to_date))

    def get_behaviour(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> dict[str, Any]:
        return self._request("GET", self._student_path("behaviour"), params=self._range_params(from_date, to_date))

    def get_announcements(self) -> dict[str, Any]:
        return self._request("GET", self._student_path("announcements"))
