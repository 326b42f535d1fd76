from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.pupil_dashboard.pupil_dashboard.core.exceptions import RecordsAPIError, RecordsAuthError
from src.pupil_dashboard.pupil_dashboard.records.client import RecordsClient


VALID_CODE = "ABC123"
VALID_DOB = "2010-05-04"


def _session(status):
    return {"code": "/", "status": status}


ATTENDANCE_PAYLOAD = {
    "success": 1,
    "data": {
        "2023-09-05": {"AM": _session("present"), "PM": _session("present")},
        "2024-02-28": {"AM": _session("absent"), "PM": _session("excused")},
        "2024-03-01": {"AM": _session("present"), "PM": _session("late")},
        "2024-03-04": {"AM": _session("present"), "PM": _session("present")},
        "2024-03-05": {"AM": _session("present")},
        "2024-03-11": {"AM": _session("late"), "PM": _session("unknown")},
        "2024-03-12": {"AM": _session("present"), "PM": _session("present")},
    },
    "meta": {
        "dates": ["2023-09-05", "2024-02-28", "2024-03-01", "2024-03-04", "2024-03-05", "2024-03-11", "2024-03-12"],
        "sessions": ["AM", "PM"],
        "start_date": "2023-08-01",
        "end_date": "2024-03-15",
        "percentage": "80",
        "percentage_singe_august": "92",
    },
}

BEHAVIOUR_PAYLOAD = {
    "success": 1,
    "data": {
        "positive_reasons": {"Effort": 10, "Homework": 4, "Kindness": 7, "Teamwork": 1, "Focus": 3, "Reading": 2, "Music": 1},
        "negative_reasons": {"Late to lesson": 2, "No equipment": 1},
    },
    "meta": {"start_date": "2024-03-01", "end_date": "2024-03-15"},
}

ANNOUNCEMENTS_PAYLOAD = {
    "success": 1,
    "data": [
        {
            "title": "Sports day",
            "description": "<p>Bring a water bottle.</p>",
            "teacher_name": "Mr Smith",
            "school_name": "Hill School",
            "school_logo": "https://example.invalid/logo.png",
            "timestamp": "2024-03-10T09:30:00+00:00",
        },
        {
            "title": "Trip letter",
            "description": "Forms due Friday.",
            "teacher_name": "Ms Jones",
            "school_name": "Hill School",
            "school_logo": None,
            "timestamp": "2024-03-12T12:00:00+00:00",
        },
    ],
    "meta": {},
}

STUDENT_INFO_PAYLOAD = {
    "success": 1,
    "data": {"user": {"id": 42, "name": "Alex Example", "first_name": "Alex", "avatar_url": "https://example.invalid/a.png"}},
    "meta": {"session_id": "rotated"},
}


class FakeRecordsClient(RecordsClient):
    """In-memory records client. Set `fail_on` to a method name to make it raise."""

    def __init__(self, pupil_code: str, date_of_birth: str, *, fail_on: Optional[str] = None):
        self.pupil_code = pupil_code
        self.date_of_birth = date_of_birth
        self.fail_on = fail_on
        self.calls: list[tuple] = []
        self.attendance = ATTENDANCE_PAYLOAD
        self.behaviour = BEHAVIOUR_PAYLOAD
        self.announcements = ANNOUNCEMENTS_PAYLOAD

    def _check(self, name: str) -> None:
        if self.fail_on == name:
            raise RecordsAPIError(f"{name} failed")

    def login(self) -> None:
        self.calls.append(("login",))
        if (self.pupil_code, self.date_of_birth) != (VALID_CODE, VALID_DOB):
            raise RecordsAuthError("Invalid login details")
        self._check("login")

    def get_student_info(self):
        self.calls.append(("get_student_info",))
        self._check("get_student_info")
        return STUDENT_INFO_PAYLOAD

    def get_attendance(self, *, from_date=None, to_date=None):
        self.calls.append(("get_attendance", from_date, to_date))
        self._check("get_attendance")
        return self.attendance

    def get_behaviour(self, *, from_date=None, to_date=None):
        self.calls.append(("get_behaviour", from_date, to_date))
        self._check("get_behaviour")
        return self.behaviour

    def get_announcements(self):
        self.calls.append(("get_announcements",))
        self._check("get_announcements")
        return self.announcements


class FakeClientFactory:
    def __init__(self):
        self.created: list[FakeRecordsClient] = []
        self.fail_on: Optional[str] = None

    def __call__(self, pupil_code: str, date_of_birth: str) -> FakeRecordsClient:
        client = FakeRecordsClient(pupil_code, date_of_birth, fail_on=self.fail_on)
        self.created.append(client)
        return client

    @property
    def last(self) -> FakeRecordsClient:
        return self.created[-1]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 10, 0, 0)


@pytest.fixture
def fake_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def fake_client(fake_factory) -> FakeRecordsClient:
    return fake_factory(VALID_CODE, VALID_DOB)


@pytest.fixture
def attendance_payload() -> dict:
    return ATTENDANCE_PAYLOAD


@pytest.fixture
def behaviour_payload() -> dict:
    return BEHAVIOUR_PAYLOAD


@pytest.fixture
def app(monkeypatch, fake_factory, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.pupil_dashboard.pupil_dashboard import create_app

    return create_app(client_factory=fake_factory, clock=lambda: fixed_now)


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def logged_in(http):
    http.set_cookie("pupilCode", VALID_CODE)
    http.set_cookie("dateOfBirth", VALID_DOB)
    return http
