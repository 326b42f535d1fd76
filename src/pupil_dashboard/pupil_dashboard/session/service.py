from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, RecordsAuthError, ValidationError
from ..records.client import ClientFactory, RecordsClient

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials. Please check your pupil code and date of birth."


@dataclass(frozen=True)
class StudentProfile:
    name: str
    display_name: str
    avatar: Optional[str]

    def to_dict(self) -> dict:
        return {"name": self.name, "displayName": self.display_name, "avatar": self.avatar}


class SessionService:
    """Use case: turn a pupil code + date of birth into a logged-in records client."""

    def __init__(self, client_factory: ClientFactory):
        self._client_factory = client_factory

    def verify(self, pupil_code: Optional[str], date_of_birth: Optional[str]) -> None:
        if not pupil_code or not date_of_birth:
            raise ValidationError("Pupil code and date of birth are required")
        self.open_client(pupil_code, date_of_birth)

    def open_client(self, pupil_code: Optional[str], date_of_birth: Optional[str]) -> RecordsClient:
        """Single login attempt. Rejected credentials raise AuthenticationError;
        transport/upstream failures propagate as RecordsError."""
        try:
            code = require_non_empty(pupil_code, "Pupil code")
            dob = require_non_empty(date_of_birth, "Date of birth")
        except ValidationError as e:
            raise AuthenticationError(str(e)) from e

        client = self._client_factory(code, dob)
        try:
            client.login()
        except RecordsAuthError as e:
            logger.info("Records login rejected: %s", e)
            raise AuthenticationError(INVALID_CREDENTIALS) from e
        return client

    @staticmethod
    def profile(client: RecordsClient) -> StudentProfile:
        info: dict[str, Any] = client.get_student_info() or {}
        user = (info.get("data") or {}).get("user") or {}
        return StudentProfile(
            name=user.get("name") or "Student",
            display_name=user.get("first_name") or "Student",
            avatar=user.get("avatar_url") or None,
        )
