from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class RecordsClient(ABC):
    """Narrow interface over the school-records service.

    Every method performs a single request and returns the upstream JSON
    document unchanged, raising a `RecordsError` subclass on failure.
    """

    @abstractmethod
    def login(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_student_info(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_attendance(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_behaviour(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_announcements(self) -> dict[str, Any]:
        raise NotImplementedError


# (pupil_code, date_of_birth) -> unauthenticated client
ClientFactory = Callable[[str, str], RecordsClient]
