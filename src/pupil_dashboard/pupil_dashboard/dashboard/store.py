from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from ..announcements.cursor import AnnouncementCursor


class RequestTokens:
    """Monotonic request tokens; only the most recently issued one is current."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


@dataclass
class DashboardStore:
    """Per-view state: the fetched documents plus the announcement cursor."""

    attendance: Optional[dict[str, Any]] = None
    behaviour: Optional[dict[str, Any]] = None
    cursor: AnnouncementCursor = field(default_factory=lambda: AnnouncementCursor([]))
    tokens: RequestTokens = field(default_factory=RequestTokens)

    def begin_refresh(self) -> int:
        return self.tokens.issue()

    def accept_attendance(self, token: int, payload: dict[str, Any]) -> bool:
        if not self.tokens.is_current(token):
            return False
        self.attendance = payload
        return True

    def accept_behaviour(self, token: int, payload: dict[str, Any]) -> bool:
        if not self.tokens.is_current(token):
            return False
        self.behaviour = payload
        return True

    def set_announcements(self, items, index: int = 0) -> AnnouncementCursor:
        self.cursor = AnnouncementCursor(items, index)
        return self.cursor
