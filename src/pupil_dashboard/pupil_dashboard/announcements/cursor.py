from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_announcement_date


def _entry(item: Mapping[str, Any]) -> dict:
    return {
        "title": item.get("title", ""),
        "description": item.get("description", ""),
        "teacherName": item.get("teacher_name", ""),
        "schoolName": item.get("school_name", ""),
        "schoolLogo": item.get("school_logo"),
        "date": format_announcement_date(item.get("timestamp")),
    }


class AnnouncementCursor:
    """Shows one announcement at a time; the index never leaves [0, len-1]."""

    def __init__(self, items: Sequence[Mapping[str, Any]], index: int = 0):
        self._items = list(items or [])
        self._index = 0
        self.move_to(index)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[Mapping[str, Any]]:
        if not self._items:
            return None
        return self._items[self._index]

    @property
    def prev_disabled(self) -> bool:
        return self._index == 0

    @property
    def next_disabled(self) -> bool:
        return not self._items or self._index == len(self._items) - 1

    @property
    def pagination(self) -> str:
        if not self._items:
            return ""
        return f"{self._index + 1} of {len(self._items)}"

    def move_to(self, index: int) -> None:
        if not self._items:
            self._index = 0
            return
        self._index = min(max(int(index), 0), len(self._items) - 1)

    def next(self) -> bool:
        if self.next_disabled:
            return False
        self._index += 1
        return True

    def previous(self) -> bool:
        if self.prev_disabled:
            return False
        self._index -= 1
        return True

    def entries(self) -> list[dict]:
        """Every announcement in display form, in upstream order."""
        return [_entry(item) for item in self._items]

    def view(self) -> dict:
        item = self.current
        return {
            "announcement": _entry(item) if item is not None else None,
            "index": self._index,
            "total": len(self._items),
            "pagination": self.pagination,
            "prevDisabled": self.prev_disabled,
            "nextDisabled": self.next_disabled,
        }
