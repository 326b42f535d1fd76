from __future__ import annotations

import re
from datetime import date, datetime

from ..core.constants import API_DATE_FORMAT

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, API_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(API_DATE_FORMAT)


def is_iso_date(value) -> bool:
    return isinstance(value, str) and bool(_ISO_DATE.match(value))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_long_date(value: date) -> str:
    """`January 5, 2024` style label used on chart axes."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: date) -> str:
    """`Jan 5, 2024` style label used by the range caption."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_announcement_date(value: str | None) -> str:
    """Render an upstream timestamp as `5 Jan 2024`; unparseable input is returned as-is."""
    if not value:
        return ""
    try:
        moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return f"{moment.day} {moment.strftime('%b')} {moment.year}"
