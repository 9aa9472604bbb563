"""Lenient coercion of form and query values.

Request values arrive as strings and are coerced the permissive way the
API has always accepted them: integers are read from a leading numeric
prefix and dates from ISO 8601 or common free-form text. Helpers return
`None` for input they cannot read instead of raising; callers decide
what an unreadable value means.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

# Fixed English names keep the rendering independent of the process locale.
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_int(value) -> Optional[int]:
    """Return the integer at the start of `value`, or `None`.

    `"30"` -> 30, `"45min"` -> 45, `" -2"` -> -2, `"2.5"` -> 2,
    `"abc"`/`""`/`None` -> None. Integers pass through unchanged.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    m = _INT_PREFIX.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse date text into a naive server-local `datetime`.

    ISO 8601 is tried first; anything else goes through dateutil, which
    reads forms like `2023/01/15`, `2023-1-5`, `January 15, 2023` and
    `Sun Jan 15 2023`. Date-only input means midnight of that day.
    Values carrying an offset (or `Z`) are converted to local time
    before the offset is dropped, so every stored date shares the
    reference used for the default "now".
    Returns `None` for empty or unparseable input.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(value: datetime) -> str:
    """Render a date as `Mon Jan 01 2024` (no time of day)."""
    return f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} {value.day:02d} {value.year:04d}"
