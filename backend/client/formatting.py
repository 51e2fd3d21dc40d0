"""Date formatting helpers for the todo views."""

import logging
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]


def _as_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_display_date(value: DateLike) -> str:
    """'Jan 1, 2024' style, or 'No date' when unset."""
    try:
        d = _as_date(value)
    except ValueError:
        logger.debug("Unparseable date: %r", value)
        return "Invalid date"
    if d is None:
        return "No date"
    return f"{d:%b} {d.day}, {d.year}"


def format_date_for_input(value: DateLike) -> str:
    """YYYY-MM-DD for editing, or an empty string."""
    try:
        d = _as_date(value)
    except ValueError:
        return ""
    return d.isoformat() if d else ""


def parse_input_date(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD field; an empty value means no date."""
    if not value:
        return None
    return date.fromisoformat(value)
