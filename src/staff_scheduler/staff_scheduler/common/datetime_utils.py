from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from ..core.constants import CLOCK_FORMAT, DAY_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: Any, field_name: str = "Date") -> date:
    """Parse YYYY-MM-DD (a full ISO timestamp is cut down to its day)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} is invalid (YYYY-MM-DD)")


def parse_clock(value: Any, field_name: str = "Time") -> time:
    """Parse HH:MM or HH:MM:SS."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required (HH:MM)")
    v = value.strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} is invalid (HH:MM)")


def format_clock(value: time) -> str:
    # Seconds are dropped on purpose: 09:00:00 -> 09:00.
    return value.strftime(CLOCK_FORMAT)


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
