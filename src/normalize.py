"""
Field normalization helpers.

Converts raw sheet cells into typed values. Every helper degrades to an
empty/zero/None value instead of raising, so a malformed cell never aborts
a load.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
# Decimal literal accepted by a JavaScript numeric conversion
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

DateLike = Union[date, datetime]


def normalize_string(value: Any) -> str:
    """None becomes "", anything else is stringified and trimmed."""
    if value is None:
        return ""
    return str(value).strip()


def parse_number(value: Any) -> float:
    """
    Parse a quantity, accepting a decimal comma ("3,5" -> 3.5).

    Only the first comma is replaced; there is no thousands-separator
    handling. Empty, unparseable or non-finite input gives 0.
    """
    if value is None or value == "":
        return 0.0
    text = str(value).replace(",", ".", 1).strip()
    if text == "":
        return 0.0
    if not _DECIMAL.fullmatch(text):
        return 0.0
    try:
        number = float(text)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _parse_int(text: str) -> Optional[int]:
    """Read a leading integer, ignoring trailing text ("15x" -> 15)."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_day_date(text: Optional[str]) -> Optional[date]:
    """
    Parse "dd/mm/yyyy" into a date.

    Years 0-99 are read as 1900 + year. Returns None unless the text has
    exactly three "/"-separated parts forming a real calendar date.
    """
    if not text or not isinstance(text, str):
        return None
    parts = text.strip().split("/")
    if len(parts) != 3:
        return None

    day, month, year = (_parse_int(part.strip()) for part in parts)
    if day is None or month is None or year is None:
        return None
    if 0 <= year <= 99:
        year += 1900

    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    """
    Parse "dd/mm/yyyy hh:mm:ss" into a datetime.

    The time part is optional. When all three time components are integers
    they are added to midnight, rolling over like the spreadsheet's own
    clock arithmetic; otherwise the time stays at midnight.
    """
    if not text or not isinstance(text, str):
        return None
    date_part, _, time_part = text.strip().partition(" ")
    if not date_part:
        return None

    base_date = parse_day_date(date_part)
    if base_date is None:
        return None
    base = datetime(base_date.year, base_date.month, base_date.day)
    if not time_part:
        return base

    pieces = time_part.split(":")
    if len(pieces) < 3:
        return base
    hours, minutes, seconds = (_parse_int(piece) for piece in pieces[:3])
    if hours is None or minutes is None or seconds is None:
        return base

    try:
        return base + timedelta(hours=hours, minutes=minutes, seconds=seconds)
    except OverflowError:
        return base


def to_date_key(value: Optional[DateLike]) -> Optional[str]:
    """Date -> "YYYY-MM-DD", None for a missing date."""
    if not isinstance(value, date):
        return None
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_display_date(value: Optional[DateLike]) -> str:
    """Date -> "DD/MM/YYYY", empty string for a missing date."""
    if not isinstance(value, date):
        return ""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def date_key_to_display(date_key: str) -> str:
    """"YYYY-MM-DD" -> "DD/MM/YYYY" without going through a date object."""
    year, month, day = date_key.split("-")
    return f"{day}/{month}/{year}"


def format_timestamp(value: Optional[datetime], raw: str = "") -> str:
    """Datetime -> "DD/MM/YYYY HH:MM:SS"; falls back to the raw text."""
    if not isinstance(value, datetime):
        return raw
    return f"{to_display_date(value)} {value:%H:%M:%S}"
