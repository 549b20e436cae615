"""Datepoint Normalization
-----------------------

Helpers that decide whether a raw value is a usable point in time, parse
datepoint text, and promote plain dates to midnight datetimes where two
datepoints have to be compared.

Examples:
  >>> is_datepoint(datetime(2024, 1, 1))
  True

  >>> is_datepoint("2024-01-01")
  False

  >>> parse_datepoint("2024–01–10")
  datetime.datetime(2024, 1, 10, 0, 0)
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime, time
from typing import Any, Optional

try:
    from dateutil import parser as dateutil_parser
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e


def is_datepoint(value: Any) -> bool:
    """
    Check whether a value is a point in time.

    Both ``datetime`` and plain ``date`` count; strings never do (use
    parse_datepoint to turn text into a datetime first).

    Args:
        value: Raw value

    Returns:
        True for date/datetime instances, False otherwise
    """
    return isinstance(value, date)


def to_datetime(value: date) -> datetime:
    """
    Promote a date to a datetime.

    A plain ``date`` becomes midnight of that day (no tzinfo); a
    ``datetime`` is returned unchanged.

    Examples:
        >>> to_datetime(date(2024, 1, 1))
        datetime.datetime(2024, 1, 1, 0, 0)
    """
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def normalize_datepoint_text(text: str) -> str:
    """
    Normalize datepoint text before parsing.

    Transformations:
      - Strip whitespace
      - Normalize Unicode (NFC)
      - Normalize dashes (—, –, −, ‒ → -)
      - Collapse whitespace

    Examples:
        >>> normalize_datepoint_text("  2024–01–10 ")
        '2024-01-10'
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFC", text.strip())

    for dash in ("—", "–", "−", "‒"):
        text = text.replace(dash, "-")

    return re.sub(r"\s+", " ", text).strip()


def parse_datepoint(text: str) -> Optional[datetime]:
    """
    Parse datepoint text into a datetime.

    Uses dateutil's ISO-first parser. Text that does not describe a
    point in time yields None rather than raising.

    Args:
        text: Raw text (e.g., "2024-01-10", "2024-01-10T12:30:00+00:00")

    Returns:
        Parsed datetime or None

    Examples:
        >>> parse_datepoint("2024-01-10T12:30:00")
        datetime.datetime(2024, 1, 10, 12, 30)

        >>> parse_datepoint("not-a-date") is None
        True
    """
    text_norm = normalize_datepoint_text(text)
    if not text_norm:
        return None

    try:
        return dateutil_parser.isoparse(text_norm)
    except (ValueError, OverflowError):
        pass

    try:
        return dateutil_parser.parse(text_norm)
    except (ValueError, OverflowError):
        return None


def coerce_datepoint(value: Any, *, parse_strings: bool = False) -> Any:
    """
    Coerce a raw field value towards a datepoint.

    Dates and datetimes are returned as given, strings are parsed when
    ``parse_strings`` is set and anything else is returned untouched so
    validation can report the original raw value.

    Args:
        value: Raw value from a field set or storage row
        parse_strings: Whether to parse string values

    Returns:
        date/datetime when coercion succeeded, the raw value otherwise
    """
    if is_datepoint(value):
        return value

    if parse_strings and isinstance(value, str):
        parsed = parse_datepoint(value)
        if parsed is not None:
            return parsed

    return value


__all__ = [
    "is_datepoint",
    "to_datetime",
    "normalize_datepoint_text",
    "parse_datepoint",
    "coerce_datepoint",
]
