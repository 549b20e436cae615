"""Period storage codecs.

Converts Period values to the representations a host persistence layer
stores and back:

  - JSON document: {"startDate": ..., "endDate": ..., "boundaryType": "[)"}
  - Embedded columns: three columns on the owning row
  - Interval notation: "[2024-01-01T00:00:00, 2024-01-10T00:00:00)"

Every decode raises PeriodDecodeError on malformed input, and every
encode/decode pair round-trips start, end and boundary type exactly.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from periodbundle.exceptions import PeriodBundleError, PeriodDecodeError
from periodbundle.period.periodmodel import BoundaryType, DatepointLike, Period
from periodbundle.period.periodnormalize import is_datepoint, normalize_datepoint_text

try:
    from dateutil import parser as dateutil_parser
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

if TYPE_CHECKING:
    from periodbundle.config import EmbeddedPeriodConfig

logger = logging.getLogger(__name__)

START_DATE_PROPERTY = "startDate"
END_DATE_PROPERTY = "endDate"
BOUNDARY_TYPE_PROPERTY = "boundaryType"

_NOTATION_RE = re.compile(r"^\s*([\[(])\s*([^,]+?)\s*,\s*([^,]+?)\s*([\])])\s*$")
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_PARSER = dateutil_parser.isoparser()


# ---- Datepoint helpers ----

def _encode_datepoint(value: DatepointLike) -> str:
    return value.isoformat()


def _decode_datepoint(value: Any, name: str) -> DatepointLike:
    """
    Decode a stored datepoint (ISO string or date/datetime).

    Date-only text ("2024-01-10") decodes to a date, so periods built from
    plain dates come back as plain dates.
    """
    if is_datepoint(value):
        return value

    if isinstance(value, str):
        text = normalize_datepoint_text(value)
        try:
            if _DATE_ONLY_RE.match(text):
                return _ISO_PARSER.parse_isodate(text)
            return dateutil_parser.isoparse(text)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Could not decode {name} {value!r}: {e}")
            raise PeriodDecodeError(f"Invalid {name} value {value!r}: {e}") from e

    raise PeriodDecodeError(f"Invalid {name} value {value!r}: expected ISO 8601 string")


def _build_period(start: Any, end: Any, boundary_type: Any) -> Period:
    """Build a Period, reporting value-model failures as decode errors."""
    try:
        return Period.create(start, end, boundary_type)
    except PeriodBundleError as e:
        logger.debug(f"Stored period rejected by value model: {e}")
        raise PeriodDecodeError(f"Stored period is invalid: {e}") from e


# ---- Mapping / JSON document ----

def to_dict(period: Optional[Period]) -> Optional[dict]:
    """
    Serialize a Period to a plain dict.

    Examples:
        >>> to_dict(Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10)))
        {'startDate': '2024-01-01T00:00:00', 'endDate': '2024-01-10T00:00:00', 'boundaryType': '[)'}
    """
    if period is None:
        return None

    return {
        START_DATE_PROPERTY: _encode_datepoint(period.start_date),
        END_DATE_PROPERTY: _encode_datepoint(period.end_date),
        BOUNDARY_TYPE_PROPERTY: period.boundary_type.value,
    }


def from_dict(data: Optional[Mapping[str, Any]]) -> Optional[Period]:
    """
    Deserialize a Period from a dict produced by to_dict().

    A missing boundaryType key falls back to the default boundary type.

    Raises:
        PeriodDecodeError: If keys are missing or values are invalid
    """
    if data is None:
        return None

    if not isinstance(data, Mapping):
        raise PeriodDecodeError(f"Expected a mapping, got {type(data).__name__}")

    missing = [key for key in (START_DATE_PROPERTY, END_DATE_PROPERTY) if key not in data]
    if missing:
        raise PeriodDecodeError(f"Stored period is missing keys: {', '.join(missing)}")

    start = _decode_datepoint(data[START_DATE_PROPERTY], START_DATE_PROPERTY)
    end = _decode_datepoint(data[END_DATE_PROPERTY], END_DATE_PROPERTY)
    boundary_type = data.get(BOUNDARY_TYPE_PROPERTY)
    if boundary_type is None:
        boundary_type = BoundaryType.default()

    return _build_period(start, end, boundary_type)


def to_json(period: Optional[Period]) -> Optional[str]:
    """Serialize a Period to a JSON document (None stays None)."""
    data = to_dict(period)
    if data is None:
        return None
    return json.dumps(data)


def from_json(document: Optional[Union[str, bytes]]) -> Optional[Period]:
    """
    Deserialize a Period from a JSON document.

    Empty documents and JSON null decode to None.

    Raises:
        PeriodDecodeError: If the document is not valid JSON or not a period
    """
    if document is None or (isinstance(document, (str, bytes)) and not document.strip()):
        return None

    try:
        data = json.loads(document)
    except (TypeError, ValueError) as e:
        logger.debug(f"Could not decode period JSON: {e}")
        raise PeriodDecodeError(f"Invalid period JSON: {e}") from e

    return from_dict(data)


# ---- Embedded columns ----

def to_columns(period: Optional[Period], config: EmbeddedPeriodConfig) -> dict:
    """
    Serialize a Period to embedded column values.

    Args:
        period: Period or None (all columns become None)
        config: EmbeddedPeriodConfig naming the columns

    Returns:
        {column_name: value} with datepoints left as date/datetime for the host
        driver to bind; the boundary column is omitted when disabled
    """
    columns = {
        config.start_date_column: period.start_date if period else None,
        config.end_date_column: period.end_date if period else None,
    }
    if config.boundary_type_enabled:
        columns[config.boundary_type_column] = period.boundary_type.value if period else None
    return columns


def from_columns(
    row: Mapping[str, Any],
    config: EmbeddedPeriodConfig,
    default_boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
) -> Optional[Period]:
    """
    Deserialize a Period from embedded column values.

    Both endpoint columns NULL means no period. Exactly one NULL endpoint
    is a decode error since a Period never has only one endpoint.

    Args:
        row: Mapping of column name to stored value
        config: EmbeddedPeriodConfig naming the columns
        default_boundary_type: Used when the boundary column is disabled or NULL

    Raises:
        PeriodDecodeError: If only one endpoint is stored or values are invalid
    """
    start_raw = row.get(config.start_date_column)
    end_raw = row.get(config.end_date_column)

    if start_raw is None and end_raw is None:
        return None

    if start_raw is None or end_raw is None:
        raise PeriodDecodeError(
            f"Embedded period has only one endpoint "
            f"({config.start_date_column}={start_raw!r}, {config.end_date_column}={end_raw!r})"
        )

    boundary_type = None
    if config.boundary_type_enabled:
        boundary_type = row.get(config.boundary_type_column)
    if boundary_type is None:
        boundary_type = default_boundary_type

    return _build_period(
        _decode_datepoint(start_raw, config.start_date_column),
        _decode_datepoint(end_raw, config.end_date_column),
        boundary_type,
    )


# ---- Interval notation ----

def to_interval_notation(period: Period) -> str:
    """
    Format a Period in ISO 80000 interval notation.

    Examples:
        >>> to_interval_notation(Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10), "[]"))
        '[2024-01-01T00:00:00, 2024-01-10T00:00:00]'
    """
    return str(period)


def from_interval_notation(text: str) -> Period:
    """
    Parse ISO 80000 interval notation into a Period.

    Raises:
        PeriodDecodeError: If text is not bracket-delimited "start, end"
    """
    match = _NOTATION_RE.match(text or "")
    if not match:
        raise PeriodDecodeError(f"Invalid interval notation {text!r}")

    open_bracket, start_text, end_text, close_bracket = match.groups()
    return _build_period(
        _decode_datepoint(start_text, "start"),
        _decode_datepoint(end_text, "end"),
        open_bracket + close_bracket,
    )


__all__ = [
    "START_DATE_PROPERTY",
    "END_DATE_PROPERTY",
    "BOUNDARY_TYPE_PROPERTY",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_columns",
    "from_columns",
    "to_interval_notation",
    "from_interval_notation",
]
