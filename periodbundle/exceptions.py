"""Period Bundle Errors
--------------------

Typed errors raised by the value model, the codecs and the field mapper.

Every error is a ValueError so callers that only care about "bad input"
can catch one type. Mapping errors additionally carry the raw start/end
values the caller submitted, plus a message template and parameters a
host can use to render a user-facing message.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional, Sequence


class ErrorKind(str, Enum):
    """Abstract error kinds reported by period construction and mapping."""

    INVALID_BOUNDARY_TYPE = "invalid_boundary_type"
    INVALID_INTERVAL = "invalid_interval"
    INVALID_START_DATE = "invalid_start_date"
    INVALID_END_DATE = "invalid_end_date"
    START_AFTER_END = "start_after_end"
    INVALID_PERIOD = "invalid_period"
    NULL_PERIOD_NOT_ALLOWED = "null_period_not_allowed"


class PeriodBundleError(ValueError):
    """Base class for every error raised by periodbundle."""


class InvalidBoundaryType(PeriodBundleError):
    """A boundary type is not one of the four supported values."""

    kind = ErrorKind.INVALID_BOUNDARY_TYPE

    def __init__(self, value: Any, *, choices: Sequence[str] = ()):
        self.value = value
        self.choices = tuple(choices)
        message = f'Invalid boundary type "{value}".'
        if self.choices:
            message += f" Choice between: {', '.join(self.choices)}"
        super().__init__(message)


class InvalidInterval(PeriodBundleError):
    """The start datepoint is later than the end datepoint."""

    kind = ErrorKind.INVALID_INTERVAL

    def __init__(self, start: Any, end: Any, message: Optional[str] = None):
        self.start = start
        self.end = end
        super().__init__(
            message or f"Start date {start!r} must be lesser than or equal to end date {end!r}"
        )


class InvalidDatepoint(PeriodBundleError):
    """An endpoint handed to the value model is not a date or datetime."""

    def __init__(self, value: Any, role: str):
        self.value = value
        self.role = role
        super().__init__(f"{role} must be a date or datetime, got {type(value).__name__}")


class FieldBindingError(PeriodBundleError):
    """A field binding is malformed or missing from the field set."""


class PeriodDecodeError(PeriodBundleError):
    """A stored representation could not be decoded into a Period."""


class UnknownPeriodFunction(PeriodBundleError):
    """A query function name is not registered."""


class ConfigurationError(PeriodBundleError):
    """Configuration content is structurally invalid."""


def encode_raw_value(value: Any) -> str:
    """
    JSON-encode a raw field value for message templating.

    Datetimes and other non-JSON values fall back to their ISO form or str().

    Examples:
        >>> encode_raw_value(None)
        'null'
        >>> encode_raw_value("not-a-date")
        '"not-a-date"'
    """
    def _default(obj: Any) -> str:
        if hasattr(obj, "isoformat"):
            return obj.isoformat()
        return str(obj)

    return json.dumps(value, default=_default)


class PeriodMappingError(PeriodBundleError):
    """
    A field set could not be mapped to a Period.

    Attributes:
        kind: ErrorKind of the failure
        start: Raw start value as read from the field set
        end: Raw end value as read from the field set
        invalid_message: Message template for display (placeholders in
            ``{{ name }}`` form)
        message_parameters: Placeholder values, JSON-encoded raw inputs
    """

    kind: ErrorKind
    invalid_message = "Invalid Period."

    def __init__(self, message: str, *, start: Any = None, end: Any = None):
        self.start = start
        self.end = end
        self.message_parameters = {
            "{{ startDate }}": encode_raw_value(start),
            "{{ endDate }}": encode_raw_value(end),
        }
        super().__init__(message)

    def render_message(self) -> str:
        """Substitute message_parameters into invalid_message."""
        rendered = self.invalid_message
        for placeholder, value in self.message_parameters.items():
            rendered = rendered.replace(placeholder, value)
        return rendered


class InvalidStartDate(PeriodMappingError):
    kind = ErrorKind.INVALID_START_DATE
    invalid_message = "Start date should be valid. {{ startDate }} is not a valid date."


class InvalidEndDate(PeriodMappingError):
    kind = ErrorKind.INVALID_END_DATE
    invalid_message = "End date should be valid. {{ endDate }} is not a valid date."


class StartAfterEnd(PeriodMappingError):
    kind = ErrorKind.START_AFTER_END
    invalid_message = "Start date {{ startDate }} should be before or equal to end date {{ endDate }}."


class InvalidPeriod(PeriodMappingError):
    """Construction failed; the underlying exception is kept on ``cause``."""

    kind = ErrorKind.INVALID_PERIOD
    invalid_message = "Invalid Period."

    def __init__(self, message: str, *, start: Any = None, end: Any = None,
                 cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message, start=start, end=end)


class NullPeriodNotAllowed(PeriodMappingError):
    kind = ErrorKind.NULL_PERIOD_NOT_ALLOWED
    invalid_message = "A valid Period is required."


__all__ = [
    "ErrorKind",
    "PeriodBundleError",
    "InvalidBoundaryType",
    "InvalidInterval",
    "InvalidDatepoint",
    "FieldBindingError",
    "PeriodDecodeError",
    "UnknownPeriodFunction",
    "ConfigurationError",
    "PeriodMappingError",
    "InvalidStartDate",
    "InvalidEndDate",
    "StartAfterEnd",
    "InvalidPeriod",
    "NullPeriodNotAllowed",
    "encode_raw_value",
]
