"""Period query helpers.

Host query layers translate period filters into their own predicate
language. This module gives them what they need without generating SQL:

  - a registry of the period query functions (PERIOD_START_DATE, ...)
    and the stored property each one reads
  - Comparison tuples with the operator implied by a boundary type
  - an in-memory pandas filter with the same semantics, used for
    DataFrames of stored periods and as a reference for host translators
"""

from __future__ import annotations

import logging
from datetime import date
from typing import NamedTuple, Optional, Protocol, Union

import pandas as pd

from periodbundle.exceptions import UnknownPeriodFunction
from periodbundle.period.periodcodec import (
    BOUNDARY_TYPE_PROPERTY,
    END_DATE_PROPERTY,
    START_DATE_PROPERTY,
)
from periodbundle.period.periodmodel import BoundaryType, Period
from periodbundle.period.periodnormalize import to_datetime

logger = logging.getLogger(__name__)


# ---- Query function registry ----

# Functions reading an embedded (three-column) period
PERIOD_FUNCTIONS = {
    "PERIOD_START_DATE": START_DATE_PROPERTY,
    "PERIOD_END_DATE": END_DATE_PROPERTY,
    "PERIOD_BOUNDARY_TYPE": BOUNDARY_TYPE_PROPERTY,
}

# Functions reading a period stored as a JSON document
JSON_PERIOD_FUNCTIONS = {
    "JSON_PERIOD_START_DATE": START_DATE_PROPERTY,
    "JSON_PERIOD_END_DATE": END_DATE_PROPERTY,
    "JSON_PERIOD_BOUNDARY_TYPE": BOUNDARY_TYPE_PROPERTY,
}


def property_for_function(name: str) -> str:
    """
    Resolve a period query function name to the property it reads.

    Lookup is case-insensitive, matching query-language conventions.

    Examples:
        >>> property_for_function("PERIOD_END_DATE")
        'endDate'

        >>> property_for_function("json_period_start_date")
        'startDate'

    Raises:
        UnknownPeriodFunction: If name is not registered
    """
    key = (name or "").strip().upper()
    if key in PERIOD_FUNCTIONS:
        return PERIOD_FUNCTIONS[key]
    if key in JSON_PERIOD_FUNCTIONS:
        return JSON_PERIOD_FUNCTIONS[key]

    known = sorted(PERIOD_FUNCTIONS) + sorted(JSON_PERIOD_FUNCTIONS)
    raise UnknownPeriodFunction(f"Unknown period function {name!r}. Known: {', '.join(known)}")


def is_json_function(name: str) -> bool:
    return (name or "").strip().upper() in JSON_PERIOD_FUNCTIONS


# ---- Predicates ----

class Comparison(NamedTuple):
    """A single ``field <operator> value`` condition."""

    field: str
    operator: str
    value: object


class PredicateTranslator(Protocol):
    """Capability a host query layer implements to consume comparisons."""

    def translate(self, comparisons: list[Comparison]) -> object:
        ...


def contains_predicate(
    reference: date,
    boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
    *,
    start_field: str = START_DATE_PROPERTY,
    end_field: str = END_DATE_PROPERTY,
) -> list[Comparison]:
    """
    Conditions selecting stored periods that contain a reference datepoint.

    Args:
        reference: Datepoint that must fall inside the stored period
        boundary_type: Inclusivity of the stored periods
        start_field: Name of the stored start field
        end_field: Name of the stored end field

    Returns:
        Two comparisons to AND together

    Examples:
        >>> contains_predicate(datetime(2024, 1, 5), "[)")
        [Comparison(field='startDate', operator='<=', value=...),
         Comparison(field='endDate', operator='>', value=...)]
    """
    boundary_type = BoundaryType.coerce(boundary_type)
    point = to_datetime(reference)

    return [
        Comparison(start_field, "<=" if boundary_type.is_start_included() else "<", point),
        Comparison(end_field, ">=" if boundary_type.is_end_included() else ">", point),
    ]


def overlaps_predicate(
    period: Period,
    stored_boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
    *,
    start_field: str = START_DATE_PROPERTY,
    end_field: str = END_DATE_PROPERTY,
) -> list[Comparison]:
    """
    Conditions selecting stored periods that overlap a given period.

    Touching endpoints count as overlap only when both the stored side
    and the given side include them.

    An empty given period ([t, t), (t, t], (t, t)) overlaps nothing, so it
    yields a contradictory pair that no row satisfies. Empty stored rows
    are not excluded: field-vs-value comparisons cannot see that a row
    starts and ends at the same instant.

    Returns:
        Two comparisons to AND together
    """
    stored = BoundaryType.coerce(stored_boundary_type)
    start = to_datetime(period.start_date)
    end = to_datetime(period.end_date)

    if period.is_empty():
        return [
            Comparison(start_field, "<", start),
            Comparison(start_field, ">", start),
        ]

    touch_at_start = stored.is_start_included() and period.is_end_included()
    touch_at_end = stored.is_end_included() and period.is_start_included()

    return [
        Comparison(start_field, "<=" if touch_at_start else "<", end),
        Comparison(end_field, ">=" if touch_at_end else ">", start),
    ]


# ---- pandas filter ----

_OPERATORS = {
    "<": lambda series, value: series < value,
    "<=": lambda series, value: series <= value,
    ">": lambda series, value: series > value,
    ">=": lambda series, value: series >= value,
}


def _mask(frame: pd.DataFrame, comparisons: list[Comparison]) -> pd.Series:
    mask = pd.Series(True, index=frame.index)
    for comparison in comparisons:
        mask &= _OPERATORS[comparison.operator](frame[comparison.field], comparison.value)
    return mask


def filter_periods(
    frame: pd.DataFrame,
    reference: date,
    *,
    start_column: str = START_DATE_PROPERTY,
    end_column: str = END_DATE_PROPERTY,
    boundary_column: Optional[str] = BOUNDARY_TYPE_PROPERTY,
    default_boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
) -> pd.DataFrame:
    """
    Keep the rows of a DataFrame whose period contains a reference datepoint.

    Each row is tested with its own boundary type when a boundary column is
    present; rows without one (missing column or NaN) use the default.

    Args:
        frame: DataFrame with start/end datetime columns
        reference: Datepoint to test
        start_column: Column holding period starts
        end_column: Column holding period ends
        boundary_column: Column holding bracket values, or None
        default_boundary_type: Boundary type for rows without one

    Returns:
        Filtered copy of frame (original index preserved)

    Examples:
        >>> df = pd.DataFrame({
        ...     "startDate": [datetime(2024, 1, 1), datetime(2024, 1, 5)],
        ...     "endDate": [datetime(2024, 1, 5), datetime(2024, 1, 9)],
        ...     "boundaryType": ["[]", "()"],
        ... })
        >>> filter_periods(df, datetime(2024, 1, 5)).index.tolist()
        [0]
    """
    if frame.empty:
        return frame.copy()

    default = BoundaryType.coerce(default_boundary_type)

    if boundary_column and boundary_column in frame.columns:
        boundaries = frame[boundary_column].where(frame[boundary_column].notna(), default.value)
    else:
        boundaries = pd.Series(default.value, index=frame.index)

    mask = pd.Series(False, index=frame.index)
    for raw_type in boundaries.unique():
        boundary_type = BoundaryType.coerce(raw_type)
        rows = boundaries == raw_type
        comparisons = contains_predicate(
            reference, boundary_type, start_field=start_column, end_field=end_column
        )
        mask |= rows & _mask(frame, comparisons)

    logger.debug(f"filter_periods kept {int(mask.sum())}/{len(frame)} rows")
    return frame[mask].copy()


__all__ = [
    "PERIOD_FUNCTIONS",
    "JSON_PERIOD_FUNCTIONS",
    "property_for_function",
    "is_json_function",
    "Comparison",
    "PredicateTranslator",
    "contains_predicate",
    "overlaps_predicate",
    "filter_periods",
]
