"""Period Value Model
------------------

Immutable interval between two points in time with a boundary type that
says which endpoints belong to the interval.

Boundary types use ISO 80000 bracket notation as their identifiers:

    [)  include start, exclude end (default)
    []  include both endpoints
    (]  exclude start, include end
    ()  exclude both endpoints

Key Design Principles:
  1. A constructed Period always satisfies start_date <= end_date
  2. Endpoints are kept exactly as given; plain dates are compared as
     midnight datetimes
  3. Periods are never mutated; with_boundary_type() returns a new one
  4. An empty period ([t, t), (t, t], (t, t)) contains and overlaps nothing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Union

from periodbundle.exceptions import InvalidBoundaryType, InvalidDatepoint, InvalidInterval
from periodbundle.period.periodnormalize import is_datepoint, to_datetime


class BoundaryType(str, Enum):
    """Which endpoints of a Period are inclusive."""

    INCLUDE_START_EXCLUDE_END = "[)"
    INCLUDE_ALL = "[]"
    EXCLUDE_START_INCLUDE_END = "(]"
    EXCLUDE_ALL = "()"

    @classmethod
    def default(cls) -> "BoundaryType":
        return cls.INCLUDE_START_EXCLUDE_END

    @classmethod
    def coerce(cls, value: Any) -> "BoundaryType":
        """
        Resolve a boundary type from a member, a bracket value or a member name.

        Args:
            value: BoundaryType, "[)", "include_all", "INCLUDE_ALL", ...

        Returns:
            Matching BoundaryType

        Raises:
            InvalidBoundaryType: If value does not denote one of the four types

        Examples:
            >>> BoundaryType.coerce("[]")
            <BoundaryType.INCLUDE_ALL: '[]'>

            >>> BoundaryType.coerce("exclude_all")
            <BoundaryType.EXCLUDE_ALL: '()'>
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member

        raise InvalidBoundaryType(value, choices=[member.value for member in cls])

    def is_start_included(self) -> bool:
        return self.value[0] == "["

    def is_end_included(self) -> bool:
        return self.value[1] == "]"

    def is_start_excluded(self) -> bool:
        return not self.is_start_included()

    def is_end_excluded(self) -> bool:
        return not self.is_end_included()

    def start_operator(self) -> str:
        """Operator for ``value <op> start`` when testing containment."""
        return ">=" if self.is_start_included() else ">"

    def end_operator(self) -> str:
        """Operator for ``value <op> end`` when testing containment."""
        return "<=" if self.is_end_included() else "<"

    @classmethod
    def from_inclusivity(cls, start_included: bool, end_included: bool) -> "BoundaryType":
        return cls(("[" if start_included else "(") + ("]" if end_included else ")"))


DatepointLike = Union[date, datetime]


@dataclass(frozen=True)
class Period:
    """
    Interval between two datepoints.

    Build instances with Period.create() (or the constructor, which runs
    the same validation); both reject start > end and unknown boundary
    types.

    Example:
        >>> p = Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10), "[]")
        >>> p.boundary_type
        <BoundaryType.INCLUDE_ALL: '[]'>
        >>> p.contains(datetime(2024, 1, 10))
        True
    """

    start_date: DatepointLike
    end_date: DatepointLike
    boundary_type: BoundaryType = field(default=BoundaryType.INCLUDE_START_EXCLUDE_END)

    def __post_init__(self):
        if not is_datepoint(self.start_date):
            raise InvalidDatepoint(self.start_date, "start_date")
        if not is_datepoint(self.end_date):
            raise InvalidDatepoint(self.end_date, "end_date")

        try:
            reversed_endpoints = self._start() > self._end()
        except TypeError as e:
            # naive vs aware datetimes cannot be ordered
            raise InvalidInterval(
                self.start_date, self.end_date, f"Start and end dates cannot be compared: {e}"
            ) from e
        if reversed_endpoints:
            raise InvalidInterval(self.start_date, self.end_date)

        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "boundary_type", BoundaryType.coerce(self.boundary_type))

    def _start(self) -> datetime:
        return to_datetime(self.start_date)

    def _end(self) -> datetime:
        return to_datetime(self.end_date)

    @classmethod
    def create(
        cls,
        start_date: DatepointLike,
        end_date: DatepointLike,
        boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
    ) -> "Period":
        """
        Construct a Period from two datepoints.

        Args:
            start_date: Start datepoint
            end_date: End datepoint (must not be before start_date)
            boundary_type: BoundaryType or its bracket value

        Returns:
            New Period

        Raises:
            InvalidInterval: If start_date > end_date
            InvalidBoundaryType: If boundary_type is not recognised
            InvalidDatepoint: If an endpoint is not a date/datetime
        """
        return cls(start_date, end_date, boundary_type)

    # ---- Inclusivity ----

    def is_start_included(self) -> bool:
        return self.boundary_type.is_start_included()

    def is_end_included(self) -> bool:
        return self.boundary_type.is_end_included()

    # ---- Relations ----

    @property
    def duration(self) -> timedelta:
        return self._end() - self._start()

    def is_empty(self) -> bool:
        """
        Check whether the period contains no instant at all.

        Only zero-length periods that do not include both endpoints are
        empty; [t, t] still contains t.
        """
        return self._start() == self._end() and self.boundary_type is not BoundaryType.INCLUDE_ALL

    def contains(self, datepoint: DatepointLike) -> bool:
        """
        Check whether a datepoint falls inside the period.

        Endpoints count only when the boundary type includes them.
        """
        point = to_datetime(datepoint)

        if self.is_start_included():
            after_start = point >= self._start()
        else:
            after_start = point > self._start()

        if self.is_end_included():
            before_end = point <= self._end()
        else:
            before_end = point < self._end()

        return after_start and before_end

    def overlaps(self, other: "Period") -> bool:
        """
        Check whether two periods share at least one instant.

        Touching endpoints overlap only when both sides include them.
        Empty periods overlap nothing.
        """
        if self.is_empty() or other.is_empty():
            return False

        if self._start() < other._end() and other._start() < self._end():
            return True

        if self._end() == other._start():
            return self.is_end_included() and other.is_start_included()

        if other._end() == self._start():
            return other.is_end_included() and self.is_start_included()

        return False

    def with_boundary_type(self, boundary_type: Union[BoundaryType, str]) -> "Period":
        """Return a copy of this period with another boundary type."""
        return Period(self.start_date, self.end_date, boundary_type)

    def __str__(self) -> str:
        return (
            f"{self.boundary_type.value[0]}{self.start_date.isoformat()}, "
            f"{self.end_date.isoformat()}{self.boundary_type.value[1]}"
        )


def create_period(
    start_date: DatepointLike,
    end_date: DatepointLike,
    boundary_type: Union[BoundaryType, str] = BoundaryType.INCLUDE_START_EXCLUDE_END,
) -> Period:
    """Module-level alias of Period.create()."""
    return Period.create(start_date, end_date, boundary_type)


BOUNDARY_TYPES = tuple(BoundaryType)


__all__ = [
    "BoundaryType",
    "BOUNDARY_TYPES",
    "Period",
    "create_period",
]
