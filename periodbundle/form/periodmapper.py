"""Period field mapper.

Maps three form fields (start date, end date, boundary type) to a single
Period and back.

Public API:
    MapperConfig(...)                       immutable, validated settings
    PeriodDataMapper(config)                the mapper
    mapper.map_data_to_fields(period, fields)
        Write a Period (or nothing) into the field set
    mapper.map_fields_to_data(fields) -> Period | None
        Read and validate the field set, raising PeriodMappingError
    mapper.try_map_fields_to_data(fields) -> MappingResult
        Same validation, error returned instead of raised

Validation order (first failure wins):
    1. start invalid while end valid        -> InvalidStartDate
    2. end invalid while start valid        -> InvalidEndDate
    3. both valid, start after end          -> StartAfterEnd
    4. both valid, construction fails       -> InvalidPeriod
    5. no period and allow_null is False    -> NullPeriodNotAllowed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple, Optional, Protocol, Union

from periodbundle.exceptions import (
    FieldBindingError,
    InvalidEndDate,
    InvalidPeriod,
    InvalidStartDate,
    NullPeriodNotAllowed,
    PeriodBundleError,
    PeriodMappingError,
    StartAfterEnd,
)
from periodbundle.form.fieldset import FieldAccessor
from periodbundle.period.periodmodel import BoundaryType, Period
from periodbundle.period.periodnormalize import coerce_datepoint, is_datepoint, to_datetime


class FormDataMapper(Protocol):
    """Capability a host form layer depends on to bind compound values."""

    def map_data_to_fields(self, data: Any, fields: Mapping[str, FieldAccessor]) -> None:
        ...

    def map_fields_to_data(self, fields: Mapping[str, FieldAccessor]) -> Any:
        ...


@dataclass(frozen=True)
class MapperConfig:
    """
    Settings for PeriodDataMapper, validated once at construction.

    Attributes:
        default_boundary_type: Used when no boundary-type field is read
        start_date_field: Name of the start date field
        end_date_field: Name of the end date field
        boundary_type_field: Name of the boundary type field, or None to
            never read/write one
        allow_null: Whether an empty field set maps to None instead of failing
        parse_strings: Whether string field values are parsed into datetimes
    """

    default_boundary_type: BoundaryType = BoundaryType.INCLUDE_START_EXCLUDE_END
    start_date_field: str = "startDate"
    end_date_field: str = "endDate"
    boundary_type_field: Optional[str] = "boundaryType"
    allow_null: bool = True
    parse_strings: bool = field(default=False)

    def __post_init__(self):
        object.__setattr__(
            self, "default_boundary_type", BoundaryType.coerce(self.default_boundary_type)
        )

        names = [self.start_date_field, self.end_date_field]
        if self.boundary_type_field is not None:
            names.append(self.boundary_type_field)

        for name in names:
            if not isinstance(name, str) or not name.strip():
                raise FieldBindingError(f"Field binding must be a non-empty string, got {name!r}")

        if len(set(names)) != len(names):
            raise FieldBindingError(f"Field bindings must be distinct, got {names}")


class MappingResult(NamedTuple):
    """Outcome of try_map_fields_to_data(): a period or an error, never both."""

    period: Optional[Period]
    error: Optional[PeriodMappingError]

    @property
    def ok(self) -> bool:
        return self.error is None


class PeriodDataMapper:
    """
    Bidirectional mapper between a field set and a Period.

    Accepts either a MapperConfig or the MapperConfig keyword arguments:

        >>> mapper = PeriodDataMapper(default_boundary_type="[]", allow_null=False)
        >>> fields = FieldSet.from_values(
        ...     startDate=datetime(2024, 1, 1), endDate=datetime(2024, 1, 10))
        >>> mapper.map_fields_to_data(fields)
        Period(start_date=..., end_date=..., boundary_type=<BoundaryType.INCLUDE_ALL: '[]'>)
    """

    def __init__(self, config: Optional[MapperConfig] = None, **options: Any):
        if config is not None and options:
            raise TypeError("Pass either a MapperConfig or keyword options, not both")
        self.config = config if config is not None else MapperConfig(**options)

    # ---- Period -> fields ----

    def map_data_to_fields(
        self,
        data: Optional[Period],
        fields: Mapping[str, FieldAccessor],
    ) -> None:
        """
        Write a Period into the field set.

        None leaves every field untouched. The boundary-type field is only
        written when it is configured and present in the field set.

        Raises:
            TypeError: If data is neither None nor a Period
            FieldBindingError: If the start or end field is missing
        """
        # no data yet, nothing to prepopulate
        if data is None:
            return

        if not isinstance(data, Period):
            raise TypeError(f"Expected argument of type Period, {type(data).__name__} given")

        self._field(fields, self.config.start_date_field).set_data(data.start_date)
        self._field(fields, self.config.end_date_field).set_data(data.end_date)

        boundary_field = self.config.boundary_type_field
        if boundary_field is not None and boundary_field in fields:
            fields[boundary_field].set_data(data.boundary_type)

    # ---- fields -> Period ----

    def map_fields_to_data(self, fields: Mapping[str, FieldAccessor]) -> Optional[Period]:
        """
        Read, validate and build a Period from the field set.

        Returns:
            Period, or None when both dates are empty and allow_null is set

        Raises:
            PeriodMappingError: One of InvalidStartDate, InvalidEndDate,
                StartAfterEnd, InvalidPeriod, NullPeriodNotAllowed
            FieldBindingError: If the start or end field is missing
        """
        start_raw = self._field(fields, self.config.start_date_field).get_data()
        end_raw = self._field(fields, self.config.end_date_field).get_data()
        boundary_type = self._read_boundary_type(fields)

        start = coerce_datepoint(start_raw, parse_strings=self.config.parse_strings)
        end = coerce_datepoint(end_raw, parse_strings=self.config.parse_strings)
        start_valid = is_datepoint(start)
        end_valid = is_datepoint(end)

        if not start_valid and end_valid:
            raise InvalidStartDate(
                "Start date should be a date or datetime", start=start_raw, end=end_raw
            )

        if not end_valid and start_valid:
            raise InvalidEndDate(
                "End date should be a date or datetime", start=start_raw, end=end_raw
            )

        period = None

        if start_valid and end_valid:
            if self._is_start_after_end(start, end, start_raw, end_raw):
                raise StartAfterEnd(
                    "Start date should be lesser than or equal to the end date.",
                    start=start_raw,
                    end=end_raw,
                )

            try:
                period = Period.create(start, end, boundary_type)
            except PeriodBundleError as e:
                raise InvalidPeriod(
                    f"Invalid Period: {e}", start=start_raw, end=end_raw, cause=e
                ) from e

        if period is None and not self.config.allow_null:
            raise NullPeriodNotAllowed(
                "A valid Period is required", start=start_raw, end=end_raw
            )

        return period

    def try_map_fields_to_data(self, fields: Mapping[str, FieldAccessor]) -> MappingResult:
        """
        Like map_fields_to_data() but returns mapping errors instead of raising.

        FieldBindingError still raises; it signals a wiring mistake, not bad input.
        """
        try:
            return MappingResult(self.map_fields_to_data(fields), None)
        except PeriodMappingError as e:
            return MappingResult(None, e)

    # ---- Helpers ----

    @staticmethod
    def _field(fields: Mapping[str, FieldAccessor], name: str) -> FieldAccessor:
        try:
            return fields[name]
        except KeyError:
            raise FieldBindingError(
                f'Field "{name}" is not present in the field set. Available: {", ".join(fields)}'
            ) from None

    def _read_boundary_type(self, fields: Mapping[str, FieldAccessor]) -> Union[BoundaryType, Any]:
        boundary_field = self.config.boundary_type_field
        if boundary_field is None or boundary_field not in fields:
            return self.config.default_boundary_type

        value = fields[boundary_field].get_data()
        if value is None:
            return self.config.default_boundary_type
        return value

    @staticmethod
    def _is_start_after_end(start, end, start_raw, end_raw) -> bool:
        try:
            return to_datetime(start) > to_datetime(end)
        except TypeError as e:
            # naive vs aware datetimes
            raise InvalidPeriod(
                f"Invalid Period: {e}", start=start_raw, end=end_raw, cause=e
            ) from e


__all__ = [
    "FormDataMapper",
    "MapperConfig",
    "MappingResult",
    "PeriodDataMapper",
]
