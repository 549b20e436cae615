"""Form-side mapping between a start/end/boundary-type field set and a Period."""

from periodbundle.form.fieldset import Field, FieldAccessor, FieldSet
from periodbundle.form.periodmapper import (
    FormDataMapper,
    MapperConfig,
    MappingResult,
    PeriodDataMapper,
)

__all__ = [
    "Field",
    "FieldAccessor",
    "FieldSet",
    "FormDataMapper",
    "MapperConfig",
    "MappingResult",
    "PeriodDataMapper",
]
