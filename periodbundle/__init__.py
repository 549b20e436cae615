"""Period Bundle - period (date/time interval) support for ORM and form layers

Public API for the period value model, storage codecs, query helpers and
the form field mapper.

Usage:
    from periodbundle import Period, BoundaryType, PeriodDataMapper, FieldSet

    # Build a period
    period = Period.create(start, end, BoundaryType.INCLUDE_ALL)

    # Store it
    document = to_json(period)          # '{"startDate": ..., "boundaryType": "[]"}'

    # Map form fields to a period
    mapper = PeriodDataMapper(allow_null=False)
    period = mapper.map_fields_to_data(FieldSet.from_values(startDate=start, endDate=end))

    # Load settings from YAML ($PERIODBUNDLE_CONFIG)
    mapper = PeriodDataMapper(load_config().mapper_config())
"""

__version__ = "0.1.0"

# ============================================================================
# Value model
# ============================================================================

from .period.periodmodel import (
    BoundaryType,   # "[)", "[]", "(]", "()"
    Period,         # Immutable interval
    create_period,  # Validated construction
)

# ============================================================================
# Storage codecs
# ============================================================================

from .period.periodcodec import (
    to_dict,
    from_dict,
    to_json,
    from_json,
    to_columns,
    from_columns,
    to_interval_notation,
    from_interval_notation,
)

# ============================================================================
# Query helpers
# ============================================================================

from .period.periodquery import (
    Comparison,
    property_for_function,
    contains_predicate,
    overlaps_predicate,
    filter_periods,
)

# ============================================================================
# Form mapping
# ============================================================================

from .form.fieldset import Field, FieldAccessor, FieldSet
from .form.periodmapper import MapperConfig, MappingResult, PeriodDataMapper

# ============================================================================
# Configuration and errors
# ============================================================================

from .config import BundleConfig, EmbeddedPeriodConfig, load_config, clear_config_cache
from .exceptions import (
    ErrorKind,
    PeriodBundleError,
    InvalidBoundaryType,
    InvalidInterval,
    InvalidDatepoint,
    FieldBindingError,
    PeriodDecodeError,
    UnknownPeriodFunction,
    ConfigurationError,
    PeriodMappingError,
    InvalidStartDate,
    InvalidEndDate,
    StartAfterEnd,
    InvalidPeriod,
    NullPeriodNotAllowed,
)

__all__ = [
    "__version__",
    # Value model
    "BoundaryType",
    "Period",
    "create_period",
    # Codecs
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_columns",
    "from_columns",
    "to_interval_notation",
    "from_interval_notation",
    # Query helpers
    "Comparison",
    "property_for_function",
    "contains_predicate",
    "overlaps_predicate",
    "filter_periods",
    # Form mapping
    "Field",
    "FieldAccessor",
    "FieldSet",
    "MapperConfig",
    "MappingResult",
    "PeriodDataMapper",
    # Configuration
    "BundleConfig",
    "EmbeddedPeriodConfig",
    "load_config",
    "clear_config_cache",
    # Errors
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
]
