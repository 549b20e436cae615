"""Period value model, storage codecs and query helpers.

Public API:
    Period.create(start, end, boundary_type="[)") -> Period
        Build a validated, immutable Period

    BoundaryType
        The four inclusivity modes ("[)", "[]", "(]", "()")

    to_json(period) / from_json(document)
    to_columns(period, config) / from_columns(row, config)
    to_interval_notation(period) / from_interval_notation(text)
        Storage round trips

    contains_predicate(reference, boundary_type) -> list[Comparison]
    overlaps_predicate(period, stored_boundary_type) -> list[Comparison]
    filter_periods(frame, reference) -> DataFrame
        Query helpers honouring endpoint inclusivity

Examples:
    >>> from datetime import datetime
    >>> from periodbundle.period import Period, BoundaryType, to_json, from_json
    >>>
    >>> p = Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10), BoundaryType.INCLUDE_ALL)
    >>> p.is_end_included()
    True
    >>> from_json(to_json(p)) == p
    True
"""

from periodbundle.period.periodmodel import (
    BOUNDARY_TYPES,
    BoundaryType,
    Period,
    create_period,
)
from periodbundle.period.periodcodec import (
    to_dict,
    from_dict,
    to_json,
    from_json,
    to_columns,
    from_columns,
    to_interval_notation,
    from_interval_notation,
)
from periodbundle.period.periodquery import (
    Comparison,
    PredicateTranslator,
    property_for_function,
    contains_predicate,
    overlaps_predicate,
    filter_periods,
)

__all__ = [
    "BOUNDARY_TYPES",
    "BoundaryType",
    "Period",
    "create_period",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_columns",
    "from_columns",
    "to_interval_notation",
    "from_interval_notation",
    "Comparison",
    "PredicateTranslator",
    "property_for_function",
    "contains_predicate",
    "overlaps_predicate",
    "filter_periods",
]
