"""Tests for period storage codecs.

Run with: pytest tests/test_periodcodec.py -v
"""

import inspect
import json
import pytest
from datetime import date, datetime, timedelta, timezone

from periodbundle.config import EmbeddedPeriodConfig
from periodbundle.exceptions import PeriodDecodeError
from periodbundle.period.periodcodec import (
    from_columns,
    from_dict,
    from_interval_notation,
    from_json,
    to_columns,
    to_dict,
    to_interval_notation,
    to_json,
)
from periodbundle.period.periodmodel import BoundaryType, Period


SAMPLE_PERIODS = [
    Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10)),
    Period.create(datetime(2024, 1, 1, 8, 30, 15, 123456), datetime(2024, 3, 1), "[]"),
    Period.create(
        datetime(2024, 6, 1, tzinfo=timezone.utc),
        datetime(2024, 6, 2, tzinfo=timezone(timedelta(hours=5, minutes=30))),
        "(]",
    ),
    Period.create(datetime(2024, 1, 1), datetime(2024, 1, 1), "()"),
    Period.create(date(2024, 1, 1), date(2024, 1, 10), "[]"),
    Period.create(date(2024, 1, 1), datetime(2024, 1, 10, 12), "[)"),
]


class TestJsonCodec:
    """Test the JSON document representation"""

    def test_document_shape(self, jan_period):
        """Document uses startDate/endDate/boundaryType keys"""
        data = json.loads(to_json(jan_period))
        assert data == {
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-01-10T00:00:00",
            "boundaryType": "[)",
        }

    @pytest.mark.parametrize("period", SAMPLE_PERIODS, ids=str)
    def test_round_trip(self, period):
        """from_json(to_json(p)) == p"""
        decoded = from_json(to_json(period))
        assert decoded == period
        assert decoded.boundary_type is period.boundary_type

    def test_none(self):
        """None and empty documents mean no period"""
        assert to_json(None) is None
        assert from_json(None) is None
        assert from_json("") is None
        assert from_json("null") is None

    def test_missing_boundary_uses_default(self):
        """A document without boundaryType decodes with the default"""
        period = from_json('{"startDate": "2024-01-01", "endDate": "2024-01-02"}')
        assert period.boundary_type is BoundaryType.INCLUDE_START_EXCLUDE_END

    def test_null_boundary_uses_default(self):
        """A null boundaryType decodes with the default"""
        period = from_dict({"startDate": "2024-01-01", "endDate": "2024-01-02", "boundaryType": None})
        assert period.boundary_type is BoundaryType.INCLUDE_START_EXCLUDE_END

    def test_empty_boundary_rejected(self):
        """An empty boundaryType string is invalid, not the default"""
        with pytest.raises(PeriodDecodeError):
            from_dict({"startDate": "2024-01-01", "endDate": "2024-01-02", "boundaryType": ""})

    def test_date_endpoints_stay_dates(self):
        """Date-only values decode to dates, full timestamps to datetimes"""
        period = from_json('{"startDate": "2024-01-01", "endDate": "2024-01-10T06:00:00"}')
        assert type(period.start_date) is date
        assert period.start_date == date(2024, 1, 1)
        assert period.end_date == datetime(2024, 1, 10, 6)

        document = json.loads(to_json(Period.create(date(2024, 1, 1), date(2024, 1, 10))))
        assert document["startDate"] == "2024-01-01"
        assert document["endDate"] == "2024-01-10"

    @pytest.mark.parametrize("document", [
        "{not json",
        '{"startDate": "2024-01-01"}',
        '{"startDate": "yesterday", "endDate": "2024-01-02"}',
        '{"startDate": "2024-02-01", "endDate": "2024-01-01"}',
        '{"startDate": "2024-01-01", "endDate": "2024-01-02", "boundaryType": "<>"}',
        '["2024-01-01", "2024-01-02"]',
    ])
    def test_malformed(self, document):
        """Malformed documents raise PeriodDecodeError"""
        with pytest.raises(PeriodDecodeError):
            from_json(document)

    def test_dict_round_trip(self, jan_period):
        """to_dict/from_dict round trip"""
        assert from_dict(to_dict(jan_period)) == jan_period
        assert to_dict(None) is None
        assert from_dict(None) is None


class TestColumnsCodec:
    """Test the embedded three-column representation"""

    def test_columns_for_property(self, jan_period):
        """Columns are named after the embedding property"""
        config = EmbeddedPeriodConfig.for_property("validity")
        assert to_columns(jan_period, config) == {
            "validity_start_date": datetime(2024, 1, 1),
            "validity_end_date": datetime(2024, 1, 10),
            "validity_boundary_type": "[)",
        }

    @pytest.mark.parametrize("period", SAMPLE_PERIODS, ids=str)
    def test_round_trip(self, period):
        """from_columns(to_columns(p)) == p"""
        config = EmbeddedPeriodConfig()
        assert from_columns(to_columns(period, config), config) == period

    def test_boundary_disabled(self):
        """Without a boundary column, the default boundary type is used"""
        config = EmbeddedPeriodConfig(boundary_type_enabled=False)
        period = Period.create(datetime(2024, 1, 1), datetime(2024, 1, 2), "()")
        row = to_columns(period, config)
        assert "boundary_type" not in row
        decoded = from_columns(row, config, default_boundary_type="[]")
        assert decoded.boundary_type is BoundaryType.INCLUDE_ALL

    def test_null_columns(self):
        """All-NULL endpoints mean no period"""
        config = EmbeddedPeriodConfig()
        row = to_columns(None, config)
        assert row == {"start_date": None, "end_date": None, "boundary_type": None}
        assert from_columns(row, config) is None

    def test_single_endpoint_fails(self):
        """Exactly one NULL endpoint is a decode error"""
        config = EmbeddedPeriodConfig()
        with pytest.raises(PeriodDecodeError):
            from_columns({"start_date": datetime(2024, 1, 1), "end_date": None}, config)

    @pytest.mark.parametrize("func", [to_columns, from_columns])
    def test_config_parameter_annotated(self, func):
        """Column codecs declare the config type they read"""
        annotation = inspect.signature(func).parameters["config"].annotation
        assert annotation == "EmbeddedPeriodConfig"

    def test_string_columns(self):
        """String column values (e.g. from SQLite) decode"""
        config = EmbeddedPeriodConfig()
        row = {"start_date": "2024-01-01 00:00:00", "end_date": "2024-01-10", "boundary_type": "[]"}
        period = from_columns(row, config)
        assert period == Period.create(datetime(2024, 1, 1), date(2024, 1, 10), "[]")


class TestIntervalNotation:
    """Test ISO 80000 interval notation"""

    @pytest.mark.parametrize("period", SAMPLE_PERIODS, ids=str)
    def test_round_trip(self, period):
        """from_interval_notation(to_interval_notation(p)) == p"""
        assert from_interval_notation(to_interval_notation(period)) == period

    def test_format(self):
        """Brackets follow the boundary type"""
        period = Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10), "(]")
        assert to_interval_notation(period) == "(2024-01-01T00:00:00, 2024-01-10T00:00:00]"

    def test_parse_with_spaces(self):
        """Whitespace around parts is tolerated"""
        period = from_interval_notation(" [ 2024-01-01 , 2024-01-10 ] ")
        assert period.boundary_type is BoundaryType.INCLUDE_ALL
        assert period.end_date == date(2024, 1, 10)

    @pytest.mark.parametrize("text", [
        "",
        "2024-01-01/2024-01-10",
        "[2024-01-01, 2024-01-10",
        "[2024-01-10, 2024-01-01)",
        "[soon, later)",
    ])
    def test_malformed(self, text):
        """Malformed notation raises PeriodDecodeError"""
        with pytest.raises(PeriodDecodeError):
            from_interval_notation(text)
