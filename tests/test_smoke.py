"""Smoke tests - fast, lightweight tests for basic functionality.

These tests verify that the package imports successfully and core functions
are available. They run quickly (<1 second) and are suitable for CI/CD.

Run with: pytest tests/test_smoke.py
"""

import pytest


class TestPackageBasics:
    """Test basic package functionality"""

    def test_version_exists(self):
        """Test that package version is defined"""
        from periodbundle import __version__

        assert __version__ is not None
        assert isinstance(__version__, str)
        assert len(__version__) > 0

    def test_package_imports(self):
        """Test that package imports successfully"""
        import periodbundle
        assert periodbundle is not None


class TestAPIImports:
    """Test that all primary API functions can be imported"""

    def test_value_model_imports(self):
        """Test value model imports"""
        from periodbundle import BoundaryType, Period, create_period

        assert len(BoundaryType) == 4
        assert callable(create_period)
        assert callable(Period.create)

    def test_codec_imports(self):
        """Test codec imports"""
        from periodbundle import to_json, from_json, to_columns, from_columns

        assert callable(to_json)
        assert callable(from_json)
        assert callable(to_columns)
        assert callable(from_columns)

    def test_mapper_imports(self):
        """Test mapper imports"""
        from periodbundle import PeriodDataMapper, MapperConfig, FieldSet

        assert callable(PeriodDataMapper)
        assert callable(MapperConfig)
        assert callable(FieldSet.from_values)

    def test_errors_share_base_class(self):
        """All errors derive from PeriodBundleError, itself a ValueError"""
        from periodbundle import (
            PeriodBundleError,
            InvalidBoundaryType,
            InvalidInterval,
            InvalidStartDate,
            NullPeriodNotAllowed,
        )

        assert issubclass(PeriodBundleError, ValueError)
        for cls in (InvalidBoundaryType, InvalidInterval, InvalidStartDate, NullPeriodNotAllowed):
            assert issubclass(cls, PeriodBundleError)
