"""Shared test fixtures for periodbundle tests."""

import pytest
from datetime import datetime

from periodbundle.config import CONFIG_ENV_VAR, clear_config_cache
from periodbundle.form.fieldset import FieldSet
from periodbundle.period.periodmodel import BoundaryType, Period


@pytest.fixture
def jan_period():
    """Fixture providing Period(2024-01-01, 2024-01-10, [))."""
    return Period.create(datetime(2024, 1, 1), datetime(2024, 1, 10))


@pytest.fixture(params=list(BoundaryType), ids=lambda b: b.name)
def boundary_type(request):
    """Fixture parametrized over all four boundary types."""
    return request.param


@pytest.fixture
def empty_fields():
    """Fixture providing an empty start/end/boundaryType field set."""
    return FieldSet.empty("startDate", "endDate", "boundaryType")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep configuration tests independent of the environment and each other."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
