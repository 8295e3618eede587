"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from datetime import date

import pytest

from models.config import QuotaConfiguration, SQLiteDatabaseConfiguration
from quota.quota_service import QuotaServiceHolder
from quota.sql_quota_store import SQLQuotaStore
from tests.unit.utils.clock_helpers import FixedClock


@pytest.fixture(name="quota_configuration")
def quota_configuration_fixture() -> QuotaConfiguration:
    """Quota configuration with SQLite storage residing in memory."""
    return QuotaConfiguration(
        sqlite=SQLiteDatabaseConfiguration(db_path=":memory:"),
        daily_allowance=100,
        scheduler={"enabled": False},
    )


@pytest.fixture(name="store")
def store_fixture(quota_configuration: QuotaConfiguration):
    """Quota store connected to in-memory SQLite database."""
    store = SQLQuotaStore(quota_configuration)
    yield store
    store.close()


@pytest.fixture(name="clock")
def clock_fixture() -> FixedClock:
    """Clock frozen at noon of 2024-01-02."""
    return FixedClock(date(2024, 1, 2))


@pytest.fixture(name="reset_quota_service_holder")
def reset_quota_service_holder_fixture():
    """Make sure no quota service leaks between tests."""
    QuotaServiceHolder()._service = None  # pylint: disable=protected-access
    yield
    QuotaServiceHolder()._service = None  # pylint: disable=protected-access
