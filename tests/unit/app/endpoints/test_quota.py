"""Unit tests for the /quota REST API endpoints."""

from datetime import date

import pytest
from fastapi import HTTPException
from pytest_mock import MockerFixture

from app.endpoints.quota import quota_endpoint_handler, quota_reset_endpoint_handler
from authentication.interface import AuthTuple
from models.config import QuotaConfiguration
from models.quota import BatchResult
from quota.errors import StoreUnavailableError
from quota.quota_service import QuotaService, QuotaServiceHolder
from quota.sql_quota_store import SQLQuotaStore
from tests.unit.utils.clock_helpers import FixedClock

# Authorization tuple required by URL endpoint handler
AUTH: AuthTuple = ("test_user_id", "test_user", "test_token")


@pytest.fixture(name="service")
def service_fixture(
    reset_quota_service_holder,  # pylint: disable=unused-argument
    quota_configuration: QuotaConfiguration,
    store: SQLQuotaStore,
    clock: FixedClock,
) -> QuotaService:
    """Quota service with in-memory storage registered in the holder."""
    service = QuotaService(quota_configuration, store=store, clock=clock)
    QuotaServiceHolder()._service = service  # pylint: disable=protected-access
    return service


async def test_quota_endpoint_first_access(service: QuotaService) -> None:
    """Test that quota record is created on the first access."""
    response = await quota_endpoint_handler(auth=AUTH)

    assert response.user_id == "test_user_id"
    assert response.tokens_available == 100
    assert response.tokens_used == 0
    assert response.last_reset_date == date(2024, 1, 2)
    assert response.percentage_remaining == 100.0
    assert service.store.get("test_user_id") is not None


async def test_quota_endpoint_stale_record(
    service: QuotaService, store: SQLQuotaStore
) -> None:
    """Test that stale quota record is reset before it is returned."""
    store.create_if_absent("test_user_id", 40, date(2024, 1, 1))

    response = await quota_endpoint_handler(auth=AUTH)

    assert response.tokens_available == 100
    assert response.last_reset_date == date(2024, 1, 2)
    assert service.store.get("test_user_id").tokens_available == 100  # type: ignore


async def test_quota_endpoint_storage_unavailable(
    service: QuotaService, mocker: MockerFixture
) -> None:
    """Test the /quota endpoint when storage can not be reached."""
    mocker.patch.object(
        service.store,
        "get",
        side_effect=StoreUnavailableError("get", OSError("disk I/O error")),
    )

    with pytest.raises(HTTPException) as exc_info:
        await quota_endpoint_handler(auth=AUTH)

    assert exc_info.value.status_code == 503
    assert exc_info.value.detail["response"] == "Unable to load quota"  # type: ignore


@pytest.mark.usefixtures("reset_quota_service_holder")
async def test_quota_endpoint_without_service() -> None:
    """Test the /quota endpoint when quota service is not initialized."""
    with pytest.raises(RuntimeError, match="QuotaService has not been initialised"):
        await quota_endpoint_handler(auth=AUTH)


async def test_quota_reset_endpoint(
    service: QuotaService, store: SQLQuotaStore, mocker: MockerFixture
) -> None:
    """Test that stale quota records are reset."""
    store.create_if_absent("foo", 10, date(2024, 1, 1))
    store.create_if_absent("bar", 10, date(2024, 1, 1))
    mock_response = mocker.Mock()
    mock_response.status_code = 200

    response = await quota_reset_endpoint_handler(auth=AUTH, response=mock_response)

    assert response.success is True
    assert response.reset_count == 2
    assert response.message == "Tokens reset successfully"
    assert response.error is None
    assert mock_response.status_code == 200

    # second call on the same day has nothing to do
    response = await quota_reset_endpoint_handler(auth=AUTH, response=mock_response)
    assert response.reset_count == 0
    assert response.message == "All tokens are up to date"
    assert service.store.get("foo").last_reset_date == date(2024, 1, 2)  # type: ignore


async def test_quota_reset_endpoint_failure(
    service: QuotaService, mocker: MockerFixture
) -> None:
    """Test that failed reset is reported with status 500."""
    mocker.patch.object(
        service,
        "reset_stale",
        return_value=BatchResult(
            success=False,
            reset_count=5,
            error="Quota storage failed during bulk_reset: timeout",
            message="Error resetting tokens",
        ),
    )
    mock_response = mocker.Mock()

    response = await quota_reset_endpoint_handler(auth=AUTH, response=mock_response)

    assert response.success is False
    assert response.reset_count == 5
    assert response.error is not None
    assert "timeout" in response.error
    assert mock_response.status_code == 500
