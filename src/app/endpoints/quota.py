"""Handlers for daily token quota REST API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

import constants
from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from models.responses import QuotaResetResponse, QuotaResponse
from quota.quota_service import QuotaServiceHolder
from utils.quota import get_reconciled_quota

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["quota"])


quota_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Current-day quota of the user",
        "model": QuotaResponse,
    },
    503: {
        "detail": {
            "response": constants.UNABLE_TO_LOAD_QUOTA,
            "cause": "Quota storage failed during get: disk I/O error",
        }
    },
}


@router.get("/quota", responses=quota_responses)
async def quota_endpoint_handler(
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> QuotaResponse:
    """
    Handle request to the /quota endpoint.

    Reconcile quota of the authenticated user and return it. A quota record
    that has been last reset before today is reset to the daily allowance
    before it is returned, and a record is created on the first access.

    Returns:
        QuotaResponse: Current-day correct quota of the user.
    """
    user_id, _, _ = auth
    logger.info("Response to /v1/quota endpoint for user %s", user_id)

    service = QuotaServiceHolder().get_service()
    return get_reconciled_quota(service, user_id)


quota_reset_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "All stale quota records have been reset",
        "model": QuotaResetResponse,
    },
    500: {
        "description": "Quota records could not be reset",
        "model": QuotaResetResponse,
    },
}


@router.post("/quota/reset", responses=quota_reset_responses)
async def quota_reset_endpoint_handler(
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
    response: Response,
) -> QuotaResetResponse:
    """
    Handle request to the /quota/reset endpoint.

    Run batch reconciliation that resets every stale quota record. The
    endpoint is meant to be triggered by an external scheduler and can be
    called any number of times per day.

    Returns:
        QuotaResetResponse: Number of records changed by this run.
    """
    # Used only for authentication
    _ = auth

    logger.info("Response to /v1/quota/reset endpoint")

    service = QuotaServiceHolder().get_service()
    result = service.reset_stale()
    if not result.success:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return QuotaResetResponse(
        success=result.success,
        message=result.message,
        reset_count=result.reset_count,
        error=result.error,
    )
