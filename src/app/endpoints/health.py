"""Handlers for health REST API endpoints.

These endpoints are used to check if service is live and prepared to accept
requests. Note that these endpoints can be accessed using GET or HEAD HTTP
methods. For HEAD HTTP method, just the HTTP response code is used.
"""

import logging
from typing import Any

from fastapi import APIRouter, status, Response

from models.responses import (
    LivenessResponse,
    ReadinessResponse,
)
from quota.quota_service import QuotaServiceHolder

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["health"])


def check_quota_store_readiness() -> tuple[bool, str]:
    """Check that quota service is initialized and its storage is reachable.

    Returns:
        Tuple with readiness flag and the reason.
    """
    try:
        service = QuotaServiceHolder().get_service()
    except RuntimeError as e:
        return False, f"Quota service is not initialized: {e}"

    if not service.store.connected():
        return False, "Quota storage is not available"

    return True, "Service is ready"


get_readiness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is ready",
        "model": ReadinessResponse,
    },
    503: {
        "description": "Service is not ready",
        "model": ReadinessResponse,
    },
}


@router.get("/readiness", responses=get_readiness_responses)
async def readiness_probe_get_method(
    response: Response,
) -> ReadinessResponse:
    """
    Handle the readiness probe endpoint, returning service readiness.

    Returns 200 when the quota storage can be reached, 503 otherwise.
    """
    logger.info("Response to /readiness endpoint")

    ready, reason = check_quota_store_readiness()
    if not ready:
        logger.warning("Service is not ready: %s", reason)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready, reason=reason)


get_liveness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is alive",
        "model": LivenessResponse,
    },
    # HTTP_503_SERVICE_UNAVAILABLE will never be returned when unreachable
}


@router.get("/liveness", responses=get_liveness_responses)
async def liveness_probe_get_method() -> LivenessResponse:
    """
    Return the liveness status of the service.

    Returns:
        LivenessResponse: Indicates that the service is alive.
    """
    logger.info("Response to /liveness endpoint")

    return LivenessResponse(alive=True)
