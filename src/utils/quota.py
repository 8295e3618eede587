"""Quota handling helper functions."""

from datetime import timezone

from fastapi import HTTPException, status

import constants
from log import get_logger
from models.quota import QuotaRecord
from models.responses import QuotaResponse
from quota.clock import Clock
from quota.errors import StoreUnavailableError
from quota.quota_service import QuotaService

logger = get_logger(__name__)


def percentage_remaining(tokens_available: int, daily_allowance: int) -> float:
    """Compute available tokens as percentage of daily allowance.

    Args:
        tokens_available: Number of tokens that can still be consumed.
        daily_allowance: Number of tokens granted every day.

    Returns:
        Percentage rounded to two decimal places and clamped to [0, 100].
    """
    if daily_allowance <= 0:
        return 0.0
    percentage = tokens_available / daily_allowance * 100
    return round(min(max(percentage, 0.0), 100.0), 2)


def to_quota_response(
    record: QuotaRecord, daily_allowance: int, clock: Clock
) -> QuotaResponse:
    """Construct quota view from reconciled quota record.

    Args:
        record: Quota record that has already been reconciled.
        daily_allowance: Number of tokens granted every day.
        clock: Clock used to compute time of the next reset.

    Returns:
        QuotaResponse: View of the quota record. Counters are never negative.
    """
    now = clock.now()
    next_reset_at = clock.next_reset_at(now)
    # aware datetimes sharing one tzinfo subtract as wall time, ignoring DST
    delta = next_reset_at.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    seconds_until_reset = int(delta.total_seconds())
    return QuotaResponse(
        user_id=record.user_id,
        tokens_available=max(record.tokens_available, 0),
        tokens_used=max(record.tokens_used, 0),
        last_reset_date=record.last_reset_date,
        daily_allowance=daily_allowance,
        percentage_remaining=percentage_remaining(
            record.tokens_available, daily_allowance
        ),
        next_reset_at=next_reset_at,
        seconds_until_reset=max(seconds_until_reset, 0),
    )


def get_reconciled_quota(service: QuotaService, user_id: str) -> QuotaResponse:
    """Reconcile and return quota of given user.

    Args:
        service: Quota service to be used.
        user_id: Identifier of the user to get quota for.

    Returns:
        QuotaResponse: Current-day correct quota of the user.

    Raises:
        HTTPException: With status 503 if quota storage is not available.
    """
    try:
        record = service.reconcile(user_id)
    except StoreUnavailableError as e:
        logger.error("Unable to reconcile quota for user %s: %s", user_id, e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "response": constants.UNABLE_TO_LOAD_QUOTA,
                "cause": str(e),
            },
        ) from e
    return to_quota_response(record, service.daily_allowance, service.clock)
