"""Models for REST API responses."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class QuotaResponse(BaseModel):
    """Model representing reconciled daily token quota of one user.

    Attributes:
        user_id: User identification.
        tokens_available: Number of tokens that can still be consumed today.
        tokens_used: Number of tokens consumed since the last reset.
        last_reset_date: Day of the last reset, always the current day.
        daily_allowance: Number of tokens granted every day.
        percentage_remaining: Available tokens as percentage of allowance.
        next_reset_at: Timestamp when the quota is reset next time.
        seconds_until_reset: Number of seconds until the next reset.

    Example:
        ```python
        quota_response = QuotaResponse(
            user_id="123e4567-e89b-12d3-a456-426614174000",
            tokens_available=40,
            tokens_used=60,
            last_reset_date=date(2024, 1, 2),
            daily_allowance=100,
            percentage_remaining=40.0,
            next_reset_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
            seconds_until_reset=3600,
        )
        ```
    """

    user_id: str = Field(
        ...,
        description="User identification",
        examples=["123e4567-e89b-12d3-a456-426614174000"],
    )

    tokens_available: int = Field(
        ...,
        description="Number of tokens that can still be consumed today",
        examples=[100, 40],
    )

    tokens_used: int = Field(
        ...,
        description="Number of tokens consumed since the last reset",
        examples=[0, 60],
    )

    last_reset_date: date = Field(
        ...,
        description="Day on which the quota has been reset last time",
        examples=["2024-01-02"],
    )

    daily_allowance: int = Field(
        ...,
        description="Number of tokens granted every day",
        examples=[100],
    )

    percentage_remaining: float = Field(
        ...,
        description="Available tokens as percentage of the daily allowance",
        examples=[100.0, 40.0],
    )

    next_reset_at: datetime = Field(
        ...,
        description="Timestamp at which the quota is reset next time",
        examples=["2024-01-03T00:00:00+00:00"],
    )

    seconds_until_reset: int = Field(
        ...,
        description="Number of seconds remaining until the next reset",
        examples=[3600],
    )


class QuotaResetResponse(BaseModel):
    """Model representing result of batch reconciliation.

    Attributes:
        success: If all stale records were processed.
        message: Human readable summary.
        reset_count: Number of records changed by this run.
        error: Error message when the run failed.
    """

    success: bool = Field(
        ...,
        description="Flag indicating that the reset finished successfully",
        examples=[True, False],
    )

    message: str = Field(
        "",
        description="Human readable summary of the reset",
        examples=["Tokens reset successfully", "All tokens are up to date"],
    )

    reset_count: int = Field(
        0,
        description="Number of quota records changed by the reset",
        examples=[0, 42],
    )

    error: Optional[str] = Field(
        None,
        description="Error message in case the reset failed",
        examples=["Quota storage failed during _bulk_reset_chunk: disk I/O error"],
    )

    # provides examples for /docs endpoint
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "message": "Tokens reset successfully",
                    "reset_count": 2,
                    "error": None,
                }
            ]
        }
    }


class ReadinessResponse(BaseModel):
    """Model representing response to a readiness request.

    Attributes:
        ready: If service is ready.
        reason: The reason for the readiness.

    Example:
        ```python
        readiness_response = ReadinessResponse(
            ready=False,
            reason="Quota storage is not available",
        )
        ```
    """

    ready: bool = Field(
        ...,
        description="Flag indicating if service is ready",
        examples=[True, False],
    )

    reason: str = Field(
        ...,
        description="The reason for the readiness",
        examples=["Service is ready"],
    )


class LivenessResponse(BaseModel):
    """Model representing a response to a liveness request.

    Attributes:
        alive: If app is alive.

    Example:
        ```python
        liveness_response = LivenessResponse(alive=True)
        ```
    """

    alive: bool = Field(
        ...,
        description="Flag indicating that the app is alive",
        examples=[True, False],
    )

    # provides examples for /docs endpoint
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "alive": True,
                }
            ]
        }
    }
