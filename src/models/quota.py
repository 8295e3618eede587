"""Model representing one quota record stored per user."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class QuotaRecord(BaseModel):
    """Daily token quota of one user.

    Attributes:
        user_id: Opaque user identifier provided by the identity collaborator.
        tokens_available: Number of tokens that can still be consumed today.
        tokens_used: Number of tokens consumed since the last reset.
        last_reset_date: Calendar day on which the record was last
            initialized to the daily allowance.
        created_at: Timestamp set by the store on insert.
        updated_at: Timestamp set by the store on every update.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    tokens_available: int
    tokens_used: int
    last_reset_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_stale(self, today: date) -> bool:
        """Check if the record was last reset before the given day."""
        return self.last_reset_date < today


class BatchResult(BaseModel):
    """Outcome of one batch reconciliation run."""

    success: bool
    reset_count: NonNegativeInt = 0
    error: Optional[str] = None
    message: str = Field(default="")
