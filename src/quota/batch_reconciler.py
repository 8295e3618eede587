"""Scheduled sweep that resets all stale quota records.

Lazy reconciliation only fixes records of users who actually read their
quota. The batch reconciler bounds the staleness window for everyone else, so
consumption logic that trusts `last_reset_date == today` is eventually correct
for all users, not just active ones.

The sweep is idempotent. It can be invoked any number of times per day and
concurrently with itself or with lazy reconciliations: a record that has
already reached today is excluded from the update when the update is
executed, not merely when stale records are listed.
"""

from itertools import islice

import metrics
from log import get_logger
from models.quota import BatchResult
from quota.clock import Clock
from quota.errors import StoreUnavailableError
from quota.quota_store import QuotaStore

logger = get_logger(__name__)


class BatchReconciler:
    """Reset every quota record whose last reset date is not today."""

    def __init__(
        self,
        store: QuotaStore,
        clock: Clock,
        daily_allowance: int,
        chunk_size: int,
    ) -> None:
        """Initialize reconciler with its collaborators."""
        self.store = store
        self.clock = clock
        self.daily_allowance = daily_allowance
        self.chunk_size = chunk_size

    def run(self) -> BatchResult:
        """Run one batch reconciliation.

        Returns:
            BatchResult: `reset_count` contains number of records actually
            changed by this run, which can be lower than number of records
            that were stale when the sweep started.
        """
        today = self.clock.today()
        logger.info("Batch reconciliation for %s started", today)

        reset_count = 0
        with metrics.quota_batch_duration_seconds.time():
            try:
                stale_user_ids = self.store.list_stale(today)
                while chunk := list(islice(stale_user_ids, self.chunk_size)):
                    logger.debug("Resetting chunk of %d stale records", len(chunk))
                    reset_count += self.store.bulk_reset(
                        chunk, today, self.daily_allowance
                    )
            except StoreUnavailableError as e:
                logger.error("Batch reconciliation failed: %s", e)
                metrics.quota_batch_runs_total.labels("false").inc()
                metrics.quota_batch_resets_total.inc(reset_count)
                return BatchResult(
                    success=False,
                    reset_count=reset_count,
                    error=str(e),
                    message="Error resetting tokens",
                )

        metrics.quota_batch_runs_total.labels("true").inc()
        metrics.quota_batch_resets_total.inc(reset_count)
        logger.info(
            "Batch reconciliation for %s finished, %d records reset",
            today,
            reset_count,
        )
        if reset_count == 0:
            return BatchResult(
                success=True, reset_count=0, message="All tokens are up to date"
            )
        return BatchResult(
            success=True,
            reset_count=reset_count,
            message="Tokens reset successfully",
        )

    def __str__(self) -> str:
        """Return textual representation of reconciler instance."""
        name = type(self).__name__
        return f"{name}: daily allowance: {self.daily_allowance} chunk size: {self.chunk_size}"
