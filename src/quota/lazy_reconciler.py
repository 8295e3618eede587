"""Reconciliation of one quota record performed as a side effect of a read."""

import metrics
from log import get_logger
from models.quota import QuotaRecord
from quota.clock import Clock
from quota.errors import ResetConflictError
from quota.quota_store import QuotaStore

logger = get_logger(__name__)


class LazyReconciler:
    """Make sure every quota record returned to a reader is current-day correct.

    Staleness detection and the reset are not separated by an unguarded gap:
    the reset is a compare-and-reset that only succeeds when the record still
    carries the reset date observed by the read. When two readers race, one
    of them wins and the other re-reads the already reset record.
    """

    def __init__(self, store: QuotaStore, clock: Clock, daily_allowance: int) -> None:
        """Initialize reconciler with its collaborators."""
        self.store = store
        self.clock = clock
        self.daily_allowance = daily_allowance

    def reconcile(self, user_id: str) -> QuotaRecord:
        """Return quota record of given user, reset to today if it is stale.

        Raises:
            StoreUnavailableError: when the quota storage fails.
        """
        today = self.clock.today()

        record = self.store.get(user_id)
        if record is None:
            logger.info("No quota record for user %s, creating one", user_id)
            # a concurrent create started on the previous day may win the insert
            record = self.store.create_if_absent(user_id, self.daily_allowance, today)

        # a record reset on a later day than today (clock moved backwards) is
        # left alone, reset dates never decrease
        if not record.is_stale(today):
            logger.debug("Quota record for user %s is current", user_id)
            return record

        logger.info(
            "Quota record for user %s was last reset on %s, resetting to %s",
            user_id,
            record.last_reset_date,
            today,
        )
        try:
            reset_record = self.store.compare_and_reset(
                user_id, record.last_reset_date, today, self.daily_allowance
            )
        except ResetConflictError as e:
            # someone else already reset the record, the only possible
            # outcome is that it is now current
            logger.info("Reset conflict resolved by re-fetch: %s", e)
            metrics.quota_reset_conflicts_total.inc()
            refreshed = self.store.get(user_id)
            if refreshed is None:
                # records are never deleted
                raise RuntimeError(f"Quota record for user {user_id} is missing") from e
            return refreshed

        metrics.quota_lazy_resets_total.inc()
        return reset_record
