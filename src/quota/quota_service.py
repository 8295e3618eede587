"""Quota service wiring store, clock and reconcilers together."""

from typing import Optional

from log import get_logger
from models.config import QuotaConfiguration
from models.quota import BatchResult, QuotaRecord
from quota.batch_reconciler import BatchReconciler
from quota.clock import Clock, SystemClock
from quota.lazy_reconciler import LazyReconciler
from quota.quota_store import QuotaStore
from quota.sql_quota_store import SQLQuotaStore
from utils.types import Singleton

logger = get_logger(__name__)


class QuotaService:
    """Entry point to quota reconciliation used by REST API and scheduler."""

    def __init__(
        self,
        configuration: QuotaConfiguration,
        store: Optional[QuotaStore] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Initialize quota service according to configuration."""
        self.daily_allowance = configuration.daily_allowance
        self.clock = clock if clock is not None else SystemClock(configuration.timezone)
        self.store = store if store is not None else SQLQuotaStore(configuration)
        self.lazy_reconciler = LazyReconciler(
            self.store, self.clock, self.daily_allowance
        )
        self.batch_reconciler = BatchReconciler(
            self.store,
            self.clock,
            self.daily_allowance,
            configuration.bulk_reset_chunk_size,
        )
        logger.info("Quota service initialized: %s, %s", self.store, self.clock)

    def reconcile(self, user_id: str) -> QuotaRecord:
        """Return current-day correct quota record for given user."""
        return self.lazy_reconciler.reconcile(user_id)

    def reset_stale(self) -> BatchResult:
        """Reset all stale quota records."""
        return self.batch_reconciler.run()

    def close(self) -> None:
        """Release storage connection."""
        self.store.close()


class QuotaServiceHolder(metaclass=Singleton):
    """Container for an initialised QuotaService."""

    _service: Optional[QuotaService] = None

    def load(self, configuration: QuotaConfiguration) -> None:
        """Construct quota service according to configuration."""
        self._service = QuotaService(configuration)

    def get_service(self) -> QuotaService:
        """Return an initialised QuotaService."""
        if self._service is None:
            raise RuntimeError(
                "QuotaService has not been initialised. Ensure 'load(..)' has been called."
            )
        return self._service

    def unload(self) -> None:
        """Close and forget quota service."""
        if self._service is not None:
            self._service.close()
            self._service = None
