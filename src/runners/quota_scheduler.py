"""Daily token quota scheduler runner."""

from threading import Event, Thread
from typing import Optional

from log import get_logger
from models.config import QuotaConfiguration
from quota.errors import StoreUnavailableError
from quota.quota_service import QuotaService

logger = get_logger(__name__)


def quota_scheduler(config: QuotaConfiguration, stop: Optional[Event] = None) -> bool:
    """Quota scheduler task.

    Run batch reconciliation every `config.scheduler.period` seconds until
    the stop event is set. The scheduler uses its own connection to quota
    storage.
    """
    if not config.scheduler.enabled:
        logger.warning("Quota scheduler is disabled, skipping")
        return False

    try:
        service = QuotaService(config)
    except StoreUnavailableError as e:
        logger.warning("Can not connect to database, skipping: %s", e)
        return False

    stop = stop if stop is not None else Event()
    period = config.scheduler.period

    logger.info(
        "Quota scheduler started in separated thread with period set to %d seconds",
        period,
    )

    while not stop.is_set():
        logger.info("Quota scheduler sync started")
        try:
            result = service.reset_stale()
            if result.success:
                logger.info("Quota scheduler reset %d records", result.reset_count)
            else:
                logger.error("Quota reset error: %s", result.error)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception("Quota reset error: %s", e)
        logger.info("Quota scheduler sync finished")
        stop.wait(period)

    service.close()
    return True


def start_quota_scheduler(config: QuotaConfiguration) -> Event:
    """Start quota scheduler in separate thread.

    Returns:
        Event that stops the scheduler when set.
    """
    logger.info("Starting quota scheduler")
    stop = Event()
    thread = Thread(
        target=quota_scheduler,
        daemon=True,
        args=(config, stop),
    )
    thread.start()
    return stop
