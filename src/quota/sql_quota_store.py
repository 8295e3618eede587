"""Quota store backed by SQLite or PostgreSQL database."""

from datetime import date, datetime, timezone
from itertools import islice
from typing import Any, Iterable, Iterator, Optional

import metrics
from log import get_logger
from models.config import QuotaConfiguration
from models.quota import QuotaRecord
from utils.connection_decorator import connection
from quota.errors import ResetConflictError, store_errors
from quota.quota_store import QuotaStore
from quota.sql import (
    BULK_RESET_QUOTA_PG,
    BULK_RESET_QUOTA_SQLITE,
    COMPARE_AND_RESET_QUOTA_PG,
    COMPARE_AND_RESET_QUOTA_SQLITE,
    CREATE_LAST_RESET_DATE_INDEX,
    CREATE_QUOTA_TABLE_PG,
    CREATE_QUOTA_TABLE_SQLITE,
    INIT_QUOTA_PG,
    INIT_QUOTA_SQLITE,
    LIST_STALE_AFTER_PG,
    LIST_STALE_AFTER_SQLITE,
    LIST_STALE_PG,
    LIST_STALE_SQLITE,
    SELECT_QUOTA_PG,
    SELECT_QUOTA_SQLITE,
)

logger = get_logger(__name__)


class SQLQuotaStore(QuotaStore):
    """Quota store where each user has one row in `user_tokens` table."""

    def __init__(self, configuration: QuotaConfiguration) -> None:
        """Initialize quota store and connect to the configured database."""
        self.sqlite_connection_config = configuration.sqlite
        self.postgres_connection_config = configuration.postgres
        self.list_page_size = configuration.list_page_size
        self.bulk_reset_chunk_size = configuration.bulk_reset_chunk_size
        self.connection: Any = None

        # initialize connection to DB
        # and initialize tables too
        self.connect()

    @store_errors
    def connect(self) -> None:
        """Initialize connection to database."""
        super().connect()

    @store_errors
    @connection
    def get(self, user_id: str) -> Optional[QuotaRecord]:
        """Retrieve quota record for given user."""
        if self.sqlite_connection_config is not None:
            return self._read_quota(SELECT_QUOTA_SQLITE, user_id)
        return self._read_quota(SELECT_QUOTA_PG, user_id)

    def _read_quota(self, query_statement: str, user_id: str) -> Optional[QuotaRecord]:
        """Read quota record from selected database."""
        # it is not possible to use context manager there, because SQLite does
        # not support it
        cursor = self.connection.cursor()
        cursor.execute(query_statement, (user_id,))
        row = cursor.fetchone()
        cursor.close()
        if row is None:
            return None
        return self._to_record(row)

    @store_errors
    @connection
    def create_if_absent(
        self, user_id: str, tokens_available: int, last_reset_date: date
    ) -> QuotaRecord:
        """Create quota record for given user unless it already exists.

        When a concurrent create wins the race, the insert is silently
        skipped and the winner's record is returned instead.
        """
        if self.sqlite_connection_config is not None:
            insert_statement = INIT_QUOTA_SQLITE
            select_statement = SELECT_QUOTA_SQLITE
        else:
            insert_statement = INIT_QUOTA_PG
            select_statement = SELECT_QUOTA_PG

        cursor = self.connection.cursor()
        cursor.execute(
            insert_statement,
            (user_id, tokens_available, self._date_param(last_reset_date)),
        )
        created = cursor.rowcount == 1
        cursor.close()
        if created:
            logger.info("Created quota record for user %s", user_id)
            metrics.quota_records_created_total.inc()
        else:
            logger.debug("Quota record for user %s already exists", user_id)

        record = self._read_quota(select_statement, user_id)
        if record is None:
            # the row can not disappear, records are never deleted
            raise RuntimeError(f"Quota record for user {user_id} is missing")
        return record

    @store_errors
    @connection
    def compare_and_reset(
        self,
        user_id: str,
        expected_last_reset_date: date,
        new_date: date,
        tokens_available: int,
    ) -> QuotaRecord:
        """Reset quota record if its last reset date is still the expected one.

        Raises:
            ResetConflictError: when the record has been changed by another
                actor since it was read by the caller.
        """
        if self.sqlite_connection_config is not None:
            update_statement = COMPARE_AND_RESET_QUOTA_SQLITE
        else:
            update_statement = COMPARE_AND_RESET_QUOTA_PG

        cursor = self.connection.cursor()
        cursor.execute(
            update_statement,
            (
                tokens_available,
                self._date_param(new_date),
                user_id,
                self._date_param(expected_last_reset_date),
                self._date_param(new_date),
            ),
        )
        row = cursor.fetchone()
        cursor.close()

        if row is None:
            raise ResetConflictError(user_id, expected_last_reset_date)
        return self._to_record(row)

    def list_stale(
        self,
        current_date: date,
        after: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> Iterator[str]:
        """Generate IDs of users whose last reset date differs from given date.

        Records are read page by page ordered by user ID, so the sequence can
        be restarted from any point by passing the last seen ID as `after`.
        """
        limit = page_size or self.list_page_size
        while True:
            page = self._list_stale_page(current_date, after, limit)
            yield from page
            if len(page) < limit:
                return
            after = page[-1]

    @store_errors
    @connection
    def _list_stale_page(
        self, current_date: date, after: Optional[str], limit: int
    ) -> list[str]:
        """Read one page of stale user IDs."""
        sqlite = self.sqlite_connection_config is not None
        current = self._date_param(current_date)
        if after is None:
            statement = LIST_STALE_SQLITE if sqlite else LIST_STALE_PG
            parameters: tuple[Any, ...] = (current, limit)
        else:
            statement = LIST_STALE_AFTER_SQLITE if sqlite else LIST_STALE_AFTER_PG
            parameters = (current, after, limit)

        cursor = self.connection.cursor()
        cursor.execute(statement, parameters)
        rows = cursor.fetchall()
        cursor.close()
        return [row[0] for row in rows]

    def bulk_reset(
        self, user_ids: Iterable[str], new_date: date, tokens_available: int
    ) -> int:
        """Reset all given records whose last reset date is older than new date.

        Records already advanced to the new date by a lazy reset are excluded
        by the statement itself, so values written in the meantime are kept.
        """
        ids = iter(user_ids)
        reset_count = 0
        while chunk := list(islice(ids, self.bulk_reset_chunk_size)):
            reset_count += self._bulk_reset_chunk(chunk, new_date, tokens_available)
        return reset_count

    @store_errors
    @connection
    def _bulk_reset_chunk(
        self, user_ids: list[str], new_date: date, tokens_available: int
    ) -> int:
        """Reset one chunk of records, return number of changed rows."""
        new = self._date_param(new_date)
        cursor = self.connection.cursor()
        if self.sqlite_connection_config is not None:
            placeholders = ", ".join("?" * len(user_ids))
            cursor.execute(
                BULK_RESET_QUOTA_SQLITE.format(placeholders=placeholders),
                (tokens_available, new, new, *user_ids),
            )
        else:
            cursor.execute(
                BULK_RESET_QUOTA_PG,
                (tokens_available, new, new, user_ids),
            )
        changed = cursor.rowcount
        cursor.close()
        logger.info("Changed %d rows in database", changed)
        return changed

    def _initialize_tables(self) -> None:
        """Initialize tables used by quota store."""
        logger.info("Initializing tables for quota store")
        if self.sqlite_connection_config is not None:
            create_statement = CREATE_QUOTA_TABLE_SQLITE
        else:
            create_statement = CREATE_QUOTA_TABLE_PG
        cursor = self.connection.cursor()
        cursor.execute(create_statement)
        cursor.execute(CREATE_LAST_RESET_DATE_INDEX)
        cursor.close()

    def _date_param(self, value: date) -> Any:
        """Convert date into value understood by the selected database."""
        # SQLite stores dates as ISO 8601 text, which keeps them comparable
        if self.sqlite_connection_config is not None:
            return value.isoformat()
        return value

    @staticmethod
    def _to_record(row: tuple[Any, ...]) -> QuotaRecord:
        """Construct quota record from database row."""
        user_id, tokens_available, tokens_used, last_reset_date, created, updated = row
        if isinstance(last_reset_date, str):
            last_reset_date = date.fromisoformat(last_reset_date)
        if isinstance(created, str):
            created = SQLQuotaStore._to_utc(datetime.fromisoformat(created))
        if isinstance(updated, str):
            updated = SQLQuotaStore._to_utc(datetime.fromisoformat(updated))
        return QuotaRecord(
            user_id=user_id,
            tokens_available=tokens_available,
            tokens_used=tokens_used,
            last_reset_date=last_reset_date,
            created_at=created,
            updated_at=updated,
        )

    @staticmethod
    def _to_utc(value: datetime) -> datetime:
        """Mark timestamp stored by SQLite `datetime('now')` as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def __str__(self) -> str:
        """Return textual representation of quota store instance."""
        name = type(self).__name__
        backend = "sqlite" if self.sqlite_connection_config is not None else "postgres"
        return f"{name}: backend: {backend}"
