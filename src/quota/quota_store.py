"""Abstract class that is the parent for all quota store implementations.

Quota store provides durable access to one quota record per user. It is the
only place where quota records are written by reconciliation, and every write
it performs is a single atomic statement:

1. `create_if_absent` inserts a record unless one already exists; when two
   callers race, both receive the winner's record
1. `compare_and_reset` resets a record only if its `last_reset_date` still
   equals the value the caller observed, otherwise `ResetConflictError` is
   raised
1. `bulk_reset` resets a set of records, skipping every record whose
   `last_reset_date` has already reached the new date at write time

No in-process locking is used. Correctness rests entirely on the conditions
evaluated by the storage itself.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Iterable, Iterator, Optional

import sqlite3
import psycopg2

from log import get_logger
from models.config import SQLiteDatabaseConfiguration, PostgreSQLDatabaseConfiguration
from models.quota import QuotaRecord
from quota.connect_pg import connect_pg
from quota.connect_sqlite import connect_sqlite


logger = get_logger(__name__)


class QuotaStore(ABC):
    """Abstract class that is parent for all quota store implementations."""

    @abstractmethod
    def __init__(self) -> None:
        """Initialize connection configuration(s)."""
        self.sqlite_connection_config: Optional[SQLiteDatabaseConfiguration] = None
        self.postgres_connection_config: Optional[PostgreSQLDatabaseConfiguration] = (
            None
        )
        self.connection: Any = None

    @abstractmethod
    def get(self, user_id: str) -> Optional[QuotaRecord]:
        """Retrieve quota record for given user, None if it does not exist."""

    @abstractmethod
    def create_if_absent(
        self, user_id: str, tokens_available: int, last_reset_date: date
    ) -> QuotaRecord:
        """Create quota record unless it exists, return the stored record."""

    @abstractmethod
    def compare_and_reset(
        self,
        user_id: str,
        expected_last_reset_date: date,
        new_date: date,
        tokens_available: int,
    ) -> QuotaRecord:
        """Reset quota record if it was not changed by another actor."""

    @abstractmethod
    def list_stale(
        self,
        current_date: date,
        after: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> Iterator[str]:
        """Generate IDs of users whose last reset date differs from given date."""

    @abstractmethod
    def bulk_reset(
        self, user_ids: Iterable[str], new_date: date, tokens_available: int
    ) -> int:
        """Reset all given records that are still stale, return changed count."""

    @abstractmethod
    def _initialize_tables(self) -> None:
        """Initialize tables and indexes."""

    def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Initializing connection to quota store database")
        if self.postgres_connection_config is not None:
            self.connection = connect_pg(self.postgres_connection_config)
        if self.sqlite_connection_config is not None:
            self.connection = connect_sqlite(self.sqlite_connection_config)

        try:
            self._initialize_tables()
        except Exception as e:
            self.connection.close()
            self.connection = None
            logger.exception("Error initializing quota store database:\n%s", e)
            raise

    def connected(self) -> bool:
        """Check if connection to quota store is alive."""
        if self.connection is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute("SELECT 1")
            logger.debug("Connection to storage is ok")
            return True
        except (psycopg2.Error, sqlite3.Error) as e:
            logger.error("Disconnected from storage: %s", e)
            return False
        finally:
            if cursor is not None:
                try:
                    cursor.close()
                except Exception:  # pylint: disable=broad-exception-caught
                    logger.warning("Unable to close cursor")

    def close(self) -> None:
        """Close connection to quota store database."""
        if self.connection is not None:
            logger.info("Closing connection to quota store database")
            self.connection.close()
            self.connection = None
