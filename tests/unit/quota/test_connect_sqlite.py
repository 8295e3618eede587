"""Unit tests for SQLite connection handler."""

from sqlite3 import OperationalError

import pytest

from quota.connect_sqlite import connect_sqlite
from models.config import SQLiteDatabaseConfiguration


def test_connect_sqlite_when_connection_established() -> None:
    """Test the connection to SQLite database residing in memory."""
    configuration = SQLiteDatabaseConfiguration(db_path=":memory:")

    connection = connect_sqlite(configuration)
    assert connection is not None
    # statements are committed immediately
    assert connection.autocommit is True
    connection.close()


def test_connect_sqlite_when_connection_error() -> None:
    """Test the connection to SQLite database that can not be opened."""
    configuration = SQLiteDatabaseConfiguration(db_path="/")

    with pytest.raises(OperationalError, match="unable to open database file"):
        _ = connect_sqlite(configuration)
