"""Exceptions raised by quota store and reconcilers."""

import sqlite3
from datetime import date
from functools import wraps
from typing import Any, Callable, TypeVar

import psycopg2

from log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StoreUnavailableError(Exception):
    """Quota storage can not be reached or failed to execute a statement."""

    def __init__(self, operation: str, cause: Exception) -> None:
        """Construct the exception from failed operation and driver error."""
        message = f"Quota storage failed during {operation}: {cause}"
        super().__init__(message)
        self.operation = operation


class ResetConflictError(Exception):
    """Record has already been reset by another actor."""

    def __init__(self, user_id: str, expected_last_reset_date: date) -> None:
        """Construct the exception with conflicting record identification."""
        message = (
            f"Quota record for user {user_id} no longer has "
            f"last reset date {expected_last_reset_date.isoformat()}"
        )
        super().__init__(message)
        self.user_id = user_id
        self.expected_last_reset_date = expected_last_reset_date


def store_errors(f: Callable[..., T]) -> Callable[..., T]:
    """Translate database driver errors into StoreUnavailableError."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return f(*args, **kwargs)
        except (sqlite3.Error, psycopg2.Error) as e:
            logger.error("Quota storage error in %s: %s", f.__name__, e)
            raise StoreUnavailableError(f.__name__, e) from e

    return wrapper
