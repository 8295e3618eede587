"""Decorator that makes sure there's an active connection to storage."""

from functools import wraps
from typing import Any, Callable, TypeVar

from log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def connection(f: Callable[..., T]) -> Callable[..., T]:
    """Reconnect to storage before the call if the connection has been lost.

    The decorated method must belong to an object providing `connected()` and
    `connect()` methods.
    """

    @wraps(f)
    def wrapper(connectable: Any, *args: Any, **kwargs: Any) -> T:
        if not connectable.connected():
            logger.info("Reconnecting to storage before calling %s", f.__name__)
            connectable.connect()
        return f(connectable, *args, **kwargs)

    return wrapper
