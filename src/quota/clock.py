"""Source of the server-side notion of "today".

Reconciliation never trusts the caller's clock. The current day is computed
by the service itself in the configured time zone, so every lazy and batch
reconciliation agrees on the same day boundary.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

import constants


class Clock(ABC):
    """Abstract clock used by reconcilers."""

    @abstractmethod
    def now(self) -> datetime:
        """Return current timezone-aware timestamp."""

    def today(self) -> date:
        """Return current calendar day."""
        return self.now().date()

    def next_reset_at(self, now: Optional[datetime] = None) -> datetime:
        """Return the timestamp at which the calendar day after `now` starts."""
        if now is None:
            now = self.now()
        tomorrow = now.date() + timedelta(days=1)
        return datetime.combine(tomorrow, time.min, tzinfo=now.tzinfo)


class SystemClock(Clock):
    """Clock backed by the system time converted to the configured time zone."""

    def __init__(self, timezone: str = constants.DEFAULT_QUOTA_TIMEZONE) -> None:
        """Initialize clock for given IANA time zone name."""
        self.timezone: tzinfo = ZoneInfo(timezone)

    def now(self) -> datetime:
        """Return current timestamp in configured time zone."""
        return datetime.now(self.timezone)

    def __str__(self) -> str:
        """Return textual representation of clock instance."""
        return f"{type(self).__name__}: time zone: {self.timezone}"
