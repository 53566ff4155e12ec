"""Local clock and calendar-day keys."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        """Return the current timezone-aware local time."""


@dataclass
class SystemClock(Clock):
    """Wall clock in a fixed zone or in the host's current local zone.

    The host zone is looked up on every call so a timezone change is picked
    up without restarting.
    """

    timezone_name: str | None = None

    def now(self) -> datetime:
        """Return the current local time."""
        if self.timezone_name:
            return datetime.now(tz=ZoneInfo(self.timezone_name))
        return datetime.now().astimezone()


def date_key(day: date) -> str:
    """Format a calendar day as YYYY-MM-DD."""
    return day.isoformat()
