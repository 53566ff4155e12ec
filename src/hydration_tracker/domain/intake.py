"""Domain models for water intake tracking."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class WaterUnit(str, Enum):
    """Unit the user tracks intake in."""

    ML = "ml"
    OZ = "oz"
    BOTTLE = "bottle"


@dataclass(frozen=True)
class IntakeEntry:
    """A single recorded act of drinking."""

    id: str
    timestamp: datetime
    amount: float


@dataclass(frozen=True)
class DailyRecord:
    """Archived summary of one elapsed local day."""

    date_key: str
    total_intake: float
    goal: float
    unit: WaterUnit

    @property
    def progress(self) -> float:
        """Progress ratio clamped to [0, 1]."""
        if self.goal <= 0:
            return 0.0
        return min(self.total_intake / self.goal, 1.0)

    @property
    def goal_met(self) -> bool:
        """Return True when the goal was met on this day."""
        return self.goal > 0 and self.total_intake >= self.goal


@dataclass(frozen=True)
class TrackingSnapshot:
    """Read-only view of the tracking state."""

    daily_goal: float
    unit: WaterUnit
    bottle_size: float
    current_date_key: str
    today_intake: float
    entries: tuple[IntakeEntry, ...]
    history: tuple[DailyRecord, ...]
