"""Domain models for charts and calendar views."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChartPoint:
    """Intake and goal for one day of a chart series."""

    date_key: str
    intake: float
    goal: float


@dataclass(frozen=True)
class ChartSummary:
    """Chart series with the aggregates shown next to it."""

    points: list[ChartPoint]
    average_intake: float
    days_goal_met: int
    current_streak: int


@dataclass(frozen=True)
class DaySummary:
    """Calendar cell data for a single day."""

    date_key: str
    intake: float
    goal: float
    progress: float
    is_today: bool
    is_future: bool
