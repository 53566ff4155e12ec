"""Daily water tracking state: intake, rollover, streaks and charts."""

import calendar
import logging
import threading
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Protocol
from uuid import uuid4

from hydration_tracker.domain.intake import (
    DailyRecord,
    IntakeEntry,
    TrackingSnapshot,
    WaterUnit,
)
from hydration_tracker.domain.stats import ChartPoint, ChartSummary, DaySummary
from hydration_tracker.services.clock import Clock, date_key

_logger = logging.getLogger(__name__)

ML_QUICK_ADD = (100.0, 200.0, 300.0, 500.0)
OZ_QUICK_ADD = (4.0, 8.0, 12.0, 16.0)
BOTTLE_FRACTIONS = (0.25, 0.5, 0.75, 1.0)

MORNING = (5, 12)
AFTERNOON = (12, 17)
# Hours past 24 wrap into the next morning: 17:00-05:00.
EVENING = (17, 29)

CHART_RANGES = (7, 14, 30)


class WaterStorage(Protocol):
    """Persistence interface for tracking state."""

    def get_daily_goal(self) -> float:
        """Return the daily goal, 0 when unset."""

    def set_daily_goal(self, goal: float) -> None:
        """Persist the daily goal."""

    def get_unit(self) -> WaterUnit:
        """Return the unit preference."""

    def set_unit(self, unit: WaterUnit) -> None:
        """Persist the unit preference."""

    def get_bottle_size(self) -> float:
        """Return the bottle size, 0 when unset."""

    def set_bottle_size(self, size: float) -> None:
        """Persist the bottle size."""

    def get_date_key(self) -> str:
        """Return the last known local date key, empty when never set."""

    def get_today_intake(self) -> float:
        """Return today's intake total."""

    def set_today_intake(self, intake: float) -> None:
        """Persist today's intake total."""

    def get_entries(self) -> list[IntakeEntry]:
        """Return today's intake entries in insertion order."""

    def set_entries(self, entries: list[IntakeEntry]) -> None:
        """Persist today's intake entries."""

    def get_history(self) -> list[DailyRecord]:
        """Return archived daily records."""

    def set_history(self, records: list[DailyRecord]) -> None:
        """Persist archived daily records."""

    def reset_day(self, new_date_key: str) -> None:
        """Zero today's intake, clear entries and store a new date key at once."""


@dataclass
class TrackingService:
    """Owns today's intake, the goal settings and the archived history.

    State is loaded from storage on construction and every command writes
    through to storage after updating memory. Commands hold a single lock so
    rollover and archival stay atomic when called from several threads.
    """

    storage: WaterStorage
    clock: Clock
    _daily_goal: float = field(init=False, default=0.0)
    _unit: WaterUnit = field(init=False, default=WaterUnit.ML)
    _bottle_size: float = field(init=False, default=0.0)
    _current_date_key: str = field(init=False, default="")
    _today_intake: float = field(init=False, default=0.0)
    _entries: list[IntakeEntry] = field(init=False, default_factory=list)
    _history: list[DailyRecord] = field(init=False, default_factory=list)
    _lock: threading.RLock = field(
        init=False, repr=False, default_factory=threading.RLock
    )

    def __post_init__(self) -> None:
        self._daily_goal = self.storage.get_daily_goal()
        self._unit = self.storage.get_unit()
        self._bottle_size = self.storage.get_bottle_size()
        self._current_date_key = self.storage.get_date_key()
        self._today_intake = self.storage.get_today_intake()
        self._entries = self.storage.get_entries()
        self._history = self.storage.get_history()
        self.check_for_new_day_and_reset_if_needed()

    # State access

    @property
    def daily_goal(self) -> float:
        return self._daily_goal

    @property
    def unit(self) -> WaterUnit:
        return self._unit

    @property
    def bottle_size(self) -> float:
        return self._bottle_size

    @property
    def current_date_key(self) -> str:
        return self._current_date_key

    @property
    def today_intake(self) -> float:
        return self._today_intake

    @property
    def entries(self) -> list[IntakeEntry]:
        return list(self._entries)

    @property
    def history(self) -> list[DailyRecord]:
        return list(self._history)

    def snapshot(self) -> TrackingSnapshot:
        """Return an immutable copy of the current state."""
        with self._lock:
            return TrackingSnapshot(
                daily_goal=self._daily_goal,
                unit=self._unit,
                bottle_size=self._bottle_size,
                current_date_key=self._current_date_key,
                today_intake=self._today_intake,
                entries=tuple(self._entries),
                history=tuple(self._history),
            )

    # Commands

    def check_for_new_day_and_reset_if_needed(self) -> None:
        """Archive the outgoing day and reset counters when the local day changed."""
        with self._lock:
            new_key = self._today_key()
            if self._current_date_key == new_key:
                return
            old_key = self._current_date_key
            archived = bool(old_key) and self._today_intake > 0
            if archived:
                self._archive_day(
                    old_key, self._today_intake, self._daily_goal, self._unit
                )
            self._today_intake = 0.0
            self._entries = []
            self._current_date_key = new_key
            self.storage.reset_day(new_key)
            _logger.info(
                "Day rollover: old_key=%s new_key=%s archived=%s",
                old_key or "<none>",
                new_key,
                archived,
            )

    def add_intake(self, amount: float) -> IntakeEntry:
        """Record an intake amount in the current unit."""
        with self._lock:
            entry = IntakeEntry(
                id=str(uuid4()), timestamp=self.clock.now(), amount=amount
            )
            self._entries = [*self._entries, entry]
            self._today_intake = self._today_intake + amount
            self.storage.set_entries(self._entries)
            self.storage.set_today_intake(self._today_intake)
            return entry

    def undo_last_add(self) -> IntakeEntry | None:
        """Remove the most recent entry; returns it, or None when there was none."""
        with self._lock:
            if not self._entries:
                return None
            last = self._entries[-1]
            self._entries = self._entries[:-1]
            if self._entries:
                self._today_intake = max(self._today_intake - last.amount, 0.0)
            else:
                self._today_intake = 0.0
            self.storage.set_entries(self._entries)
            self.storage.set_today_intake(self._today_intake)
            return last

    def reset_today(self) -> None:
        """Discard today's intake without archiving it."""
        with self._lock:
            self._today_intake = 0.0
            self._entries = []
            self._current_date_key = self._today_key()
            self.storage.reset_day(self._current_date_key)
            _logger.info("Manual reset: date_key=%s", self._current_date_key)

    def archive_today(self) -> DailyRecord | None:
        """Snapshot the current day into history without resetting it."""
        with self._lock:
            if self._today_intake <= 0:
                return None
            record = self._archive_day(
                self._current_date_key,
                self._today_intake,
                self._daily_goal,
                self._unit,
            )
            _logger.info("Manual archive: date_key=%s", record.date_key)
            return record

    def set_goal(self, goal: float) -> None:
        """Update the daily goal, clamped at 0."""
        with self._lock:
            self._daily_goal = max(float(goal), 0.0)
            self.storage.set_daily_goal(self._daily_goal)

    def set_unit(self, unit: WaterUnit) -> None:
        """Update the unit; existing goal and intake values are not rescaled."""
        with self._lock:
            self._unit = unit
            self.storage.set_unit(unit)

    def set_bottle_size(self, size: float) -> None:
        """Update the bottle size, clamped at 0."""
        with self._lock:
            self._bottle_size = max(float(size), 0.0)
            self.storage.set_bottle_size(self._bottle_size)

    # Queries

    def progress(self) -> float:
        """Return today's progress clamped to [0, 1]."""
        if self._daily_goal <= 0:
            return 0.0
        return min(self._today_intake / self._daily_goal, 1.0)

    def remaining(self) -> float:
        """Return the amount left to reach the goal, floored at 0."""
        return max(self._daily_goal - self._today_intake, 0.0)

    def goal_reached(self) -> bool:
        """Return True when today's goal is set and met."""
        return self._daily_goal > 0 and self._today_intake >= self._daily_goal

    def is_bottle_mode(self) -> bool:
        return self._unit is WaterUnit.BOTTLE

    def display_unit(self) -> str:
        """Return the unit label shown next to amounts."""
        return "bottles" if self.is_bottle_mode() else self._unit.value

    def quick_add_amounts(self) -> list[float]:
        """Return the preset amounts offered for one-tap logging."""
        if self.is_bottle_mode() and self._bottle_size > 0:
            return [self._bottle_size * fraction for fraction in BOTTLE_FRACTIONS]
        if self._unit is WaterUnit.ML:
            return list(ML_QUICK_ADD)
        return list(OZ_QUICK_ADD)

    def current_streak(self) -> int:
        """Count consecutive goal-met days ending today or yesterday.

        Today counts when its goal is already met. The walk over history
        stops at the first day that is missing or did not meet its goal.
        """
        with self._lock:
            today = self.clock.now().date()
            current_key = date_key(today)
            streak = 1 if self.goal_reached() else 0
            expected = today - timedelta(days=1)
            for record in sorted(
                self._history, key=lambda item: item.date_key, reverse=True
            ):
                if record.date_key == current_key:
                    continue
                if record.date_key == date_key(expected) and record.goal_met:
                    streak += 1
                    expected -= timedelta(days=1)
                    continue
                break
            return streak

    def intake_by_period(self, start_hour: int, end_hour: int) -> float:
        """Sum today's entries whose local hour falls in [start_hour, end_hour).

        An end hour above 24 wraps past midnight.
        """
        tz = self.clock.now().tzinfo
        total = 0.0
        for entry in self._entries:
            hour = entry.timestamp.astimezone(tz).hour
            if end_hour <= 24:
                matched = start_hour <= hour < end_hour
            else:
                matched = hour >= start_hour or hour < end_hour - 24
            if matched:
                total += entry.amount
        return total

    def morning_intake(self) -> float:
        return self.intake_by_period(*MORNING)

    def afternoon_intake(self) -> float:
        return self.intake_by_period(*AFTERNOON)

    def evening_intake(self) -> float:
        return self.intake_by_period(*EVENING)

    def chart_data(self, last_days: int) -> list[ChartPoint]:
        """Return one point per day for the last N days, oldest first."""
        with self._lock:
            today = self.clock.now().date()
            current_key = date_key(today)
            by_key = {record.date_key: record for record in self._history}
            points: list[ChartPoint] = []
            for offset in range(last_days - 1, -1, -1):
                key = date_key(today - timedelta(days=offset))
                if key == current_key:
                    points.append(ChartPoint(key, self._today_intake, self._daily_goal))
                    continue
                record = by_key.get(key)
                if record is None:
                    points.append(ChartPoint(key, 0.0, self._daily_goal))
                else:
                    points.append(ChartPoint(key, record.total_intake, record.goal))
            return points

    def chart_summary(self, last_days: int) -> ChartSummary:
        """Return chart points with average intake, goal-met days and streak."""
        points = self.chart_data(last_days)
        average = sum(point.intake for point in points) / len(points) if points else 0.0
        return ChartSummary(
            points=points,
            average_intake=average,
            days_goal_met=sum(
                1 for point in points if point.goal > 0 and point.intake >= point.goal
            ),
            current_streak=self.current_streak(),
        )

    def record_for(self, key: str) -> DailyRecord | None:
        """Return the archived record for a date key, if any."""
        for record in self._history:
            if record.date_key == key:
                return record
        return None

    def day_summary(self, day: date) -> DaySummary:
        """Return calendar data for a day: live for today, archived otherwise."""
        with self._lock:
            today = self.clock.now().date()
            key = date_key(day)
            if day == today:
                intake, goal, progress = (
                    self._today_intake,
                    self._daily_goal,
                    self.progress(),
                )
            elif (record := self.record_for(key)) is not None:
                intake, goal, progress = (
                    record.total_intake,
                    record.goal,
                    record.progress,
                )
            else:
                intake, goal, progress = 0.0, 0.0, 0.0
            return DaySummary(
                date_key=key,
                intake=intake,
                goal=goal,
                progress=progress,
                is_today=day == today,
                is_future=day > today,
            )

    def month_summary(self, year: int, month: int) -> list[DaySummary]:
        """Return one calendar cell per day of the month."""
        _, days = calendar.monthrange(year, month)
        return [self.day_summary(date(year, month, day)) for day in range(1, days + 1)]

    def _today_key(self) -> str:
        return date_key(self.clock.now().date())

    def _archive_day(
        self, key: str, intake: float, goal: float, unit: WaterUnit
    ) -> DailyRecord:
        record = DailyRecord(date_key=key, total_intake=intake, goal=goal, unit=unit)
        history = [item for item in self._history if item.date_key != key]
        history.append(record)
        history.sort(key=lambda item: item.date_key, reverse=True)
        self._history = history
        self.storage.set_history(history)
        return record
