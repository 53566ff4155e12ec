"""Typed tracker storage on top of a key-value store."""

import logging
from dataclasses import dataclass

from hydration_tracker.adapters.codec import (
    decode_entries,
    decode_history,
    encode_entries,
    encode_history,
)
from hydration_tracker.adapters.key_value_store import KeyValueStore
from hydration_tracker.domain.intake import DailyRecord, IntakeEntry, WaterUnit
from hydration_tracker.domain.preferences import DEVICE_LANGUAGE
from hydration_tracker.services.preferences import PreferencesStorage
from hydration_tracker.services.tracking import WaterStorage

_logger = logging.getLogger(__name__)

DAILY_GOAL = "dailyGoal"
UNIT = "unit"
DATE_KEY = "dateKey"
TODAY_INTAKE = "todayIntake"
ENTRIES = "entries"
HISTORY = "history"
BOTTLE_SIZE = "bottleSize"
IS_DARK_MODE = "isDarkMode"
IS_DARK_MODE_SET = "isDarkModeSet"
APP_LANGUAGE = "appLanguage"

_EMPTY_LIST = "[]"


@dataclass
class KeyValueWaterStorage(WaterStorage, PreferencesStorage):
    """Stores tracker fields under fixed keys; lists are kept as JSON text."""

    store: KeyValueStore

    def get_daily_goal(self) -> float:
        """Return the stored goal."""
        return _to_float(self.store.get(DAILY_GOAL))

    def set_daily_goal(self, goal: float) -> None:
        """Store the goal."""
        self.store.set(DAILY_GOAL, goal)

    def get_unit(self) -> WaterUnit:
        """Return the stored unit, falling back to ml for unknown values."""
        raw = self.store.get(UNIT)
        if raw is None:
            return WaterUnit.ML
        try:
            return WaterUnit(raw)
        except ValueError:
            _logger.warning("Unknown stored unit, using ml: unit=%s", raw)
            return WaterUnit.ML

    def set_unit(self, unit: WaterUnit) -> None:
        """Store the unit."""
        self.store.set(UNIT, unit.value)

    def get_bottle_size(self) -> float:
        """Return the stored bottle size."""
        return _to_float(self.store.get(BOTTLE_SIZE))

    def set_bottle_size(self, size: float) -> None:
        """Store the bottle size."""
        self.store.set(BOTTLE_SIZE, size)

    def get_date_key(self) -> str:
        """Return the stored date key."""
        raw = self.store.get(DATE_KEY)
        return raw if isinstance(raw, str) else ""

    def get_today_intake(self) -> float:
        """Return the stored intake total."""
        return _to_float(self.store.get(TODAY_INTAKE))

    def set_today_intake(self, intake: float) -> None:
        """Store the intake total."""
        self.store.set(TODAY_INTAKE, intake)

    def get_entries(self) -> list[IntakeEntry]:
        """Return stored entries."""
        return decode_entries(self.store.get(ENTRIES))

    def set_entries(self, entries: list[IntakeEntry]) -> None:
        """Store entries."""
        self.store.set(ENTRIES, encode_entries(entries))

    def get_history(self) -> list[DailyRecord]:
        """Return stored history."""
        return decode_history(self.store.get(HISTORY))

    def set_history(self, records: list[DailyRecord]) -> None:
        """Store history."""
        self.store.set(HISTORY, encode_history(records))

    def reset_day(self, new_date_key: str) -> None:
        """Reset today's fields in a single transaction."""
        with self.store.transaction() as draft:
            draft[TODAY_INTAKE] = 0.0
            draft[ENTRIES] = _EMPTY_LIST
            draft[DATE_KEY] = new_date_key

    def get_is_dark_mode(self) -> bool:
        """Return the dark mode flag."""
        return self.store.get(IS_DARK_MODE) is True

    def get_is_dark_mode_set(self) -> bool:
        """Return whether dark mode was chosen explicitly."""
        return self.store.get(IS_DARK_MODE_SET) is True

    def set_is_dark_mode(self, dark: bool) -> None:
        """Store the dark mode flag and mark it as chosen."""
        with self.store.transaction() as draft:
            draft[IS_DARK_MODE] = dark
            draft[IS_DARK_MODE_SET] = True

    def get_app_language(self) -> str:
        """Return the app language."""
        raw = self.store.get(APP_LANGUAGE)
        return raw if isinstance(raw, str) and raw else DEVICE_LANGUAGE

    def set_app_language(self, language: str) -> None:
        """Store the app language."""
        self.store.set(APP_LANGUAGE, language)


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
