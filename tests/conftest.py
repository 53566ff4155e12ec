"""Shared test fixtures."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from hydration_tracker.adapters.key_value_store import InMemoryKeyValueStore
from hydration_tracker.adapters.key_value_water_storage import KeyValueWaterStorage
from hydration_tracker.config import Settings
from hydration_tracker.containers import AppContainer
from hydration_tracker.services.clock import Clock
from hydration_tracker.services.preferences import PreferencesService
from hydration_tracker.services.tracking import TrackingService

LOCAL_TZ = timezone(timedelta(hours=-5))


@dataclass
class FixedClock(Clock):
    """Clock that only moves when a test moves it."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)

    def set(self, value: datetime) -> None:
        self.current = value


def local_time(
    year: int, month: int, day: int, hour: int = 10, minute: int = 0
) -> datetime:
    """Build an aware datetime in the test timezone."""
    return datetime(year, month, day, hour, minute, tzinfo=LOCAL_TZ)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(local_time(2024, 1, 1))


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(store: InMemoryKeyValueStore) -> KeyValueWaterStorage:
    return KeyValueWaterStorage(store)


@pytest.fixture
def tracking_service(
    storage: KeyValueWaterStorage, clock: FixedClock
) -> TrackingService:
    return TrackingService(storage=storage, clock=clock)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_path=str(tmp_path / "state.json"), timezone="UTC")


@pytest.fixture
def container(
    settings: Settings,
    storage: KeyValueWaterStorage,
    tracking_service: TrackingService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        tracking_service=tracking_service,
        preferences_service=PreferencesService(storage),
    )
