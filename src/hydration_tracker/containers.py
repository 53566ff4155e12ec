"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from hydration_tracker.adapters.key_value_store import JsonFileKeyValueStore
from hydration_tracker.adapters.key_value_water_storage import KeyValueWaterStorage
from hydration_tracker.config import Settings, parse_timezone
from hydration_tracker.services.clock import SystemClock
from hydration_tracker.services.preferences import PreferencesService
from hydration_tracker.services.tracking import TrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tracking_service: TrackingService
    preferences_service: PreferencesService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = SystemClock(timezone_name=parse_timezone(resolved_settings.timezone))
    store = JsonFileKeyValueStore(path=Path(resolved_settings.storage_path))
    storage = KeyValueWaterStorage(store)
    return AppContainer(
        settings=resolved_settings,
        tracking_service=TrackingService(storage=storage, clock=clock),
        preferences_service=PreferencesService(storage),
    )
