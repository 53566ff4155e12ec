"""Tests for the preferences service."""

from hydration_tracker.adapters.key_value_water_storage import KeyValueWaterStorage
from hydration_tracker.services.preferences import PreferencesService


def test_defaults(storage: KeyValueWaterStorage) -> None:
    preferences = PreferencesService(storage).get_preferences()

    assert preferences.is_dark_mode is False
    assert preferences.is_dark_mode_set is False
    assert preferences.app_language == "device"


def test_set_dark_mode_and_language(storage: KeyValueWaterStorage) -> None:
    service = PreferencesService(storage)

    service.set_dark_mode(True)
    service.set_app_language("de")

    preferences = service.get_preferences()
    assert preferences.is_dark_mode is True
    assert preferences.is_dark_mode_set is True
    assert preferences.app_language == "de"


def test_blank_language_falls_back_to_device(storage: KeyValueWaterStorage) -> None:
    service = PreferencesService(storage)
    service.set_app_language("fr")

    service.set_app_language("  ")

    assert service.get_preferences().app_language == "device"
