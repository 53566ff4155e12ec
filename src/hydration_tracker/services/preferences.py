"""Display preferences service."""

from dataclasses import dataclass
from typing import Protocol

from hydration_tracker.domain.preferences import DEVICE_LANGUAGE, DisplayPreferences


class PreferencesStorage(Protocol):
    """Persistence interface for display preferences."""

    def get_is_dark_mode(self) -> bool:
        """Return the stored dark mode flag."""

    def get_is_dark_mode_set(self) -> bool:
        """Return True once the user has chosen a dark mode value."""

    def set_is_dark_mode(self, dark: bool) -> None:
        """Persist the dark mode flag and mark it as chosen."""

    def get_app_language(self) -> str:
        """Return the app language code or "device"."""

    def set_app_language(self, language: str) -> None:
        """Persist the app language code."""


@dataclass
class PreferencesService:
    """Service for appearance and language settings."""

    storage: PreferencesStorage

    def get_preferences(self) -> DisplayPreferences:
        """Return all display preferences."""
        return DisplayPreferences(
            is_dark_mode=self.storage.get_is_dark_mode(),
            is_dark_mode_set=self.storage.get_is_dark_mode_set(),
            app_language=self.storage.get_app_language(),
        )

    def set_dark_mode(self, dark: bool) -> None:
        """Persist an explicit dark mode choice."""
        self.storage.set_is_dark_mode(dark)

    def set_app_language(self, language: str) -> None:
        """Persist the app language; blank values fall back to the device."""
        self.storage.set_app_language(language.strip() or DEVICE_LANGUAGE)
