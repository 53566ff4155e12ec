"""Domain models for display preferences."""

from dataclasses import dataclass

DEVICE_LANGUAGE = "device"


@dataclass(frozen=True)
class DisplayPreferences:
    """Appearance and language settings."""

    is_dark_mode: bool
    is_dark_mode_set: bool
    app_language: str
