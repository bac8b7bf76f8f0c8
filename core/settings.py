"""Persistent user preferences backed by QSettings."""

from typing import Optional

from PyQt6.QtCore import QSettings

ORGANIZATION = "SkinScan"
APPLICATION = "SkinScan"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"
DEFAULT_LANGUAGE = "en"
DEFAULT_CAMERA_INDEX = 0


class AppSettings:
    """Typed access to the handful of stored preferences.

    Invalid stored values fall back to the defaults instead of raising, so a
    hand-edited config file never keeps the app from starting.
    """

    def __init__(self, settings: Optional[QSettings] = None):
        self._settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)

    @property
    def theme(self) -> str:
        value = self._settings.value("theme", DEFAULT_THEME)
        return value if value in THEMES else DEFAULT_THEME

    @theme.setter
    def theme(self, value: str):
        if value not in THEMES:
            raise ValueError(f"Unknown theme: {value}")
        self._settings.setValue("theme", value)

    @property
    def language(self) -> str:
        return str(self._settings.value("language", DEFAULT_LANGUAGE))

    @property
    def camera_index(self) -> int:
        try:
            index = int(self._settings.value("camera_index", DEFAULT_CAMERA_INDEX))
        except (TypeError, ValueError):
            return DEFAULT_CAMERA_INDEX
        return index if index >= 0 else DEFAULT_CAMERA_INDEX

    @camera_index.setter
    def camera_index(self, value: int):
        if value < 0:
            raise ValueError("Camera index must be non-negative")
        self._settings.setValue("camera_index", int(value))

    def sync(self):
        self._settings.sync()
