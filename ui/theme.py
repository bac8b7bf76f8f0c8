"""Light and dark stylesheets for the SkinScan window."""

import logging
import sys
from typing import Optional

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from core.settings import THEMES, AppSettings
from core.utils import get_asset_path

logger = logging.getLogger(__name__)


def load_stylesheet(theme: str) -> str:
    """QSS text for a theme, or an empty string if the file is missing."""
    path = get_asset_path(f"assets/styles/{theme}.qss")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.warning("Stylesheet %s not found, using Qt defaults", path)
        return ""


class ThemeManager:
    """Applies the stored theme to the application and persists changes."""

    LIGHT, DARK = THEMES

    def __init__(self, app: QApplication, settings: Optional[AppSettings] = None):
        self._app = app
        self._settings = settings or AppSettings()
        self._current_theme = self._settings.theme
        self._app.setFont(self._platform_font())

    @staticmethod
    def _platform_font() -> QFont:
        if sys.platform == "darwin":
            return QFont(".AppleSystemUIFont", 13)
        if sys.platform == "win32":
            return QFont("Segoe UI", 10)
        return QFont("Ubuntu", 10)

    def apply_theme(self, theme: Optional[str] = None):
        """Apply a theme (the current one by default) and remember it."""
        theme = theme or self._current_theme
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self._app.setStyleSheet(load_stylesheet(theme))
        self._settings.theme = theme
        self._current_theme = theme

    def toggle_theme(self) -> str:
        """Flip between light and dark. Returns the new theme."""
        self.apply_theme(self.LIGHT if self.is_dark else self.DARK)
        return self._current_theme

    @property
    def current_theme(self) -> str:
        return self._current_theme

    @property
    def is_dark(self) -> bool:
        return self._current_theme == self.DARK
