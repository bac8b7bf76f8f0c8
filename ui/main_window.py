"""Top-level window: Database, Scan and Log tabs behind a sidebar."""

import logging
from typing import Optional

from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.capture_pipeline import CapturePipeline
from core.classifier import SkinClassifier
from core.log_store import get_log_store
from core.settings import AppSettings
from i18n import t
from ui.database_widget import DatabaseWidget
from ui.dialogs.about_dialog import AboutDialog
from ui.log_widget import LogWidget
from ui.scan_widget import ScanWidget
from ui.theme import ThemeManager

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Sidebar navigation over the three tabs, opening on Scan.

    The camera only runs while the Scan tab is visible.
    """

    DATABASE_TAB, SCAN_TAB, LOG_TAB = range(3)
    CAMERA_CHOICES = 4

    def __init__(
        self,
        theme_manager: ThemeManager,
        pipeline: Optional[CapturePipeline] = None,
        settings: Optional[AppSettings] = None,
    ):
        super().__init__()
        self._theme_manager = theme_manager
        self._settings = settings or AppSettings()
        if pipeline is None:
            classifier = SkinClassifier()
            if not classifier.is_available:
                logger.warning("Skin model not installed; captures will log an error")
            pipeline = CapturePipeline(classifier, get_log_store())
        self._pipeline = pipeline
        self._nav_buttons = []

        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(900, 620)
        self.resize(1060, 720)

        self.setCentralWidget(self._build_central())
        self._build_menus()
        self._status_label = QLabel()
        self.statusBar().addPermanentWidget(self._status_label)
        self._unsubscribe = self._pipeline.log_store.subscribe(lambda record: self._update_status())
        self._update_status()

        self._switch_tab(self.SCAN_TAB)

    def _build_central(self) -> QWidget:
        central = QWidget()
        row = QHBoxLayout(central)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(0)

        self._database_widget = DatabaseWidget()
        self._scan_widget = ScanWidget(self._pipeline, settings=self._settings)
        self._log_widget = LogWidget(self._pipeline.log_store)

        self._stack = QStackedWidget()
        self._stack.setObjectName("contentArea")
        for widget in self._tabs():
            self._stack.addWidget(widget)

        row.addWidget(self._build_sidebar())
        row.addWidget(self._stack, 1)
        return central

    def _tabs(self):
        return (self._database_widget, self._scan_widget, self._log_widget)

    def _build_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(220)

        column = QVBoxLayout(sidebar)
        column.setContentsMargins(12, 16, 12, 16)
        column.setSpacing(4)

        logo = QLabel(t("app.title"))
        logo.setObjectName("sidebarLogo")
        tagline = QLabel(t("app.subtitle"))
        tagline.setWordWrap(True)
        tagline.setStyleSheet("font-size: 11px; color: #888; padding: 0 8px 12px 8px;")
        column.addWidget(logo)
        column.addWidget(tagline)

        entries = (
            ("sidebar.database", "\U0001f4d6"),
            ("sidebar.scan", "\U0001f4f7"),
            ("sidebar.log", "\U0001f4cb"),
        )
        for index, (key, icon) in enumerate(entries):
            button = QPushButton(f"  {icon}  {t(key)}")
            button.setProperty("class", "navButton")
            button.clicked.connect(lambda checked, i=index: self._switch_tab(i))
            column.addWidget(button)
            self._nav_buttons.append(button)

        column.addStretch()
        return sidebar

    def _switch_tab(self, index: int):
        leaving_scan = self._stack.currentIndex() == self.SCAN_TAB and index != self.SCAN_TAB
        self._stack.setCurrentIndex(index)

        for i, button in enumerate(self._nav_buttons):
            button.setProperty("active", "true" if i == index else "false")
            button.style().unpolish(button)
            button.style().polish(button)

        if leaving_scan:
            self._scan_widget.stop_camera()
        if index == self.SCAN_TAB:
            self._scan_widget.start_camera()
        elif index == self.LOG_TAB:
            self._log_widget.refresh()

    @property
    def current_tab(self) -> int:
        return self._stack.currentIndex()

    def _build_menus(self):
        bar = self.menuBar()

        file_menu = bar.addMenu(t("menu.file"))
        quit_action = QAction(t("menu.quit"), self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = bar.addMenu(t("menu.view"))
        dark_action = QAction(t("menu.toggle_dark_mode"), self)
        dark_action.setShortcut("Ctrl+D")
        dark_action.triggered.connect(self._theme_manager.toggle_theme)
        view_menu.addAction(dark_action)

        navigate_menu = bar.addMenu(t("menu.navigate"))
        for key, shortcut, index in (
            ("sidebar.database", "Ctrl+1", self.DATABASE_TAB),
            ("sidebar.scan", "Ctrl+2", self.SCAN_TAB),
            ("sidebar.log", "Ctrl+3", self.LOG_TAB),
        ):
            action = QAction(t(key), self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked, i=index: self._switch_tab(i))
            navigate_menu.addAction(action)

        camera_menu = bar.addMenu(t("menu.camera"))
        group = QActionGroup(self)
        group.setExclusive(True)
        for index in range(self.CAMERA_CHOICES):
            action = QAction(t("menu.camera_index", index=index), self)
            action.setCheckable(True)
            action.setChecked(index == self._settings.camera_index)
            action.triggered.connect(lambda checked, i=index: self.select_camera(i))
            group.addAction(action)
            camera_menu.addAction(action)

        help_menu = bar.addMenu(t("menu.help"))
        about_action = QAction(t("menu.about"), self)
        about_action.triggered.connect(lambda: AboutDialog(self).exec())
        help_menu.addAction(about_action)

    def select_camera(self, index: int):
        """Store the camera choice and restart the stream if it is showing."""
        self._settings.camera_index = index
        if self.current_tab == self.SCAN_TAB:
            self._scan_widget.stop_camera()
            self._scan_widget.start_camera()

    def _update_status(self):
        self._status_label.setText(t("status.captures", count=self._pipeline.log_store.count()))

    def status_text(self) -> str:
        return self._status_label.text()

    def closeEvent(self, event):
        """Stop the camera and let running classifications finish."""
        self._unsubscribe()
        for widget in self._tabs():
            widget.cleanup()
        QApplication.processEvents()
        event.accept()
