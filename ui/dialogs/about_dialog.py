"""About box with version and skin model install status."""

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from core.model_manager import DEFAULT_MODEL, ModelManager, get_model_manager
from i18n import t

APP_VERSION = "1.0.0"


class AboutDialog(QDialog):
    """Shows where the classifier weights live and whether they are installed."""

    def __init__(self, parent=None, model_manager: ModelManager = None):
        super().__init__(parent)
        self._manager = model_manager or get_model_manager()
        self.setWindowTitle(t("about.title"))
        self.setFixedSize(440, 340)

        column = QVBoxLayout(self)
        column.setSpacing(10)

        name = QLabel(t("app.title"))
        name.setProperty("class", "sectionTitle")
        name.setAlignment(Qt.AlignmentFlag.AlignCenter)

        version = QLabel(t("about.version", version=APP_VERSION))
        version.setAlignment(Qt.AlignmentFlag.AlignCenter)
        version.setStyleSheet("color: #888;")

        blurb = QLabel(t("about.description"))
        blurb.setAlignment(Qt.AlignmentFlag.AlignCenter)
        blurb.setWordWrap(True)

        self._model_label = QLabel(self._model_summary())
        self._model_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._model_label.setWordWrap(True)
        self._model_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._model_label.setStyleSheet("font-size: 11px; color: #888;")

        folder_btn = QPushButton(t("about.open_models_folder"))
        folder_btn.setProperty("class", "secondaryButton")
        folder_btn.clicked.connect(self._open_models_folder)

        close_btn = QPushButton(t("common.close"))
        close_btn.setProperty("class", "secondaryButton")
        close_btn.clicked.connect(self.accept)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(folder_btn)
        buttons.addWidget(close_btn)
        buttons.addStretch()

        for widget in (name, version, blurb, self._model_label):
            column.addWidget(widget)
        column.addStretch()
        column.addLayout(buttons)

    def _model_summary(self) -> str:
        info = self._manager.get_model_info(DEFAULT_MODEL)
        path = self._manager.get_model_path(DEFAULT_MODEL)
        key = "about.model_installed" if self._manager.is_model_available(DEFAULT_MODEL) else "about.model_missing"
        return "\n".join((
            info.display_name,
            t("about.model_details", architecture=info.architecture, classes=info.num_classes),
            t(key, path=path),
        ))

    def model_text(self) -> str:
        return self._model_label.text()

    def _open_models_folder(self):
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(self._manager.get_models_dir())))
