"""Detail view of one logged capture."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from core.utils import CaptureRecord, format_timestamp
from i18n import t
from ui.components.camera_preview import pil_to_pixmap
from ui.components.disclaimer_banner import DisclaimerBanner


class PhotoDetailDialog(QDialog):
    """Shows the normalized capture with its date and prediction."""

    IMAGE_SIZE = 360

    def __init__(self, record: CaptureRecord, parent=None):
        super().__init__(parent)
        self._record = record
        self._setup_ui()

    def _setup_ui(self):
        self.setWindowTitle(t("detail.title"))
        self.setMinimumWidth(440)

        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._image_label.setPixmap(pil_to_pixmap(self._record.image).scaled(
            self.IMAGE_SIZE, self.IMAGE_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        ))

        date_label = QLabel(t("log.date", date=format_timestamp(self._record.captured_at)))
        date_label.setProperty("class", "sectionTitle")
        date_label.setStyleSheet("font-size: 15px;")

        self._prediction_label = QLabel(t("log.prediction", prediction=self._record.prediction))
        self._prediction_label.setProperty("class", "logPrediction")
        self._prediction_label.setStyleSheet("font-size: 15px; font-weight: bold;")
        self._prediction_label.setWordWrap(True)

        close_btn = QPushButton(t("common.close"))
        close_btn.setProperty("class", "secondaryButton")
        close_btn.clicked.connect(self.accept)

        layout.addWidget(self._image_label)
        layout.addWidget(date_label)
        layout.addWidget(self._prediction_label)
        layout.addWidget(DisclaimerBanner(compact=True))
        layout.addWidget(close_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    def prediction_text(self) -> str:
        return self._prediction_label.text()
