"""Photo log tab listing every capture of this session."""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.image_normalizer import ImageNormalizer
from core.log_store import LogStore
from core.utils import CaptureRecord, format_timestamp
from i18n import t
from ui.dialogs.photo_detail_dialog import PhotoDetailDialog


class _LogCard(QWidget):
    """Single capture card: thumbnail, date, and prediction."""

    def __init__(self, record: CaptureRecord, parent=None):
        super().__init__(parent)
        self._record = record
        self._setup_ui()

    def _setup_ui(self):
        self.setObjectName("resultCard")
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(16)

        # Thumbnail
        thumb_label = QLabel()
        thumb_label.setFixedSize(100, 100)
        thumb_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        pixmap = QPixmap()
        pixmap.loadFromData(ImageNormalizer.create_thumbnail(self._record.image, (100, 100)))
        if not pixmap.isNull():
            thumb_label.setPixmap(pixmap)
        else:
            thumb_label.setText("\U0001f4f7")
            thumb_label.setStyleSheet("font-size: 28px; color: #888;")

        # Info
        info_layout = QVBoxLayout()
        info_layout.setSpacing(2)

        date_label = QLabel(t("log.date", date=format_timestamp(self._record.captured_at)))
        date_label.setStyleSheet("font-size: 12px;")

        prediction_label = QLabel(t("log.prediction", prediction=self._record.prediction))
        prediction_label.setProperty("class", "logPrediction")
        prediction_label.setWordWrap(True)

        info_layout.addWidget(date_label)
        info_layout.addWidget(prediction_label)
        info_layout.addStretch()

        view_btn = QPushButton(t("log.view"))
        view_btn.setProperty("class", "secondaryButton")
        view_btn.setFixedWidth(70)
        view_btn.clicked.connect(self._open_detail)

        layout.addWidget(thumb_label)
        layout.addLayout(info_layout, 1)
        layout.addWidget(view_btn)

    def _open_detail(self):
        PhotoDetailDialog(self._record, parent=self).exec()


class LogWidget(QWidget):
    """Browse the captures taken since the app started, oldest first."""

    def __init__(self, log_store: LogStore, parent=None):
        super().__init__(parent)
        self._log_store = log_store
        self._setup_ui()
        self._load_log()
        self._unsubscribe = self._log_store.subscribe(self._on_record_added)

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        self._container = QWidget()
        self._layout = QVBoxLayout(self._container)
        self._layout.setContentsMargins(32, 24, 32, 24)
        self._layout.setSpacing(16)

        title = QLabel(t("log.title"))
        title.setProperty("class", "sectionTitle")

        subtitle = QLabel(t("log.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        self._layout.addWidget(title)
        self._layout.addWidget(subtitle)

        # Content area for cards
        self._cards_layout = QVBoxLayout()
        self._cards_layout.setSpacing(8)
        self._layout.addLayout(self._cards_layout)
        self._layout.addStretch()

        scroll.setWidget(self._container)
        outer.addWidget(scroll)

    def _load_log(self):
        """Rebuild the card list from the log store."""
        while self._cards_layout.count():
            item = self._cards_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        records = self._log_store.all()
        if not records:
            empty_label = QLabel(t("log.empty"))
            empty_label.setProperty("class", "logEmpty")
            empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self._cards_layout.addWidget(empty_label)
            return

        for record in records:
            self._cards_layout.addWidget(_LogCard(record))

    def _on_record_added(self, record: CaptureRecord):
        self._load_log()

    def card_count(self) -> int:
        return sum(
            1 for i in range(self._cards_layout.count())
            if isinstance(self._cards_layout.itemAt(i).widget(), _LogCard)
        )

    def refresh(self):
        """Reload cards from the log store."""
        self._load_log()

    def cleanup(self):
        self._unsubscribe()
