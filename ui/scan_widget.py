"""Camera scan tab: live preview, capture button, and latest prediction."""

import logging
from typing import List, Optional

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QDesktopServices, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.capture_pipeline import CapturePipeline, CaptureRequest
from core.frame_source import FrameSource
from core.settings import AppSettings
from core.utils import ClassificationResult, get_camera_settings_url
from i18n import t
from ui.components.camera_preview import CameraPreview
from ui.components.disclaimer_banner import DisclaimerBanner
from workers.camera_worker import CameraWorker
from workers.classification_worker import ClassificationWorker

logger = logging.getLogger(__name__)


class ScanWidget(QWidget):
    """Captures skin photos from the camera and classifies them."""

    CAMERA_PAGE = 0
    PERMISSION_PAGE = 1

    def __init__(self, pipeline: CapturePipeline, settings: Optional[AppSettings] = None, parent=None):
        super().__init__(parent)
        self._pipeline = pipeline
        self._settings = settings or AppSettings()
        self._frame_source = FrameSource()
        self._camera_worker: Optional[CameraWorker] = None
        self._workers: List[ClassificationWorker] = []
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("scan.title"))
        title.setProperty("class", "sectionTitle")

        self._disclaimer = DisclaimerBanner()

        self._stack = QStackedWidget()

        # Camera page
        camera_page = QWidget()
        camera_layout = QVBoxLayout(camera_page)
        camera_layout.setContentsMargins(0, 0, 0, 0)
        camera_layout.setSpacing(16)

        self._preview = CameraPreview()

        self._prediction_label = QLabel(t("scan.prediction_placeholder"))
        self._prediction_label.setObjectName("predictionLabel")
        self._prediction_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._prediction_label.setWordWrap(True)

        self._capture_btn = QPushButton(t("scan.take_photo"))
        self._capture_btn.setObjectName("primaryButton")
        self._capture_btn.setEnabled(False)

        camera_layout.addWidget(self._preview, 1)
        camera_layout.addWidget(self._prediction_label)
        camera_layout.addWidget(self._capture_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        # Permission page
        permission_page = QWidget()
        permission_layout = QVBoxLayout(permission_page)
        permission_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        permission_layout.setSpacing(16)

        self._permission_label = QLabel(t("scan.camera_required"))
        self._permission_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._permission_label.setWordWrap(True)
        self._permission_label.setMaximumWidth(420)

        self._settings_btn = QPushButton(t("scan.open_settings"))
        self._settings_btn.setObjectName("primaryButton")

        self._retry_btn = QPushButton(t("scan.retry_camera"))
        self._retry_btn.setProperty("class", "secondaryButton")

        permission_layout.addWidget(self._permission_label, alignment=Qt.AlignmentFlag.AlignCenter)
        permission_layout.addWidget(self._settings_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        permission_layout.addWidget(self._retry_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self._stack.addWidget(camera_page)      # 0
        self._stack.addWidget(permission_page)  # 1

        layout.addWidget(title)
        layout.addWidget(self._disclaimer)
        layout.addWidget(self._stack, 1)

    def _connect_signals(self):
        self._capture_btn.clicked.connect(self.take_photo)
        self._settings_btn.clicked.connect(self._open_settings)
        self._retry_btn.clicked.connect(self.start_camera)
        shortcut = QShortcut(QKeySequence(Qt.Key.Key_Space), self)
        shortcut.activated.connect(self.take_photo)

    # --- Camera ---

    def start_camera(self):
        """Start streaming frames from the configured camera."""
        if self._camera_worker and self._camera_worker.isRunning():
            return

        self._frame_source.clear()
        self._capture_btn.setEnabled(False)
        self._stack.setCurrentIndex(self.CAMERA_PAGE)
        self._preview.reset()

        worker = CameraWorker(self._settings.camera_index, parent=self)
        worker.frame_ready.connect(lambda frame, w=worker: self._on_worker_frame(w, frame))
        worker.error.connect(lambda message, w=worker: self._on_worker_error(w, message))
        worker.finished.connect(lambda w=worker: self._on_camera_finished(w))
        self._camera_worker = worker
        worker.start()

    def stop_camera(self):
        worker, self._camera_worker = self._camera_worker, None
        if worker is not None and worker.isRunning():
            worker.stop()
            worker.wait(3000)
        self._frame_source.clear()
        self._capture_btn.setEnabled(False)

    def _on_worker_frame(self, worker: CameraWorker, frame):
        # Frames still queued from a stopped or replaced camera are dropped
        if worker is self._camera_worker:
            self._on_frame(frame)

    def _on_worker_error(self, worker: CameraWorker, message: str):
        if worker is self._camera_worker:
            self._on_camera_error(message)

    def _on_camera_finished(self, worker: CameraWorker):
        if worker is self._camera_worker:
            self._camera_worker = None
        worker.deleteLater()

    def _on_frame(self, frame):
        self._frame_source.publish(frame)
        self._preview.set_frame(frame)
        if not self._capture_btn.isEnabled():
            self._capture_btn.setEnabled(True)

    def _on_camera_error(self, message: str):
        logger.warning("Camera unavailable: %s", message)
        self._capture_btn.setEnabled(False)
        self._stack.setCurrentIndex(self.PERMISSION_PAGE)

    def _open_settings(self):
        QDesktopServices.openUrl(QUrl(get_camera_settings_url()))

    # --- Capture ---

    def take_photo(self):
        """Snapshot the latest frame and classify it in the background.

        Repeated taps each start their own request; nothing is queued or dropped.
        """
        frame = self._frame_source.capture_still()
        if frame is None:
            return

        request = self._pipeline.begin(frame)
        worker = ClassificationWorker(self._pipeline, request, parent=self)
        worker.classified.connect(self._on_classified)
        worker.finished.connect(self._on_worker_finished)
        self._workers.append(worker)
        self._prediction_label.setText(t("scan.analyzing"))
        worker.start()

    def _on_classified(self, request: CaptureRequest, result: ClassificationResult):
        record = self._pipeline.complete(request, result)
        self._prediction_label.setText(record.prediction)

    def _on_worker_finished(self):
        worker = self.sender()
        if worker in self._workers:
            self._workers.remove(worker)
            worker.deleteLater()

    @property
    def frame_source(self) -> FrameSource:
        return self._frame_source

    @property
    def showing_permission_prompt(self) -> bool:
        return self._stack.currentIndex() == self.PERMISSION_PAGE

    @property
    def can_capture(self) -> bool:
        return self._capture_btn.isEnabled()

    def prediction_text(self) -> str:
        return self._prediction_label.text()

    def cleanup(self):
        self.stop_camera()
        for worker in list(self._workers):
            if worker.isRunning() and not worker.wait(5000):
                worker.terminate()
                worker.wait(2000)
