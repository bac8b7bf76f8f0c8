"""Background worker streaming camera frames to the UI thread."""

import logging

import cv2
from PyQt6.QtCore import QThread, pyqtSignal

from core.frame_source import FrameSource

logger = logging.getLogger(__name__)


class CameraWorker(QThread):
    """Reads frames from an OpenCV capture device until stopped."""

    frame_ready = pyqtSignal(object)   # PIL.Image in RGB
    error = pyqtSignal(str)            # camera could not be opened

    FRAME_WIDTH = 640
    FRAME_HEIGHT = 480
    FRAME_INTERVAL_MS = 33  # ~30 FPS

    def __init__(self, camera_index: int = 0, parent=None):
        super().__init__(parent)
        self._camera_index = camera_index
        self._stop_requested = False
        self._streaming = False

    def run(self):
        capture = cv2.VideoCapture(self._camera_index)
        try:
            if not capture.isOpened():
                logger.warning("Camera %d could not be opened", self._camera_index)
                self.error.emit(f"Camera {self._camera_index} unavailable")
                return

            capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.FRAME_WIDTH)
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.FRAME_HEIGHT)
            capture.set(cv2.CAP_PROP_BUFFERSIZE, 1)
            logger.info("Camera %d started", self._camera_index)

            self._streaming = True
            while not self._stop_requested:
                ok, frame = capture.read()
                if not ok:
                    self.msleep(self.FRAME_INTERVAL_MS)
                    continue
                self.frame_ready.emit(FrameSource.frame_from_bgr(frame))
                self.msleep(self.FRAME_INTERVAL_MS)
        finally:
            self._streaming = False
            capture.release()

    def stop(self):
        """Ask the capture loop to exit after the current frame."""
        self._stop_requested = True

    @property
    def is_streaming(self) -> bool:
        return self._streaming
