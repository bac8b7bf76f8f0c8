"""Background worker that classifies one capture off the UI thread."""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from core.capture_pipeline import CapturePipeline, CaptureRequest
from core.utils import ClassificationResult, ClassifierError

logger = logging.getLogger(__name__)


class ClassificationWorker(QThread):
    """Runs a single classify call and reports it exactly once."""

    classified = pyqtSignal(object, object)  # CaptureRequest, ClassificationResult

    def __init__(self, pipeline: CapturePipeline, request: CaptureRequest, parent=None):
        super().__init__(parent)
        self._pipeline = pipeline
        self._request = request

    @property
    def request(self) -> CaptureRequest:
        return self._request

    def run(self):
        try:
            result = self._pipeline.classify(self._request)
        except Exception as e:
            logger.exception("Classification worker failed")
            result = ClassificationResult.failure(ClassifierError.PROCESSING_ERROR)
            result.error_message = f"{result.error_message}: {e}"
        self.classified.emit(self._request, result)
