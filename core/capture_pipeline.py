"""Capture orchestration: normalize a frame, classify it, log the outcome."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from PIL import Image

from core.image_normalizer import ImageNormalizer
from core.log_store import LogStore, get_log_store
from core.utils import (
    CaptureRecord,
    CaptureState,
    ClassificationResult,
    ClassifierError,
)

logger = logging.getLogger(__name__)


@dataclass
class CaptureRequest:
    """One user-triggered capture travelling through the pipeline."""
    request_id: int
    image: Optional[Image.Image] = None
    state: CaptureState = CaptureState.IDLE


class CapturePipeline:
    """Runs each capture through Idle -> Normalizing -> Classifying -> Completed.

    begin() and complete() run on the UI thread; classify() runs on a worker.
    Concurrent requests are neither deduplicated nor queued, so records land
    in the log in completion order.
    """

    def __init__(
        self,
        classifier,
        log_store: Optional[LogStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._classifier = classifier
        self._log_store = log_store if log_store is not None else get_log_store()
        self._clock = clock or datetime.now
        self._next_id = 1
        self._pending = 0

    @property
    def log_store(self) -> LogStore:
        return self._log_store

    @property
    def pending(self) -> int:
        """Number of requests waiting on classification."""
        return self._pending

    @property
    def state(self) -> CaptureState:
        return CaptureState.CLASSIFYING if self._pending else CaptureState.IDLE

    def begin(self, frame: Image.Image) -> CaptureRequest:
        """Normalize the frame and hand the request over to classification."""
        request = CaptureRequest(request_id=self._next_id)
        self._next_id += 1

        request.state = CaptureState.NORMALIZING
        request.image = ImageNormalizer.normalize(frame)

        request.state = CaptureState.CLASSIFYING
        self._pending += 1
        logger.debug("Capture %d classifying (%d pending)", request.request_id, self._pending)
        return request

    def classify(self, request: CaptureRequest) -> ClassificationResult:
        """Classify the normalized image. Safe to call off the UI thread."""
        try:
            return self._classifier.classify(request.image)
        except Exception:
            logger.exception("Classifier raised for capture %d", request.request_id)
            return ClassificationResult.failure(ClassifierError.PROCESSING_ERROR)

    def complete(self, request: CaptureRequest, result: ClassificationResult) -> CaptureRecord:
        """Record the outcome, successful or not, and return the request to Idle."""
        if request.state is not CaptureState.CLASSIFYING:
            raise RuntimeError(
                f"Capture {request.request_id} is {request.state.value}, not classifying"
            )

        request.state = CaptureState.COMPLETED
        self._pending -= 1
        if not result.success:
            logger.warning("Capture %d: %s", request.request_id, result.error_message)

        record = CaptureRecord.create(
            image=request.image,
            prediction=result.display_text,
            captured_at=self._clock(),
        )
        self._log_store.append(record)

        request.image = None
        request.state = CaptureState.IDLE
        return record

    def capture(self, frame: Image.Image) -> CaptureRecord:
        """Run a whole capture synchronously on the calling thread."""
        request = self.begin(frame)
        result = self.classify(request)
        return self.complete(request, result)
