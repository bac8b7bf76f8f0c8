"""Holder for the most recent camera frame."""

from typing import Optional

import cv2
import numpy as np
from PIL import Image


class FrameSource:
    """Latest-frame buffer fed by the camera worker.

    Frames arrive through a queued Qt signal, so publish() and capture_still()
    both run on the UI thread.
    """

    def __init__(self):
        self._latest: Optional[Image.Image] = None
        self._frame_count = 0

    @staticmethod
    def frame_from_bgr(frame: np.ndarray) -> Image.Image:
        """Convert an OpenCV BGR frame into an RGB PIL image."""
        if frame.ndim == 2:
            return Image.fromarray(frame).convert("RGB")
        return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

    def publish(self, frame: Image.Image) -> None:
        """Replace the latest frame."""
        self._latest = frame
        self._frame_count += 1

    def latest(self) -> Optional[Image.Image]:
        return self._latest

    def capture_still(self) -> Optional[Image.Image]:
        """Snapshot copy of the latest frame in RGB, or None before the first frame."""
        if self._latest is None:
            return None
        still = self._latest.copy()
        if still.mode != "RGB":
            still = still.convert("RGB")
        return still

    @property
    def has_frame(self) -> bool:
        return self._latest is not None

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def clear(self) -> None:
        """Drop the buffered frame (camera stopped)."""
        self._latest = None
