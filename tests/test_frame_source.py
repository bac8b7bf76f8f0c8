"""Tests for core.frame_source module."""

import numpy as np
from PIL import Image

from core.frame_source import FrameSource


class TestFrameFromBgr:
    def test_swaps_channels(self):
        bgr = np.zeros((4, 6, 3), dtype=np.uint8)
        bgr[..., 0] = 255  # blue
        image = FrameSource.frame_from_bgr(bgr)
        assert image.mode == "RGB"
        assert image.size == (6, 4)
        assert image.getpixel((0, 0)) == (0, 0, 255)

    def test_grayscale_frame(self):
        gray = np.full((4, 6), 128, dtype=np.uint8)
        image = FrameSource.frame_from_bgr(gray)
        assert image.mode == "RGB"
        assert image.getpixel((2, 2)) == (128, 128, 128)


class TestFrameSource:
    def test_no_frame_initially(self):
        source = FrameSource()
        assert source.has_frame is False
        assert source.latest() is None
        assert source.capture_still() is None
        assert source.frame_count == 0

    def test_publish_replaces_latest(self, raw_frame, sample_image):
        source = FrameSource()
        source.publish(raw_frame)
        source.publish(sample_image)
        assert source.latest() is sample_image
        assert source.frame_count == 2

    def test_capture_still_is_copy(self, raw_frame):
        source = FrameSource()
        source.publish(raw_frame)
        still = source.capture_still()
        assert still is not raw_frame
        assert still.size == raw_frame.size
        assert np.array_equal(np.array(still), np.array(raw_frame))

    def test_still_unaffected_by_later_frames(self):
        source = FrameSource()
        frame = Image.new("RGB", (8, 8), (1, 2, 3))
        source.publish(frame)
        still = source.capture_still()
        frame.putpixel((0, 0), (9, 9, 9))
        assert still.getpixel((0, 0)) == (1, 2, 3)

    def test_capture_still_converts_to_rgb(self):
        source = FrameSource()
        source.publish(Image.new("RGBA", (8, 8), (1, 2, 3, 4)))
        assert source.capture_still().mode == "RGB"

    def test_clear(self, raw_frame):
        source = FrameSource()
        source.publish(raw_frame)
        source.clear()
        assert source.has_frame is False
        assert source.capture_still() is None
