"""Shared test fixtures for SkinScan."""

import io
import os
import struct
import tempfile
import zlib
from pathlib import Path
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
import torch
from PIL import Image

from core.classifier import SkinClassifier
from core.log_store import LogStore
from core.utils import ClassificationResult, Prediction


class TinySkinNet(torch.nn.Module):
    """Small stand-in for EfficientNet with the same input/output contract."""

    def __init__(self, num_classes: int):
        super().__init__()
        self.pool = torch.nn.AdaptiveAvgPool2d(1)
        self.fc = torch.nn.Linear(3, num_classes)

    def forward(self, x):
        return self.fc(torch.flatten(self.pool(x), 1))


class EmptyNet(torch.nn.Module):
    """Produces zero candidate classes."""

    def forward(self, x):
        return x.new_zeros((x.shape[0], 0))


class BrokenNet(torch.nn.Module):
    def forward(self, x):
        raise RuntimeError("inference engine failure")


class StubClassifier:
    """Returns a fixed result and remembers the image sizes it saw."""

    def __init__(self, result: ClassificationResult):
        self.result = result
        self.seen_sizes = []

    def classify(self, image):
        self.seen_sizes.append(image.size)
        return self.result


class FakeCapture:
    """Stand-in for cv2.VideoCapture yielding a fixed number of BGR frames."""

    def __init__(self, opened=True, frames=3, on_read=None):
        self._opened = opened
        self._frames = frames
        self._on_read = on_read
        self.reads = 0
        self.released = False
        self.props = {}

    def isOpened(self):
        return self._opened

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def read(self):
        self.reads += 1
        if self._on_read:
            self._on_read(self.reads)
        if self.reads > self._frames:
            return False, None
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        frame[..., 2] = 255  # red in BGR
        return True, frame

    def release(self):
        self.released = True


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def raw_frame():
    """A 300x400 (width x height) RGB camera frame."""
    return Image.fromarray(np.random.randint(0, 255, (400, 300, 3), dtype=np.uint8))


@pytest.fixture
def sample_image():
    """A 224x224 RGB image."""
    return Image.fromarray(np.random.randint(0, 255, (224, 224, 3), dtype=np.uint8))


@pytest.fixture
def truncated_image(tmp_dir):
    """A JPEG whose header parses but whose pixel data is cut short."""
    arr = np.random.randint(0, 255, (256, 256, 3), dtype=np.uint8)
    full_path = tmp_dir / "full.jpg"
    Image.fromarray(arr).save(full_path, format="JPEG", quality=95)
    data = full_path.read_bytes()

    cut_path = tmp_dir / "truncated.jpg"
    cut_path.write_bytes(data[: len(data) // 2])
    return Image.open(cut_path)


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


@pytest.fixture
def broken_png(tmp_dir):
    """A PNG whose pixel data runs into a chunk with an invalid type."""
    arr = np.random.randint(0, 255, (64, 64, 3), dtype=np.uint8)
    buffer = io.BytesIO()
    Image.fromarray(arr).save(buffer, format="PNG")
    data = buffer.getvalue()

    header, pixels = [], b""
    pos = 8
    while pos < len(data):
        (length,) = struct.unpack(">I", data[pos:pos + 4])
        kind = data[pos + 4:pos + 8]
        body = data[pos + 8:pos + 8 + length]
        pos += 12 + length
        if kind == b"IDAT":
            pixels += body
        elif kind != b"IEND":
            header.append(_png_chunk(kind, body))

    half = len(pixels) // 2
    path = tmp_dir / "broken.png"
    path.write_bytes(
        data[:8]
        + b"".join(header)
        + _png_chunk(b"IDAT", pixels[:half])
        + _png_chunk(b"\x00\x01\x02\x03", pixels[half:])
        + _png_chunk(b"IEND", b"")
    )
    return Image.open(path)


@pytest.fixture
def build_classifier(tmp_dir):
    """Factory creating a SkinClassifier around a small saved network."""

    def _build(net: torch.nn.Module, labels=None) -> SkinClassifier:
        weights_path = tmp_dir / "model.pth"
        torch.save(net.state_dict(), weights_path)
        with patch.object(SkinClassifier, "_build_model", lambda self: net):
            return SkinClassifier(model_path=str(weights_path), labels=labels)

    return _build


@pytest.fixture
def tiny_classifier(build_classifier):
    """Classifier whose softmax output is always [0.7, 0.2, 0.1]."""
    net = TinySkinNet(3)
    with torch.no_grad():
        net.fc.weight.zero_()
        net.fc.bias.copy_(torch.log(torch.tensor([0.2, 0.7, 0.1])))
    return build_classifier(net, labels=["Dermatofibroma", "Melanoma", "Vascular Lesion"])


@pytest.fixture
def melanoma_result():
    return ClassificationResult(
        success=True,
        predictions=[Prediction("Melanoma", 0.92), Prediction("Nevus", 0.05)],
        model_name="stub",
    )


@pytest.fixture
def stub_classifier(melanoma_result):
    return StubClassifier(melanoma_result)


@pytest.fixture
def log_store():
    return LogStore()


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication shared by every widget test."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _init_i18n():
    """Initialize i18n for all tests."""
    import i18n
    i18n.init("en")
