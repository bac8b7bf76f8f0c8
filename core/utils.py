"""Shared utilities, dataclasses, formatting, and platform-specific paths."""

import math
import os
import sys
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from PIL import Image


# --- Type aliases ---

LogListener = Callable[["CaptureRecord"], None]


# --- Enums ---

class ClassifierError(Enum):
    MODEL_UNAVAILABLE = "model_unavailable"
    NO_RESULT = "no_result"
    PROCESSING_ERROR = "processing_error"


ERROR_MESSAGES = {
    ClassifierError.MODEL_UNAVAILABLE: "Failed to load model",
    ClassifierError.NO_RESULT: "No predictions found",
    ClassifierError.PROCESSING_ERROR: "Error making prediction",
}


class CaptureState(Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    CLASSIFYING = "classifying"
    COMPLETED = "completed"


# --- Dataclasses ---

@dataclass(frozen=True)
class Prediction:
    """A single (label, confidence) pair from the classifier."""
    label: str
    confidence: float


@dataclass
class ClassificationResult:
    """Outcome of one classify call."""
    success: bool
    predictions: List[Prediction] = field(default_factory=list)
    error: Optional[ClassifierError] = None
    error_message: str = ""
    processing_time_ms: int = 0
    model_name: str = ""

    @classmethod
    def failure(cls, error: ClassifierError, model_name: str = "") -> "ClassificationResult":
        return cls(
            success=False,
            error=error,
            error_message=ERROR_MESSAGES[error],
            model_name=model_name,
        )

    @property
    def top(self) -> Optional[Prediction]:
        return self.predictions[0] if self.predictions else None

    @property
    def display_text(self) -> str:
        """Formatted top prediction, or the error description on failure."""
        if self.success and self.top is not None:
            return format_prediction(self.top.label, self.top.confidence)
        return self.error_message or ERROR_MESSAGES[ClassifierError.NO_RESULT]


@dataclass(frozen=True)
class CaptureRecord:
    """One completed scan. Immutable once constructed."""
    identifier: str
    image: Image.Image
    captured_at: datetime
    prediction: str

    @classmethod
    def create(
        cls,
        image: Image.Image,
        prediction: str,
        captured_at: Optional[datetime] = None,
    ) -> "CaptureRecord":
        """Build a record that owns its own copy of the image."""
        return cls(
            identifier=uuid.uuid4().hex,
            image=image.copy(),
            captured_at=captured_at or datetime.now(),
            prediction=prediction,
        )


# --- Formatting ---

def format_prediction(label: str, confidence: float) -> str:
    """Render a prediction as '<label> (<pct>% confidence)'."""
    if not math.isfinite(confidence):
        confidence = 0.0
    pct = min(max(confidence * 100, 0.0), 100.0)
    return f"{label} ({pct:.2f}% confidence)"


def format_timestamp(value: datetime) -> str:
    """Medium date with short time, e.g. 'Oct 19, 2026 at 3:04 PM'."""
    hour = value.strftime("%I").lstrip("0") or "12"
    return f"{value:%b} {value.day}, {value.year} at {hour}:{value:%M %p}"


def format_file_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


# --- Platform-specific paths ---

def get_data_dir() -> Path:
    """Get the platform-specific application data directory."""
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support" / "SkinScan"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home())) / "SkinScan"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "skinscan"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_models_dir() -> Path:
    """Get the directory for installed AI models."""
    models_dir = get_data_dir() / "models"
    models_dir.mkdir(parents=True, exist_ok=True)
    return models_dir


def get_asset_path(relative_path: str) -> str:
    """Get absolute path to an asset file, handling PyInstaller frozen apps."""
    if getattr(sys, "frozen", False):
        base = Path(sys._MEIPASS)
    else:
        base = Path(__file__).parent.parent
    return str(base / relative_path)


def get_platform() -> str:
    """Get the current platform name."""
    if sys.platform == "darwin":
        return "macos"
    elif sys.platform == "win32":
        return "windows"
    return "linux"


# Deep links into the OS camera privacy settings
CAMERA_SETTINGS_URLS = {
    "macos": "x-apple.systempreferences:com.apple.preference.security?Privacy_Camera",
    "windows": "ms-settings:privacy-webcam",
    "linux": "settings://privacy",
}


def get_camera_settings_url() -> str:
    """URL that opens the camera permission settings for this platform."""
    return CAMERA_SETTINGS_URLS[get_platform()]
