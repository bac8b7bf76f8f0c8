"""Tests for core.utils module."""

from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from core.utils import (
    CAMERA_SETTINGS_URLS,
    ERROR_MESSAGES,
    CaptureState,
    ClassificationResult,
    ClassifierError,
    Prediction,
    format_file_size,
    format_prediction,
    format_timestamp,
    get_asset_path,
    get_camera_settings_url,
    get_data_dir,
    get_models_dir,
    get_platform,
)


class TestFormatPrediction:
    def test_two_decimals(self):
        assert format_prediction("Melanoma", 0.8765) == "Melanoma (87.65% confidence)"

    def test_full_confidence(self):
        assert format_prediction("Melanoma", 1.0) == "Melanoma (100.00% confidence)"

    def test_zero_confidence(self):
        assert format_prediction("Nevus", 0.0) == "Nevus (0.00% confidence)"

    def test_small_confidence(self):
        assert format_prediction("Candidiasis", 0.0004) == "Candidiasis (0.04% confidence)"

    def test_clamps_above_one(self):
        assert format_prediction("Melanoma", 1.2) == "Melanoma (100.00% confidence)"

    def test_clamps_below_zero(self):
        assert format_prediction("Melanoma", -0.1) == "Melanoma (0.00% confidence)"

    def test_label_with_parentheses(self):
        assert format_prediction("Tinea (Ringworm)", 0.5) == "Tinea (Ringworm) (50.00% confidence)"

    @pytest.mark.parametrize("confidence", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_reads_as_zero(self, confidence):
        assert format_prediction("Melanoma", confidence) == "Melanoma (0.00% confidence)"


class TestFormatTimestamp:
    def test_afternoon(self):
        assert format_timestamp(datetime(2026, 10, 19, 15, 4)) == "Oct 19, 2026 at 3:04 PM"

    def test_morning(self):
        assert format_timestamp(datetime(2026, 1, 5, 9, 30)) == "Jan 5, 2026 at 9:30 AM"

    def test_midnight(self):
        assert format_timestamp(datetime(2026, 3, 1, 0, 7)) == "Mar 1, 2026 at 12:07 AM"

    def test_noon(self):
        assert format_timestamp(datetime(2026, 3, 1, 12, 0)) == "Mar 1, 2026 at 12:00 PM"


class TestClassificationResult:
    def test_failure_messages(self):
        for error, message in ERROR_MESSAGES.items():
            result = ClassificationResult.failure(error, "m")
            assert result.success is False
            assert result.error == error
            assert result.error_message == message
            assert result.display_text == message
            assert result.model_name == "m"

    def test_error_texts(self):
        assert ERROR_MESSAGES[ClassifierError.MODEL_UNAVAILABLE] == "Failed to load model"
        assert ERROR_MESSAGES[ClassifierError.NO_RESULT] == "No predictions found"
        assert ERROR_MESSAGES[ClassifierError.PROCESSING_ERROR] == "Error making prediction"

    def test_top(self):
        result = ClassificationResult(
            success=True,
            predictions=[Prediction("Melanoma", 0.9), Prediction("Nevus", 0.1)],
        )
        assert result.top == Prediction("Melanoma", 0.9)

    def test_top_empty(self):
        assert ClassificationResult(success=True).top is None

    def test_display_text_success(self, melanoma_result):
        assert melanoma_result.display_text == "Melanoma (92.00% confidence)"

    def test_display_text_success_without_predictions(self):
        assert ClassificationResult(success=True).display_text == "No predictions found"


class TestCaptureState:
    def test_states(self):
        assert [s.name for s in CaptureState] == [
            "IDLE", "NORMALIZING", "CLASSIFYING", "COMPLETED",
        ]


class TestFormatFileSize:
    def test_bytes(self):
        assert format_file_size(500) == "500 B"

    def test_kilobytes(self):
        assert format_file_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_file_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert format_file_size(2 * 1024 * 1024 * 1024) == "2.0 GB"

    def test_zero(self):
        assert format_file_size(0) == "0 B"


class TestPlatformPaths:
    def test_data_dir_exists(self):
        d = get_data_dir()
        assert d.exists()
        assert d.is_dir()

    def test_models_dir_inside_data_dir(self):
        assert get_models_dir().parent == get_data_dir()

    def test_linux_data_dir_uses_xdg(self, tmp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_dir))
        with patch("core.utils.sys.platform", "linux"):
            assert get_data_dir() == tmp_dir / "skinscan"

    def test_asset_path(self):
        path = Path(get_asset_path("assets/styles/light.qss"))
        assert path.exists()

    def test_platform(self):
        assert get_platform() in ("macos", "windows", "linux")


class TestCameraSettingsUrl:
    def test_every_platform_has_url(self):
        assert set(CAMERA_SETTINGS_URLS) == {"macos", "windows", "linux"}

    @pytest.mark.parametrize("platform,expected", [
        ("darwin", "x-apple.systempreferences:com.apple.preference.security?Privacy_Camera"),
        ("win32", "ms-settings:privacy-webcam"),
    ])
    def test_per_platform(self, platform, expected):
        with patch("core.utils.sys.platform", platform):
            assert get_camera_settings_url() == expected
