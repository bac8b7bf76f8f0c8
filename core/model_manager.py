"""Model registry, installation, and local path lookup."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.utils import format_file_size, get_models_dir

logger = logging.getLogger(__name__)


@dataclass
class ModelInfo:
    """Metadata about an available AI model."""
    name: str
    display_name: str
    architecture: str
    num_classes: int
    size_mb: float
    description: str


MODEL_REGISTRY: List[ModelInfo] = [
    ModelInfo(
        name="skin-efficientnet-b0",
        display_name="EfficientNet-B0 (Skin Conditions)",
        architecture="efficientnet_b0",
        num_classes=10,
        size_mb=16.0,
        description="Ten-class skin condition classifier covering keratoses, dermatitis, nevi, melanoma, carcinoma, fungal infections and vascular lesions.",
    ),
]

DEFAULT_MODEL = "skin-efficientnet-b0"


class ModelManager:
    """Manages locally installed model weights."""

    def __init__(self):
        self._models_dir = get_models_dir()

    def get_registry(self) -> List[ModelInfo]:
        """Get all known models."""
        return MODEL_REGISTRY

    def get_model_info(self, model_name: str) -> Optional[ModelInfo]:
        """Get info for a specific model."""
        for model in MODEL_REGISTRY:
            if model.name == model_name:
                return model
        return None

    def is_model_available(self, model_name: str) -> bool:
        """Check if a model's weights file is installed."""
        if self.get_model_info(model_name) is None:
            return False
        return self.get_model_path(model_name).exists()

    def get_model_path(self, model_name: str) -> Path:
        """Get the local path for a model's weights file."""
        return self._models_dir / model_name / "model.pth"

    def get_models_dir(self) -> Path:
        """Get the root models directory."""
        return self._models_dir

    def install_model(self, model_name: str, source_path: str) -> Path:
        """Copy a trained weights file into the model's directory."""
        if self.get_model_info(model_name) is None:
            raise ValueError(f"Unknown model: {model_name}")
        source = Path(source_path)
        if not source.is_file():
            raise FileNotFoundError(f"Weights file not found: {source_path}")

        target = self.ensure_model_dir(model_name) / "model.pth"
        shutil.copyfile(source, target)
        logger.info("Installed %s weights from %s", model_name, source)
        return target

    def get_total_size(self) -> int:
        """Get total size of all installed models in bytes."""
        total = 0
        if self._models_dir.exists():
            for f in self._models_dir.rglob("*"):
                if f.is_file():
                    total += f.stat().st_size
        return total

    def get_total_size_formatted(self) -> str:
        """Get total model storage as human-readable string."""
        return format_file_size(self.get_total_size())

    def ensure_model_dir(self, model_name: str) -> Path:
        """Create and return the directory for a model."""
        model_dir = self._models_dir / model_name
        model_dir.mkdir(parents=True, exist_ok=True)
        return model_dir


# Module-level singleton
_model_manager: Optional[ModelManager] = None


def get_model_manager() -> ModelManager:
    """Get the global ModelManager instance."""
    global _model_manager
    if _model_manager is None:
        _model_manager = ModelManager()
    return _model_manager
