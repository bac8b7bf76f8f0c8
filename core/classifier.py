"""Skin condition classification from normalized camera captures.

Uses an EfficientNet-B0 fine-tuned on ten skin conditions. The weights are a
pre-trained artifact installed under the models directory; this module only
runs inference.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from PIL import Image

from core.image_normalizer import ImageNormalizer
from core.model_manager import DEFAULT_MODEL, get_model_manager
from core.utils import ClassificationResult, ClassifierError, Prediction

logger = logging.getLogger(__name__)


class SkinClassifier:
    """Classifies skin lesion images into one of ten conditions."""

    MODEL_NAME = DEFAULT_MODEL
    CLASSES = [
        "Actinic Keratosis",
        "Atopic Dermatitis",
        "Benign Keratosis",
        "Dermatofibroma",
        "Melanocytic Nevus",
        "Melanoma",
        "Squamous Cell Carcinoma",
        "Tinea (Ringworm)",
        "Candidiasis",
        "Vascular Lesion",
    ]

    def __init__(self, model_path: Optional[str] = None, labels: Optional[List[str]] = None):
        self._labels = list(labels) if labels is not None else list(self.CLASSES)
        if model_path is None:
            model_path = get_model_manager().get_model_path(self.MODEL_NAME)
        self._model_path = Path(model_path)
        self._model = self._load_model()

    @property
    def is_available(self) -> bool:
        """Whether the model artifact loaded successfully."""
        return self._model is not None

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def classify(self, image: Image.Image) -> ClassificationResult:
        """Run the model on a normalized image.

        Never raises: load, conversion and inference failures are returned as
        unsuccessful results carrying a ClassifierError.
        """
        start_time = time.time()

        if self._model is None:
            return ClassificationResult.failure(ClassifierError.MODEL_UNAVAILABLE, self.MODEL_NAME)

        try:
            import torch

            tensor = ImageNormalizer.preprocess_for_skin(image)
            with torch.inference_mode():
                outputs = self._model(tensor)
                probabilities = torch.nn.functional.softmax(outputs, dim=1)
                probs = probabilities.cpu().numpy()[0]
        except Exception as e:
            logger.error("Skin classification failed: %s", e)
            return ClassificationResult.failure(ClassifierError.PROCESSING_ERROR, self.MODEL_NAME)

        predictions = [
            Prediction(label=label, confidence=float(prob))
            for label, prob in zip(self._labels, probs)
        ]
        if not predictions:
            logger.warning("Model returned no candidate labels")
            return ClassificationResult.failure(ClassifierError.NO_RESULT, self.MODEL_NAME)

        # Sort by confidence descending
        predictions.sort(key=lambda p: p.confidence, reverse=True)
        elapsed_ms = int((time.time() - start_time) * 1000)

        return ClassificationResult(
            success=True,
            predictions=predictions,
            processing_time_ms=elapsed_ms,
            model_name=self.MODEL_NAME,
        )

    def _load_model(self):
        """Load the weights once; None marks the model as unavailable."""
        if not self._model_path.exists():
            logger.warning("Skin model weights not found at %s", self._model_path)
            return None

        try:
            import torch

            model = self._build_model()
            state_dict = torch.load(str(self._model_path), map_location="cpu", weights_only=True)
            model.load_state_dict(state_dict)
            model.eval()
        except Exception as e:
            logger.error("Failed to load skin model from %s: %s", self._model_path, e)
            return None

        logger.info("Loaded %s from %s", self.MODEL_NAME, self._model_path)
        return model

    def _build_model(self):
        """Create the untrained network the weights are loaded into."""
        from torchvision import models

        return models.efficientnet_b0(weights=None, num_classes=len(self._labels))
