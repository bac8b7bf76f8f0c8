"""Geometric normalization of captured frames and model input preparation."""

import io
import logging
from typing import Tuple

from PIL import Image

logger = logging.getLogger(__name__)


class ImageNormalizer:
    """Orientation fix and top-square crop applied to every captured frame.

    Both geometric operations are total: if a transformed image cannot be
    produced, the input image is returned unchanged.
    """

    @staticmethod
    def fix_orientation(image: Image.Image) -> Image.Image:
        """Rotate the raw sensor image 90 degrees clockwise."""
        try:
            return image.transpose(Image.Transpose.ROTATE_270)
        except Exception as e:
            logger.warning("Orientation fix failed, keeping original frame: %s", e)
            return image

    @staticmethod
    def crop_to_top_square(image: Image.Image) -> Image.Image:
        """Crop the square of side min(width, height / 2) anchored at (0, 0)."""
        try:
            width, height = image.size
            side = int(min(width, height / 2))
            if side < 1:
                return image
            return image.crop((0, 0, side, side))
        except Exception as e:
            logger.warning("Top-square crop failed, keeping original frame: %s", e)
            return image

    @staticmethod
    def normalize(image: Image.Image) -> Image.Image:
        """Apply the full normalization: orientation fix, then top-square crop."""
        rotated = ImageNormalizer.fix_orientation(image)
        return ImageNormalizer.crop_to_top_square(rotated)

    @staticmethod
    def preprocess_for_skin(image: Image.Image) -> "torch.Tensor":
        """Preprocess a normalized capture for the skin EfficientNet model.

        Returns tensor of shape (1, 3, 224, 224) with ImageNet normalization.
        """
        from torchvision import transforms

        transform = transforms.Compose([
            transforms.Resize((224, 224)),
            transforms.ToTensor(),
            transforms.Normalize(
                mean=[0.485, 0.456, 0.406],
                std=[0.229, 0.224, 0.225],
            ),
        ])

        tensor = transform(image.convert("RGB"))
        return tensor.unsqueeze(0)  # Add batch dimension

    @staticmethod
    def create_thumbnail(image: Image.Image, size: Tuple[int, int] = (128, 128)) -> bytes:
        """Create a JPEG thumbnail and return as bytes."""
        thumb = image.copy()
        thumb.thumbnail(size, Image.Resampling.LANCZOS)
        if thumb.mode != "RGB":
            thumb = thumb.convert("RGB")

        buffer = io.BytesIO()
        thumb.save(buffer, format="JPEG", quality=80)
        return buffer.getvalue()
