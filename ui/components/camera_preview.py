"""Live camera preview label and PIL to Qt image conversion."""

from PIL import Image
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import QLabel, QSizePolicy

from i18n import t


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    """Convert a PIL image into a QPixmap that owns its pixel data."""
    rgb = image.convert("RGB")
    data = rgb.tobytes("raw", "RGB")
    qimage = QImage(data, rgb.width, rgb.height, rgb.width * 3, QImage.Format.Format_RGB888)
    return QPixmap.fromImage(qimage.copy())


class CameraPreview(QLabel):
    """Shows the most recent camera frame, scaled to fill the widget."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("cameraPreview")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumHeight(400)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.reset()

    def set_frame(self, image: Image.Image):
        pixmap = pil_to_pixmap(image)
        self.setPixmap(pixmap.scaled(
            self.width(), self.height(),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.FastTransformation,
        ))

    def reset(self):
        """Clear the frame and show the waiting placeholder."""
        self.clear()
        self.setText(t("scan.waiting_for_camera"))
