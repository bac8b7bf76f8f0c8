"""Screening-aid notice shown next to every prediction."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from i18n import t


class DisclaimerBanner(QWidget):
    """Amber notice reminding that a prediction is not a diagnosis.

    The compact variant drops the icon and padding for use inside dialogs.
    """

    def __init__(self, compact: bool = False, parent=None):
        super().__init__(parent)
        self.setObjectName("disclaimerBanner")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        layout = QHBoxLayout(self)
        margin = 8 if compact else 14
        layout.setContentsMargins(margin + 4, margin, margin + 4, margin)
        layout.setSpacing(10)

        if not compact:
            icon = QLabel("\u26a0")
            icon.setFixedWidth(22)
            icon.setAlignment(Qt.AlignmentFlag.AlignTop)
            layout.addWidget(icon)

        self._label = QLabel(t("disclaimer.banner"))
        self._label.setWordWrap(True)
        if compact:
            self._label.setStyleSheet("font-size: 11px;")
        layout.addWidget(self._label, 1)

    def text(self) -> str:
        return self._label.text()
