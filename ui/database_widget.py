"""Disease reference database tab with a detail page per condition."""

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFrame,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.disease_db import DISEASES, Disease
from i18n import t


class _DiseaseDetail(QWidget):
    """Full description, identification hints, treatment and dangers."""

    def __init__(self, on_back, parent=None):
        super().__init__(parent)
        self._on_back = on_back
        self._setup_ui()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(12)

        back_btn = QPushButton(f"\u2190  {t('database.back')}")
        back_btn.setProperty("class", "secondaryButton")
        back_btn.setFixedWidth(140)
        back_btn.clicked.connect(self._on_back)

        self._name_label = QLabel()
        self._name_label.setProperty("class", "sectionTitle")
        self._name_label.setStyleSheet("font-size: 26px;")

        self._description_label = QLabel()
        self._description_label.setProperty("class", "sectionSubtitle")
        self._description_label.setWordWrap(True)

        self._identify_label = QLabel()
        self._identify_label.setWordWrap(True)
        self._treatment_label = QLabel()
        self._treatment_label.setWordWrap(True)
        self._dangers_label = QLabel()
        self._dangers_label.setWordWrap(True)

        layout.addWidget(back_btn)
        layout.addWidget(self._name_label)
        layout.addWidget(self._description_label)
        for heading_key, body in (
            ("database.how_to_identify", self._identify_label),
            ("database.treatment", self._treatment_label),
            ("database.dangers", self._dangers_label),
        ):
            layout.addWidget(self._divider())
            heading = QLabel(t(heading_key))
            heading.setProperty("class", "sectionTitle")
            heading.setStyleSheet("font-size: 18px;")
            layout.addWidget(heading)
            layout.addWidget(body)
        layout.addStretch()

        scroll.setWidget(container)
        outer.addWidget(scroll)

    @staticmethod
    def _divider() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        return line

    def show_disease(self, disease: Disease):
        self._name_label.setText(disease.name)
        self._description_label.setText(disease.description)
        self._identify_label.setText("\n".join(f"\u2022 {p}" for p in disease.detail_points))
        self._treatment_label.setText(disease.treatment)
        self._dangers_label.setText(disease.dangers)


class DatabaseWidget(QWidget):
    """Browse the static skin condition reference."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._current: Optional[Disease] = None
        self._setup_ui()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        self._stack = QStackedWidget()

        # List page
        list_page = QWidget()
        layout = QVBoxLayout(list_page)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("database.title"))
        title.setProperty("class", "sectionTitle")

        subtitle = QLabel(t("database.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        self._list = QListWidget()
        self._list.setObjectName("diseaseList")
        self._list.setWordWrap(True)
        for disease in DISEASES:
            item = QListWidgetItem(f"{disease.name}\n{disease.description}")
            item.setData(Qt.ItemDataRole.UserRole, disease)
            self._list.addItem(item)
        self._list.itemClicked.connect(self._on_item_clicked)

        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._list, 1)

        # Detail page
        self._detail = _DiseaseDetail(on_back=self.show_list)

        self._stack.addWidget(list_page)     # 0
        self._stack.addWidget(self._detail)  # 1
        outer.addWidget(self._stack)

    def _on_item_clicked(self, item: QListWidgetItem):
        self.show_disease(item.data(Qt.ItemDataRole.UserRole))

    def show_disease(self, disease: Disease):
        """Open the detail page for a condition."""
        self._current = disease
        self._detail.show_disease(disease)
        self._stack.setCurrentIndex(1)

    def show_list(self):
        self._current = None
        self._stack.setCurrentIndex(0)

    @property
    def current_disease(self) -> Optional[Disease]:
        """The condition on the detail page, or None on the list page."""
        return self._current

    def disease_count(self) -> int:
        return self._list.count()

    def cleanup(self):
        """Nothing to release; the condition list is static."""
