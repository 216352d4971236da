# wealthsim/ui/widgets/add_asset_dialog.py

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QDialog, QFormLayout, QVBoxLayout, QHBoxLayout,
    QLineEdit, QComboBox, QDoubleSpinBox, QPushButton, QMessageBox,
)

from wealthsim.domain.models.asset import AssetCategory

# Hisseler sadece simülasyon işlemiyle eklenir
_MANUAL_CATEGORIES = [
    (AssetCategory.REAL_ESTATE, "Gayrimenkul"),
    (AssetCategory.CRYPTO, "Kripto"),
    (AssetCategory.CASH, "Nakit"),
    (AssetCategory.OTHER, "Diğer"),
]


class AddAssetDialog(QDialog):
    """
    Elle varlık ekleme penceresi (gayrimenkul, kripto, nakit, diğer).
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Varlık Ekle")
        self.setMinimumWidth(360)
        self.setWindowFlag(Qt.WindowContextHelpButtonHint, False)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.line_name = QLineEdit()
        self.line_name.setPlaceholderText("Örn: Ev, Bitcoin cüzdanı")

        self.combo_category = QComboBox()
        for category, label in _MANUAL_CATEGORIES:
            self.combo_category.addItem(label, category)

        self.spin_value = QDoubleSpinBox()
        self.spin_value.setDecimals(2)
        self.spin_value.setRange(0, 1_000_000_000)
        self.spin_value.setGroupSeparatorShown(True)

        form.addRow("Ad:", self.line_name)
        form.addRow("Tür:", self.combo_category)
        form.addRow("Değer:", self.spin_value)
        layout.addLayout(form)

        btn_row = QHBoxLayout()
        btn_cancel = QPushButton("İptal")
        btn_ok = QPushButton("Kaydet")
        btn_ok.setDefault(True)
        btn_cancel.clicked.connect(self.reject)
        btn_ok.clicked.connect(self._on_accept)
        btn_row.addStretch()
        btn_row.addWidget(btn_cancel)
        btn_row.addWidget(btn_ok)
        layout.addLayout(btn_row)

    def _on_accept(self):
        if not self.line_name.text().strip():
            QMessageBox.warning(self, "Uyarı", "Varlık adı boş olamaz.")
            return
        self.accept()

    def get_values(self) -> Optional[Dict[str, Any]]:
        """
        Dialog kabul edildiyse girilen değerleri döner.
        {
          "name": str,
          "category": AssetCategory,
          "value": Decimal,
        }
        """
        if self.result() != QDialog.Accepted:
            return None
        return {
            "name": self.line_name.text().strip(),
            "category": self.combo_category.currentData(),
            "value": Decimal(str(self.spin_value.value())).quantize(Decimal("0.01")),
        }
