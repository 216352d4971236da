# wealthsim/ui/asset_table_model.py

from __future__ import annotations

from typing import List

from PyQt5.QtCore import QAbstractTableModel, Qt, QModelIndex, QVariant

from wealthsim.domain.models.asset import Asset, StockAsset
from wealthsim.domain.models.transaction import Transaction


class AssetTableModel(QAbstractTableModel):
    """
    Varlık listesi tablo modeli.

    Kolonlar:
      0: Varlık adı (sembol)
      1: Tür
      2: Adet @ Ort. Maliyet (sadece hisseler)
      3: Değer
    """

    def __init__(self, assets: List[Asset], parent=None):
        super().__init__(parent)
        self._assets = assets
        self._headers = ["Varlık", "Tür", "Adet / Maliyet", "Değer"]

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._assets)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self._headers)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return QVariant()
        if orientation == Qt.Horizontal:
            return self._headers[section]
        return section + 1

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid() or role not in (Qt.DisplayRole, Qt.TextAlignmentRole):
            return QVariant()

        if role == Qt.TextAlignmentRole:
            return Qt.AlignCenter

        asset = self._assets[index.row()]
        col = index.column()
        if col == 0:
            if isinstance(asset, StockAsset):
                return f"{asset.name} ({asset.symbol})"
            return asset.name
        elif col == 1:
            return asset.category.value
        elif col == 2:
            if isinstance(asset, StockAsset) and asset.quantity:
                return f"{asset.quantity} @ {asset.avg_cost:.2f}"
            return "-"
        elif col == 3:
            return f"{asset.value:,.2f}"

        return QVariant()

    def update_data(self, assets: List[Asset]):
        self.beginResetModel()
        self._assets = assets
        self.endResetModel()

    def get_asset(self, row: int) -> Asset:
        if row < 0 or row >= len(self._assets):
            raise IndexError("Row out of range in AssetTableModel.get_asset")
        return self._assets[row]


class TransactionTableModel(QAbstractTableModel):
    """
    İşlem geçmişi (en yeni üstte).
    """

    def __init__(self, transactions: List[Transaction], parent=None):
        super().__init__(parent)
        self._transactions = transactions
        self._headers = ["Tarih", "Sembol", "Yön", "Fiyat", "Adet", "Toplam"]

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._transactions)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self._headers)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return QVariant()
        return self._headers[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid() or role not in (Qt.DisplayRole, Qt.TextAlignmentRole):
            return QVariant()

        if role == Qt.TextAlignmentRole:
            return Qt.AlignCenter

        tx = self._transactions[index.row()]
        values = [
            tx.trade_date.isoformat(),
            tx.symbol,
            "ALIŞ" if tx.side.value == "BUY" else "SATIŞ",
            f"{tx.price:.2f}",
            str(tx.quantity),
            f"{tx.total:,.2f}",
        ]
        return values[index.column()]

    def update_data(self, transactions: List[Transaction]):
        self.beginResetModel()
        self._transactions = transactions
        self.endResetModel()
