# wealthsim/application/services/portfolio_service.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import uuid4

from wealthsim.domain.models.asset import (
    Asset,
    AssetCategory,
    CashAsset,
    OtherAsset,
    StockAsset,
)
from wealthsim.domain.models.settlement import find_cash
from wealthsim.domain.models.transaction import Transaction
from wealthsim.domain.services_interfaces.i_portfolio_store import IPortfolioStore


@dataclass
class PortfolioSummary:
    """
    Panel kartları ve dağılım grafiği için basit özet.

    - net_worth: tüm varlıkların değer toplamı
    - cash_total / stock_total: kategori toplamları
    - allocation: { kategori: toplam değer } (sadece değeri olan kategoriler)
    """
    net_worth: Decimal
    cash_total: Decimal
    stock_total: Decimal
    allocation: Dict[AssetCategory, Decimal] = field(default_factory=dict)


class PortfolioService:
    """
    Varlık listesi ile ilgili temel işlemleri yöneten application servisi.

    - Varlık/işlem listelerini store'dan okur
    - Elle varlık ekleme, değer güncelleme, silme
    - Net değer ve kategori dağılımı özeti
    """

    def __init__(self, store: IPortfolioStore) -> None:
        self._store = store

    # --------- Görüntüleme --------- #

    def list_assets(self) -> List[Asset]:
        return self._store.load_assets()

    def list_transactions(self) -> List[Transaction]:
        return self._store.load_transactions()

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self._store.load_assets():
            if asset.id == asset_id:
                return asset
        return None

    def summary(self) -> PortfolioSummary:
        assets = self._store.load_assets()

        allocation: Dict[AssetCategory, Decimal] = {}
        for asset in assets:
            allocation[asset.category] = allocation.get(asset.category, Decimal("0")) + asset.value

        return PortfolioSummary(
            net_worth=sum((a.value for a in assets), Decimal("0")),
            cash_total=allocation.get(AssetCategory.CASH, Decimal("0")),
            stock_total=allocation.get(AssetCategory.STOCK, Decimal("0")),
            allocation={k: v for k, v in allocation.items() if v > 0},
        )

    # --------- Elle varlık yönetimi --------- #

    def add_manual_asset(
        self,
        name: str,
        category: AssetCategory,
        value: Decimal,
        color: Optional[str] = None,
    ) -> Asset:
        """
        Nakit, gayrimenkul, kripto veya diğer varlık ekler.
        Hisseler sadece simülasyon işlemleriyle oluşur.
        """
        if not name or not name.strip():
            raise ValueError("Varlık adı boş olamaz")
        if value < 0:
            raise ValueError("Varlık değeri negatif olamaz")

        category = AssetCategory(category)
        if category == AssetCategory.STOCK:
            raise ValueError("Hisse varlıkları simülasyon işlemleriyle eklenir")

        if category == AssetCategory.CASH:
            # Harcanabilir bakiye tek bir CASH kaydıdır
            if find_cash(self._store.load_assets()) is not None:
                raise ValueError("Nakit varlığı zaten var; değerini güncelleyin")
            asset: Asset = CashAsset(id=uuid4().hex, name=name.strip(), value=value, color=color)
        else:
            asset = OtherAsset(
                id=uuid4().hex,
                name=name.strip(),
                category=category,
                value=value,
                color=color,
            )

        self._store.save_asset(asset)
        return asset

    def update_asset_value(self, asset_id: str, value: Decimal) -> Asset:
        """
        Elle girilen bir varlığın değerini günceller.
        Hisse değeri işlemlerle belirlendiği için burada değiştirilemez.
        """
        if value < 0:
            raise ValueError("Varlık değeri negatif olamaz")

        asset = self.get_asset(asset_id)
        if asset is None:
            raise ValueError(f"Varlık bulunamadı: {asset_id}")
        if isinstance(asset, StockAsset):
            raise ValueError("Hisse değeri elle güncellenemez")

        updated = replace(asset, value=value)
        self._store.save_asset(updated)
        return updated

    def delete_asset(self, asset_id: str) -> List[Asset]:
        return self._store.delete_asset(asset_id)

    def reset(self) -> None:
        """Varlık ve işlemleri başlangıç verisine döndürür."""
        self._store.reset()
