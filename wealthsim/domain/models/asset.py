# wealthsim/domain/models/asset.py

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union


class AssetCategory(str, Enum):
    CASH = "CASH"
    STOCK = "STOCK"
    REAL_ESTATE = "REAL_ESTATE"
    CRYPTO = "CRYPTO"
    OTHER = "OTHER"


def _to_decimal(value: Any) -> Decimal:
    """
    JSON'dan gelen int/float/str değerleri güvenli şekilde Decimal'e çevirir.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class CashAsset:
    """
    Harcanabilir nakit bakiyesi.
    Portföyde bakiye olarak kullanılan tek CASH kaydı budur.
    """
    id: str
    name: str
    value: Decimal
    color: Optional[str] = None

    @property
    def category(self) -> AssetCategory:
        return AssetCategory.CASH


@dataclass(frozen=True)
class StockAsset:
    """
    Tek bir hisse pozisyonu.

    - quantity: eldeki adet (>= 0)
    - avg_cost: sadece alışlarla güncellenen ağırlıklı ortalama maliyet
    - value: son işlemdeki fiyat üzerinden pozisyon değeri
    """
    id: str
    name: str
    symbol: str
    quantity: int
    avg_cost: Decimal
    value: Decimal
    color: Optional[str] = None

    @property
    def category(self) -> AssetCategory:
        return AssetCategory.STOCK

    @property
    def total_cost(self) -> Decimal:
        return self.avg_cost * Decimal(self.quantity)


@dataclass(frozen=True)
class OtherAsset:
    """
    Elle girilen diğer varlıklar (gayrimenkul, kripto, diğer).
    """
    id: str
    name: str
    category: AssetCategory
    value: Decimal
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.category in (AssetCategory.CASH, AssetCategory.STOCK):
            raise ValueError(f"OtherAsset cannot have category {self.category.value}")


Asset = Union[CashAsset, StockAsset, OtherAsset]


# --------- JSON blob <-> domain dönüşümü --------- #

def asset_to_dict(asset: Asset) -> Dict[str, Any]:
    """
    Varlığı store'daki JSON dizisi formatına çevirir.
    Alan adları eski kayıtlarla uyumlu tutulur (avgCost, type).
    Para alanları Decimal string olarak yazılır; okurken sayı da kabul edilir.
    """
    data: Dict[str, Any] = {
        "id": asset.id,
        "name": asset.name,
        "type": asset.category.value,
        "value": str(asset.value),
    }
    if isinstance(asset, StockAsset):
        data["symbol"] = asset.symbol
        data["quantity"] = asset.quantity
        data["avgCost"] = str(asset.avg_cost)
    if asset.color is not None:
        data["color"] = asset.color
    return data


def asset_from_dict(data: Dict[str, Any]) -> Asset:
    """
    Store'dan okunan tek bir kaydı tipine göre doğru varlık sınıfına çevirir.
    """
    category = AssetCategory(data["type"])
    value = _to_decimal(data.get("value"))
    color = data.get("color")

    if category == AssetCategory.CASH:
        return CashAsset(id=str(data["id"]), name=data["name"], value=value, color=color)

    if category == AssetCategory.STOCK:
        return StockAsset(
            id=str(data["id"]),
            name=data["name"],
            symbol=data.get("symbol") or data["name"],
            quantity=int(data.get("quantity") or 0),
            avg_cost=_to_decimal(data.get("avgCost")),
            value=value,
            color=color,
        )

    return OtherAsset(
        id=str(data["id"]),
        name=data["name"],
        category=category,
        value=value,
        color=color,
    )
