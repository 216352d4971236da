# wealthsim/domain/models/transaction.py

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict
from uuid import uuid4


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Transaction:
    """
    Gerçekleşmiş tek bir simülasyon işlemi.
    Sadece settlement sırasında oluşturulur; sonradan değiştirilmez/silinmez.
    """
    id: str
    trade_date: date
    symbol: str
    side: TradeSide
    price: Decimal        # birim fiyat
    quantity: int         # adet
    total: Decimal        # price * quantity

    @classmethod
    def record(
        cls,
        side: TradeSide,
        symbol: str,
        price: Decimal,
        quantity: int,
        trade_date: date,
    ) -> "Transaction":
        """
        Yeni bir işlem kaydı oluşturur, toplam tutarı kendisi hesaplar.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        return cls(
            id=uuid4().hex,
            trade_date=trade_date,
            symbol=symbol,
            side=side,
            price=price,
            quantity=quantity,
            total=price * Decimal(quantity),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.trade_date.isoformat(),
            "symbol": self.symbol,
            "type": self.side.value,
            "price": str(self.price),
            "quantity": self.quantity,
            "total": str(self.total),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(data["id"]),
            trade_date=date.fromisoformat(data["date"]),
            symbol=data["symbol"],
            side=TradeSide(data["type"]),
            price=Decimal(str(data["price"])),
            quantity=int(data["quantity"]),
            total=Decimal(str(data["total"])),
        )
