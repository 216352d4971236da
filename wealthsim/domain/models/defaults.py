# wealthsim/domain/models/defaults.py

from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import List

from .asset import Asset, CashAsset, StockAsset
from .transaction import TradeSide, Transaction


def default_assets() -> List[Asset]:
    """
    İlk açılışta store'a yazılan örnek varlıklar.
    Hisse değerleri 0 ile başlar; ilk işlemde güncellenir.
    """
    return [
        CashAsset(id="1", name="Nakit (Birikim)", value=Decimal("500000"), color="#fca5a5"),
        StockAsset(
            id="2",
            name="Apple Inc.",
            symbol="AAPL",
            quantity=10,
            avg_cost=Decimal("145"),
            value=Decimal("0"),
            color="#fb7185",
        ),
        StockAsset(
            id="3",
            name="Taiwan Semiconductor",
            symbol="TSM",
            quantity=50,
            avg_cost=Decimal("90"),
            value=Decimal("0"),
            color="#818cf8",
        ),
    ]


def default_transactions() -> List[Transaction]:
    """Örnek varlıklarla tutarlı iki alış kaydı."""
    return [
        Transaction(
            id="t1",
            trade_date=date(2023, 10, 1),
            symbol="AAPL",
            side=TradeSide.BUY,
            price=Decimal("145"),
            quantity=10,
            total=Decimal("1450"),
        ),
        Transaction(
            id="t2",
            trade_date=date(2023, 11, 15),
            symbol="TSM",
            side=TradeSide.BUY,
            price=Decimal("90"),
            quantity=50,
            total=Decimal("4500"),
        ),
    ]
