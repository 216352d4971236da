# wealthsim/domain/models/market.py

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List


class MarketMode(str, Enum):
    SIMULATED = "SIMULATED"
    REAL = "REAL"


@dataclass(frozen=True)
class CandleData:
    """
    Tek bir işlem periyodunun OHLCV barı.
    Değişmez kural: low <= open, close <= high
    """
    bar_date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int


@dataclass(frozen=True)
class StockQuote:
    """
    Bir sembol için anlık fiyat görüntüsü.
    """
    symbol: str
    price: Decimal
    change: Decimal
    percent_change: Decimal
    high: Decimal
    low: Decimal
    open: Decimal
    prev_close: Decimal


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Tek bir yenilemenin sonucu: aynı sembol için mum serisi + anlık fiyat.
    """
    symbol: str
    quote: StockQuote
    candles: List[CandleData]
