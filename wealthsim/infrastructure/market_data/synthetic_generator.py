# wealthsim/infrastructure/market_data/synthetic_generator.py

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from wealthsim.domain.models.market import CandleData, StockQuote

_CENT = Decimal("0.01")

VOLATILITY_RATIO = 0.05
MIN_VOLUME = 500_000
MAX_VOLUME = 1_500_000
FALLBACK_PRICE = Decimal("150")


def _money(value: float) -> Decimal:
    """float → 2 haneye yuvarlanmış Decimal."""
    return Decimal(str(value)).quantize(_CENT)


def generate_candles(
    days: int = 30,
    base_price: float = 150.0,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> List[CandleData]:
    """
    Bugün ile biten `days` adet ardışık takvim günü için sahte mum serisi üretir.

    Her bar bir önceki kapanışın rastgele yürüyüşüdür:
        volatilite = fiyat * 0.05
        close = önceki + (U - 0.5) * volatilite
        open  = önceki + (U - 0.5) * volatilite * 0.5
        high  = max(open, close) + U * volatilite * 0.2
        low   = min(open, close) - U * volatilite * 0.2

    Yuvarlama monoton olduğu için low <= open, close <= high korunur.
    """
    if days <= 0:
        raise ValueError("days must be positive")

    rng = rng or random.Random()
    today = today or date.today()
    price = base_price
    candles: List[CandleData] = []

    for offset in range(days - 1, -1, -1):
        volatility = price * VOLATILITY_RATIO
        close = price + (rng.random() - 0.5) * volatility
        open_ = price + (rng.random() - 0.5) * volatility * 0.5
        high = max(open_, close) + rng.random() * volatility * 0.2
        low = min(open_, close) - rng.random() * volatility * 0.2

        candles.append(
            CandleData(
                bar_date=today - timedelta(days=offset),
                open=_money(open_),
                high=_money(high),
                low=_money(low),
                close=_money(close),
                volume=rng.randrange(MIN_VOLUME, MAX_VOLUME),
            )
        )
        price = close

    return candles


def generate_quote(symbol: str, rng: Optional[random.Random] = None) -> StockQuote:
    """
    Sahte anlık fiyat: 100-150 aralığında fiyat, ±2.5 içinde önceki kapanış.
    """
    rng = rng or random.Random()
    price = 100 + rng.random() * 50
    prev_close = price - (rng.random() * 5 - 2.5)
    change = price - prev_close

    return StockQuote(
        symbol=symbol,
        price=_money(price),
        change=_money(change),
        percent_change=_money(change / prev_close * 100),
        high=_money(price * 1.02),
        low=_money(price * 0.98),
        open=_money(prev_close * 1.01),
        prev_close=_money(prev_close),
    )


def fallback_quote(symbol: str) -> StockQuote:
    """
    Canlı fiyat alınamadığında gösterilen sabit, değişimsiz fiyat.
    """
    return StockQuote(
        symbol=symbol,
        price=FALLBACK_PRICE,
        change=Decimal("0"),
        percent_change=Decimal("0"),
        high=FALLBACK_PRICE,
        low=FALLBACK_PRICE,
        open=FALLBACK_PRICE,
        prev_close=FALLBACK_PRICE,
    )
