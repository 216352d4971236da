# wealthsim/application/services/market_refresh_service.py

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from wealthsim.domain.models.market import MarketMode, MarketSnapshot
from .market_data_gateway import MarketDataGateway

logger = logging.getLogger(__name__)


class MarketRefreshService:
    """
    Sembol değişiminde / açılışta mum serisi ve fiyatı birlikte yeniler.

    - İki istek birbirinden bağımsız olarak paralel atılır, ikisi de bitince birleştirilir.
    - Biri hata verirse yenileme başarısız sayılır (None), ekrandaki eski veri korunur.
    - Her çağrı artan bir token alır; sonucu gelene kadar daha yeni bir istek
      başlatılmışsa eski sonuç atılır (None).
    """

    def __init__(self, gateway: MarketDataGateway, max_workers: int = 2) -> None:
        self._gateway = gateway
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="market-refresh")
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._lock = threading.Lock()

    def _issue_token(self) -> int:
        with self._lock:
            self._latest_token = next(self._tokens)
            return self._latest_token

    def is_latest(self, token: int) -> bool:
        with self._lock:
            return token == self._latest_token

    def refresh(
        self,
        symbol: str,
        mode: MarketMode,
        resolution: str = "D",
    ) -> Optional[MarketSnapshot]:
        token = self._issue_token()
        symbol = symbol.strip().upper()

        candles_future = self._executor.submit(self._gateway.get_candles, symbol, resolution, mode)
        quote_future = self._executor.submit(self._gateway.get_quote, symbol, mode)

        try:
            candles = candles_future.result()
            quote = quote_future.result()
        except Exception:
            logger.exception("%s için piyasa verisi yenilenemedi", symbol)
            return None

        if not self.is_latest(token):
            logger.debug("%s yenilemesi (token=%d) daha yeni bir istekle geçersiz kaldı", symbol, token)
            return None

        return MarketSnapshot(symbol=symbol, quote=quote, candles=candles)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
