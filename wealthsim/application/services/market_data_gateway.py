# wealthsim/application/services/market_data_gateway.py

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from wealthsim.domain.exceptions import UpstreamUnavailableError
from wealthsim.domain.models.market import CandleData, MarketMode, StockQuote
from wealthsim.domain.services_interfaces.i_market_data_client import IMarketDataClient
from wealthsim.infrastructure.market_data import synthetic_generator

logger = logging.getLogger(__name__)

SIMULATED_DAILY_DAYS = 60
SIMULATED_DEFAULT_DAYS = 30
FALLBACK_DAYS = 30


class MarketDataGateway:
    """
    Mum serisi ve anlık fiyat için hibrit veri kaynağı.

    Her çağrıda yeniden karar verilir:
      - mode == SIMULATED veya canlı client yok → sentetik veri (ağ erişimi yok)
      - aksi halde canlı çağrı; hata olursa sessizce sentetik veriye düşer

    Arayüz hiçbir zaman veri gösteremez duruma düşmesin diye
    upstream hataları bu sınıftan dışarı sızmaz.
    """

    def __init__(
        self,
        live_client: Optional[IMarketDataClient] = None,
        simulated_latency: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._live_client = live_client
        self._simulated_latency = simulated_latency
        self._sleep = sleep

    @property
    def has_live_source(self) -> bool:
        """Canlı sağlayıcı kimlik bilgisi tanımlı mı?"""
        return self._live_client is not None

    def default_mode(self) -> MarketMode:
        """Kimlik bilgisi yoksa uygulama sadece simülasyon modunda çalışır."""
        return MarketMode.REAL if self.has_live_source else MarketMode.SIMULATED

    def _use_simulation(self, mode: MarketMode) -> bool:
        return mode == MarketMode.SIMULATED or self._live_client is None

    def _simulate_latency(self) -> None:
        if self._simulated_latency > 0:
            self._sleep(self._simulated_latency)

    # --------- Mum serisi --------- #

    def get_candles(self, symbol: str, resolution: str, mode: MarketMode) -> List[CandleData]:
        if self._use_simulation(mode):
            logger.info("[SIM] %s için sentetik mum serisi üretiliyor", symbol)
            self._simulate_latency()
            days = SIMULATED_DAILY_DAYS if resolution == "D" else SIMULATED_DEFAULT_DAYS
            return synthetic_generator.generate_candles(days)

        try:
            candles = self._live_client.get_candles(symbol, resolution)
        except UpstreamUnavailableError as exc:
            logger.warning("Canlı mum verisi alınamadı, sentetik veriye geçiliyor: %s", exc)
            return synthetic_generator.generate_candles(FALLBACK_DAYS)

        if not candles:
            logger.warning("%s için boş mum serisi döndü, sentetik veriye geçiliyor", symbol)
            return synthetic_generator.generate_candles(FALLBACK_DAYS)
        return candles

    # --------- Anlık fiyat --------- #

    def get_quote(self, symbol: str, mode: MarketMode) -> StockQuote:
        if self._use_simulation(mode):
            logger.info("[SIM] %s için sentetik fiyat üretiliyor", symbol)
            self._simulate_latency()
            return synthetic_generator.generate_quote(symbol)

        try:
            return self._live_client.get_quote(symbol)
        except UpstreamUnavailableError as exc:
            logger.warning("Canlı fiyat alınamadı, sabit fiyata geçiliyor: %s", exc)
            return synthetic_generator.fallback_quote(symbol)
