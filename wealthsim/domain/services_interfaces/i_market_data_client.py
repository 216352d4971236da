# wealthsim/domain/services_interfaces/i_market_data_client.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from wealthsim.domain.models.market import CandleData, StockQuote


class IMarketDataClient(ABC):
    """
    Canlı piyasa verisi sağlayıcılarını soyutlayan arayüz.

    Uygulama şu an Finnhub kullanıyor, fakat bu interface sayesinde:
        - FinnhubMarketDataClient → gerçek senaryo
        - Mock / Fake client      → unit test
    şeklinde tak-çıkar yapı kuruluyor.

    Hata durumunda UpstreamUnavailableError / MalformedResponseError fırlatılır;
    fallback kararı MarketDataGateway'e aittir.
    """

    @abstractmethod
    def get_candles(self, symbol: str, resolution: str) -> List[CandleData]:
        """
        Çözünürlüğe göre sabit bir geriye dönük pencere için mum serisi döner.
        Sıralama: eskiden yeniye.
        """
        raise NotImplementedError

    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        """Sembolün anlık fiyat bilgisini döner."""
        raise NotImplementedError
