# wealthsim/infrastructure/market_data/finnhub_client.py

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests

from wealthsim.domain.exceptions import MalformedResponseError, UpstreamUnavailableError
from wealthsim.domain.models.market import CandleData, StockQuote
from wealthsim.domain.services_interfaces.i_market_data_client import IMarketDataClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://finnhub.io/api/v1"

DAILY_WINDOW_SECONDS = 90 * 24 * 60 * 60
INTRADAY_WINDOW_SECONDS = 30 * 24 * 60 * 60


class FinnhubMarketDataClient(IMarketDataClient):
    """
    IMarketDataClient arayüzünü Finnhub REST API ile implemente eden sınıf.

    Notlar:
      - Kimlik doğrulama `token` query parametresi ile yapılır.
      - /stock/candle paralel diziler döner: t, o, h, l, c, v + durum alanı s.
        s != "ok" ise veri yok demektir.
      - Hatalar UpstreamUnavailableError / MalformedResponseError olarak fırlatılır,
        fallback kararını gateway verir.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("Finnhub API key is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    # ----------------- Yardımcı metotlar ----------------- #

    def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        query = dict(params, token=self._api_key)
        try:
            response = self._session.get(url, params=query, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise UpstreamUnavailableError(f"Finnhub isteği başarısız: {path}: {exc}") from exc

        # requests'in JSONDecodeError'u da ValueError alt sınıfıdır
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"Finnhub yanıtı JSON değil: {path}") from exc

        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Finnhub yanıtı beklenmeyen tipte: {type(payload).__name__}")
        return payload

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        """
        JSON'dan gelen int/float değerleri Decimal'e çevirir.
        None veya sayı olmayan değerde MalformedResponseError.
        """
        if value is None or isinstance(value, bool):
            raise MalformedResponseError(f"Sayısal alan bekleniyordu: {value!r}")
        try:
            return Decimal(str(float(value)))
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Sayısal alan bekleniyordu: {value!r}") from exc

    # ----------------- Mum serisi ----------------- #

    def get_candles(self, symbol: str, resolution: str) -> List[CandleData]:
        """
        Günlük çözünürlükte son 90 gün, diğerlerinde son 30 gün istenir.
        Sağlayıcının sırası (eskiden yeniye) korunur.
        """
        to_ts = int(time.time())
        window = DAILY_WINDOW_SECONDS if resolution == "D" else INTRADAY_WINDOW_SECONDS
        from_ts = to_ts - window

        data = self._get_json(
            "/stock/candle",
            {"symbol": symbol, "resolution": resolution, "from": from_ts, "to": to_ts},
        )

        if data.get("s") != "ok":
            raise UpstreamUnavailableError(
                f"Finnhub {symbol} için veri dönmedi (status={data.get('s')!r})"
            )

        try:
            columns = [data[k] for k in ("t", "o", "h", "l", "c", "v")]
        except KeyError as exc:
            raise MalformedResponseError(f"Finnhub mum yanıtında alan eksik: {exc}") from exc

        if not all(isinstance(col, list) for col in columns):
            raise MalformedResponseError("Finnhub mum alanları dizi değil")
        if len({len(col) for col in columns}) != 1:
            raise MalformedResponseError("Finnhub mum dizilerinin uzunlukları farklı")

        candles: List[CandleData] = []
        for ts, o, h, l, c, v in zip(*columns):
            try:
                bar_date = datetime.fromtimestamp(int(ts), tz=timezone.utc).date()
                volume = int(v)
            except (TypeError, ValueError, OverflowError, OSError) as exc:
                raise MalformedResponseError(f"Finnhub mum satırı okunamadı: {exc}") from exc

            candles.append(
                CandleData(
                    bar_date=bar_date,
                    open=self._to_decimal(o),
                    high=self._to_decimal(h),
                    low=self._to_decimal(l),
                    close=self._to_decimal(c),
                    volume=volume,
                )
            )

        logger.debug("Finnhub %s için %d mum alındı (%s)", symbol, len(candles), resolution)
        return candles

    # ----------------- Anlık fiyat ----------------- #

    def get_quote(self, symbol: str) -> StockQuote:
        data = self._get_json("/quote", {"symbol": symbol})

        return StockQuote(
            symbol=symbol,
            price=self._to_decimal(data.get("c")),
            change=self._to_decimal(data.get("d")),
            percent_change=self._to_decimal(data.get("dp")),
            high=self._to_decimal(data.get("h")),
            low=self._to_decimal(data.get("l")),
            open=self._to_decimal(data.get("o")),
            prev_close=self._to_decimal(data.get("pc")),
        )
