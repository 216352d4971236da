import threading
from unittest.mock import MagicMock

import pytest

from wealthsim.application.services.market_refresh_service import MarketRefreshService
from wealthsim.domain.models.market import MarketMode


@pytest.fixture
def gateway():
    gw = MagicMock()
    gw.get_candles.return_value = ["candle"]
    return gw


@pytest.fixture
def service(gateway):
    svc = MarketRefreshService(gateway, max_workers=4)
    yield svc
    svc.shutdown()


def test_refresh_combines_candles_and_quote(service, gateway):
    snapshot = service.refresh(" aapl ", MarketMode.SIMULATED)

    assert snapshot.symbol == "AAPL"
    assert snapshot.candles == ["candle"]
    assert snapshot.quote is gateway.get_quote.return_value
    gateway.get_candles.assert_called_once_with("AAPL", "D", MarketMode.SIMULATED)
    gateway.get_quote.assert_called_once_with("AAPL", MarketMode.SIMULATED)


def test_any_failure_fails_whole_refresh(service, gateway):
    gateway.get_quote.side_effect = RuntimeError("boom")
    assert service.refresh("AAPL", MarketMode.REAL) is None


def test_superseded_refresh_is_discarded(service, gateway):
    nested = {}

    def candles_side_effect(symbol, resolution, mode):
        if symbol == "AAPL":
            # İlk istek bitmeden yeni bir sembol istenir
            nested["result"] = service.refresh("MSFT", mode)
        return ["candle"]

    gateway.get_candles.side_effect = candles_side_effect

    assert service.refresh("AAPL", MarketMode.SIMULATED) is None
    assert nested["result"].symbol == "MSFT"


def test_candles_and_quote_are_fetched_concurrently(gateway):
    # Sıralı çalışsaydı ilk çağrı bariyerde zaman aşımına uğrardı
    barrier = threading.Barrier(2, timeout=5)

    def candles(symbol, resolution, mode):
        barrier.wait()
        return ["candle"]

    def quote(symbol, mode):
        barrier.wait()
        return "quote"

    gateway.get_candles.side_effect = candles
    gateway.get_quote.side_effect = quote
    service = MarketRefreshService(gateway)
    try:
        snapshot = service.refresh("AAPL", MarketMode.REAL)
    finally:
        service.shutdown()

    assert snapshot is not None
    assert snapshot.quote == "quote"
    assert not barrier.broken
