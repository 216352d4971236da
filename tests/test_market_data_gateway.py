"""
MarketDataGateway kaynak seçimi ve fallback davranışı.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from wealthsim.application.services.market_data_gateway import (
    FALLBACK_DAYS,
    SIMULATED_DAILY_DAYS,
    SIMULATED_DEFAULT_DAYS,
    MarketDataGateway,
)
from wealthsim.domain.exceptions import MalformedResponseError, UpstreamUnavailableError
from wealthsim.domain.models.market import CandleData, MarketMode
from wealthsim.infrastructure.market_data.finnhub_client import FinnhubMarketDataClient


@pytest.fixture
def live_client():
    return MagicMock()


@pytest.fixture
def sleep():
    return MagicMock()


def _candle():
    one = Decimal("1")
    return CandleData(bar_date=date(2024, 1, 2), open=one, high=one, low=one, close=one, volume=10)


class TestSimulatedPath:
    def test_simulated_mode_never_touches_live_client(self, live_client, sleep):
        gateway = MarketDataGateway(live_client, sleep=sleep)

        candles = gateway.get_candles("AAPL", "D", MarketMode.SIMULATED)
        quote = gateway.get_quote("AAPL", MarketMode.SIMULATED)

        assert len(candles) == SIMULATED_DAILY_DAYS
        assert quote.symbol == "AAPL"
        live_client.get_candles.assert_not_called()
        live_client.get_quote.assert_not_called()

    def test_non_daily_resolution_length(self, sleep):
        gateway = MarketDataGateway(sleep=sleep)
        assert len(gateway.get_candles("AAPL", "60", MarketMode.SIMULATED)) == SIMULATED_DEFAULT_DAYS

    def test_real_mode_without_credential_is_simulated(self, sleep):
        gateway = MarketDataGateway(None, sleep=sleep)

        assert gateway.default_mode() == MarketMode.SIMULATED
        assert not gateway.has_live_source
        assert len(gateway.get_candles("AAPL", "D", MarketMode.REAL)) == SIMULATED_DAILY_DAYS
        assert gateway.get_quote("AAPL", MarketMode.REAL).price > 0

    def test_latency_is_applied_only_on_simulated_path(self, live_client, sleep):
        live_client.get_quote.return_value = MagicMock()
        gateway = MarketDataGateway(live_client, simulated_latency=0.5, sleep=sleep)

        gateway.get_quote("AAPL", MarketMode.SIMULATED)
        sleep.assert_called_once_with(0.5)

        sleep.reset_mock()
        gateway.get_quote("AAPL", MarketMode.REAL)
        sleep.assert_not_called()

    def test_zero_latency_does_not_sleep(self, sleep):
        MarketDataGateway(sleep=sleep).get_quote("AAPL", MarketMode.SIMULATED)
        sleep.assert_not_called()


class TestLivePath:
    def test_live_results_are_returned(self, live_client, sleep):
        live_client.get_candles.return_value = [_candle()]
        gateway = MarketDataGateway(live_client, sleep=sleep)

        assert gateway.default_mode() == MarketMode.REAL
        assert gateway.get_candles("AAPL", "D", MarketMode.REAL) == [_candle()]
        live_client.get_candles.assert_called_once_with("AAPL", "D")
        assert gateway.get_quote("AAPL", MarketMode.REAL) is live_client.get_quote.return_value

    @pytest.mark.parametrize("error", [UpstreamUnavailableError("down"), MalformedResponseError("bad")])
    def test_candle_failure_falls_back_to_synthetic(self, live_client, sleep, error):
        live_client.get_candles.side_effect = error
        gateway = MarketDataGateway(live_client, sleep=sleep)

        candles = gateway.get_candles("AAPL", "D", MarketMode.REAL)

        assert len(candles) == FALLBACK_DAYS
        assert candles[-1].bar_date == date.today()

    def test_empty_candle_list_falls_back(self, live_client, sleep):
        live_client.get_candles.return_value = []
        gateway = MarketDataGateway(live_client, sleep=sleep)
        assert len(gateway.get_candles("AAPL", "D", MarketMode.REAL)) == FALLBACK_DAYS

    def test_quote_failure_returns_flat_quote(self, live_client, sleep):
        live_client.get_quote.side_effect = UpstreamUnavailableError("timeout")
        gateway = MarketDataGateway(live_client, sleep=sleep)

        quote = gateway.get_quote("TSM", MarketMode.REAL)

        assert quote.symbol == "TSM"
        assert quote.price == Decimal("150")
        assert quote.change == 0


class TestWithFinnhubClient:
    """Gerçek Finnhub client'ı, sahte HTTP oturumu ile gateway üzerinden."""

    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def gateway(self, session, sleep):
        return MarketDataGateway(FinnhubMarketDataClient("secret", session=session), sleep=sleep)

    @pytest.mark.parametrize(
        "payload",
        [
            {"s": "ok", "t": None, "o": None, "h": None, "l": None, "c": None, "v": None},
            {"s": "ok", "t": [1700000000], "o": [1.0], "h": [1.0], "l": [1.0], "c": "x", "v": [1]},
            {"s": "ok", "t": [1700000000], "o": [None], "h": [1.0], "l": [1.0], "c": [1.0], "v": [1]},
            ["not", "an", "object"],
        ],
    )
    def test_malformed_candles_fall_back(self, gateway, session, payload):
        session.get.return_value.json.return_value = payload

        candles = gateway.get_candles("AAPL", "D", MarketMode.REAL)

        assert len(candles) == FALLBACK_DAYS
        session.get.assert_called_once()

    def test_malformed_quote_falls_back(self, gateway, session):
        session.get.return_value.json.return_value = {"c": None}

        quote = gateway.get_quote("AAPL", MarketMode.REAL)

        assert quote.price == Decimal("150")

    def test_valid_candles_pass_through(self, gateway, session):
        session.get.return_value.json.return_value = {
            "s": "ok", "t": [1700000000], "o": [10.5], "h": [11.0],
            "l": [10.0], "c": [10.8], "v": [42],
        }

        candles = gateway.get_candles("AAPL", "D", MarketMode.REAL)

        assert len(candles) == 1
        assert candles[0].close == Decimal("10.8")
        assert candles[0].volume == 42
