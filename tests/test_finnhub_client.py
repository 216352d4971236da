"""
FinnhubMarketDataClient: istek parametreleri ve yanıt eşleme testleri (ağ erişimi yok).
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from wealthsim.domain.exceptions import MalformedResponseError, UpstreamUnavailableError
from wealthsim.infrastructure.market_data.finnhub_client import FinnhubMarketDataClient


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return FinnhubMarketDataClient("secret", session=session)


def _respond(session, payload):
    response = MagicMock()
    response.json.return_value = payload
    session.get.return_value = response
    return response


CANDLE_PAYLOAD = {
    "s": "ok",
    "t": [1700000000, 1700086400],
    "o": [180.1, 182.0],
    "h": [183.5, 184.0],
    "l": [179.0, 181.2],
    "c": [182.2, 183.1],
    "v": [1000000, 1200000],
}


class TestCandles:
    def test_parallel_arrays_are_zipped(self, client, session):
        _respond(session, CANDLE_PAYLOAD)

        candles = client.get_candles("AAPL", "D")

        assert [c.bar_date for c in candles] == [date(2023, 11, 14), date(2023, 11, 15)]
        assert candles[0].open == Decimal("180.1")
        assert candles[1].close == Decimal("183.1")
        assert candles[1].volume == 1200000

    def test_request_parameters(self, client, session):
        _respond(session, CANDLE_PAYLOAD)

        client.get_candles("AAPL", "D")

        args, kwargs = session.get.call_args
        assert args[0] == "https://finnhub.io/api/v1/stock/candle"
        params = kwargs["params"]
        assert params["symbol"] == "AAPL"
        assert params["resolution"] == "D"
        assert params["token"] == "secret"
        assert params["to"] - params["from"] == 90 * 24 * 60 * 60
        assert kwargs["timeout"] == 10

    def test_intraday_window_is_thirty_days(self, client, session):
        _respond(session, CANDLE_PAYLOAD)
        client.get_candles("AAPL", "60")
        params = session.get.call_args[1]["params"]
        assert params["to"] - params["from"] == 30 * 24 * 60 * 60

    def test_no_data_status(self, client, session):
        _respond(session, {"s": "no_data"})
        with pytest.raises(UpstreamUnavailableError):
            client.get_candles("ZZZZ", "D")

    def test_unequal_arrays(self, client, session):
        _respond(session, dict(CANDLE_PAYLOAD, c=[1.0]))
        with pytest.raises(MalformedResponseError):
            client.get_candles("AAPL", "D")

    @pytest.mark.parametrize("field", ["t", "c", "v"])
    def test_null_array(self, client, session, field):
        _respond(session, dict(CANDLE_PAYLOAD, **{field: None}))
        with pytest.raises(MalformedResponseError):
            client.get_candles("AAPL", "D")

    def test_null_value_inside_array(self, client, session):
        _respond(session, dict(CANDLE_PAYLOAD, o=[None, 182.0]))
        with pytest.raises(MalformedResponseError):
            client.get_candles("AAPL", "D")

    def test_missing_array(self, client, session):
        payload = dict(CANDLE_PAYLOAD)
        del payload["v"]
        _respond(session, payload)
        with pytest.raises(MalformedResponseError):
            client.get_candles("AAPL", "D")


class TestTransportErrors:
    def test_http_error(self, client, session):
        response = _respond(session, {})
        response.raise_for_status.side_effect = requests.HTTPError("429")
        with pytest.raises(UpstreamUnavailableError):
            client.get_quote("AAPL")

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("offline")
        with pytest.raises(UpstreamUnavailableError):
            client.get_quote("AAPL")

    def test_invalid_json(self, client, session):
        response = _respond(session, None)
        response.json.side_effect = ValueError("not json")
        with pytest.raises(MalformedResponseError):
            client.get_quote("AAPL")

    def test_non_object_payload(self, client, session):
        _respond(session, [1, 2])
        with pytest.raises(MalformedResponseError):
            client.get_quote("AAPL")


class TestQuote:
    def test_fields_are_mapped(self, client, session):
        _respond(session, {"c": 189.5, "d": 1.2, "dp": 0.64, "h": 190, "l": 187, "o": 188, "pc": 188.3})

        quote = client.get_quote("AAPL")

        assert quote.symbol == "AAPL"
        assert quote.price == Decimal("189.5")
        assert quote.change == Decimal("1.2")
        assert quote.percent_change == Decimal("0.64")
        assert quote.high == Decimal("190")
        assert quote.low == Decimal("187")
        assert quote.open == Decimal("188")
        assert quote.prev_close == Decimal("188.3")
        assert session.get.call_args[0][0].endswith("/quote")

    def test_missing_field(self, client, session):
        _respond(session, {"d": 1.2})
        with pytest.raises(MalformedResponseError):
            client.get_quote("AAPL")


def test_api_key_is_required():
    with pytest.raises(ValueError):
        FinnhubMarketDataClient("")


def test_base_url_trailing_slash(session):
    _respond(session, {"c": 1, "d": 0, "dp": 0, "h": 1, "l": 1, "o": 1, "pc": 1})
    FinnhubMarketDataClient("k", base_url="http://localhost:9000/api/", session=session).get_quote("X")
    assert session.get.call_args[0][0] == "http://localhost:9000/api/quote"
